"""
Reporting for Test Runs

This package turns already-computed run data into console output.

Features:
    - Suite start banner and end-of-run summary
    - Per-spec output driven by state and verbosity
    - Container hierarchy with labels and failure highlighting
    - Captured stdout, writer output and report entries
    - Progress reports with goroutine stacks and source snippets

Usage:
    from cadence.reporting import DefaultReporter, ReporterConfig

    reporter = DefaultReporter(ReporterConfig(verbose=True))

    reporter.suite_will_begin(suite_report)
    for spec in suite_report.spec_reports:
        reporter.will_run(spec)
        reporter.did_run(spec)
    reporter.suite_did_end(suite_report)
"""

# Models
from .models import (
    FAILURE_STATES,
    CodeLocation,
    Failure,
    FailureNodeContext,
    FunctionCall,
    Goroutine,
    NodeType,
    PreRunStats,
    ProgressReport,
    ReportEntry,
    ReportEntryVisibility,
    SpecCounts,
    SpecReport,
    SpecState,
    SuiteConfig,
    SuiteReport,
)

# Configuration
from .config import ConfigurationError, ReporterConfig, Verbosity

# Renderers
from .hierarchy import HierarchyMode, HierarchyRenderer
from .progress import ProgressReportRenderer
from .source import FileSourceLookup, NullSourceLookup, SourceLookup, SourceWindow
from .spec_renderer import DENOTER, RETRY_DENOTER, SpecRenderer
from .summary import SuiteSummaryRenderer

# Reporter
from .reporter import DefaultReporter

__all__ = [
    # Models
    "FAILURE_STATES",
    "CodeLocation",
    "Failure",
    "FailureNodeContext",
    "FunctionCall",
    "Goroutine",
    "NodeType",
    "PreRunStats",
    "ProgressReport",
    "ReportEntry",
    "ReportEntryVisibility",
    "SpecCounts",
    "SpecReport",
    "SpecState",
    "SuiteConfig",
    "SuiteReport",
    # Configuration
    "ConfigurationError",
    "ReporterConfig",
    "Verbosity",
    # Renderers
    "HierarchyMode",
    "HierarchyRenderer",
    "ProgressReportRenderer",
    "FileSourceLookup",
    "NullSourceLookup",
    "SourceLookup",
    "SourceWindow",
    "DENOTER",
    "RETRY_DENOTER",
    "SpecRenderer",
    "SuiteSummaryRenderer",
    # Reporter
    "DefaultReporter",
]
