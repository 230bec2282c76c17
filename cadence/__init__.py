"""
Cadence - Console Reporter for Test Runs

This package renders already-computed test-run data as human-readable,
optionally colorized console output.

Subpackages:
    - formatting: Style markers, colors and layout helpers
    - reporting: Report models, renderers and the DefaultReporter
    - report_parsing: Load and validate report documents (YAML/JSON)

Usage:
    from cadence import DefaultReporter, ReporterConfig, load_report

    report, result = load_report("reports/run.yaml")
    reporter = DefaultReporter(ReporterConfig(verbose=True))

    reporter.suite_will_begin(report)
    for spec in report.spec_reports:
        reporter.will_run(spec)
        reporter.did_run(spec)
    reporter.suite_did_end(report)
"""

__version__ = "0.1.0"

# Re-export formatting for convenience
from .formatting import ColorMode, Formatter

# Re-export reporting for convenience
from .reporting import (
    # Models
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
    SpecReport,
    SpecState,
    SuiteConfig,
    SuiteReport,
    # Configuration
    ConfigurationError,
    ReporterConfig,
    Verbosity,
    # Reporter
    DefaultReporter,
)

# Re-export report_parsing for convenience
from .report_parsing import (
    load_progress_report,
    load_report,
    load_reporter_config,
    validate_report_yaml,
    ValidationResult,
)

__all__ = [
    # Package info
    "__version__",
    # Formatting
    "ColorMode",
    "Formatter",
    # Reporting - Models
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
    "SpecReport",
    "SpecState",
    "SuiteConfig",
    "SuiteReport",
    # Reporting - Configuration
    "ConfigurationError",
    "ReporterConfig",
    "Verbosity",
    # Reporting - Reporter
    "DefaultReporter",
    # Report parsing
    "load_progress_report",
    "load_report",
    "load_reporter_config",
    "validate_report_yaml",
    "ValidationResult",
]
