"""
Default console reporter.

DefaultReporter is the entry point a runner talks to. It receives one call
per lifecycle event, delegates to the renderers and writes the styled
result to its output stream.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from ..formatting import Formatter
from .config import ReporterConfig
from .hierarchy import HierarchyRenderer
from .models import ProgressReport, SpecReport, SuiteReport
from .progress import ProgressReportRenderer
from .source import FileSourceLookup, SourceLookup
from .spec_renderer import SpecRenderer
from .summary import SuiteSummaryRenderer

logger = logging.getLogger(__name__)


class DefaultReporter:
    """
    Writes human-readable output for a test run.

    Example:
        from cadence.reporting import DefaultReporter, ReporterConfig

        reporter = DefaultReporter(ReporterConfig(verbose=True))
        reporter.suite_will_begin(suite)
        for spec in suite.spec_reports:
            reporter.will_run(spec)
            reporter.did_run(spec)
        reporter.suite_did_end(suite)

    Every call is independent: rendering the same report twice writes the
    same bytes twice.
    """

    def __init__(
        self,
        config: ReporterConfig | None = None,
        writer: TextIO | None = None,
        source_lookup: SourceLookup | None = None,
    ):
        """
        Initialize the reporter.

        Args:
            config: Reporter settings (defaults to normal verbosity, colors on)
            writer: Output stream (defaults to sys.stdout)
            source_lookup: Where progress reports read source snippets from

        Raises:
            ConfigurationError: If more than one verbosity flag is set
        """
        self.config = config or ReporterConfig()
        self.config.validate()

        self.writer = writer if writer is not None else sys.stdout
        self.formatter = Formatter(self.config.resolved_color_mode())

        hierarchy = HierarchyRenderer(self.formatter)
        self.progress = ProgressReportRenderer(
            self.formatter,
            source_lookup if source_lookup is not None else FileSourceLookup(),
        )
        self.specs = SpecRenderer(self.config, self.formatter, hierarchy, self.progress)
        self.summary = SuiteSummaryRenderer(self.config, self.formatter, hierarchy)

        logger.debug(
            f"Reporter ready: verbosity={self.config.verbosity().name}, "
            f"color={self.formatter.mode.value}"
        )

    def suite_will_begin(self, report: SuiteReport) -> None:
        self._write(self.summary.render_suite_will_begin(report))

    def will_run(self, report: SpecReport) -> None:
        self._write(self.specs.render_will_run(report))

    def did_run(self, report: SpecReport) -> None:
        self._write(self.specs.render_did_run(report))

    def suite_did_end(self, report: SuiteReport) -> None:
        self._write(self.summary.render_suite_did_end(report))

    def emit_progress_report(self, report: ProgressReport) -> None:
        """Write an on-demand snapshot of a running spec."""
        self._write(self.progress.render(report))

    def _write(self, text: str) -> None:
        if not text:
            return
        self.writer.write(self.formatter.style(text))
        self.writer.flush()
