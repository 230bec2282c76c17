"""
Suite-level banners: the header printed when a suite starts and the
summary printed once it has ended.
"""

from __future__ import annotations

from ..formatting import Formatter, TextBuffer, format_duration, format_seconds
from .config import ReporterConfig, Verbosity
from .hierarchy import HierarchyMode, HierarchyRenderer
from .models import SpecState, SuiteReport

# Heading and color used for each failed report in the summary
FAILURE_HEADINGS = {
    SpecState.FAILED: ("{{red}}", "[FAIL]"),
    SpecState.PANICKED: ("{{magenta}}", "[PANICKED!]"),
    SpecState.INTERRUPTED: ("{{orange}}", "[INTERRUPTED]"),
    SpecState.ABORTED: ("{{coral}}", "[ABORTED]"),
}


class SuiteSummaryRenderer:
    """Renders the suite-will-begin banner and the suite-did-end summary."""

    def __init__(self, config: ReporterConfig, formatter: Formatter, hierarchy: HierarchyRenderer):
        self.config = config
        self.formatter = formatter
        self.hierarchy = hierarchy

    def render_suite_will_begin(self, report: SuiteReport) -> str:
        buffer = TextBuffer()
        stats = report.pre_run_stats
        suite_config = report.suite_config
        labels = ", ".join(report.suite_labels)

        if self.config.verbosity() == Verbosity.SUCCINCT:
            buffer.emit(f"[{suite_config.random_seed}] {{{{bold}}}}{report.suite_description}{{{{/}}}} ")
            if labels:
                buffer.emit(f"{{{{coral}}}}[{labels}]{{{{/}}}} ")
            buffer.emit(f"- {stats.specs_that_will_run}/{stats.total_specs} specs ")
            if suite_config.parallel_total > 1:
                buffer.emit(f"- {suite_config.parallel_total} procs ")
            return buffer.getvalue()

        banner = f"Running Suite: {report.suite_description} - {report.suite_path}"
        buffer.emit_block(banner)
        width = len(banner)
        if labels:
            buffer.emit_block(f"{{{{coral}}}}[{labels}]{{{{/}}}} ")
            width = max(width, len(labels) + 2)
        buffer.emit_block("=" * width)

        seed_line = f"Random Seed: {{{{bold}}}}{suite_config.random_seed}{{{{/}}}}"
        if suite_config.randomize_all_specs:
            seed_line += " - will randomize all specs"
        buffer.emit_block(seed_line)
        buffer.emit("\n")

        buffer.emit_block(
            f"Will run {{{{bold}}}}{stats.specs_that_will_run}{{{{/}}}} "
            f"of {{{{bold}}}}{stats.total_specs}{{{{/}}}} specs"
        )
        if suite_config.parallel_total > 1:
            buffer.emit_block(
                f"Running in parallel across {{{{bold}}}}{suite_config.parallel_total}{{{{/}}}} processes"
            )
        buffer.emit("\n")
        return buffer.getvalue()

    def render_suite_did_end(self, report: SuiteReport) -> str:
        buffer = TextBuffer()
        failures = report.failures()

        if failures:
            noun = "Failure" if len(failures) == 1 else "Failures"
            buffer.emit_block("\n\n")
            buffer.emit_block(f"{{{{red}}}}{{{{bold}}}}Summarizing {len(failures)} {noun}:{{{{/}}}}")
            for spec in failures:
                color, heading = FAILURE_HEADINGS[spec.state]
                location = self.hierarchy.location_block(
                    spec, color, HierarchyMode.SUCCINCT, use_precise_failure_location=True
                )
                buffer.emit_block(self.formatter.fi(1, f"{color}{heading}{{{{/}}}} {location}"))

        if self.config.verbosity() == Verbosity.SUCCINCT and report.suite_succeeded:
            buffer.emit(f" {{{{green}}}}SUCCESS!{{{{/}}}} {format_duration(report.run_time)} ")
            return buffer.getvalue()

        buffer.emit_block("\n")
        if report.suite_succeeded:
            color, status = "{{green}}{{bold}}", "SUCCESS!"
        else:
            color, status = "{{red}}{{bold}}", "FAIL!"

        counts = report.counts()
        buffer.emit_block(
            f"{color}Ran {counts.ran} of {report.pre_run_stats.total_specs} Specs "
            f"in {format_seconds(report.run_time)} seconds{{{{/}}}}"
        )

        reasons = report.special_suite_failure_reasons
        if len(reasons) == 0:
            buffer.emit(f"{color}{status}{{{{/}}}} -- ")
        elif len(reasons) == 1:
            buffer.emit(f"{color}{status} - {reasons[0]}{{{{/}}}} -- ")
        else:
            buffer.emit_block(f"{color}{status} - {', '.join(reasons)}{{{{/}}}}\n")

        before_suite_failed = any(
            spec.leaf_node_type.is_before_suite and spec.state.is_failure
            for spec in report.spec_reports
        )
        if before_suite_failed and not any(spec.is_spec for spec in report.spec_reports):
            buffer.emit("{{cyan}}{{bold}}A BeforeSuite node failed so all tests were skipped.{{/}}\n")
            return buffer.getvalue()

        buffer.emit(f"{{{{green}}}}{{{{bold}}}}{counts.passed + counts.flaked} Passed{{{{/}}}} | ")
        buffer.emit(f"{{{{red}}}}{{{{bold}}}}{counts.failed} Failed{{{{/}}}} | ")
        if counts.flaked > 0:
            buffer.emit(f"{{{{light-yellow}}}}{{{{bold}}}}{counts.flaked} Flaked{{{{/}}}} | ")
        buffer.emit(f"{{{{yellow}}}}{{{{bold}}}}{counts.pending} Pending{{{{/}}}} | ")
        buffer.emit(f"{{{{cyan}}}}{{{{bold}}}}{counts.skipped} Skipped{{{{/}}}}\n")
        return buffer.getvalue()
