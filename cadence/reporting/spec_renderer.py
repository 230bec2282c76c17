"""
Per-spec rendering.

SpecRenderer decides what to print before and after each spec runs. The
decision is driven by state and verbosity, refined by node kind and by
whatever output was captured while the spec ran.
"""

from __future__ import annotations

import os

from ..formatting import Formatter, TextBuffer, format_seconds, format_timestamp
from .config import ReporterConfig, Verbosity
from .hierarchy import HierarchyMode, HierarchyRenderer, format_labels
from .models import ReportEntryVisibility, SpecReport, SpecState
from .progress import DELIMITER, ProgressReportRenderer, emit_writer_output

if os.name == "nt":
    DENOTER = "+"
    RETRY_DENOTER = "R"
else:
    DENOTER = "•"
    RETRY_DENOTER = "↺"


# Color and header suffix per failure state
FAILURE_STYLES = {
    SpecState.FAILED: ("{{red}}", " [FAILED]"),
    SpecState.PANICKED: ("{{magenta}}", "! [PANICKED]"),
    SpecState.INTERRUPTED: ("{{orange}}", "! [INTERRUPTED]"),
    SpecState.ABORTED: ("{{coral}}", "! [ABORTED]"),
}


class SpecRenderer:
    """
    Renders the will-run and did-run events for a single spec.

    Both methods return template text; an empty string means nothing should
    be written for that event.
    """

    def __init__(
        self,
        config: ReporterConfig,
        formatter: Formatter,
        hierarchy: HierarchyRenderer,
        progress: ProgressReportRenderer,
    ):
        self.config = config
        self.formatter = formatter
        self.hierarchy = hierarchy
        self.progress = progress

    def render_will_run(self, report: SpecReport) -> str:
        """Announce a spec that is about to run. Only emitted at Verbose and above."""
        if self.config.verbosity() < Verbosity.VERBOSE:
            return ""
        if report.state in (SpecState.PENDING, SpecState.SKIPPED):
            return ""

        fi = self.formatter.fi
        buffer = TextBuffer()
        buffer.emit_block(DELIMITER)

        indent = 0
        if report.leaf_node_type.is_suite_level:
            buffer.emit_block(
                f"{{{{bold}}}}[{report.leaf_node_type.value}] {report.leaf_node_text}{{{{/}}}}"
            )
        else:
            if report.container_hierarchy_texts:
                buffer.emit_block(self.formatter.cycle_join(report.container_hierarchy_texts, " "))
                indent = 1
            buffer.emit_block(fi(
                indent,
                f"{{{{bold}}}}{report.leaf_node_text}{{{{/}}}}" + format_labels(report.labels()),
            ))

        buffer.emit_block(fi(indent, f"{{{{gray}}}}{report.leaf_node_location}{{{{/}}}}"))
        return buffer.getvalue()

    def render_did_run(self, report: SpecReport) -> str:
        """Report the outcome of a spec or suite-level node."""
        verbosity = self.config.verbosity()
        fi = self.formatter.fi

        has_stdout = bool(report.captured_stdout_err)
        has_writer_output = bool(report.captured_writer_output)
        entries = self._visible_entries(report, verbosity)

        include_runtime = True
        emit_writer = True
        stream = False
        succinct_location = verbosity == Verbosity.SUCCINCT

        if report.leaf_node_type.is_suite_level:
            denoter = f"[{report.leaf_node_type.value}]"
        else:
            denoter = DENOTER

        state = report.state
        if state == SpecState.PASSED:
            color = "{{green}}"
            succinct_location = verbosity < Verbosity.VERBOSE
            emit_writer = (
                (self.config.always_emit_writer_output or verbosity >= Verbosity.VERBOSE)
                and has_writer_output
            )
            if report.leaf_node_type.is_suite_level:
                if not (verbosity >= Verbosity.VERBOSE or has_stdout or entries or emit_writer):
                    return ""
                header = f"{denoter} PASSED"
            else:
                header = denoter
                stream = True
                if report.num_attempts > 1:
                    header = f"{RETRY_DENOTER} [FLAKEY TEST - TOOK {report.num_attempts} ATTEMPTS TO PASS]"
                    stream = False
                if report.run_time >= self.config.slow_spec_threshold:
                    header += " [SLOW TEST]"
                    stream = False
                if has_stdout or emit_writer or entries:
                    stream = False
        elif state == SpecState.PENDING:
            color = "{{yellow}}"
            include_runtime = False
            emit_writer = False
            if verbosity == Verbosity.SUCCINCT:
                header = "P"
                stream = True
            else:
                header = "P [PENDING]"
                succinct_location = verbosity < Verbosity.VERY_VERBOSE
        elif state == SpecState.SKIPPED:
            color = "{{cyan}}"
            header = "S"
            stream = True
            has_message = report.failure is not None and bool(report.failure.message)
            if has_message or verbosity == Verbosity.VERY_VERBOSE:
                header = "S [SKIPPED]"
                stream = False
        else:
            color, word = FAILURE_STYLES[state]
            header = denoter + word

        if stream:
            return f"{color}{header}{{{{/}}}}"

        buffer = TextBuffer()
        buffer.emit_block(DELIMITER)
        if include_runtime:
            header += f" [{format_seconds(report.run_time)} seconds]"
        buffer.emit_block(f"{color}{header}{{{{/}}}}")

        mode = HierarchyMode.SUCCINCT if succinct_location else HierarchyMode.FULL
        buffer.emit_block(self.hierarchy.location_block(report, color, mode))

        if has_stdout:
            buffer.emit("\n")
            buffer.emit_block(fi(1, "{{gray}}Begin Captured StdOut/StdErr Output >>{{/}}"))
            buffer.emit_block(fi(2, report.captured_stdout_err))
            buffer.emit_block(fi(1, "{{gray}}<< End Captured StdOut/StdErr Output{{/}}"))

        if emit_writer and has_writer_output:
            buffer.emit("\n")
            emit_writer_output(buffer, self.formatter, 1, report.captured_writer_output)

        if entries:
            buffer.emit("\n")
            buffer.emit_block(fi(1, "{{gray}}Begin Report Entries >>{{/}}"))
            for entry in entries:
                buffer.emit_block(fi(
                    2,
                    f"{{{{bold}}}}{entry.name}{{{{gray}}}} - {entry.location} @ "
                    f"{format_timestamp(entry.time)}{{{{/}}}}",
                ))
                if entry.value:
                    buffer.emit_block(fi(3, entry.value))
            buffer.emit_block(fi(1, "{{gray}}<< End Report Entries{{/}}"))

        failure = report.failure
        if failure is not None:
            node_kind = (failure.failure_node_type or report.leaf_node_type).value
            buffer.emit("\n")
            buffer.emit_block(fi(1, f"{color}{failure.message}{{{{/}}}}"))
            buffer.emit_block(fi(
                1,
                f"{color}In {{{{bold}}}}[{node_kind}]{{{{/}}}}{color} at: "
                f"{{{{bold}}}}{failure.location}{{{{/}}}}\n",
            ))
            if failure.forwarded_panic:
                buffer.emit("\n")
                buffer.emit_block(fi(1, f"{color}{failure.forwarded_panic}{{{{/}}}}"))

            if self.config.full_trace or failure.forwarded_panic:
                buffer.emit("\n")
                buffer.emit_block(fi(1, f"{color}Full Stack Trace{{{{/}}}}"))
                buffer.emit_block(fi(2, failure.location.full_stack_trace))

            if failure.progress_report is not None:
                buffer.emit("\n")
                self.progress.render_into(
                    buffer, failure.progress_report, indent=1, include_writer_output=False
                )

        buffer.emit_block(DELIMITER)
        return buffer.getvalue()

    def _visible_entries(self, report: SpecReport, verbosity: Verbosity):
        if report.failure is not None or verbosity >= Verbosity.VERBOSE:
            return report.entries_with_visibility(
                ReportEntryVisibility.ALWAYS, ReportEntryVisibility.FAILURE_OR_VERBOSE
            )
        return report.entries_with_visibility(ReportEntryVisibility.ALWAYS)
