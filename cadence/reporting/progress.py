"""
Progress report rendering.

A progress report describes where a running spec currently is, down to the
step being executed, along with the goroutine stacks captured at that moment.
Highlighted frames are expanded with a de-indented source snippet.
"""

from __future__ import annotations

from ..formatting import Formatter, TextBuffer, format_duration, round_to_millisecond
from .models import FunctionCall, Goroutine, NodeType, ProgressReport
from .source import NullSourceLookup, SourceLookup, SourceWindow, dedent_window

DELIMITER = "{{gray}}" + "-" * 30 + "{{/}}"

# Captured writer output in a progress report is cut to its tail.
WRITER_OUTPUT_LINE_LIMIT = 10


def emit_writer_output(
    buffer: TextBuffer,
    formatter: Formatter,
    indent: int,
    output: str,
    limit: int = 0,
) -> None:
    """Emit a captured writer-output block, keeping only the last lines if limited."""
    buffer.emit_block(formatter.fi(indent, "{{gray}}Begin Captured Writer Output >>{{/}}"))
    lines = output.split("\n")
    if limit and len(lines) > limit:
        buffer.emit_block(formatter.fi(indent + 1, "{{gray}}...{{/}}"))
        for line in lines[-limit:]:
            buffer.emit_block(formatter.fi(indent + 1, line))
    else:
        buffer.emit_block(formatter.fi(indent + 1, output))
    buffer.emit_block(formatter.fi(indent, "{{gray}}<< End Captured Writer Output{{/}}"))


class ProgressReportRenderer:
    """Renders ProgressReport snapshots as template text."""

    def __init__(self, formatter: Formatter, source_lookup: SourceLookup | None = None):
        self.formatter = formatter
        self.source_lookup = source_lookup or NullSourceLookup()

    def render(self, report: ProgressReport) -> str:
        """Render a standalone, delimiter-bracketed progress report."""
        buffer = TextBuffer()
        buffer.emit_block(DELIMITER)
        if report.running_in_parallel:
            buffer.emit(
                f"{{{{coral}}}}Progress Report for Process #{{{{bold}}}}{report.parallel_process}{{{{/}}}}\n"
            )
        self.render_into(buffer, report, indent=0, include_writer_output=True)
        buffer.emit_block(DELIMITER)
        return buffer.getvalue()

    def render_into(
        self,
        buffer: TextBuffer,
        report: ProgressReport,
        indent: int = 0,
        include_writer_output: bool = True,
    ) -> None:
        """Render the body of a progress report into an existing buffer."""
        fi = self.formatter.fi

        if report.message:
            buffer.emit_block(fi(indent, report.message))
            indent += 1

        if report.leaf_node_text:
            subject_indent = indent
            if report.container_hierarchy_texts:
                buffer.emit(fi(indent, self.formatter.cycle_join(report.container_hierarchy_texts, " ")))
                buffer.emit(" ")
                subject_indent = 0
            runtime = _runtime(report, report.spec_start_time)
            buffer.emit(fi(
                subject_indent,
                f"{{{{bold}}}}{{{{orange}}}}{report.leaf_node_text}{{{{/}}}} (Spec Runtime: {runtime})\n",
            ))
            buffer.emit(fi(indent + 1, f"{{{{gray}}}}{report.leaf_node_location}{{{{/}}}}\n"))
            indent += 1

        if report.current_node_type is not None:
            line = f"In {{{{bold}}}}{{{{orange}}}}[{report.current_node_type.value}]{{{{/}}}}"
            if report.current_node_text and report.current_node_type != NodeType.IT:
                line += f" {{{{bold}}}}{{{{orange}}}}{report.current_node_text}{{{{/}}}}"
            line += f" (Node Runtime: {_runtime(report, report.current_node_start_time)})\n"
            buffer.emit(fi(indent, line))
            buffer.emit(fi(indent + 1, f"{{{{gray}}}}{report.current_node_location}{{{{/}}}}\n"))
            indent += 1

        if report.current_step_text:
            runtime = _runtime(report, report.current_step_start_time)
            buffer.emit(fi(
                indent,
                f"At {{{{bold}}}}{{{{orange}}}}[By Step] {report.current_step_text}{{{{/}}}} (Step Runtime: {runtime})\n",
            ))
            buffer.emit(fi(indent + 1, f"{{{{gray}}}}{report.current_step_location}{{{{/}}}}\n"))
            indent += 1

        indent = max(indent - 1, 0)

        if include_writer_output and report.captured_writer_output:
            buffer.emit("\n")
            emit_writer_output(
                buffer, self.formatter, indent,
                report.captured_writer_output, WRITER_OUTPUT_LINE_LIMIT,
            )

        spec_goroutine = report.spec_goroutine()
        if spec_goroutine is not None:
            buffer.emit("\n")
            buffer.emit(fi(indent, "{{bold}}{{underline}}Spec Goroutine{{/}}\n"))
            self._emit_goroutines(buffer, indent, [spec_goroutine])

        highlighted = report.highlighted_goroutines()
        if highlighted:
            buffer.emit("\n")
            buffer.emit(fi(indent, "{{bold}}{{underline}}Goroutines of Interest{{/}}\n"))
            self._emit_goroutines(buffer, indent, highlighted)

        others = report.other_goroutines()
        if others:
            buffer.emit("\n")
            buffer.emit(fi(indent, "{{gray}}{{bold}}{{underline}}Other Goroutines{{/}}\n"))
            self._emit_goroutines(buffer, indent, others)

    def _emit_goroutines(self, buffer: TextBuffer, indent: int, goroutines: list[Goroutine]) -> None:
        fi = self.formatter.fi
        for idx, goroutine in enumerate(goroutines):
            color = "{{orange}}" if goroutine.has_highlights else "{{gray}}"
            buffer.emit(fi(indent, f"{color}goroutine {goroutine.id} [{goroutine.state}]{{{{/}}}}\n"))
            for call in goroutine.stack:
                if call.highlight:
                    buffer.emit(fi(indent, f"{color}{{{{bold}}}}> {call.function}{{{{/}}}}\n"))
                    buffer.emit(fi(indent + 2, f"{color}{{{{bold}}}}{call.filename}:{call.line}{{{{/}}}}\n"))
                    self._emit_source(buffer, indent + 3, call)
                else:
                    buffer.emit(fi(indent + 1, f"{{{{gray}}}}{call.function}{{{{/}}}}\n"))
                    buffer.emit(fi(indent + 2, f"{{{{gray}}}}{call.filename}:{call.line}{{{{/}}}}\n"))
            if idx + 1 < len(goroutines):
                buffer.emit("\n")

    def _emit_source(self, buffer: TextBuffer, indent: int, call: FunctionCall) -> None:
        window = self._source_window(call)
        if window is None:
            return
        for idx, line in enumerate(dedent_window(window.lines)):
            if idx == window.highlight:
                buffer.emit(self.formatter.fi(indent, f"{{{{bold}}}}{{{{orange}}}}> {line}{{{{/}}}}\n"))
            else:
                buffer.emit(self.formatter.fi(indent, f"| {line}\n"))

    def _source_window(self, call: FunctionCall) -> SourceWindow | None:
        if call.source:
            return SourceWindow(lines=call.source, highlight=call.source_highlight)
        return self.source_lookup.lookup(call.filename, call.line)


def _runtime(report: ProgressReport, start) -> str:
    return format_duration(round_to_millisecond(report.elapsed_since(start)))
