"""
Report parser for suite report documents.

This module converts validated YAML/JSON data into the typed report model.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any

from ..reporting.config import ReporterConfig
from ..reporting.models import (
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
)
from .validation import LOCATION_PATTERN


class ReportParser:
    """Parses and converts validated data to a typed SuiteReport."""

    def __init__(self, data: dict[str, Any]):
        self.data = data

    def parse(self) -> SuiteReport:
        """Convert validated data to a typed SuiteReport."""
        suite = self.data["suite"]
        specs = tuple(self._parse_spec(spec) for spec in self.data.get("specs") or [])

        return SuiteReport(
            suite_description=suite["description"],
            suite_path=suite.get("path", ""),
            suite_labels=tuple(suite.get("labels") or ()),
            suite_config=SuiteConfig(
                random_seed=suite.get("random_seed", 0),
                randomize_all_specs=suite.get("randomize_all_specs", False),
                parallel_total=suite.get("parallel_total", 1),
            ),
            pre_run_stats=PreRunStats(
                total_specs=suite.get("total_specs", len(specs)),
                specs_that_will_run=suite.get("specs_that_will_run", len(specs)),
            ),
            run_time=_seconds(suite.get("run_time")),
            # Without an explicit verdict, the suite succeeded if nothing failed
            suite_succeeded=suite.get(
                "succeeded", not any(spec.state.is_failure for spec in specs)
            ),
            special_suite_failure_reasons=tuple(suite.get("special_failure_reasons") or ()),
            spec_reports=specs,
        )

    def parse_reporter_config(self) -> ReporterConfig:
        """Build a ReporterConfig from the optional ``reporter`` block."""
        reporter = self.data.get("reporter") or {}
        kwargs: dict[str, Any] = {
            key: reporter[key]
            for key in (
                "succinct",
                "verbose",
                "very_verbose",
                "no_color",
                "always_emit_writer_output",
                "full_trace",
            )
            if key in reporter
        }
        if reporter.get("slow_spec_threshold") is not None:
            kwargs["slow_spec_threshold"] = _seconds(reporter["slow_spec_threshold"])
        return ReporterConfig(**kwargs)

    def _parse_spec(self, spec: dict) -> SpecReport:
        texts: list[str] = []
        locations: list[CodeLocation] = []
        labels: list[tuple[str, ...]] = []
        for container in spec.get("containers") or []:
            if isinstance(container, str):
                container = {"text": container}
            texts.append(container["text"])
            locations.append(parse_location(container.get("location")))
            labels.append(tuple(container.get("labels") or ()))

        failure = spec.get("failure")

        return SpecReport(
            state=SpecState(spec["state"]),
            leaf_node_type=NodeType(spec.get("type", NodeType.IT.value)),
            leaf_node_text=spec.get("text", ""),
            leaf_node_location=parse_location(spec.get("location")),
            leaf_node_labels=tuple(spec.get("labels") or ()),
            container_hierarchy_texts=tuple(texts),
            container_hierarchy_locations=tuple(locations),
            container_hierarchy_labels=tuple(labels),
            num_attempts=spec.get("attempts", 1),
            run_time=_seconds(spec.get("run_time")),
            failure=self._parse_failure(failure) if failure is not None else None,
            captured_stdout_err=spec.get("stdout", ""),
            captured_writer_output=spec.get("writer_output", ""),
            report_entries=tuple(self._parse_entry(e) for e in spec.get("entries") or []),
        )

    def _parse_entry(self, entry: dict) -> ReportEntry:
        return ReportEntry(
            name=entry["name"],
            location=parse_location(entry.get("location")),
            time=parse_time(entry.get("time")) or datetime.min,
            visibility=ReportEntryVisibility(entry.get("visibility", ReportEntryVisibility.ALWAYS.value)),
            value=entry.get("value"),
        )

    def _parse_failure(self, failure: dict) -> Failure:
        context = failure.get("node_context")
        node_type = failure.get("node_type")
        progress = failure.get("progress_report")

        return Failure(
            message=failure.get("message", ""),
            location=parse_location(failure.get("location")),
            failure_node_context=FailureNodeContext(context) if context else None,
            failure_node_container_index=failure.get("container_index", 0),
            failure_node_type=NodeType(node_type) if node_type else None,
            failure_node_location=parse_location(failure.get("node_location")),
            forwarded_panic=failure.get("forwarded_panic", ""),
            progress_report=parse_progress_report(progress) if progress is not None else None,
        )


def parse_progress_report(data: dict) -> ProgressReport:
    """Convert a validated progress-report mapping to a ProgressReport."""
    node_type = data.get("node_type")
    return ProgressReport(
        message=data.get("message", ""),
        parallel_process=data.get("parallel_process", 1),
        running_in_parallel=data.get("running_in_parallel", False),
        time=parse_time(data.get("time")),
        container_hierarchy_texts=tuple(data.get("containers") or ()),
        leaf_node_text=data.get("text", ""),
        leaf_node_location=parse_location(data.get("location")),
        spec_start_time=parse_time(data.get("spec_start_time")),
        current_node_type=NodeType(node_type) if node_type else None,
        current_node_text=data.get("node_text", ""),
        current_node_location=parse_location(data.get("node_location")),
        current_node_start_time=parse_time(data.get("node_start_time")),
        current_step_text=data.get("step_text", ""),
        current_step_location=parse_location(data.get("step_location")),
        current_step_start_time=parse_time(data.get("step_start_time")),
        captured_writer_output=data.get("writer_output", ""),
        goroutines=tuple(_parse_goroutine(g) for g in data.get("goroutines") or []),
    )


def _parse_goroutine(data: dict) -> Goroutine:
    return Goroutine(
        id=data["id"],
        state=data.get("state", "running"),
        is_spec_goroutine=data.get("is_spec_goroutine", False),
        stack=tuple(
            FunctionCall(
                function=frame["function"],
                filename=frame.get("file", ""),
                line=frame.get("line", 0),
                highlight=frame.get("highlight", False),
                source=tuple(frame.get("source") or ()),
                source_highlight=frame.get("source_highlight", -1),
            )
            for frame in data.get("stack") or []
        ),
    )


def parse_location(value: str | dict | None) -> CodeLocation:
    """Accept ``"file:line"`` or ``{file, line, full_stack_trace}``."""
    if value is None:
        return CodeLocation()
    if isinstance(value, dict):
        return CodeLocation(
            file_name=value.get("file", ""),
            line_number=value.get("line", 0),
            full_stack_trace=value.get("full_stack_trace", ""),
        )
    match = LOCATION_PATTERN.match(value)
    if match is None:
        return CodeLocation(file_name=value)
    return CodeLocation(file_name=match.group("file"), line_number=int(match.group("line")))


def parse_time(value: str | date | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(value)


def _seconds(value: float | int | None) -> timedelta:
    return timedelta(seconds=value or 0)
