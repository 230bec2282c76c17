"""
Schema validation for suite report documents.

This module checks raw parsed YAML (or JSON) against the report document
schema and reports errors with helpful messages.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from ..reporting.models import FailureNodeContext, NodeType, ReportEntryVisibility, SpecState


# ─────────────────────────────────────────────────────────────────────────────
# Validation Result Types
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ValidationError:
    """Represents a single validation error with context."""
    path: str  # e.g., "specs[0].failure.location"
    message: str
    value: Any = None
    suggestion: str | None = None

    def __str__(self) -> str:
        parts = [f"❌ {self.path}: {self.message}"]
        if self.value is not None:
            parts.append(f"   Got: {repr(self.value)}")
        if self.suggestion:
            parts.append(f"   💡 {self.suggestion}")
        return "\n".join(parts)


@dataclass
class ValidationResult:
    """Result of schema validation."""
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(
        self,
        path: str,
        message: str,
        value: Any = None,
        suggestion: str | None = None
    ) -> None:
        self.errors.append(ValidationError(path, message, value, suggestion))

    def __str__(self) -> str:
        if self.is_valid:
            return "✅ Report validation passed"
        lines = [f"Report validation failed with {len(self.errors)} error(s):\n"]
        lines.extend(str(e) for e in self.errors)
        return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# Report Validator
# ─────────────────────────────────────────────────────────────────────────────

# "path/to/file.go:123"
LOCATION_PATTERN = re.compile(r"^(?P<file>.*):(?P<line>\d+)$")


class ReportValidator:
    """Validates a raw report document against the schema."""

    REQUIRED_TOP_LEVEL = {"suite"}
    OPTIONAL_TOP_LEVEL = {"version", "reporter", "specs"}
    REPORTER_FLAGS = {
        "succinct",
        "verbose",
        "very_verbose",
        "no_color",
        "always_emit_writer_output",
        "full_trace",
    }
    VALID_STATES = {s.value for s in SpecState}
    VALID_NODE_TYPES = {t.value for t in NodeType}
    VALID_CONTEXTS = {c.value for c in FailureNodeContext}
    VALID_VISIBILITIES = {v.value for v in ReportEntryVisibility}

    def __init__(self, data: dict[str, Any]):
        self.data = data
        self.result = ValidationResult()

    def validate(self) -> ValidationResult:
        """Run all validation checks and return result."""
        self._validate_top_level()
        if not self.result.is_valid:
            return self.result

        self._validate_version()
        self._validate_suite()
        self.validate_reporter()
        self._validate_specs()

        return self.result

    def _validate_top_level(self) -> None:
        """Check required and unknown top-level keys."""
        keys = set(self.data.keys())
        missing = self.REQUIRED_TOP_LEVEL - keys
        unknown = keys - self.REQUIRED_TOP_LEVEL - self.OPTIONAL_TOP_LEVEL

        for key in sorted(missing):
            self.result.add_error(
                key,
                f"Required field '{key}' is missing",
                suggestion=f"Add '{key}:' to your report file"
            )

        for key in sorted(unknown):
            self.result.add_error(
                key,
                f"Unknown top-level field '{key}'",
                suggestion=f"Valid fields are: {', '.join(sorted(self.REQUIRED_TOP_LEVEL | self.OPTIONAL_TOP_LEVEL))}"
            )

    def _validate_version(self) -> None:
        version = self.data.get("version")
        if version is None:
            return
        if not isinstance(version, int) or isinstance(version, bool) or version < 1:
            self.result.add_error(
                "version",
                "Must be an integer >= 1",
                value=version,
                suggestion="Use 'version: 1'"
            )

    def _validate_suite(self) -> None:
        suite = self.data.get("suite")
        if not isinstance(suite, dict):
            self.result.add_error("suite", "Must be an object", value=suite)
            return

        description = suite.get("description")
        if not isinstance(description, str) or not description.strip():
            self.result.add_error(
                "suite.description",
                "Must be a non-empty string",
                value=description,
                suggestion="Name the suite, e.g. 'description: My Suite'"
            )

        if "path" in suite and not isinstance(suite["path"], str):
            self.result.add_error("suite.path", "Must be a string", value=suite["path"])

        self._check_string_list("suite.labels", suite.get("labels"))
        self._check_string_list("suite.special_failure_reasons", suite.get("special_failure_reasons"))

        for key in ("random_seed", "total_specs", "specs_that_will_run"):
            self._check_int(f"suite.{key}", suite.get(key), minimum=0)
        self._check_int("suite.parallel_total", suite.get("parallel_total"), minimum=1)

        for key in ("randomize_all_specs", "succeeded"):
            self._check_bool(f"suite.{key}", suite.get(key))

        self._check_seconds("suite.run_time", suite.get("run_time"))

    def validate_reporter(self) -> None:
        """Check the optional reporter block."""
        reporter = self.data.get("reporter")
        if reporter is None:
            return
        if not isinstance(reporter, dict):
            self.result.add_error("reporter", "Must be an object", value=reporter)
            return

        valid_keys = self.REPORTER_FLAGS | {"slow_spec_threshold"}
        for key in sorted(set(reporter) - valid_keys):
            self.result.add_error(
                f"reporter.{key}",
                "Unknown reporter setting",
                suggestion=f"Valid settings: {', '.join(sorted(valid_keys))}"
            )

        for key in sorted(self.REPORTER_FLAGS & set(reporter)):
            self._check_bool(f"reporter.{key}", reporter[key])

        self._check_seconds("reporter.slow_spec_threshold", reporter.get("slow_spec_threshold"))

        chosen = [key for key in ("succinct", "verbose", "very_verbose") if reporter.get(key) is True]
        if len(chosen) > 1:
            self.result.add_error(
                "reporter",
                "Only one of succinct, verbose, or very_verbose may be set",
                value=chosen
            )

    def _validate_specs(self) -> None:
        specs = self.data.get("specs")
        if specs is None:
            return
        if not isinstance(specs, list):
            self.result.add_error("specs", "Must be a list", value=specs)
            return

        for i, spec in enumerate(specs):
            self._validate_spec(f"specs[{i}]", spec)

    def _validate_spec(self, path: str, spec: Any) -> None:
        if not isinstance(spec, dict):
            self.result.add_error(path, "Spec must be an object", value=spec)
            return

        if "text" in spec and not isinstance(spec["text"], str):
            self.result.add_error(f"{path}.text", "Must be a string", value=spec["text"])

        node_type = spec.get("type")
        if node_type is not None and node_type not in self.VALID_NODE_TYPES:
            self.result.add_error(
                f"{path}.type",
                "Invalid node type",
                value=node_type,
                suggestion=f"Valid types: {', '.join(sorted(self.VALID_NODE_TYPES))}"
            )

        state = spec.get("state")
        if state not in self.VALID_STATES:
            self.result.add_error(
                f"{path}.state",
                "Invalid spec state",
                value=state,
                suggestion=f"Valid states: {', '.join(sorted(self.VALID_STATES))}"
            )

        self._check_location(f"{path}.location", spec.get("location"))
        self._check_string_list(f"{path}.labels", spec.get("labels"))
        self._check_int(f"{path}.attempts", spec.get("attempts"), minimum=1)
        self._check_seconds(f"{path}.run_time", spec.get("run_time"))

        for key in ("stdout", "writer_output"):
            if key in spec and not isinstance(spec[key], str):
                self.result.add_error(f"{path}.{key}", "Must be a string", value=spec[key])

        containers = spec.get("containers")
        if containers is not None:
            if not isinstance(containers, list):
                self.result.add_error(f"{path}.containers", "Must be a list", value=containers)
            else:
                for i, container in enumerate(containers):
                    self._validate_container(f"{path}.containers[{i}]", container)

        entries = spec.get("entries")
        if entries is not None:
            if not isinstance(entries, list):
                self.result.add_error(f"{path}.entries", "Must be a list", value=entries)
            else:
                for i, entry in enumerate(entries):
                    self._validate_entry(f"{path}.entries[{i}]", entry)

        failure = spec.get("failure")
        if failure is not None:
            self._validate_failure(f"{path}.failure", failure)

    def _validate_container(self, path: str, container: Any) -> None:
        if isinstance(container, str):
            return
        if not isinstance(container, dict):
            self.result.add_error(
                path,
                "Container must be a string or an object",
                value=container,
                suggestion="Use '- Describe A' or '- {text: Describe A, location: a.go:3}'"
            )
            return
        if not isinstance(container.get("text"), str):
            self.result.add_error(f"{path}.text", "Must be a string", value=container.get("text"))
        self._check_location(f"{path}.location", container.get("location"))
        self._check_string_list(f"{path}.labels", container.get("labels"))

    def _validate_entry(self, path: str, entry: Any) -> None:
        if not isinstance(entry, dict):
            self.result.add_error(path, "Report entry must be an object", value=entry)
            return
        name = entry.get("name")
        if not isinstance(name, str) or not name:
            self.result.add_error(f"{path}.name", "Must be a non-empty string", value=name)
        self._check_location(f"{path}.location", entry.get("location"))
        self._check_time(f"{path}.time", entry.get("time"))

        visibility = entry.get("visibility")
        if visibility is not None and visibility not in self.VALID_VISIBILITIES:
            self.result.add_error(
                f"{path}.visibility",
                "Invalid visibility",
                value=visibility,
                suggestion=f"Valid values: {', '.join(sorted(self.VALID_VISIBILITIES))}"
            )

        value = entry.get("value")
        if value is not None and not isinstance(value, str):
            self.result.add_error(f"{path}.value", "Must be a string (already rendered)", value=value)

    def _validate_failure(self, path: str, failure: Any) -> None:
        if not isinstance(failure, dict):
            self.result.add_error(path, "Failure must be an object", value=failure)
            return

        if "message" in failure and not isinstance(failure["message"], str):
            self.result.add_error(f"{path}.message", "Must be a string", value=failure["message"])

        self._check_location(f"{path}.location", failure.get("location"))
        self._check_location(f"{path}.node_location", failure.get("node_location"))

        context = failure.get("node_context")
        if context is not None and context not in self.VALID_CONTEXTS:
            self.result.add_error(
                f"{path}.node_context",
                "Invalid failure node context",
                value=context,
                suggestion=f"Valid values: {', '.join(sorted(self.VALID_CONTEXTS))}"
            )

        node_type = failure.get("node_type")
        if node_type is not None and node_type not in self.VALID_NODE_TYPES:
            self.result.add_error(f"{path}.node_type", "Invalid node type", value=node_type)

        self._check_int(f"{path}.container_index", failure.get("container_index"), minimum=0)

        if "forwarded_panic" in failure and not isinstance(failure["forwarded_panic"], str):
            self.result.add_error(f"{path}.forwarded_panic", "Must be a string", value=failure["forwarded_panic"])

        progress = failure.get("progress_report")
        if progress is not None:
            self.validate_progress_report(f"{path}.progress_report", progress)

    def validate_progress_report(self, path: str, progress: Any) -> None:
        """Check a progress report mapping (embedded or standalone)."""
        if not isinstance(progress, dict):
            self.result.add_error(path, "Progress report must be an object", value=progress)
            return

        for key in ("time", "spec_start_time", "node_start_time", "step_start_time"):
            self._check_time(f"{path}.{key}", progress.get(key))
        for key in ("location", "node_location", "step_location"):
            self._check_location(f"{path}.{key}", progress.get(key))
        self._check_string_list(f"{path}.containers", progress.get("containers"))
        self._check_int(f"{path}.parallel_process", progress.get("parallel_process"), minimum=1)
        self._check_bool(f"{path}.running_in_parallel", progress.get("running_in_parallel"))

        node_type = progress.get("node_type")
        if node_type is not None and node_type not in self.VALID_NODE_TYPES:
            self.result.add_error(f"{path}.node_type", "Invalid node type", value=node_type)

        goroutines = progress.get("goroutines")
        if goroutines is None:
            return
        if not isinstance(goroutines, list):
            self.result.add_error(f"{path}.goroutines", "Must be a list", value=goroutines)
            return

        for i, goroutine in enumerate(goroutines):
            g_path = f"{path}.goroutines[{i}]"
            if not isinstance(goroutine, dict):
                self.result.add_error(g_path, "Goroutine must be an object", value=goroutine)
                continue
            self._check_int(f"{g_path}.id", goroutine.get("id"), minimum=0, required=True)
            self._check_bool(f"{g_path}.is_spec_goroutine", goroutine.get("is_spec_goroutine"))
            stack = goroutine.get("stack", [])
            if not isinstance(stack, list):
                self.result.add_error(f"{g_path}.stack", "Must be a list", value=stack)
                continue
            for j, frame in enumerate(stack):
                f_path = f"{g_path}.stack[{j}]"
                if not isinstance(frame, dict) or not isinstance(frame.get("function"), str):
                    self.result.add_error(
                        f_path,
                        "Frame must be an object with a 'function' string",
                        value=frame
                    )
                    continue
                self._check_int(f"{f_path}.line", frame.get("line"), minimum=0)
                self._check_bool(f"{f_path}.highlight", frame.get("highlight"))
                self._check_string_list(f"{f_path}.source", frame.get("source"))
                self._check_int(f"{f_path}.source_highlight", frame.get("source_highlight"), minimum=0)

    # ─────────────────────────────────────────────────────────────────────
    # Field checks
    # ─────────────────────────────────────────────────────────────────────

    def _check_location(self, path: str, value: Any) -> None:
        if value is None:
            return
        if isinstance(value, str):
            if not LOCATION_PATTERN.match(value):
                self.result.add_error(
                    path,
                    "Location must look like 'file:line'",
                    value=value,
                    suggestion="e.g. 'suite_test.go:42'"
                )
            return
        if isinstance(value, dict):
            if not isinstance(value.get("file"), str):
                self.result.add_error(f"{path}.file", "Must be a string", value=value.get("file"))
            self._check_int(f"{path}.line", value.get("line"), minimum=0)
            trace = value.get("full_stack_trace")
            if trace is not None and not isinstance(trace, str):
                self.result.add_error(f"{path}.full_stack_trace", "Must be a string", value=trace)
            return
        self.result.add_error(path, "Location must be a string or an object", value=value)

    def _check_int(self, path: str, value: Any, minimum: int = 0, required: bool = False) -> None:
        if value is None:
            if required:
                self.result.add_error(path, "Required field is missing")
            return
        if not isinstance(value, int) or isinstance(value, bool) or value < minimum:
            self.result.add_error(path, f"Must be an integer >= {minimum}", value=value)

    def _check_bool(self, path: str, value: Any) -> None:
        if value is not None and not isinstance(value, bool):
            self.result.add_error(path, "Must be true or false", value=value)

    def _check_seconds(self, path: str, value: Any) -> None:
        if value is None:
            return
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            self.result.add_error(
                path,
                "Must be a non-negative number of seconds",
                value=value
            )

    def _check_time(self, path: str, value: Any) -> None:
        if value is None or isinstance(value, (datetime, date)):
            return
        if isinstance(value, str):
            try:
                datetime.fromisoformat(value)
            except ValueError:
                self.result.add_error(
                    path,
                    "Must be an ISO 8601 timestamp",
                    value=value,
                    suggestion="e.g. '2024-01-15T10:30:00.123'"
                )
            return
        self.result.add_error(path, "Must be a timestamp", value=value)

    def _check_string_list(self, path: str, value: Any) -> None:
        if value is None:
            return
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            self.result.add_error(path, "Must be a list of strings", value=value)
