"""
Report data models for rendered test runs.

This module defines the read-only data structures the reporter consumes:
suite reports, per-spec reports, failures, report entries and progress
snapshots. They are produced by the runner and never mutated here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum


# ─────────────────────────────────────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────────────────────────────────────

class SpecState(str, Enum):
    """Final state of a spec or suite-level node."""
    PASSED = "passed"
    FAILED = "failed"
    PANICKED = "panicked"
    INTERRUPTED = "interrupted"
    ABORTED = "aborted"
    SKIPPED = "skipped"
    PENDING = "pending"

    @property
    def is_failure(self) -> bool:
        return self in FAILURE_STATES


FAILURE_STATES = frozenset({
    SpecState.FAILED,
    SpecState.PANICKED,
    SpecState.INTERRUPTED,
    SpecState.ABORTED,
})


class NodeType(str, Enum):
    """Kind of node in the spec tree. Values are the display names."""
    CONTAINER = "Container"
    IT = "It"
    BEFORE_EACH = "BeforeEach"
    JUST_BEFORE_EACH = "JustBeforeEach"
    AFTER_EACH = "AfterEach"
    JUST_AFTER_EACH = "JustAfterEach"
    BEFORE_ALL = "BeforeAll"
    AFTER_ALL = "AfterAll"
    BEFORE_SUITE = "BeforeSuite"
    SYNCHRONIZED_BEFORE_SUITE = "SynchronizedBeforeSuite"
    AFTER_SUITE = "AfterSuite"
    SYNCHRONIZED_AFTER_SUITE = "SynchronizedAfterSuite"
    REPORT_BEFORE_EACH = "ReportBeforeEach"
    REPORT_AFTER_EACH = "ReportAfterEach"
    REPORT_AFTER_SUITE = "ReportAfterSuite"
    CLEANUP = "DeferCleanup"
    CLEANUP_AFTER_EACH = "DeferCleanup (Each)"
    CLEANUP_AFTER_ALL = "DeferCleanup (All)"
    CLEANUP_AFTER_SUITE = "DeferCleanup (Suite)"

    @property
    def is_suite_level(self) -> bool:
        """True for setup/teardown/report nodes that run once per suite."""
        return self in SUITE_LEVEL_NODE_TYPES

    @property
    def is_before_suite(self) -> bool:
        return self in (NodeType.BEFORE_SUITE, NodeType.SYNCHRONIZED_BEFORE_SUITE)


SUITE_LEVEL_NODE_TYPES = frozenset({
    NodeType.BEFORE_SUITE,
    NodeType.SYNCHRONIZED_BEFORE_SUITE,
    NodeType.AFTER_SUITE,
    NodeType.SYNCHRONIZED_AFTER_SUITE,
    NodeType.REPORT_AFTER_SUITE,
    NodeType.CLEANUP_AFTER_SUITE,
})


class FailureNodeContext(str, Enum):
    """Where the node that produced a failure sits relative to the spec."""
    AT_TOP_LEVEL = "top-level"
    IN_CONTAINER = "in-container"
    IS_LEAF_NODE = "leaf-node"


class ReportEntryVisibility(str, Enum):
    """When a report entry is shown."""
    ALWAYS = "always"
    FAILURE_OR_VERBOSE = "failure-or-verbose"
    NEVER = "never"


# ─────────────────────────────────────────────────────────────────────────────
# Locations, entries and failures
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CodeLocation:
    """A source position, optionally with the full stack trace captured there."""
    file_name: str = ""
    line_number: int = 0
    full_stack_trace: str = ""

    @property
    def is_zero(self) -> bool:
        return not self.file_name and self.line_number == 0

    def __str__(self) -> str:
        return f"{self.file_name}:{self.line_number}"


@dataclass(frozen=True)
class ReportEntry:
    """A named value attached to a spec while it ran."""
    name: str
    location: CodeLocation = field(default_factory=CodeLocation)
    time: datetime = datetime.min
    visibility: ReportEntryVisibility = ReportEntryVisibility.ALWAYS
    value: str | None = None  # already rendered by the runner


@dataclass(frozen=True)
class Failure:
    """
    Why a spec did not pass.

    ``location`` is where the failure was raised; ``failure_node_*`` describe
    the node that was running at the time, which may be a container's
    setup node rather than the spec itself.
    """
    message: str = ""
    location: CodeLocation = field(default_factory=CodeLocation)
    failure_node_context: FailureNodeContext | None = None
    failure_node_container_index: int = 0
    failure_node_type: NodeType | None = None
    failure_node_location: CodeLocation = field(default_factory=CodeLocation)
    forwarded_panic: str = ""
    progress_report: ProgressReport | None = None  # only for interruptions


# ─────────────────────────────────────────────────────────────────────────────
# Progress snapshots
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FunctionCall:
    """One frame of a goroutine stack."""
    function: str
    filename: str = ""
    line: int = 0
    highlight: bool = False
    # Pre-captured source window; when empty the reporter looks it up.
    source: tuple[str, ...] = ()
    source_highlight: int = -1


@dataclass(frozen=True)
class Goroutine:
    """A captured goroutine and its call stack, innermost frame first."""
    id: int
    state: str = "running"
    is_spec_goroutine: bool = False
    stack: tuple[FunctionCall, ...] = ()

    @property
    def has_highlights(self) -> bool:
        return any(call.highlight for call in self.stack)


@dataclass(frozen=True)
class ProgressReport:
    """Point-in-time snapshot of where a running spec is."""
    message: str = ""
    parallel_process: int = 1
    running_in_parallel: bool = False
    time: datetime | None = None  # when the snapshot was captured

    container_hierarchy_texts: tuple[str, ...] = ()
    leaf_node_text: str = ""
    leaf_node_location: CodeLocation = field(default_factory=CodeLocation)
    spec_start_time: datetime | None = None

    current_node_type: NodeType | None = None
    current_node_text: str = ""
    current_node_location: CodeLocation = field(default_factory=CodeLocation)
    current_node_start_time: datetime | None = None

    current_step_text: str = ""
    current_step_location: CodeLocation = field(default_factory=CodeLocation)
    current_step_start_time: datetime | None = None

    captured_writer_output: str = ""
    goroutines: tuple[Goroutine, ...] = ()

    def elapsed_since(self, start: datetime | None) -> timedelta:
        """
        Time between start and the capture time; zero when either is unknown.

        A naive timestamp is taken as UTC when the other one carries a zone.
        """
        if self.time is None or start is None:
            return timedelta(0)
        return _as_utc_if_mixed(self.time, start) - _as_utc_if_mixed(start, self.time)

    def spec_goroutine(self) -> Goroutine | None:
        for goroutine in self.goroutines:
            if goroutine.is_spec_goroutine:
                return goroutine
        return None

    def highlighted_goroutines(self) -> list[Goroutine]:
        return [
            g for g in self.goroutines
            if not g.is_spec_goroutine and g.has_highlights
        ]

    def other_goroutines(self) -> list[Goroutine]:
        return [
            g for g in self.goroutines
            if not g.is_spec_goroutine and not g.has_highlights
        ]


def _as_utc_if_mixed(value: datetime, other: datetime) -> datetime:
    if value.tzinfo is None and other.tzinfo is not None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ─────────────────────────────────────────────────────────────────────────────
# Spec and suite reports
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SpecReport:
    """
    Outcome of a single spec or suite-level node.

    The three container_hierarchy_* tuples run from the outermost ancestor
    to the innermost one and line up index for index.
    """
    state: SpecState = SpecState.PASSED
    leaf_node_type: NodeType = NodeType.IT
    leaf_node_text: str = ""
    leaf_node_location: CodeLocation = field(default_factory=CodeLocation)
    leaf_node_labels: tuple[str, ...] = ()

    container_hierarchy_texts: tuple[str, ...] = ()
    container_hierarchy_locations: tuple[CodeLocation, ...] = ()
    container_hierarchy_labels: tuple[tuple[str, ...], ...] = ()

    num_attempts: int = 1
    run_time: timedelta = timedelta(0)
    failure: Failure | None = None

    captured_stdout_err: str = ""
    captured_writer_output: str = ""
    report_entries: tuple[ReportEntry, ...] = ()

    @property
    def is_spec(self) -> bool:
        """True for ordinary specs, False for suite-level nodes."""
        return self.leaf_node_type == NodeType.IT

    @property
    def flaked(self) -> bool:
        return self.state == SpecState.PASSED and self.num_attempts > 1

    def labels(self) -> list[str]:
        """Ancestor labels then leaf labels, deduplicated in first-seen order."""
        seen: dict[str, None] = {}
        for container_labels in self.container_hierarchy_labels:
            for label in container_labels:
                seen.setdefault(label, None)
        for label in self.leaf_node_labels:
            seen.setdefault(label, None)
        return list(seen)

    def entries_with_visibility(self, *visibilities: ReportEntryVisibility) -> list[ReportEntry]:
        return [entry for entry in self.report_entries if entry.visibility in visibilities]


@dataclass(frozen=True)
class SuiteConfig:
    """Suite-wide settings the runner used."""
    random_seed: int = 0
    randomize_all_specs: bool = False
    parallel_total: int = 1


@dataclass(frozen=True)
class PreRunStats:
    """Spec counts known before the run starts."""
    total_specs: int = 0
    specs_that_will_run: int = 0


@dataclass(frozen=True)
class SpecCounts:
    """
    Tally of a suite's spec reports.

    Every report lands in exactly one bucket: suite-level nodes are counted
    as suite_nodes whatever their state, ordinary specs by their state.
    """
    passed: int = 0  # passed on the first attempt
    flaked: int = 0  # passed after a retry
    failed: int = 0
    pending: int = 0
    skipped: int = 0
    suite_nodes: int = 0

    @property
    def ran(self) -> int:
        return self.passed + self.flaked + self.failed

    @property
    def total(self) -> int:
        return self.ran + self.pending + self.skipped + self.suite_nodes


@dataclass(frozen=True)
class SuiteReport:
    """Complete record of a suite run, as handed over by the runner."""
    suite_description: str = ""
    suite_path: str = ""
    suite_labels: tuple[str, ...] = ()
    suite_config: SuiteConfig = field(default_factory=SuiteConfig)
    pre_run_stats: PreRunStats = field(default_factory=PreRunStats)

    run_time: timedelta = timedelta(0)
    suite_succeeded: bool = True
    special_suite_failure_reasons: tuple[str, ...] = ()
    spec_reports: tuple[SpecReport, ...] = ()

    def counts(self) -> SpecCounts:
        """Count spec reports by outcome."""
        passed = flaked = failed = pending = skipped = suite_nodes = 0
        for spec in self.spec_reports:
            if not spec.is_spec:
                suite_nodes += 1
            elif spec.state == SpecState.PASSED:
                if spec.num_attempts > 1:
                    flaked += 1
                else:
                    passed += 1
            elif spec.state.is_failure:
                failed += 1
            elif spec.state == SpecState.PENDING:
                pending += 1
            elif spec.state == SpecState.SKIPPED:
                skipped += 1
        return SpecCounts(
            passed=passed,
            flaked=flaked,
            failed=failed,
            pending=pending,
            skipped=skipped,
            suite_nodes=suite_nodes,
        )

    def failures(self) -> list[SpecReport]:
        """All reports in a failure state, suite-level nodes included, in order."""
        return [spec for spec in self.spec_reports if spec.state.is_failure]
