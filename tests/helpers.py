"""
Shared builders and constants for the reporter tests.

Expected output is written with style markers left in place, so every
reporter built here resolves colors in passthrough mode.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from cadence.reporting import (
    CodeLocation,
    NodeType,
    ProgressReport,
    ReportEntry,
    ReportEntryVisibility,
    SpecReport,
    SpecState,
)

CL0 = CodeLocation("cl0.go", 12, "full-trace\ncl-0")
CL1 = CodeLocation("cl1.go", 37, "full-trace\ncl-1")
CL2 = CodeLocation("cl2.go", 80, "full-trace\ncl-2")
CL3 = CodeLocation("cl3.go", 103, "full-trace\ncl-3")
CL4 = CodeLocation("cl4.go", 144, "full-trace\ncl-4")

PLACEHOLDER_TIME = datetime(2024, 1, 15, 10, 30, 45)
FORMATTED_TIME = "01/15/24 10:30:45"

DELIMITER = "{{gray}}------------------------------{{/}}"


def lines(*parts: str) -> str:
    """Join expected output lines the way they appear in the stream."""
    return "\n".join(parts)


def spec(
    text: str = "",
    location: CodeLocation = CodeLocation(),
    containers: tuple[str, ...] = (),
    container_locations: tuple[CodeLocation, ...] = (),
    **fields,
) -> SpecReport:
    """A SpecReport that ran for one second unless told otherwise."""
    fields.setdefault("run_time", timedelta(seconds=1))
    return SpecReport(
        leaf_node_text=text,
        leaf_node_location=location,
        container_hierarchy_texts=containers,
        container_hierarchy_locations=container_locations,
        **fields,
    )


def entry(name, location, value=None, visibility=ReportEntryVisibility.ALWAYS) -> ReportEntry:
    return ReportEntry(
        name=name,
        location=location,
        time=PLACEHOLDER_TIME,
        visibility=visibility,
        value=value,
    )


def progress_report(**fields) -> ProgressReport:
    """
    A snapshot taken at PLACEHOLDER_TIME where the spec started 5s earlier,
    the current node 3s earlier and the current step 1s earlier.
    """
    fields.setdefault("time", PLACEHOLDER_TIME)
    fields.setdefault("leaf_node_location", CL0)
    fields.setdefault("spec_start_time", PLACEHOLDER_TIME - timedelta(seconds=5))
    fields.setdefault("current_node_location", CL1)
    fields.setdefault("current_node_start_time", PLACEHOLDER_TIME - timedelta(seconds=3))
    fields.setdefault("current_step_location", CL2)
    fields.setdefault("current_step_start_time", PLACEHOLDER_TIME - timedelta(seconds=1))
    return ProgressReport(**fields)


def passed(**fields) -> SpecReport:
    return spec(state=SpecState.PASSED, **fields)


def suite_node(node_type: NodeType, **fields) -> SpecReport:
    return spec(leaf_node_type=node_type, **fields)
