"""
Rendering of a spec's position in the container hierarchy.

The location block names every ancestor container and the leaf node, each
with its labels and source location. When a failure is attached, the node
it came from is tagged with its kind and highlighted in the state color.
"""

from __future__ import annotations

from enum import Enum
from itertools import zip_longest

from ..formatting import Formatter
from .models import CodeLocation, FailureNodeContext, SpecReport


class HierarchyMode(str, Enum):
    """Layout of a location block."""
    FULL = "full"  # one indented line pair per level
    SUCCINCT = "succinct"  # everything on one line plus a single location


def format_labels(labels: list[str] | tuple[str, ...]) -> str:
    """Render a label set as `` [a, b]`` in the accent color, or nothing."""
    if not labels:
        return ""
    return " {{coral}}[" + ", ".join(labels) + "]{{/}}"


class HierarchyRenderer:
    """
    Builds location blocks for spec reports.

    Example:
        renderer = HierarchyRenderer(Formatter())
        block = renderer.location_block(report, "{{red}}", HierarchyMode.FULL)
    """

    def __init__(self, formatter: Formatter):
        self.formatter = formatter

    def location_block(
        self,
        report: SpecReport,
        highlight_color: str,
        mode: HierarchyMode,
        use_precise_failure_location: bool = False,
    ) -> str:
        """
        Render the hierarchy of a report.

        Args:
            report: The spec report to describe
            highlight_color: Style marker applied to the failing node
            mode: FULL or SUCCINCT layout
            use_precise_failure_location: In SUCCINCT mode, show where the
                failure was raised rather than the leaf/failing node

        Returns:
            Template text; FULL blocks end with a newline, SUCCINCT ones do not
        """
        texts = list(report.container_hierarchy_texts)
        # Pad or trim so the three lists stay aligned even for malformed input.
        locations = list(report.container_hierarchy_locations[: len(texts)])
        locations += [CodeLocation()] * (len(texts) - len(locations))
        labels = [
            tuple(container_labels)
            for _, container_labels in zip_longest(
                texts, report.container_hierarchy_labels, fillvalue=()
            )
        ][: len(texts)]

        texts.append(self._leaf_text(report))
        locations.append(report.leaf_node_location)
        labels.append(tuple(report.leaf_node_labels))

        failure = report.failure
        failure_location = report.leaf_node_location
        highlight_index = -1
        if failure is not None:
            failure_location = (
                failure.location if use_precise_failure_location
                else failure.failure_node_location
            )
            node_kind = (failure.failure_node_type or report.leaf_node_type).value
            context = failure.failure_node_context
            container_index = failure.failure_node_container_index
            leaf_index = len(texts) - 1

            if context == FailureNodeContext.IN_CONTAINER and not 0 <= container_index < leaf_index:
                context = FailureNodeContext.IS_LEAF_NODE

            if context == FailureNodeContext.AT_TOP_LEVEL:
                texts.insert(0, f"TOP-LEVEL [{node_kind}]")
                locations.insert(0, failure_location)
                labels.insert(0, ())
                highlight_index = 0
            elif context == FailureNodeContext.IN_CONTAINER:
                texts[container_index] = f"{texts[container_index]} [{node_kind}]"
                locations[container_index] = failure_location
                highlight_index = container_index
            elif context == FailureNodeContext.IS_LEAF_NODE:
                texts[leaf_index] = f"[{report.leaf_node_type.value}] {report.leaf_node_text}"
                locations[leaf_index] = failure_location
                highlight_index = leaf_index

        if highlight_index >= 0:
            texts[highlight_index] = f"{highlight_color}{{{{bold}}}}{texts[highlight_index]}{{{{/}}}}"

        if mode == HierarchyMode.SUCCINCT:
            out = self.formatter.cycle_join(texts, " ")
            out += format_labels(report.labels())
            out += "\n"
            if use_precise_failure_location:
                out += f"{{{{gray}}}}{failure_location}{{{{/}}}}"
            else:
                out += f"{{{{gray}}}}{locations[-1]}{{{{/}}}}"
            return out

        out = ""
        for depth, (text, location, level_labels) in enumerate(zip(texts, locations, labels)):
            out += self.formatter.fi(depth, text + format_labels(level_labels)) + "\n"
            out += self.formatter.fi(depth, f"{{{{gray}}}}{location}{{{{/}}}}") + "\n"
        return out

    def _leaf_text(self, report: SpecReport) -> str:
        if report.leaf_node_type.is_suite_level:
            return f"[{report.leaf_node_type.value}] {report.leaf_node_text}"
        return report.leaf_node_text
