"""
Style-marker resolution and text layout helpers.

The renderers compose their output as template text, e.g.
``"{{red}}FAILED{{/}}"``. The Formatter turns that template into what is
finally written: escape sequences, plain text, or the untouched template.
"""

from __future__ import annotations

import re
from typing import Sequence

from .models import PALETTE, RESET, ColorMode

INDENT = "  "


class Formatter:
    """
    Resolves ``{{tag}}`` markers according to a ColorMode.

    Example:
        formatter = Formatter(ColorMode.NONE)
        formatter.style("{{green}}SUCCESS!{{/}}")  # -> "SUCCESS!"
    """

    STYLE_PATTERN = re.compile(r"\{\{(/|[a-z][a-z-]*)\}\}")

    def __init__(self, mode: ColorMode = ColorMode.COLORS):
        self.mode = mode

    def style(self, text: str) -> str:
        """Resolve every known marker in text. Unknown tags are left alone."""
        if self.mode == ColorMode.PASSTHROUGH:
            return text

        def replace(match: re.Match) -> str:
            tag = match.group(1)
            if tag not in PALETTE:
                return match.group(0)
            if self.mode == ColorMode.NONE:
                return ""
            return PALETTE[tag]

        return self.STYLE_PATTERN.sub(replace, text)

    def fi(self, indentation: int, text: str) -> str:
        """Indent every non-empty line of text by the given depth."""
        if indentation <= 0:
            return text
        prefix = INDENT * indentation
        return "\n".join(prefix + line if line else line for line in text.split("\n"))

    def cycle_join(self, elements: Sequence[str], joiner: str = " ") -> str:
        """
        Join elements on one line, alternating default and gray styling.

        Each element opens with its own marker, so a reset inside an element
        falls back to the terminal default until the next element starts.
        """
        if not elements:
            return ""
        cycle = ("{{" + RESET + "}}", "{{gray}}")
        parts = [cycle[i % len(cycle)] + text for i, text in enumerate(elements)]
        return joiner.join(parts) + "{{" + RESET + "}}"


class TextBuffer:
    """Accumulates rendered template text between lifecycle calls."""

    def __init__(self) -> None:
        self._chunks: list[str] = []

    def emit(self, text: str) -> None:
        self._chunks.append(text)

    def emit_block(self, text: str) -> None:
        """Emit text, terminating it with a newline if it lacks one."""
        if not text:
            return
        if not text.endswith("\n"):
            text += "\n"
        self._chunks.append(text)

    def getvalue(self) -> str:
        return "".join(self._chunks)
