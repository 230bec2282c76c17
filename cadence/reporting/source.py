"""
Source-code lookup for progress reports.

Highlighted stack frames are shown with a few lines of surrounding source.
The lookup is best-effort: a missing file or an out-of-range line yields
``None`` and the frame is rendered without a snippet.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceWindow:
    """Consecutive source lines; ``highlight`` indexes the line of interest."""
    lines: tuple[str, ...]
    highlight: int


class SourceLookup(Protocol):
    """Anything that maps (file, line) to a window of source lines."""

    def lookup(self, filename: str, line: int) -> SourceWindow | None:
        ...


class FileSourceLookup:
    """Reads source windows from disk, fresh on every lookup."""

    def __init__(self, context: int = 2):
        self.context = context

    def lookup(self, filename: str, line: int) -> SourceWindow | None:
        path = Path(filename)
        if not filename or not path.is_file():
            logger.debug(f"No source file {filename!r}")
            return None
        try:
            with open(path, encoding="utf-8") as f:
                lines = f.readlines()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Could not read source for {filename}: {e}")
            return None

        if not lines or not 1 <= line <= len(lines):
            logger.debug(f"No source available for {filename}:{line}")
            return None

        start = max(0, line - 1 - self.context)
        end = min(len(lines), line + self.context)
        window = tuple(text.rstrip("\r\n") for text in lines[start:end])
        return SourceWindow(lines=window, highlight=line - 1 - start)


class NullSourceLookup:
    """Never finds anything; frames render without snippets."""

    def lookup(self, filename: str, line: int) -> SourceWindow | None:
        return None


def dedent_window(lines: tuple[str, ...] | list[str]) -> list[str]:
    """
    Strip the common leading whitespace from a source window.

    The width removed is the smallest indentation among lines that have
    content, so the least-indented line ends up at column zero.
    """
    widths = [
        len(text) - len(text.lstrip(" \t"))
        for text in lines
        if text.strip()
    ]
    trim = min(widths) if widths else 0
    return [text[trim:] for text in lines]
