"""
Color modes and the style palette.

Template text marks styling inline with ``{{tag}}`` and returns to the
unstyled baseline with ``{{/}}``. This module defines the tags that are
understood and the terminal escape sequence each one maps to.
"""

from __future__ import annotations

from enum import Enum


class ColorMode(str, Enum):
    """How style markers are resolved when text is written out."""
    COLORS = "colors"  # markers become ANSI escape sequences
    NONE = "none"  # markers are removed
    PASSTHROUGH = "passthrough"  # markers are left in place


# Reset always returns to the terminal default; it does not pop a stack.
RESET = "/"

PALETTE: dict[str, str] = {
    RESET: "\x1b[0m",
    "bold": "\x1b[1m",
    "underline": "\x1b[4m",
    "red": "\x1b[38;5;9m",
    "orange": "\x1b[38;5;214m",
    "coral": "\x1b[38;5;204m",
    "magenta": "\x1b[38;5;13m",
    "green": "\x1b[38;5;10m",
    "yellow": "\x1b[38;5;11m",
    "light-yellow": "\x1b[38;5;228m",
    "cyan": "\x1b[38;5;14m",
    "gray": "\x1b[38;5;243m",
}
