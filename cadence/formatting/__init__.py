"""
Text Formatting for Reporter Output

This package resolves the inline style markers used by the renderers and
provides the small layout helpers they share.

Usage:
    from cadence.formatting import ColorMode, Formatter

    formatter = Formatter(ColorMode.NONE)
    formatter.style("{{red}}FAIL!{{/}}")  # -> "FAIL!"
"""

from .formatter import INDENT, Formatter, TextBuffer
from .models import PALETTE, RESET, ColorMode
from .units import format_duration, format_seconds, format_timestamp, round_to_millisecond

__all__ = [
    # Models
    "ColorMode",
    "PALETTE",
    "RESET",
    # Formatter
    "Formatter",
    "TextBuffer",
    "INDENT",
    # Units
    "format_duration",
    "format_seconds",
    "format_timestamp",
    "round_to_millisecond",
]
