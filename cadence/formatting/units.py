"""
Duration and timestamp formatting shared by the renderers.
"""

from __future__ import annotations

from datetime import datetime, timedelta

_MICROSECOND = timedelta(microseconds=1)
_MILLISECOND = timedelta(milliseconds=1)


def format_seconds(value: timedelta) -> str:
    """Format a duration as fixed-point seconds, e.g. ``1.000``."""
    return f"{value.total_seconds():.3f}"


def round_to_millisecond(value: timedelta) -> timedelta:
    """Round a duration to the nearest millisecond (halves away from zero)."""
    millis = value / _MILLISECOND
    rounded = int(millis + 0.5) if millis >= 0 else -int(-millis + 0.5)
    return timedelta(milliseconds=rounded)


def format_duration(value: timedelta) -> str:
    """
    Format a duration compactly, e.g. ``1m0s``, ``3.001s`` or ``250ms``.

    Hours and minutes are only shown once the duration reaches them;
    fractional parts drop their trailing zeros.
    """
    micros = round(value / _MICROSECOND)
    if micros == 0:
        return "0s"

    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < 1_000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        return f"{sign}{_decimal(micros, 1_000, 3)}ms"

    hours, remainder = divmod(micros, 3_600_000_000)
    minutes, remainder = divmod(remainder, 60_000_000)
    out = sign
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    return out + f"{_decimal(remainder, 1_000_000, 6)}s"


def format_timestamp(value: datetime) -> str:
    """Format a capture time as ``MM/DD/YY HH:MM:SS.fff`` (zeros trimmed)."""
    out = value.strftime("%m/%d/%y %H:%M:%S")
    fraction = f"{value.microsecond // 1000:03d}".rstrip("0")
    if fraction:
        out += f".{fraction}"
    return out


def _decimal(value: int, unit: int, digits: int) -> str:
    whole, fraction = divmod(value, unit)
    fraction_text = f"{fraction:0{digits}d}".rstrip("0")
    if fraction_text:
        return f"{whole}.{fraction_text}"
    return str(whole)
