"""
Reporter configuration.

A ReporterConfig selects one verbosity level, color handling and a few
emission switches. Setting more than one verbosity flag is rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import IntEnum

from ..formatting import ColorMode


class ConfigurationError(ValueError):
    """Raised when a ReporterConfig combines mutually exclusive settings."""


class Verbosity(IntEnum):
    """Ordered verbosity levels; comparisons follow the order below."""
    SUCCINCT = 0
    NORMAL = 1
    VERBOSE = 2
    VERY_VERBOSE = 3


@dataclass(frozen=True)
class ReporterConfig:
    """Settings that control what the reporter emits."""
    succinct: bool = False
    verbose: bool = False
    very_verbose: bool = False

    no_color: bool = False
    always_emit_writer_output: bool = False
    full_trace: bool = False
    slow_spec_threshold: timedelta = timedelta(seconds=5)

    # Overrides no_color; PASSTHROUGH keeps markers for golden-output tests.
    color_mode: ColorMode | None = None

    def validate(self) -> None:
        """Raise ConfigurationError unless at most one verbosity flag is set."""
        flags = [self.succinct, self.verbose, self.very_verbose]
        if sum(flags) > 1:
            raise ConfigurationError(
                "Setting more than one of succinct, verbose, or very_verbose "
                "is a configuration error"
            )

    def verbosity(self) -> Verbosity:
        if self.succinct:
            return Verbosity.SUCCINCT
        if self.very_verbose:
            return Verbosity.VERY_VERBOSE
        if self.verbose:
            return Verbosity.VERBOSE
        return Verbosity.NORMAL

    def resolved_color_mode(self) -> ColorMode:
        if self.color_mode is not None:
            return self.color_mode
        return ColorMode.NONE if self.no_color else ColorMode.COLORS
