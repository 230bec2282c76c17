"""
Pytest fixtures for reporter tests.
"""

from datetime import timedelta
from io import StringIO

import pytest

from cadence.formatting import ColorMode
from cadence.reporting import DefaultReporter, ReporterConfig


@pytest.fixture
def output():
    return StringIO()


@pytest.fixture
def make_reporter(output):
    """Build a passthrough-mode reporter writing into ``output``."""

    def _make(source_lookup=None, **config_fields) -> DefaultReporter:
        config_fields.setdefault("slow_spec_threshold", timedelta(seconds=3))
        config = ReporterConfig(color_mode=ColorMode.PASSTHROUGH, **config_fields)
        return DefaultReporter(config, writer=output, source_lookup=source_lookup)

    return _make
