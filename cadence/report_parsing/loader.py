"""
Report loader for suite report documents.

This module provides the public API for loading and validating report
files from disk or YAML strings. JSON documents load through the same
path since JSON is valid YAML.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from ..reporting.config import ReporterConfig
from ..reporting.models import ProgressReport, SuiteReport
from .parser import ReportParser, parse_progress_report
from .validation import ReportValidator, ValidationResult

logger = logging.getLogger(__name__)


def load_report(path: str | Path) -> tuple[SuiteReport | None, ValidationResult]:
    """
    Load and validate a suite report from a YAML or JSON file.

    Args:
        path: Path to the report file

    Returns:
        Tuple of (SuiteReport or None, ValidationResult)
        If validation fails, SuiteReport will be None.

    Example:
        report, result = load_report("reports/run.yaml")
        if not result.is_valid:
            print(result)
            sys.exit(1)
        # Render report...
    """
    data, result = _read_document(path)
    if data is None:
        return None, result
    return _parse(data)


def validate_report_yaml(yaml_string: str) -> tuple[SuiteReport | None, ValidationResult]:
    """
    Validate a suite report from a YAML string (useful for testing).

    Args:
        yaml_string: YAML content as a string

    Returns:
        Tuple of (SuiteReport or None, ValidationResult)
    """
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error("yaml", f"Invalid YAML syntax: {e}")
        return None, result

    if not isinstance(data, dict):
        result = ValidationResult()
        result.add_error(
            "yaml",
            "Content must be a YAML object",
            value=type(data).__name__
        )
        return None, result

    return _parse(data)


def load_reporter_config(path: str | Path) -> tuple[ReporterConfig | None, ValidationResult]:
    """
    Load only the ``reporter`` block of a report file.

    A file without a reporter block yields the default configuration.

    Args:
        path: Path to the report file

    Returns:
        Tuple of (ReporterConfig or None, ValidationResult)
    """
    data, result = _read_document(path)
    if data is None:
        return None, result

    validator = ReportValidator(data)
    validator.validate_reporter()
    if not validator.result.is_valid:
        return None, validator.result

    return ReportParser(data).parse_reporter_config(), validator.result


def load_progress_report(path: str | Path) -> tuple[ProgressReport | None, ValidationResult]:
    """
    Load a standalone progress report snapshot.

    The file holds a single progress-report mapping, the same shape that
    ``failure.progress_report`` takes inside a suite report.

    Args:
        path: Path to the snapshot file

    Returns:
        Tuple of (ProgressReport or None, ValidationResult)
    """
    data, result = _read_document(path)
    if data is None:
        return None, result

    validator = ReportValidator(data)
    validator.validate_progress_report("progress_report", data)
    if not validator.result.is_valid:
        return None, validator.result

    return parse_progress_report(data), validator.result


def _read_document(path: str | Path) -> tuple[dict[str, Any] | None, ValidationResult]:
    path = Path(path)
    result = ValidationResult()

    # Check file exists
    if not path.exists():
        result.add_error(
            str(path),
            "File not found",
            suggestion="Check the file path is correct"
        )
        return None, result

    # Parse YAML
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        result.add_error(
            str(path),
            f"Invalid YAML syntax: {e}",
            suggestion="Check YAML formatting (indentation, colons, etc.)"
        )
        return None, result

    if not isinstance(data, dict):
        result.add_error(
            str(path),
            "File must contain a YAML object (not a list or scalar)",
            value=type(data).__name__
        )
        return None, result

    logger.debug(f"Loaded report document {path}")
    return data, result


def _parse(data: dict[str, Any]) -> tuple[SuiteReport | None, ValidationResult]:
    validator = ReportValidator(data)
    result = validator.validate()

    if not result.is_valid:
        logger.debug(f"Report validation failed with {len(result.errors)} error(s)")
        return None, result

    return ReportParser(data).parse(), result
