"""
Report Parsing for Suite Report Documents

This package loads suite reports written as YAML (or JSON) and turns them
into the typed model the reporter renders.

Usage:
    from cadence.report_parsing import load_report, validate_report_yaml

    # Load from file
    report, result = load_report("reports/run.yaml")
    if not result.is_valid:
        print(result)

    # Or validate from string
    report, result = validate_report_yaml(yaml_string)
"""

# Public API
from .loader import load_progress_report, load_report, load_reporter_config, validate_report_yaml

# Parser (for embedding report documents elsewhere)
from .parser import ReportParser, parse_location, parse_progress_report, parse_time

# Validation (for custom validation if needed)
from .validation import ReportValidator, ValidationError, ValidationResult

__all__ = [
    # Loader functions
    "load_report",
    "load_progress_report",
    "load_reporter_config",
    "validate_report_yaml",
    # Parser
    "ReportParser",
    "parse_location",
    "parse_progress_report",
    "parse_time",
    # Validation
    "ValidationResult",
    "ValidationError",
    "ReportValidator",
]
