"""
Tests for loading, validating and parsing report documents.
"""

from datetime import datetime, timedelta
from textwrap import dedent

from cadence.report_parsing import (
    load_progress_report,
    load_report,
    load_reporter_config,
    parse_location,
    validate_report_yaml,
)
from cadence.reporting import (
    CodeLocation,
    FailureNodeContext,
    NodeType,
    ReportEntryVisibility,
    ReporterConfig,
    SpecState,
)

VALID_REPORT = dedent("""\
    version: 1
    suite:
      description: My Suite
      path: ./suite
      labels: [smoke]
      random_seed: 17
      total_specs: 3
      run_time: 2.5
    reporter:
      verbose: true
      slow_spec_threshold: 10
    specs:
      - type: BeforeSuite
        state: passed
        location: suite_test.go:10
      - text: adds numbers
        state: passed
        containers:
          - Calculator
          - {text: Addition, location: calc_test.go:20, labels: [math]}
        location: calc_test.go:22
        labels: [fast]
        run_time: 0.01
        entries:
          - name: result
            location: calc_test.go:25
            time: "2024-01-15T10:30:45"
            visibility: failure-or-verbose
            value: "42"
      - text: divides
        state: failed
        containers: [Calculator]
        location: calc_test.go:40
        attempts: 2
        failure:
          message: expected 1 got 2
          location: {file: calc_test.go, line: 44, full_stack_trace: trace}
          node_context: leaf-node
          node_type: It
          node_location: calc_test.go:40
""")

SNAPSHOT = dedent("""\
    message: Interrupted
    text: The Test
    location: t.go:5
    time: "2024-01-15T10:30:45"
    spec_start_time: "2024-01-15T10:30:40"
    node_type: It
    goroutines:
      - id: 1
        is_spec_goroutine: true
        stack:
          - function: main.f()
            file: t.go
            line: 7
            highlight: true
            source: ["a", "b"]
            source_highlight: 1
""")


def error_paths(result):
    return [e.path for e in result.errors]


class TestValidReport:
    """Test parsing a well-formed report."""

    def test_suite_fields(self):
        report, result = validate_report_yaml(VALID_REPORT)
        assert result.is_valid, str(result)
        assert report.suite_description == "My Suite"
        assert report.suite_labels == ("smoke",)
        assert report.suite_config.random_seed == 17
        assert report.pre_run_stats.total_specs == 3
        assert report.pre_run_stats.specs_that_will_run == 3
        assert report.run_time == timedelta(seconds=2.5)

    def test_verdict_defaults_to_no_failures(self):
        report, _ = validate_report_yaml(VALID_REPORT)
        assert report.suite_succeeded is False

    def test_containers_and_entries(self):
        report, _ = validate_report_yaml(VALID_REPORT)
        spec = report.spec_reports[1]
        assert spec.container_hierarchy_texts == ("Calculator", "Addition")
        assert spec.container_hierarchy_locations == (
            CodeLocation(),
            CodeLocation("calc_test.go", 20),
        )
        assert spec.container_hierarchy_labels == ((), ("math",))
        assert spec.labels() == ["math", "fast"]
        assert spec.run_time == timedelta(milliseconds=10)

        entry = spec.report_entries[0]
        assert entry.time == datetime(2024, 1, 15, 10, 30, 45)
        assert entry.visibility == ReportEntryVisibility.FAILURE_OR_VERBOSE
        assert entry.value == "42"

    def test_failure(self):
        report, _ = validate_report_yaml(VALID_REPORT)
        spec = report.spec_reports[2]
        assert spec.state == SpecState.FAILED
        assert spec.num_attempts == 2
        assert spec.failure.location == CodeLocation("calc_test.go", 44, "trace")
        assert spec.failure.failure_node_context == FailureNodeContext.IS_LEAF_NODE
        assert spec.failure.failure_node_type == NodeType.IT

    def test_suite_node_type(self):
        report, _ = validate_report_yaml(VALID_REPORT)
        assert report.spec_reports[0].leaf_node_type == NodeType.BEFORE_SUITE
        assert report.counts().suite_nodes == 1

    def test_json_is_accepted(self):
        report, result = validate_report_yaml(
            '{"suite": {"description": "JSON Suite"}, "specs": [{"state": "pending", "text": "x"}]}'
        )
        assert result.is_valid
        assert report.spec_reports[0].state == SpecState.PENDING
        assert report.suite_succeeded is True


class TestInvalidReport:
    """Test validation errors."""

    def test_missing_suite(self):
        report, result = validate_report_yaml("specs: []\n")
        assert report is None
        assert "suite" in error_paths(result)

    def test_unknown_top_level_field(self):
        _, result = validate_report_yaml("suite: {description: S}\nextra: 1\n")
        assert "extra" in error_paths(result)

    def test_bad_state_and_location(self):
        _, result = validate_report_yaml(dedent("""\
            suite: {description: S}
            specs:
              - state: exploded
                location: nowhere
        """))
        assert error_paths(result) == ["specs[0].state", "specs[0].location"]

    def test_more_than_one_verbosity(self):
        _, result = validate_report_yaml(dedent("""\
            suite: {description: S}
            reporter: {succinct: true, verbose: true}
        """))
        assert error_paths(result) == ["reporter"]

    def test_bad_yaml(self):
        report, result = validate_report_yaml("suite: [unclosed\n")
        assert report is None
        assert error_paths(result) == ["yaml"]

    def test_error_message_format(self):
        _, result = validate_report_yaml("suite: {description: S}\nspecs: [{state: nope}]\n")
        text = str(result)
        assert "❌ specs[0].state: Invalid spec state" in text
        assert "Got: 'nope'" in text
        assert "💡 Valid states:" in text


class TestLocations:
    """Test location parsing."""

    def test_string_location(self):
        assert parse_location("a/b.go:12") == CodeLocation("a/b.go", 12)

    def test_colon_in_file_name(self):
        assert parse_location("C:\\src\\x.go:5") == CodeLocation("C:\\src\\x.go", 5)

    def test_location_without_line(self):
        assert parse_location("weird") == CodeLocation("weird", 0)

    def test_missing_location(self):
        assert parse_location(None) == CodeLocation()


class TestLoader:
    """Test reading documents from disk."""

    def test_load_report(self, tmp_path):
        path = tmp_path / "run.yaml"
        path.write_text(VALID_REPORT)
        report, result = load_report(path)
        assert result.is_valid
        assert len(report.spec_reports) == 3

    def test_missing_file(self, tmp_path):
        report, result = load_report(tmp_path / "nope.yaml")
        assert report is None
        assert result.errors[0].message == "File not found"

    def test_non_mapping_document(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        report, result = load_report(path)
        assert report is None
        assert result.errors[0].value == "list"

    def test_reporter_config(self, tmp_path):
        path = tmp_path / "run.yaml"
        path.write_text(VALID_REPORT)
        config, result = load_reporter_config(path)
        assert result.is_valid
        assert config == ReporterConfig(verbose=True, slow_spec_threshold=timedelta(seconds=10))

    def test_reporter_config_defaults(self, tmp_path):
        path = tmp_path / "run.yaml"
        path.write_text("suite: {description: S}\n")
        config, _ = load_reporter_config(path)
        assert config == ReporterConfig()

    def test_progress_snapshot(self, tmp_path):
        path = tmp_path / "snapshot.yaml"
        path.write_text(SNAPSHOT)
        snapshot, result = load_progress_report(path)
        assert result.is_valid, str(result)
        assert snapshot.elapsed_since(snapshot.spec_start_time) == timedelta(seconds=5)
        assert snapshot.current_node_type == NodeType.IT

        goroutine = snapshot.spec_goroutine()
        assert goroutine.id == 1
        frame = goroutine.stack[0]
        assert frame.highlight
        assert frame.source == ("a", "b")
        assert frame.source_highlight == 1

    def test_progress_snapshot_requires_goroutine_ids(self, tmp_path):
        path = tmp_path / "snapshot.yaml"
        path.write_text("goroutines:\n  - state: running\n")
        snapshot, result = load_progress_report(path)
        assert snapshot is None
        assert error_paths(result) == ["progress_report.goroutines[0].id"]
