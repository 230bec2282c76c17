#!/usr/bin/env python3
"""
Cadence CLI - Console Reporter for Test Runs

Usage:
    cadence render <report.yaml> [OPTIONS]
    cadence progress <snapshot.yaml> [OPTIONS]
    cadence validate <report.yaml>
    cadence --version
"""

import logging
from dataclasses import replace
from datetime import timedelta
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .report_parsing import load_progress_report, load_report, load_reporter_config
from .reporting import ConfigurationError, DefaultReporter, ReporterConfig, SpecState

app = typer.Typer(
    name="cadence",
    help="Cadence - console reporter for test runs",
    add_completion=False,
)
console = Console()

STATE_STYLES = {
    SpecState.PASSED: "green",
    SpecState.FAILED: "red",
    SpecState.PANICKED: "magenta",
    SpecState.INTERRUPTED: "dark_orange",
    SpecState.ABORTED: "light_coral",
    SpecState.SKIPPED: "cyan",
    SpecState.PENDING: "yellow",
}


def setup_logging(level: str = "INFO") -> logging.Logger:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )
    return logging.getLogger("cadence")


def version_callback(value: bool):
    if value:
        console.print(f"Cadence v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level",
        help="Enable logging to stderr at this level (DEBUG, INFO, ...)"
    ),
):
    """
    Cadence - console reporter for test runs

    Replay suite reports and progress snapshots as console output.
    """
    if log_level:
        setup_logging(log_level)


def build_config(
    base: ReporterConfig,
    succinct: bool,
    verbose: bool,
    very_verbose: bool,
    no_color: bool,
    full_trace: bool,
    always_emit_writer_output: bool,
    slow_threshold: Optional[float],
) -> ReporterConfig:
    """Apply command-line flags on top of a file-provided configuration."""
    config = base
    if succinct or verbose or very_verbose:
        # A verbosity flag on the command line replaces the file's choice
        config = replace(config, succinct=succinct, verbose=verbose, very_verbose=very_verbose)
    if no_color:
        config = replace(config, no_color=True)
    if full_trace:
        config = replace(config, full_trace=True)
    if always_emit_writer_output:
        config = replace(config, always_emit_writer_output=True)
    if slow_threshold is not None:
        config = replace(config, slow_spec_threshold=timedelta(seconds=slow_threshold))
    return config


def create_reporter(config: ReporterConfig) -> DefaultReporter:
    try:
        return DefaultReporter(config)
    except ConfigurationError as e:
        console.print(f"[red]❌ Invalid configuration:[/red] {e}")
        raise typer.Exit(code=2)


@app.command()
def render(
    report_file: Path = typer.Argument(
        ...,
        help="Path to the suite report (YAML or JSON)",
        exists=True,
        readable=True,
    ),
    succinct: bool = typer.Option(False, "--succinct", "-s", help="Condensed output"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Announce every spec before it runs"),
    very_verbose: bool = typer.Option(False, "--very-verbose", help="Also expand pending and skipped specs"),
    no_color: bool = typer.Option(False, "--no-color", help="Strip colors from the output"),
    full_trace: bool = typer.Option(False, "--full-trace", help="Print full stack traces for failures"),
    always_emit_writer_output: bool = typer.Option(
        False, "--always-emit-writer-output",
        help="Show captured writer output for passing specs too"
    ),
    slow_threshold: Optional[float] = typer.Option(
        None, "--slow-threshold",
        help="Seconds after which a passing spec is reported as slow"
    ),
):
    """
    Render a suite report.

    Replays the report through the reporter as a runner would: the suite
    banner, every spec, then the summary. Exits 1 if the suite failed.
    """
    report, validation = load_report(report_file)
    if not validation.is_valid:
        console.print("\n[red]❌ Validation failed:[/red]")
        console.print(str(validation), markup=False)
        raise typer.Exit(code=1)

    base, _ = load_reporter_config(report_file)
    config = build_config(
        base or ReporterConfig(),
        succinct, verbose, very_verbose, no_color,
        full_trace, always_emit_writer_output, slow_threshold,
    )
    reporter = create_reporter(config)

    reporter.suite_will_begin(report)
    for spec in report.spec_reports:
        reporter.will_run(spec)
        reporter.did_run(spec)
    reporter.suite_did_end(report)

    raise typer.Exit(code=0 if report.suite_succeeded else 1)


@app.command()
def progress(
    snapshot_file: Path = typer.Argument(
        ...,
        help="Path to a progress report snapshot (YAML or JSON)",
        exists=True,
        readable=True,
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Strip colors from the output"),
):
    """
    Render a progress report snapshot.
    """
    snapshot, validation = load_progress_report(snapshot_file)
    if not validation.is_valid:
        console.print("\n[red]❌ Validation failed:[/red]")
        console.print(str(validation), markup=False)
        raise typer.Exit(code=1)

    reporter = create_reporter(ReporterConfig(no_color=no_color))
    reporter.emit_progress_report(snapshot)


@app.command()
def validate(
    report_file: Path = typer.Argument(
        ...,
        help="Path to the suite report (YAML or JSON)",
        exists=True,
        readable=True,
    ),
):
    """
    Validate a suite report file.

    Check the schema and list the specs it contains without rendering them.
    """
    console.print(f"\n📄 Validating: {report_file}")

    report, validation = load_report(report_file)

    if not validation.is_valid:
        console.print("\n[red]❌ Validation failed:[/red]")
        console.print(str(validation), markup=False)
        raise typer.Exit(code=1)

    counts = report.counts()
    console.print(f"\n[green]✅ Valid report:[/green] {report.suite_description}")
    console.print(f"   Specs: {len(report.spec_reports)} ({counts.ran} ran, {counts.suite_nodes} suite nodes)")

    table = Table(title="Specs")
    table.add_column("State")
    table.add_column("Type", style="magenta")
    table.add_column("Spec")
    table.add_column("Location", style="cyan")

    for spec in report.spec_reports:
        path = " ".join([*spec.container_hierarchy_texts, spec.leaf_node_text]).strip()
        table.add_row(
            f"[{STATE_STYLES[spec.state]}]{spec.state.value}[/]",
            spec.leaf_node_type.value,
            path,
            str(spec.leaf_node_location),
        )

    console.print()
    console.print(table)


@app.command()
def info():
    """
    Show information about Cadence.
    """
    console.print(f"""
[bold]Cadence[/bold] v{__version__}

Console reporter for test runs

[bold]Features:[/bold]
  • Succinct, normal, verbose and very verbose output
  • Container hierarchies with labels and failure highlighting
  • Captured output and report entries
  • Progress reports with goroutine stacks and source snippets

[bold]Quick Start:[/bold]
  cadence render reports/run.yaml
  cadence validate reports/run.yaml
""")


if __name__ == "__main__":
    app()
