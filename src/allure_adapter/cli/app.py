"""Main Typer CLI application for allure-adapter."""

from __future__ import annotations

import unittest
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from allure_adapter.config import get_settings
from allure_adapter.integrations.unittest_runner import AllureTestRunner
from allure_adapter.listener import AllureListener
from allure_adapter.logging import configure_logging
from allure_adapter.serializers import ReportFormat
from allure_adapter.storage import ReportDirectory

app = typer.Typer(
    name="allure-adapter",
    help="Write Allure test-suite reports for unittest runs",
    no_args_is_help=True,
)

console = Console(highlight=False)


@app.callback()
def main(
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Log level (DEBUG, INFO, WARNING, ERROR)",
        ),
    ] = None,
    log_json: Annotated[
        bool,
        typer.Option(
            "--log-json",
            help="Emit logs as JSON lines",
        ),
    ] = False,
) -> None:
    """Configure logging for every command."""
    settings = get_settings()
    configure_logging(
        log_level=log_level or settings.log_level,
        json_format=log_json or settings.log_json_format,
    )


@app.command()
def run(
    start_dir: Annotated[
        Path,
        typer.Argument(
            help="Directory to discover tests in",
        ),
    ] = Path("."),
    pattern: Annotated[
        str,
        typer.Option(
            "-p",
            "--pattern",
            help="Pattern matching test modules",
        ),
    ] = "test*.py",
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "-o",
            "--output-dir",
            help="Report output directory",
        ),
    ] = None,
    clean: Annotated[
        bool,
        typer.Option(
            "--clean",
            help="Remove files from a previous run first",
        ),
    ] = False,
    report_format: Annotated[
        ReportFormat | None,
        typer.Option(
            "-f",
            "--format",
            help="Report document format",
            case_sensitive=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "-v",
            "--verbose",
            help="Verbose unittest output",
        ),
    ] = False,
) -> None:
    """Discover and run unittest tests, writing one report per test class."""
    settings = get_settings()
    listener = AllureListener(
        output_dir or settings.output_directory,
        clean or settings.clean_output,
        report_format=report_format or settings.report_format,
    )

    suite = unittest.TestLoader().discover(str(start_dir), pattern=pattern)
    runner = AllureTestRunner(listener, verbosity=2 if verbose else 1)
    result = runner.run(suite)

    _print_summary(listener)
    raise typer.Exit(code=0 if result.wasSuccessful() else 1)


@app.command()
def clean(
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "-o",
            "--output-dir",
            help="Report output directory",
        ),
    ] = None,
) -> None:
    """Remove report files from the output directory."""
    directory = ReportDirectory(output_dir or get_settings().output_directory)
    removed = directory.clean()
    console.print(f"Removed [bold]{removed}[/bold] file(s) from {directory.path}")


def _print_summary(listener: AllureListener) -> None:
    reports = listener.written_reports
    if not reports:
        console.print("[yellow]No test suites recorded; no reports written.[/yellow]")
        return

    table = Table(title=f"Allure reports in {listener.output_directory}")
    table.add_column("#", justify="right")
    table.add_column("Report file")
    for index, path in enumerate(reports, 1):
        table.add_row(str(index), path.name)
    console.print(table)
