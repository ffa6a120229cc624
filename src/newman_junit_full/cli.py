"""Typer CLI: convert and inspect commands."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from newman_junit_full import __version__

app = typer.Typer(
    name="newman-junit-full",
    help="Turn a Newman run summary into a full JUnit XML report.",
    no_args_is_help=True,
)
console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"newman-junit-full v{__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level="DEBUG" if verbose else "WARNING",
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version.", callback=_version_callback, is_eager=True
    ),
) -> None:
    """newman-junit-full - JUnit XML for Newman runs."""


@app.command()
def convert(
    summary_file: Path = typer.Argument(..., help="Newman JSON run summary"),
    export: str = typer.Option(None, "--export", "-o", help="Output path override"),
    options_file: Path = typer.Option(None, "--options", help="Reporter options file (JSON or YAML)"),
    out_dir: Path = typer.Option(Path.cwd(), "--dir", help="Directory for relative output paths"),
    verbose: bool = typer.Option(False, "--verbose", help="Debug logging"),
) -> None:
    """Convert a run summary and write the XML report."""
    from newman_junit_full.config import load_options, validate_options
    from newman_junit_full.reporter import JUnitFullReporter, write_artifact
    from newman_junit_full.utils import load_json

    _setup_logging(verbose)

    options = load_options(options_file, {"export": export})
    errors = validate_options(options)
    if errors:
        for e in errors:
            console.print(f"  [red]Options error: {e}[/red]")
        raise typer.Exit(1)

    if not summary_file.exists():
        console.print(f"  [red]Summary file not found:[/red] {summary_file}")
        raise typer.Exit(1)

    exports: list = []
    JUnitFullReporter(options).before_done(load_json(summary_file), exports)
    if not exports:
        console.print("  [yellow]No executions in summary; nothing written[/yellow]")
        return

    for artifact in exports:
        target = write_artifact(artifact, out_dir)
        console.print(f"[green]Report saved to:[/green] {target}")


@app.command()
def inspect(
    summary_file: Path = typer.Argument(..., help="Newman JSON run summary"),
) -> None:
    """Show the suites a report would contain, without writing anything."""
    from newman_junit_full.exporters.junit import build_suites
    from newman_junit_full.models import load_trace
    from newman_junit_full.naming import join_names
    from newman_junit_full.utils import load_json

    trace = load_trace(load_json(summary_file))
    if trace is None or not trace.executions:
        console.print("  [yellow]No executions in summary[/yellow]")
        return

    console.print(Panel(f"[bold]{trace.collection_name or 'Collection run'}[/bold]", style="blue"))

    table = Table(title="Suites", show_lines=False)
    table.add_column("ID", width=6)
    table.add_column("Request")
    table.add_column("Tests", justify="right")
    table.add_column("Failures", justify="right")
    table.add_column("Errors", justify="right")
    table.add_column("Time (s)", justify="right")

    suites = build_suites(trace)
    for s in suites:
        fail_style = "red" if s.failures else "green"
        err_style = "red" if s.errors else "green"
        table.add_row(
            str(s.id),
            join_names(s.package, s.name),
            str(s.tests),
            f"[{fail_style}]{s.failures}[/{fail_style}]",
            f"[{err_style}]{s.errors}[/{err_style}]",
            f"{s.time:.3f}",
        )

    console.print(table)
    console.print(
        f"\n[bold]Totals:[/bold] {sum(s.tests for s in suites)} tests, "
        f"[red]{sum(s.failures for s in suites)} failures[/red], "
        f"[red]{sum(s.errors for s in suites)} errors[/red] / {len(suites)} suites"
    )
