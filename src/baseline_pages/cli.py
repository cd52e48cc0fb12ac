"""
Command-line entry point for baseline-pages.

Usage:
    baseline-pages                 # same as ``build``
    baseline-pages build
    baseline-pages classify index.json --json
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from baseline_pages.classifier import bucket_counts, classify
from baseline_pages.config import BaselineSettings, PipelineConfig
from baseline_pages.errors import BaselineError
from baseline_pages.logging import configure_logging
from baseline_pages.pipeline import BaselinePipeline

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="baseline-pages",
    help="Build static pages of web features grouped by Baseline status.",
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        from baseline_pages import __version__

        typer.echo(f"baseline-pages {__version__}")
        raise typer.Exit()


def _setup_logging() -> None:
    settings = BaselineSettings()
    configure_logging(level=settings.log_level, json_format=settings.json_logs)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Fetch web-features, write per-label JSON and render the HTML pages."""
    if ctx.invoked_subcommand is None:
        build()


@app.command()
def build() -> None:
    """Run the full build with the built-in constants.

    Failures are logged; the command still ends normally.
    """
    _setup_logging()
    BaselinePipeline(PipelineConfig()).run()


@app.command("classify")
def classify_file(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Local JSON document"),
    json_out: bool = typer.Option(False, "--json", help="Print counts as JSON."),
) -> None:
    """Classify a local web-features document and show bucket sizes."""
    _setup_logging()
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
        counts = bucket_counts(classify(document))
    except (ValueError, RecursionError, BaselineError) as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    if json_out:
        console.print_json(json.dumps(counts))
        return

    table = Table(title=f"Baseline labels in {path.name}")
    table.add_column("Label", style="cyan")
    table.add_column("Features", justify="right")
    for label, count in counts.items():
        table.add_row(label, str(count))
    console.print(table)


def main() -> None:
    """Entry point for the ``baseline-pages`` script."""
    app()


if __name__ == "__main__":
    main()
