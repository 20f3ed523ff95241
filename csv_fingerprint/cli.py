"""Command line interface for csv-fingerprint.

Usage:
    csv-fingerprint process data.csv
    csv-fingerprint process data.csv --json > report.json
"""

import json
import time
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import Settings
from .errors import CsvProcessingError
from .logging_config import setup_logging
from .pipeline import process_file, summarize

app = typer.Typer(
    name="csv-fingerprint",
    help="Validate CSV rows and fingerprint the complete ones",
    add_completion=False,
)
console = Console()


@app.callback()
def main() -> None:
    """Validate CSV rows and fingerprint the complete ones."""


@app.command()
def process(
    input_file: Path = typer.Argument(..., help="CSV file to process"),
    as_json: bool = typer.Option(False, "--json", help="Print the full JSON report instead of a summary"),
    strict_width: Optional[bool] = typer.Option(None, "--strict-width/--no-strict-width", help="Reject rows whose field count differs from the header"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Process a CSV file and report accepted and rejected rows."""
    settings = Settings.from_environment()
    setup_logging(use_json=settings.log_json, log_level="DEBUG" if verbose else settings.log_level)

    if strict_width is None:
        strict_width = settings.strict_width

    start = time.perf_counter()
    try:
        result = process_file(input_file, strict_width=strict_width)
    except CsvProcessingError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=1)
    elapsed_ms = (time.perf_counter() - start) * 1000

    if as_json:
        typer.echo(json.dumps(result, ensure_ascii=False))
        return

    summary = summarize(result, preview=settings.error_preview)

    console.print(f"\n[bold green]✓ Processed {input_file}[/bold green]")
    table = Table(show_header=False)
    table.add_row("Time", f"{elapsed_ms:.0f}ms")
    table.add_row("Valid rows", str(summary["valid_rows"]))
    table.add_row("Errors", str(summary["errors"]))
    console.print(table)

    if summary["error_preview"]:
        console.print("\n[yellow]Validation errors:[/yellow]")
        for err in summary["error_preview"]:
            if isinstance(err, dict):
                console.print(f"  Line {err['line']}: {err['error']}", markup=False, highlight=False)
            else:
                console.print(f"  {err}", markup=False, highlight=False)
        remaining = summary["errors"] - len(summary["error_preview"])
        if remaining > 0:
            console.print(f"  ... and {remaining} more")


if __name__ == "__main__":
    app()
