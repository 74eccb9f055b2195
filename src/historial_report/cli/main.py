"""CLI for historial-report: render / inspect commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from historial_report.composer import ComposedReport
from historial_report.core.config import LayoutConfig, ObservabilityConfig
from historial_report.core.startup_checks import validate_layout
from historial_report.exceptions import HistorialReportError
from historial_report.formatters.pdf_formatter import PDFFormatter
from historial_report.models import MedicalRecordAggregate
from historial_report.observability import setup_logging
from historial_report.schemas import load_aggregate

app = typer.Typer(name="historial-report", help="Render medical records (historiales) as PDF reports")
console = Console()


def _configure_logging(verbose: bool) -> None:
    setup_logging(ObservabilityConfig(log_level="DEBUG" if verbose else "WARNING"))


def _load_record(path: Path) -> MedicalRecordAggregate:
    """Load an aggregate from a JSON file in the CRUD service's shape."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"{path} is not valid JSON: {exc}") from exc
    return load_aggregate(raw)


def _layout_table(report: ComposedReport) -> Table:
    table = Table(title=f"Layout ({report.page_count} page(s))")
    table.add_column("Section", style="bold", no_wrap=True)
    table.add_column("Title")
    table.add_column("Pages", justify="right")
    table.add_column("Start (mm)", justify="right")
    table.add_column("End (mm)", justify="right")
    for s in report.sections:
        pages = str(s.first_page + 1) if s.first_page == s.last_page else f"{s.first_page + 1}-{s.last_page + 1}"
        table.add_row(s.key, s.title, pages, f"{s.start_offset:.1f}", f"{s.end_offset:.1f}")
    return table


def _compose(aggregate_json: Path, logo: Optional[Path]) -> tuple[MedicalRecordAggregate, ComposedReport]:
    """Load, validate the layout and compose. Exits with code 1 on any domain error."""
    try:
        config = LayoutConfig()
        validate_layout(config)
    except ValueError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    formatter = PDFFormatter(config, logo=logo.read_bytes() if logo else None)
    try:
        record = _load_record(aggregate_json)
        return record, formatter.compose(record)
    except HistorialReportError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


@app.command()
def render(
    aggregate_json: Path = typer.Argument(..., exists=True, dir_okay=False, help="Historial JSON file"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output PDF path"),
    logo: Optional[Path] = typer.Option(None, "--logo", exists=True, dir_okay=False, help="Logo image"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Render a historial JSON file to PDF."""
    _configure_logging(verbose)
    record, report = _compose(aggregate_json, logo)
    target = output or Path(f"historial_{record.code}.pdf")
    target.write_bytes(report.pdf)

    console.print(_layout_table(report))
    console.print(f"[green]PDF saved to {target}[/green] ({len(report.pdf)} bytes)")


@app.command()
def inspect(
    aggregate_json: Path = typer.Argument(..., exists=True, dir_okay=False, help="Historial JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Compose without writing and show where each section lands."""
    _configure_logging(verbose)
    _, report = _compose(aggregate_json, None)

    console.print(_layout_table(report))
    console.print(f"\nPages: {report.page_count}")


if __name__ == "__main__":
    app()
