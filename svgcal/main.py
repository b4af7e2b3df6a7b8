from __future__ import annotations

import csv
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import typer

from . import config
from .config import MONTH_NAMES, NOTE_WRAP_LENGTH, CalendarConfig, load_style_preset
from .models import WeekStart
from .pipeline.layout import compute_layout
from .pipeline.notes import find_note, load_notes
from .pipeline.run import run_pipeline, summarize
from .pipeline.wrap import note_lines

app = typer.Typer(help="Printable monthly SVG calendar generator")
logger = logging.getLogger(__name__)

DEBUG_ENV_VAR = "SVGCAL_DEBUG"


def configure_logging(verbose: bool = False) -> None:
    debug = verbose or os.environ.get(DEBUG_ENV_VAR, "").strip() not in ("", "0")
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


@app.command()
def generate(
    num_months: int = typer.Option(1, "--num-months", "-n", min=1, help="Number of months to generate"),
    week_start: WeekStart = typer.Option(WeekStart.MONDAY, "--week-start", "-w", help="Week start day"),
    start_month: Optional[int] = typer.Option(
        None, "--start-month", "-m", min=1, max=12, help="Starting month (default: current month)"
    ),
    start_year: Optional[int] = typer.Option(
        None, "--start-year", "-y", help="Starting year (default: current year)"
    ),
    notes_file: Optional[Path] = typer.Option(None, "--notes-file", "-f", help="CSV file with monthly notes"),
    line_height: Optional[float] = typer.Option(None, "--line-height", "-l", help="Note line height in pixels"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Output directory"),
    style: Optional[Path] = typer.Option(None, "--style", help="JSON style preset"),
    pdf: bool = typer.Option(False, "--pdf", help="Also write a PDF per month"),
    preview: bool = typer.Option(False, "--preview", help="Also write a PNG preview per month"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    configure_logging(verbose)
    try:
        calendar_config = CalendarConfig.from_overrides(
            start_month=start_month,
            start_year=start_year,
            num_months=num_months,
            week_start=week_start,
            note_line_height=line_height,
            notes_file=notes_file,
        )
        page_style = load_style_preset(style)
    except (ValueError, OSError) as exc:
        raise typer.BadParameter(str(exc)) from exc
    if out:
        config.set_out_dir(out)

    try:
        result = run_pipeline(calendar_config, pdf=pdf, preview=preview, style=page_style)
    except Exception:
        logger.exception("Calendar generation failed")
        raise typer.Exit(code=1)

    for path in result.svg + result.pdf + result.preview:
        typer.echo(f"Generated: {path.name}")
    typer.echo("\nCalendar generation complete!")
    typer.echo("\nCalendar Details:")
    for line in summarize(result.months):
        typer.echo(f"  {line}")


@app.command()
def inspect(
    month: int = typer.Argument(..., min=1, max=12, help="Month (1-12)"),
    year: int = typer.Argument(..., help="Year"),
    week_start: WeekStart = typer.Option(WeekStart.MONDAY, "--week-start", "-w"),
    notes_file: Optional[Path] = typer.Option(None, "--notes-file", "-f"),
    wrap: int = typer.Option(NOTE_WRAP_LENGTH, "--wrap", min=1, help="Note wrap length"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    configure_logging(verbose)
    layout = compute_layout(year, month, week_start)
    typer.echo(
        f"{MONTH_NAMES[month - 1].capitalize()} {year}: {layout.weeks} weeks "
        f"({layout.last_day} days, starts on position {layout.starting_weekday})"
    )
    if notes_file is None:
        return
    note = find_note(load_notes(notes_file), year, month)
    if not note:
        typer.echo("No note")
        return
    for line in note_lines(note, max_line_length=wrap):
        typer.echo(f"  | {line}")


@app.command()
def template(
    year: int = typer.Argument(..., help="Year to list"),
    out: Path = typer.Option(Path("notes.csv"), "--out", "-o", help="CSV path to write"),
) -> None:
    """Write a notes CSV with one empty row per month of YEAR."""
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=["month", "note"])
        writer.writeheader()
        for name in MONTH_NAMES:
            writer.writerow({"month": f"{name.capitalize()} {year}", "note": ""})
    typer.echo(f"Wrote {out}")


if __name__ == "__main__":
    app()
