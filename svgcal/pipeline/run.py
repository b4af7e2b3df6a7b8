from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from ..config import DEFAULT_STYLE, MONTH_NAMES, CalendarConfig, PageStyle
from ..models import RenderedMonth, RunResult
from ..storage import output_path, write_document
from .compose import calendar_filename, compose
from .layout import compute_layout, iter_months
from .notes import NoteIndex, find_note, load_notes
from .render_preview import render_pdf, render_preview


logger = logging.getLogger(__name__)


def render_month(
    year: int,
    month: int,
    config: CalendarConfig,
    notes: Optional[NoteIndex] = None,
    style: PageStyle = DEFAULT_STYLE,
) -> RenderedMonth:
    month_name = MONTH_NAMES[month - 1]
    layout = compute_layout(year, month, config.week_start)
    note_text = find_note(notes, year, month)
    return RenderedMonth(
        filename=calendar_filename(month_name, year),
        content=compose(month_name, year, layout, note_text, config, style=style),
        year=year,
        month=month,
        month_name=month_name,
        layout=layout,
    )


def generate_calendars(
    config: CalendarConfig,
    notes: Optional[NoteIndex] = None,
    style: PageStyle = DEFAULT_STYLE,
) -> List[RenderedMonth]:
    return [
        render_month(year, month, config, notes, style=style)
        for year, month in iter_months(config.start_year, config.start_month, config.num_months)
    ]


def run_pipeline(
    config: CalendarConfig,
    out_dir: Path | None = None,
    pdf: bool = False,
    preview: bool = False,
    style: PageStyle = DEFAULT_STYLE,
) -> RunResult:
    notes = load_notes(config.notes_file) if config.notes_file else None
    result = RunResult()
    for rendered in generate_calendars(config, notes, style=style):
        result.months.append(rendered)
        svg_path = write_document(rendered, base_dir=out_dir)
        result.svg.append(svg_path)
        logger.info("Wrote %s", svg_path)
        stem = Path(rendered.filename).stem
        if pdf:
            result.pdf.append(render_pdf(svg_path, output_path(f"{stem}.pdf", base_dir=out_dir)))
        if preview:
            result.preview.append(render_preview(svg_path, output_path(f"{stem}.png", base_dir=out_dir)))
    return result


def summarize(rendered: List[RenderedMonth]) -> List[str]:
    return [
        f"{item.month_name.capitalize()} {item.year}: {item.layout.weeks} weeks "
        f"({item.layout.last_day} days, starts on position {item.layout.starting_weekday})"
        for item in rendered
    ]
