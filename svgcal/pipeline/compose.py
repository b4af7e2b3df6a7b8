from __future__ import annotations

from typing import List, Optional
from xml.sax.saxutils import escape

from slugify import slugify

from ..config import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    CELL_HEIGHT,
    CELL_WIDTH,
    DAYS_OF_WEEK,
    DEFAULT_STYLE,
    EXTRA_WEEK_HEIGHT,
    GRID_START_X,
    GRID_START_Y,
    IMPORTANT_DATES_LINE_COUNT,
    IMPORTANT_DATES_LINE_SPACING,
    IMPORTANT_DATES_LINE_WIDTH,
    IMPORTANT_DATES_START_Y,
    IMPORTANT_DATES_X,
    IMPORTANT_DATES_Y,
    MONTH_TITLE_Y,
    NOTE_START_Y,
    OPEN_SANS_FONT,
    PLAYFAIR_BOLD_FONT,
    PLAYFAIR_FONT,
    CalendarConfig,
    PageStyle,
)
from ..models import MonthLayout, WeekStart
from .wrap import note_lines


INDENT = "\n        "


def _fmt(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def calendar_filename(month_name: str, year: int, extension: str = ".svg") -> str:
    # the year is appended after slugify so a negative year keeps its sign
    stem = f"{slugify(f'calendar {month_name}', separator='_')}_{year}"
    if not stem or ".." in stem or "/" in stem or "\\" in stem:
        raise ValueError(f"Invalid filename generated for {month_name} {year}")
    return f"{stem}{extension}"


def svg_height(weeks: int) -> int:
    return CANVAS_HEIGHT + EXTRA_WEEK_HEIGHT if weeks > 5 else CANVAS_HEIGHT


FONT_FACES = (
    ("Open Sans", OPEN_SANS_FONT),
    ("Playfair Display", PLAYFAIR_FONT),
    ("Playfair Display Bold", PLAYFAIR_BOLD_FONT),
)


def font_face_rules() -> str:
    """@font-face rules for the bundled fonts, resolved relative to the SVG."""
    rules = []
    for family, path in FONT_FACES:
        rules.append(
            f"            @font-face {{\n"
            f"                font-family: '{family}';\n"
            f"                src: url('{path.as_posix()}') format('woff2');\n"
            f"            }}"
        )
    return "\n".join(rules)


def svg_styles(style: PageStyle = DEFAULT_STYLE) -> str:
    return f"""    <defs>
        <style><![CDATA[
{font_face_rules()}
            .month-title {{
                font-family: {style.title_font};
                font-weight: 600;
                font-size: {style.title_size}px;
                fill: {style.accent_color};
            }}
            .month-note {{
                font-family: {style.body_font};
                font-size: {style.note_size}px;
                fill: {style.text_color};
                text-anchor: middle;
            }}
            .day-header {{
                font-family: {style.header_font};
                font-size: {style.day_header_size}px;
                fill: {style.accent_color};
                font-weight: bold;
                text-anchor: middle;
            }}
            .day-number {{
                font-family: {style.body_font};
                font-size: {style.day_number_size}px;
                fill: {style.text_color};
                text-anchor: middle;
            }}
            .important-header {{
                font-family: {style.header_font};
                font-size: {style.day_header_size}px;
                fill: {style.accent_color};
            }}
            .important-line {{
                stroke: {style.line_color};
                stroke-width: 1;
            }}
        ]]></style>
    </defs>"""


def build_note_section(note_text: str, line_height: float) -> str:
    elements = []
    for index, line in enumerate(note_lines(note_text)):
        y = NOTE_START_Y + index * line_height
        elements.append(
            f'<text x="{CANVAS_WIDTH // 2}" y="{_fmt(y)}" class="month-note">{escape(line)}</text>'
        )
    return INDENT.join(elements)


def build_weekday_headers(week_start: WeekStart) -> List[str]:
    y = GRID_START_Y - 20
    elements = []
    for index, label in enumerate(DAYS_OF_WEEK[WeekStart(week_start)]):
        x = GRID_START_X + index * CELL_WIDTH + CELL_WIDTH // 2
        elements.append(f'<text x="{x}" y="{y}" class="day-header">{label}</text>')
    return elements


def build_day_numbers(layout: MonthLayout) -> List[str]:
    elements = []
    current_day = 1
    for week_index in range(layout.weeks):
        for day_index in range(7):
            cell = week_index * 7 + day_index
            if cell >= layout.starting_weekday and current_day <= layout.last_day:
                x = GRID_START_X + day_index * CELL_WIDTH + CELL_WIDTH // 2
                y = GRID_START_Y + week_index * CELL_HEIGHT + 40
                elements.append(f'<text x="{x}" y="{y}" class="day-number">{current_day}</text>')
                current_day += 1
        if current_day > layout.last_day:
            break
    return elements


def build_calendar_grid(layout: MonthLayout, week_start: WeekStart) -> str:
    return INDENT.join(build_weekday_headers(week_start) + build_day_numbers(layout))


def build_important_dates_lines() -> str:
    half_width = IMPORTANT_DATES_LINE_WIDTH // 2
    x_start = IMPORTANT_DATES_X - half_width
    x_end = IMPORTANT_DATES_X + half_width
    lines = []
    for index in range(IMPORTANT_DATES_LINE_COUNT):
        y = IMPORTANT_DATES_START_Y + index * IMPORTANT_DATES_LINE_SPACING
        lines.append(f'<line x1="{x_start}" y1="{y}" x2="{x_end}" y2="{y}" class="important-line"/>')
    return INDENT.join(lines)


def compose(
    month_name: str,
    year: int,
    layout: MonthLayout,
    note_text: Optional[str],
    config: CalendarConfig,
    style: PageStyle = DEFAULT_STYLE,
) -> str:
    height = svg_height(layout.weeks)
    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{CANVAS_WIDTH}" height="{height}" '
        f'viewBox="0 0 {CANVAS_WIDTH} {height}">',
        svg_styles(style),
        f"    <title>{escape(month_name)} {year}</title>",
        "",
        "        <!-- Month Title -->",
        f'        <text x="{CANVAS_WIDTH // 2}" y="{MONTH_TITLE_Y}" class="month-title" '
        f'text-anchor="middle">{escape(month_name)}</text>',
        "",
    ]
    if note_text and note_text.strip():
        parts.append("        <!-- Month Note -->")
        parts.append("        " + build_note_section(note_text, config.note_line_height))
        parts.append("")
    parts.extend(
        [
            "        <!-- Calendar Grid -->",
            "        " + build_calendar_grid(layout, config.week_start),
            "",
            "        <!-- Important Dates -->",
            f'        <text x="{IMPORTANT_DATES_X}" y="{IMPORTANT_DATES_Y}" class="important-header" '
            f'text-anchor="middle">IMPORTANT DATES</text>',
            "        " + build_important_dates_lines(),
            "</svg>",
        ]
    )
    return "\n".join(parts)
