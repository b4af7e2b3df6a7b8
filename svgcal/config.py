from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import date
from pathlib import Path
from typing import Optional
import json

from .models import WeekStart


OUT_DIR = Path(".")

MONTH_NAMES = [
    "JANUARY",
    "FEBRUARY",
    "MARCH",
    "APRIL",
    "MAY",
    "JUNE",
    "JULY",
    "AUGUST",
    "SEPTEMBER",
    "OCTOBER",
    "NOVEMBER",
    "DECEMBER",
]

DAYS_OF_WEEK = {
    WeekStart.SUNDAY: ["S", "M", "T", "W", "T", "F", "S"],
    WeekStart.MONDAY: ["M", "T", "W", "T", "F", "S", "S"],
}

# Canvas, in pixels
CANVAS_WIDTH = 1300
CANVAS_HEIGHT = 800
EXTRA_WEEK_HEIGHT = 80

# Grid
GRID_START_X = 60
GRID_START_Y = 280
CELL_WIDTH = 100
CELL_HEIGHT = 80

# Typography
MONTH_TITLE_Y = 80
NOTE_START_Y = 120
NOTE_LINE_HEIGHT = 30
NOTE_CHAR_LIMIT = 255
NOTE_WRAP_LENGTH = 80
NOTE_MAX_LINES = 3

# Important dates column, right of the grid
IMPORTANT_DATES_X = 1000
IMPORTANT_DATES_Y = GRID_START_Y - 20
IMPORTANT_DATES_START_Y = 320
IMPORTANT_DATES_LINE_SPACING = 80
IMPORTANT_DATES_LINE_WIDTH = 300
IMPORTANT_DATES_LINE_COUNT = 5

FONT_DIR = Path("fonts")
OPEN_SANS_FONT = FONT_DIR / "OpenSans-SemiBold.woff2"
PLAYFAIR_FONT = FONT_DIR / "PlayfairDisplay-Regular.woff2"
PLAYFAIR_BOLD_FONT = FONT_DIR / "PlayfairDisplay-Bold.woff2"


@dataclass(frozen=True)
class PageStyle:
    title_font: str = "'Open Sans', 'Helvetica Neue', Arial, sans-serif"
    body_font: str = "'Playfair Display', Georgia, serif"
    header_font: str = "'Playfair Display Bold', 'Playfair Display', Georgia, serif"
    accent_color: str = "#D4A574"
    text_color: str = "#333"
    line_color: str = "#333"
    title_size: int = 72
    note_size: int = 24
    day_header_size: int = 36
    day_number_size: int = 48


DEFAULT_STYLE = PageStyle()


def load_style_preset(path: Optional[Path] = None) -> PageStyle:
    """Read a JSON object of PageStyle overrides; no path means the default style."""
    if path is None:
        return DEFAULT_STYLE
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"Style preset must be a JSON object: {path}")
    known = {field.name for field in fields(PageStyle)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown style keys: {', '.join(sorted(unknown))}")
    return replace(DEFAULT_STYLE, **data)


@dataclass(frozen=True)
class CalendarConfig:
    start_month: int
    start_year: int
    num_months: int = 1
    week_start: WeekStart = WeekStart.MONDAY
    note_line_height: float = NOTE_LINE_HEIGHT
    notes_file: Optional[Path] = None

    def __post_init__(self) -> None:
        if not 1 <= self.start_month <= 12:
            raise ValueError(f"Invalid month {self.start_month}, expected 1-12")
        if self.num_months < 1:
            raise ValueError("Number of months must be at least 1")
        if self.note_line_height <= 0:
            raise ValueError("Note line height must be positive")
        object.__setattr__(self, "week_start", WeekStart(self.week_start))

    @classmethod
    def from_overrides(cls, today: Optional[date] = None, **overrides) -> "CalendarConfig":
        today = today or date.today()
        values = {
            "start_month": today.month,
            "start_year": today.year,
            "num_months": 1,
            "week_start": WeekStart.MONDAY,
            "note_line_height": NOTE_LINE_HEIGHT,
            "notes_file": None,
        }
        unknown = set(overrides) - set(values)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)


def set_out_dir(path: Path) -> None:
    global OUT_DIR
    OUT_DIR = path
