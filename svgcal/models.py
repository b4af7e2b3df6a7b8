from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List


class WeekStart(str, Enum):
    MONDAY = "monday"
    SUNDAY = "sunday"


@dataclass(frozen=True)
class MonthLayout:
    weeks: int             # week rows in the grid, 4-6
    starting_weekday: int  # column of day 1 under the configured week start
    last_day: int


@dataclass(frozen=True)
class RenderedMonth:
    filename: str
    content: str
    year: int
    month: int
    month_name: str
    layout: MonthLayout


@dataclass
class RunResult:
    months: List[RenderedMonth] = field(default_factory=list)
    svg: List[Path] = field(default_factory=list)
    pdf: List[Path] = field(default_factory=list)
    preview: List[Path] = field(default_factory=list)
