from __future__ import annotations

import math
from typing import Iterator, Tuple

from ..models import MonthLayout, WeekStart


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def last_day_of_month(year: int, month: int) -> int:
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in (4, 6, 9, 11):
        return 30
    return 31


# month offsets for Sakamoto's weekday formula
MONTH_OFFSETS = (0, 3, 2, 5, 0, 3, 5, 1, 4, 6, 2, 4)


def sunday_weekday(year: int, month: int, day: int = 1) -> int:
    """Weekday with 0=Sunday .. 6=Saturday, proleptic Gregorian, any integer year."""
    if month < 3:
        year -= 1
    return (year + year // 4 - year // 100 + year // 400 + MONTH_OFFSETS[month - 1] + day) % 7


def starting_weekday(year: int, month: int, week_start: WeekStart) -> int:
    """Column of day 1 in the first grid row."""
    wday = sunday_weekday(year, month)
    if WeekStart(week_start) == WeekStart.MONDAY:
        return 6 if wday == 0 else wday - 1
    return wday


def compute_layout(year: int, month: int, week_start: WeekStart) -> MonthLayout:
    offset = starting_weekday(year, month, week_start)
    last_day = last_day_of_month(year, month)
    weeks = math.ceil((offset + last_day) / 7)
    if not 4 <= weeks <= 6:
        raise ValueError(f"Layout for {year}-{month:02d} needs {weeks} weeks")
    return MonthLayout(weeks=weeks, starting_weekday=offset, last_day=last_day)


def next_month(year: int, month: int) -> Tuple[int, int]:
    if month == 12:
        return year + 1, 1
    return year, month + 1


def iter_months(start_year: int, start_month: int, count: int) -> Iterator[Tuple[int, int]]:
    year, month = start_year, start_month
    for index in range(count):
        if index:
            year, month = next_month(year, month)
        yield year, month
