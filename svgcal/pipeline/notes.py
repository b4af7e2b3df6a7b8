from __future__ import annotations

import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from ..config import MONTH_NAMES, NOTE_CHAR_LIMIT


REQUIRED_COLUMNS = {"month", "note"}

# Tried in order; the first that parses wins.
MONTH_FORMATS = [
    "%B %Y",
    "%b %Y",
    "%B, %Y",
    "%b, %Y",
    "%Y %B",
    "%Y-%m",
    "%Y/%m",
    "%m/%Y",
    "%m-%Y",
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%B %d %Y",
    "%B %d, %Y",
    "%b %d %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
]

NoteIndex = Dict[str, str]

logger = logging.getLogger(__name__)


def normalize_key(key: str) -> str:
    return " ".join(key.split()).lower()


def note_key(month_name: str, year: int) -> str:
    return normalize_key(f"{month_name} {year}")


def parse_month_expression(value: str) -> Tuple[int, int]:
    """Return (year, month) for expressions like "January 2025" or "2025-01-15"."""
    text = " ".join((value or "").split())
    if not text:
        raise ValueError("empty month value")
    for form in MONTH_FORMATS:
        try:
            parsed = datetime.strptime(text, form)  # noqa: DTZ007
        except ValueError:
            continue
        return parsed.year, parsed.month
    raise ValueError(f"unrecognized date expression '{text}'")


def _parse_row(row: dict) -> Tuple[str, str]:
    year, month = parse_month_expression(row.get("month") or "")
    key = note_key(MONTH_NAMES[month - 1], year)
    return key, (row.get("note") or "")[:NOTE_CHAR_LIMIT]


def collect_notes(rows: Iterable[dict]) -> Tuple[NoteIndex, List[str]]:
    notes: NoteIndex = {}
    skipped: List[str] = []
    for row in rows:
        try:
            key, text = _parse_row(row)
        except ValueError as exc:
            skipped.append(f"Could not parse date '{row.get('month')}': {exc}")
            continue
        notes[key] = text
        logger.debug("Loaded note for: %s", key)
    return notes, skipped


def load_notes(csv_path: Path) -> NoteIndex:
    if not csv_path.exists():
        logger.warning("Notes file not found: %s", csv_path)
        return {}
    try:
        with csv_path.open("r", encoding="utf-8-sig", newline="") as handle:
            reader = csv.DictReader(handle, strict=True)
            missing = REQUIRED_COLUMNS - set(reader.fieldnames or [])
            if missing:
                logger.warning("Notes file %s missing columns: %s", csv_path, ", ".join(sorted(missing)))
                return {}
            rows = list(reader)
    except (csv.Error, UnicodeDecodeError, OSError) as exc:
        logger.warning("Error reading notes file %s: %s", csv_path, exc)
        return {}

    notes, skipped = collect_notes(rows)
    for message in skipped:
        logger.warning(message)
    logger.debug("Total notes loaded: %d", len(notes))
    return notes


def find_note(notes: Optional[NoteIndex], year: int, month: int) -> Optional[str]:
    if notes is None:
        return None
    key = note_key(MONTH_NAMES[month - 1], year)
    note = notes.get(key)
    logger.debug("Looking for: %s -> %s", key, "Found" if note is not None else "Not found")
    return note
