from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from svgcal.config import CalendarConfig, PageStyle
from svgcal.models import WeekStart
from svgcal.pipeline.compose import calendar_filename, compose, svg_height
from svgcal.pipeline.layout import compute_layout

NS = {"svg": "http://www.w3.org/2000/svg"}


def _render(year: int, month: int, note: str | None = None, **overrides) -> ET.Element:
    config = CalendarConfig(start_month=month, start_year=year, **overrides)
    layout = compute_layout(year, month, config.week_start)
    content = compose("MONTH", year, layout, note, config)
    return ET.fromstring(content.encode("utf-8"))


def _texts(root: ET.Element, css_class: str) -> list[ET.Element]:
    return [el for el in root.iterfind(".//svg:text", NS) if el.get("class") == css_class]


def test_svg_is_valid_xml() -> None:
    root = _render(2025, 1, note="Fish & chips <Friday>.  Dinner at 8.")
    assert root.tag == "{http://www.w3.org/2000/svg}svg"
    assert root.get("width") == "1300"
    notes = [el.text for el in _texts(root, "month-note")]
    assert notes == ["Fish & chips <Friday>. Dinner at 8."]


def test_canvas_height_switches_on_six_weeks() -> None:
    assert svg_height(5) == 800
    assert svg_height(6) == 880
    assert _render(2025, 1).get("height") == "800"
    assert _render(2026, 3).get("height") == "880"


def test_day_numbers_fill_grid_in_order() -> None:
    root = _render(2025, 1)
    days = _texts(root, "day-number")
    assert [int(el.text) for el in days] == list(range(1, 32))
    # Jan 1 2025 falls in the third column with monday start
    assert days[0].get("x") == str(60 + 2 * 100 + 50)
    assert days[0].get("y") == "320"
    assert days[-1].get("y") == str(280 + 4 * 80 + 40)


def test_sunday_headers() -> None:
    root = _render(2024, 2, week_start=WeekStart.SUNDAY)
    assert [el.text for el in _texts(root, "day-header")] == ["S", "M", "T", "W", "T", "F", "S"]
    assert _texts(root, "day-number")[0].get("x") == str(60 + 4 * 100 + 50)


def test_monday_headers() -> None:
    root = _render(2024, 2)
    assert [el.text for el in _texts(root, "day-header")] == ["M", "T", "W", "T", "F", "S", "S"]


def test_note_block_is_capped_and_spaced() -> None:
    note = "One. Two. Three. Four. Five."
    config = CalendarConfig(start_month=1, start_year=2025, note_line_height=45)
    layout = compute_layout(2025, 1, config.week_start)
    root = ET.fromstring(compose("JANUARY", 2025, layout, "x " * 60 + note, config).encode("utf-8"))
    lines = _texts(root, "month-note")
    # the first sentence alone overflows one line
    assert [el.get("y") for el in lines] == ["120", "165"]
    assert all(el.get("x") == "650" for el in lines)


def test_note_block_drops_lines_past_three() -> None:
    sentence = "This sentence is padded out to be about fifty chars"
    root = _render(2025, 1, note=". ".join([sentence] * 5) + ".")
    lines = _texts(root, "month-note")
    assert [el.text for el in lines] == [f"{sentence}."] * 3
    assert [el.get("y") for el in lines] == ["120", "150", "180"]


@pytest.mark.parametrize("note", [None, "", "   "])
def test_no_note_block(note: str | None) -> None:
    assert _texts(_render(2025, 1, note=note), "month-note") == []


def test_title_and_important_dates() -> None:
    root = _render(2025, 1)
    title = _texts(root, "month-title")
    assert [el.text for el in title] == ["MONTH"]
    assert title[0].get("x") == "650"
    assert [el.text for el in _texts(root, "important-header")] == ["IMPORTANT DATES"]
    lines = [el for el in root.iterfind(".//svg:line", NS) if el.get("class") == "important-line"]
    assert len(lines) == 5
    assert [el.get("y1") for el in lines] == ["320", "400", "480", "560", "640"]
    assert {(el.get("x1"), el.get("x2")) for el in lines} == {("850", "1150")}


def test_style_block_classes() -> None:
    root = _render(2025, 1)
    style = root.find(".//svg:defs/svg:style", NS)
    assert style is not None
    for name in ("month-title", "month-note", "day-header", "day-number", "important-header", "important-line"):
        assert f".{name} " in style.text
    assert "'Playfair Display', Georgia, serif" in style.text


def test_custom_style_colors() -> None:
    config = CalendarConfig(start_month=1, start_year=2025)
    layout = compute_layout(2025, 1, config.week_start)
    content = compose("JANUARY", 2025, layout, None, config, style=PageStyle(accent_color="#112233"))
    assert "fill: #112233;" in content
    assert "#D4A574" not in content


def test_calendar_filename() -> None:
    assert calendar_filename("JANUARY", 2025) == "calendar_january_2025.svg"
    assert calendar_filename("MAY", 987, extension=".pdf") == "calendar_may_987.pdf"


def test_bundled_font_faces() -> None:
    style = _render(2025, 1).find(".//svg:defs/svg:style", NS)
    assert style.text.count("@font-face") == 3
    for family, source in (
        ("Open Sans", "fonts/OpenSans-SemiBold.woff2"),
        ("Playfair Display", "fonts/PlayfairDisplay-Regular.woff2"),
        ("Playfair Display Bold", "fonts/PlayfairDisplay-Bold.woff2"),
    ):
        assert f"font-family: '{family}';" in style.text
        assert f"url('{source}')" in style.text
    assert "font-family: 'Playfair Display Bold', 'Playfair Display', Georgia, serif;" in style.text


def test_defs_precede_title() -> None:
    root = _render(2025, 1)
    tags = [child.tag.split("}")[1] for child in root]
    assert tags[:2] == ["defs", "title"]
    assert root[1].text == "MONTH 2025"


def test_calendar_filename_keeps_year_sign() -> None:
    assert calendar_filename("MARCH", -44) == "calendar_march_-44.svg"
    assert calendar_filename("JANUARY", 12345) == "calendar_january_12345.svg"
    assert calendar_filename("JANUARY", 0) == "calendar_january_0.svg"
