"""
Tests for SVG / JSON layout rendering.

Run: pytest tests/test_layout_presenter.py
"""

import sys
import xml.etree.ElementTree as ET
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from nesting.models import PlacedPart, SheetSize
from nesting.reports import LayoutPresenter


SHEET = SheetSize(1000, 2000)
SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def layout():
    return [
        PlacedPart("bracket_0", 0, 0, 0, 0, 100, 50),
        PlacedPart("bracket_1", 0, 100, 0, 90, 50, 100),
        PlacedPart("bracket_2", 1, 0, 0, 0, 100, 50),
    ]


# ============================================================
# SVG
# ============================================================

def test_svg_is_well_formed(layout):
    svg = LayoutPresenter().generate_layout_svg(layout, SHEET)
    root = ET.fromstring(svg)

    assert root.tag == f"{SVG_NS}svg"
    groups = root.findall(f"{SVG_NS}g")
    assert [g.get("id") for g in groups] == ["sheet-0", "sheet-1"]


def test_svg_sheets_stacked_vertically(layout):
    svg = LayoutPresenter(scale=0.5).generate_layout_svg(layout, SHEET)
    root = ET.fromstring(svg)
    groups = root.findall(f"{SVG_NS}g")

    assert groups[0].get("transform") == "translate(10, 10)"
    # 2000 * 0.5 + 30 gap
    assert groups[1].get("transform") == "translate(10, 1040)"
    assert root.get("width") == "520"


def test_svg_labels_and_parts(layout):
    svg = LayoutPresenter().generate_layout_svg(layout, SHEET)

    assert "Sheet 1" in svg
    assert "Sheet 2" in svg
    assert svg.count('fill="#4CAF50"') == 2
    assert svg.count('fill="#e74c3c"') == 1
    assert "bracket_1" in svg


def test_svg_part_at_origin_drawn_at_bottom():
    svg = LayoutPresenter(scale=0.5).generate_layout_svg(
        [PlacedPart("p_0", 0, 0, 0, 0, 100, 50)], SHEET
    )
    root = ET.fromstring(svg)
    rects = root.findall(f"{SVG_NS}g/{SVG_NS}rect")
    part_rect = rects[1]
    assert part_rect.get("y") == "975"
    assert part_rect.get("height") == "25"


def test_svg_escapes_part_ids():
    svg = LayoutPresenter().generate_layout_svg(
        [PlacedPart("a<b>&c_0", 0, 0, 0, 0, 100, 50)], SHEET
    )
    assert "a&lt;b&gt;&amp;c_0" in svg
    ET.fromstring(svg)


def test_svg_empty_layout():
    svg = LayoutPresenter().generate_layout_svg([], SHEET)
    root = ET.fromstring(svg)
    assert root.findall(f"{SVG_NS}g") == []


# ============================================================
# JSON
# ============================================================

def test_json_structure(layout):
    data = LayoutPresenter().generate_layout_json(layout, SHEET)

    assert data["totalSheets"] == 2
    first = data["sheets"][0]
    assert first["sheetIndex"] == 0
    assert first["sheetSize"] == {"width": 1000, "length": 2000}
    assert first["partCount"] == 2
    assert first["utilization"] == pytest.approx(10000 / 2_000_000 * 100)
    assert first["parts"][1] == {
        "partId": "bracket_1",
        "position": {"x": 100, "y": 0},
        "size": {"width": 50, "height": 100},
        "rotation": 90,
    }


def test_json_empty_layout():
    assert LayoutPresenter().generate_layout_json([], SHEET) == {"totalSheets": 0, "sheets": []}
