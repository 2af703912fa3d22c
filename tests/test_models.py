"""
Tests for nesting data models.

Run: pytest tests/test_models.py
"""

import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from core.exceptions import InvalidGeometryError, InvalidFieldValueError, NestingError
from nesting.models import (
    Algorithm, Part, SheetSize, PlacedPart, FreeRectangle, NestingOptions,
    NestingResult, flatten_units, summarize_sheets
)


L_SHAPE = [(0, 0), (100, 0), (100, 20), (20, 20), (20, 50), (0, 50)]


def test_algorithm_parse():
    assert Algorithm.parse(None) == Algorithm.MAXRECT
    assert Algorithm.parse("genetic") == Algorithm.GENETIC
    assert Algorithm.parse(Algorithm.GUILLOTINE) == Algorithm.GUILLOTINE


def test_sheet_fits():
    sheet = SheetSize(1000, 2000)
    assert sheet.fits(1000, 2000)
    assert sheet.fits(1500, 800)
    assert not sheet.fits(1500, 800, allow_rotation=False)
    assert sheet.area == 2_000_000


def test_flatten_units_keeps_order():
    units = flatten_units([Part("a", 10, 10, quantity=2), Part("b", 5, 5)])
    assert [u.unit_id for u in units] == ["a_0", "a_1", "b_0"]


def test_free_rectangle_touching_is_not_overlap():
    rect = FreeRectangle(0, 0, 100, 100)
    assert not rect.overlaps(100, 0, 50, 50)
    assert rect.overlaps(99, 99, 10, 10)
    assert rect.contains(FreeRectangle(10, 10, 90, 90))


def test_placed_parts_on_different_sheets_never_overlap():
    a = PlacedPart("a_0", 0, 0, 0, 0, 100, 100)
    b = PlacedPart("b_0", 1, 0, 0, 0, 100, 100)
    assert not a.overlaps(b)
    assert a.overlaps(PlacedPart("c_0", 0, 50, 50, 0, 100, 100))


# ============================================================
# Outlines
# ============================================================

def test_outline_area():
    part = Part("l", 100, 50, outline=L_SHAPE)
    assert part.outline_area == pytest.approx(100 * 20 + 20 * 30)
    assert part.area == 5000


def test_outline_needs_three_vertices():
    with pytest.raises(InvalidGeometryError):
        Part("bad", 100, 50, outline=[(0, 0), (100, 0)])


def test_self_intersecting_outline_rejected():
    with pytest.raises(InvalidGeometryError):
        Part("bow", 100, 100, outline=[(0, 0), (100, 100), (100, 0), (0, 100)])


def test_placed_outline_without_source_is_rectangle():
    placed = PlacedPart("a_0", 0, 10, 20, 0, 30, 40)
    assert placed.get_placed_outline() == [(10, 20), (40, 20), (40, 60), (10, 60)]


def test_placed_outline_rotated():
    part = Part("l", 100, 50, outline=L_SHAPE)
    placed = PlacedPart("l_0", 0, 200, 300, 90, 50, 100, source=part)
    outline = placed.get_placed_outline()

    assert outline[0] == (250, 300)
    assert outline[1] == (250, 400)
    xs = [x for x, _ in outline]
    ys = [y for _, y in outline]
    assert (min(xs), max(xs)) == (200, 250)
    assert (min(ys), max(ys)) == (300, 400)


# ============================================================
# Options and results
# ============================================================

def test_options_from_camel_case():
    options = NestingOptions.from_dict({
        "sheetSize": {"width": 1219, "length": 2438},
        "allowRotation": False,
        "algorithm": "GUILLOTINE",
        "materialId": "AL-3",
        "seed": 5,
    })
    assert options.sheet_size == SheetSize(1219.0, 2438.0)
    assert options.allow_rotation is False
    assert options.algorithm == Algorithm.GUILLOTINE
    assert options.quantity == 1
    assert options.seed == 5


@pytest.mark.parametrize("value,expected", [
    ("false", False), ("False", False), ("0", False), ("no", False),
    ("true", True), ("1", True), (0, False), (True, True),
])
def test_options_rotation_flag_parsing(value, expected):
    assert NestingOptions.from_dict({"allowRotation": value}).allow_rotation is expected


def test_options_rotation_flag_rejects_garbage():
    with pytest.raises(InvalidFieldValueError):
        NestingOptions.from_dict({"allowRotation": "maybe"})


def test_options_invalid_quantity():
    with pytest.raises(InvalidFieldValueError):
        NestingOptions(quantity=0)


def test_summarize_sheets():
    layout = [
        PlacedPart("a_0", 1, 0, 0, 0, 500, 1000),
        PlacedPart("a_1", 0, 0, 0, 0, 1000, 1000),
        PlacedPart("a_2", 0, 0, 1000, 0, 1000, 1000),
    ]
    summaries = summarize_sheets(layout, SheetSize(1000, 2000))
    assert [s.sheet_index for s in summaries] == [0, 1]
    assert summaries[0].utilization == pytest.approx(100.0)
    assert summaries[1].utilization == pytest.approx(25.0)


def test_result_to_json():
    result = NestingResult(
        sheet_width=1000, sheet_length=2000, parts_per_sheet=1, sheets_required=1,
        utilization=0.25, waste_area=1_995_000,
        layout=[PlacedPart("p_0", 0, 0, 0, 0, 100, 50)],
        algorithm=Algorithm.GUILLOTINE
    )
    data = json.loads(result.to_json())
    assert data["algorithm"] == "GUILLOTINE"
    assert data["layout"][0]["part_id"] == "p_0"
    assert result.placed_area == 5000
    assert result.parts_on_sheet(1) == []


def test_error_format():
    error = InvalidGeometryError("p", "width", 0, "must be greater than zero")
    assert isinstance(error, NestingError)
    assert str(error).startswith("[INVALID_GEOMETRY] Invalid geometry for part 'p'")
    assert error.details["field"] == "width"
