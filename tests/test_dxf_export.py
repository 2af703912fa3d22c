"""
Tests for DXF export and the split comparison report.

Run: pytest tests/test_dxf_export.py
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import ezdxf
import pytest

from nesting.engine import PackingEngine
from nesting.models import Part, SheetSize
from nesting.reports import DXFNestingExporter, export_dxf, export_all_dxf
from nesting.reports.split_comparison import compare_split_modes, rectpack_reference


SHEET = SheetSize(1000, 2000)
TRIANGLE = [(0, 0), (300, 0), (0, 200)]


@pytest.fixture
def two_sheet_result():
    parts = [Part("plate", 600, 1100, quantity=2), Part("tri", 300, 200, outline=TRIANGLE)]
    return PackingEngine().optimize(parts, SHEET)


# ============================================================
# DXF
# ============================================================

def test_export_single_sheet(tmp_path, two_sheet_result):
    path = tmp_path / "sheet.dxf"
    assert export_dxf(two_sheet_result, str(path), 0)

    doc = ezdxf.readfile(str(path))
    msp = doc.modelspace()
    frames = msp.query('LWPOLYLINE[layer=="SHEET"]')
    parts = msp.query('LWPOLYLINE[layer=="PARTS"]')

    assert len(frames) == 1
    assert len(parts) == len(two_sheet_result.parts_on_sheet(0))
    assert len(msp.query('TEXT')) == len(parts)


def test_outlined_part_gets_bounding_box(tmp_path, two_sheet_result):
    sheet_index = next(p.sheet_index for p in two_sheet_result.layout if p.part_id == "tri_0")
    path = tmp_path / "tri.dxf"
    export_dxf(two_sheet_result, str(path), sheet_index)

    msp = ezdxf.readfile(str(path)).modelspace()
    assert len(msp.query('LWPOLYLINE[layer=="BOUNDS"]')) == 1


def test_rectangular_part_has_four_vertices(tmp_path, two_sheet_result):
    sheet_index = next(p.sheet_index for p in two_sheet_result.layout if p.part_id == "plate_0")
    path = tmp_path / "plate.dxf"
    export_dxf(two_sheet_result, str(path), sheet_index)

    msp = ezdxf.readfile(str(path)).modelspace()
    polylines = [e for e in msp.query('LWPOLYLINE[layer=="PARTS"]') if len(e) == 4]
    assert polylines
    assert all(e.closed for e in polylines)


def test_export_missing_sheet(tmp_path, two_sheet_result):
    assert not export_dxf(two_sheet_result, str(tmp_path / "none.dxf"), 5)


def test_export_all_sheets(tmp_path, two_sheet_result):
    files = export_all_dxf(two_sheet_result, str(tmp_path / "job.dxf"))

    assert len(files) == two_sheet_result.sheets_required
    assert Path(files[0]).name == "job_sheet1.dxf"
    assert all(Path(f).exists() for f in files)


def test_export_all_single_sheet(tmp_path):
    result = PackingEngine().optimize([Part("p", 100, 50)], SHEET)
    files = DXFNestingExporter(result).export_all_sheets(str(tmp_path / "job.dxf"))
    assert [Path(f).name for f in files] == ["job.dxf"]


# ============================================================
# Split comparison
# ============================================================

def test_compare_split_modes():
    rows = compare_split_modes([Part("p", 100, 50, quantity=6)], SHEET)

    labels = [r.label for r in rows]
    assert labels == ["MaxRects MAXRECTS", "MaxRects REMOVE_OVERLAPPING", "rectpack MaxRectsBssf"]
    assert rows[0].sheets_required == 1
    assert rows[1].sheets_required == 6
    assert rows[0].utilization > rows[1].utilization
    assert all(r.units_placed == 6 for r in rows)


def test_rectpack_reference_single_sheet():
    row = rectpack_reference([Part("p", 500, 1000, quantity=4)], SHEET)
    assert row.sheets_required == 1
    assert row.utilization == pytest.approx(100.0)
