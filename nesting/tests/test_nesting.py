"""
Test script for the nesting module.

Tests:
1. Sheet selection
2. Packing strategies
3. Cut path estimation
4. Complete nesting flow
"""

import sys
from pathlib import Path

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def test_sheet_selection():
    """Test sheet selection rules."""
    print("\n=== TEST: Sheet Selection ===")

    from nesting.sheets.sheet_selector import SheetSelector

    selector = SheetSelector()

    for width, height, qty in [(100, 50, 1), (100, 50, 60), (1100, 1100, 1), (2500, 2500, 3)]:
        sheet = selector.select_sheet(width, height, qty)
        print(f"  {width}x{height} x{qty}: {sheet.width:.0f}x{sheet.length:.0f}")
        assert sheet.fits(width, height)

    print("\n[OK] Sheet selection tests passed")


def test_strategies():
    """Test every packing strategy on the same job."""
    print("\n=== TEST: Packing Strategies ===")

    from nesting.engine.packing_engine import PackingEngine
    from nesting.models import Algorithm, Part, SheetSize, NestingOptions, NestingConfig, GeneticConfig

    config = NestingConfig(genetic=GeneticConfig(population_size=10, generations=5))
    engine = PackingEngine(config)
    sheet = SheetSize(1000, 2000)
    parts = [
        Part("bracket", 120, 80, quantity=20),
        Part("plate", 400, 250, quantity=4),
    ]

    for algorithm in Algorithm:
        result = engine.optimize(parts, sheet, NestingOptions(algorithm=algorithm))
        print(f"  {algorithm.value}: {result.sheets_required} sheets, "
              f"{result.utilization:.1f}% utilization, {len(result.layout)} units")
        assert len(result.layout) == 24
        assert 0 <= result.utilization <= 100

    print("\n[OK] Packing strategy tests passed")


def test_cut_path():
    """Test cut path sequencing."""
    print("\n=== TEST: Cut Path ===")

    from nesting.models import PlacedPart
    from nesting.toolpath.cut_path import CutPathOptimizer

    layout = [
        PlacedPart("a_0", 0, 0, 0, 0, 100, 50),
        PlacedPart("a_1", 0, 100, 0, 0, 100, 50),
    ]

    path = CutPathOptimizer().optimize_path(layout)
    print(f"  Cut: {path.total_cut_length:.1f}mm, move: {path.total_move_length:.1f}mm, "
          f"time: {path.estimated_time_seconds:.2f}s")
    assert path.total_cut_length == 600
    assert path.pierce_count == 2

    print("\n[OK] Cut path tests passed")


def test_complete_flow():
    """Test complete flow: geometry -> nesting -> cut path."""
    print("\n=== TEST: Complete Flow ===")

    from nesting import NestingService

    service = NestingService()
    result = service.optimize_nesting(
        {"boundingBox": {"width": 100, "height": 50}},
        {"quantity": 25, "algorithm": "GUILLOTINE", "materialId": "S235-2"}
    )

    print(f"  Sheet: {result.sheet_width:.0f}x{result.sheet_length:.0f}")
    print(f"  Sheets required: {result.sheets_required}")
    print(f"  Utilization: {result.utilization:.1f}%")
    for summary in result.sheet_summaries():
        print(f"    Sheet {summary.sheet_index + 1}: {summary.part_count} parts, "
              f"{summary.utilization:.1f}%")

    path = service.optimize_cut_path(result)
    print(f"  Estimated cutting time: {path.estimated_time_seconds:.1f}s")

    assert result.material_id == "S235-2"
    assert len(result.layout) == 25
    assert result.layout_json['totalSheets'] == result.sheets_required
    assert path.pierce_count == 25

    print("\n[OK] Complete flow test passed")


if __name__ == "__main__":
    print("=" * 60)
    print("NESTING MODULE TESTS")
    print("=" * 60)

    test_sheet_selection()
    test_strategies()
    test_cut_path()
    test_complete_flow()

    print("\n" + "=" * 60)
    print("ALL TESTS COMPLETED")
    print("=" * 60)
