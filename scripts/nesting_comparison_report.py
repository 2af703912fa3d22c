#!/usr/bin/env python3
"""
Free-rectangle split comparison report.

Nests a job with MaxRects in both split modes (canonical MAXRECTS and
legacy REMOVE_OVERLAPPING) and with rectpack's MaxRectsBssf, then prints a
sheets / utilization table.

Example:
    python scripts/nesting_comparison_report.py --part 100x50x40 --part 300x120x6 --sheet 1000x2000
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Tuple

sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import setup_logging
from core.exceptions import NestingError
from nesting.models import Part, SheetSize
from nesting.reports.split_comparison import compare_split_modes


def parse_part(value: str, index: int) -> Part:
    """WIDTHxHEIGHT[xQTY] -> Part"""
    fields = value.lower().split('x')
    if len(fields) not in (2, 3):
        raise argparse.ArgumentTypeError(f"Invalid part '{value}', expected WxH or WxHxQTY")
    quantity = int(fields[2]) if len(fields) == 3 else 1
    return Part(f"part{index + 1}", float(fields[0]), float(fields[1]), quantity=quantity)


def parse_sheet(value: str) -> Tuple[float, float]:
    fields = value.lower().split('x')
    if len(fields) != 2:
        raise argparse.ArgumentTypeError(f"Invalid sheet '{value}', expected WxL")
    return float(fields[0]), float(fields[1])


def main():
    parser = argparse.ArgumentParser(description="MaxRects split mode comparison")
    parser.add_argument("--part", action="append", required=True,
                        help="Part as WxH or WxHxQTY (repeatable)")
    parser.add_argument("--sheet", type=parse_sheet, default=(1000.0, 2000.0),
                        help="Sheet as WxL (default 1000x2000)")
    parser.add_argument("--no-rotation", action="store_true", help="Disable rotation")
    parser.add_argument("--json", type=str, help="Write rows to a JSON file")
    args = parser.parse_args()

    setup_logging()

    parts = [parse_part(p, i) for i, p in enumerate(args.part)]
    sheet = SheetSize(*args.sheet)

    print("=" * 70)
    print("  FREE RECTANGLE SPLIT COMPARISON")
    print("=" * 70)
    print(f"  Sheet: {sheet.width:.0f} x {sheet.length:.0f} mm")
    for part in parts:
        print(f"  {part.part_id}: {part.width:.1f} x {part.height:.1f} mm x {part.quantity}")

    try:
        rows = compare_split_modes(parts, sheet, allow_rotation=not args.no_rotation)
    except NestingError as e:
        print(f"\n[ERROR] {e}")
        sys.exit(1)

    print(f"\n  {'Packer':<34}{'Sheets':>8}{'Units':>8}{'Util %':>10}")
    print("  " + "-" * 60)
    for row in rows:
        print(f"  {row.label:<34}{row.sheets_required:>8}{row.units_placed:>8}{row.utilization:>10.1f}")

    if args.json:
        output_path = Path(args.json)
        output_path.write_text(json.dumps([row.__dict__ for row in rows], indent=2),
                               encoding='utf-8')
        print(f"\nReport: {output_path}")


if __name__ == "__main__":
    main()
