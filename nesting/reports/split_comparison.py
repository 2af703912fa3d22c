"""
Free-rectangle split comparison.

Runs the MaxRects strategy in both split modes and rectpack's MaxRectsBssf
packer on the same job, so the utilization cost of the legacy
REMOVE_OVERLAPPING update can be shown side by side.
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Optional

import rectpack

from ..models.nesting_result import Part, SheetSize, NestingOptions, Algorithm, flatten_units
from ..models.machine_config import NestingConfig, FreeRectSplit
from ..engine.packing_engine import PackingEngine

logger = logging.getLogger(__name__)


@dataclass
class ComparisonRow:
    """One packer's outcome for the job."""
    label: str
    sheets_required: int
    units_placed: int
    utilization: float


def rectpack_reference(parts: List[Part], sheet: SheetSize,
                       allow_rotation: bool = True) -> ComparisonRow:
    """Pack the job with rectpack MaxRectsBssf in input order."""
    units = flatten_units(parts)

    packer = rectpack.newPacker(
        mode=rectpack.PackingMode.Offline,
        pack_algo=rectpack.MaxRectsBssf,
        rotation=allow_rotation,
        sort_algo=rectpack.SORT_NONE
    )

    packer.add_bin(sheet.width, sheet.length, count=max(1, len(units)))

    for i, unit in enumerate(units):
        packer.add_rect(unit.part.width, unit.part.height, rid=i)

    packer.pack()

    sheets_required = 0
    units_placed = 0
    placed_area = 0.0
    for abin in packer:
        if len(abin) == 0:
            continue
        sheets_required += 1
        for rect in abin:
            units_placed += 1
            placed_area += rect.width * rect.height

    utilization = 0.0
    if sheets_required:
        utilization = placed_area / (sheets_required * sheet.area) * 100

    return ComparisonRow('rectpack MaxRectsBssf', sheets_required, units_placed, utilization)


def compare_split_modes(parts: List[Part], sheet: SheetSize,
                        allow_rotation: bool = True,
                        config: Optional[NestingConfig] = None) -> List[ComparisonRow]:
    """
    Utilization of the job under each free-rectangle update rule.

    Returns:
        Rows for MAXRECTS, REMOVE_OVERLAPPING and the rectpack reference
    """
    config = config or NestingConfig()
    options = NestingOptions(allow_rotation=allow_rotation, algorithm=Algorithm.MAXRECT)
    rows = []

    for split_mode in FreeRectSplit:
        engine = PackingEngine(replace(config, free_rect_split=split_mode))
        result = engine.optimize(parts, sheet, options)
        rows.append(ComparisonRow(
            label=f"MaxRects {split_mode.value}",
            sheets_required=result.sheets_required,
            units_placed=len(result.layout),
            utilization=result.utilization
        ))

    rows.append(rectpack_reference(parts, sheet, allow_rotation))

    for row in rows:
        logger.debug(f"{row.label}: {row.sheets_required} sheets, {row.utilization:.1f}%")
    return rows
