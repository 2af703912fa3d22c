"""
Packing strategy interface and shared layout metrics.
"""

import math
import random
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from ..models.nesting_result import Algorithm, SheetSize, PartUnit, PlacedPart
from ..models.machine_config import NestingConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutMetrics:
    """Summary figures of a layout."""
    sheets_required: int
    parts_per_sheet: int
    placed_area: float
    utilization: float          # Percentage of consumed sheet area
    waste_area: float


def layout_metrics(layout: List[PlacedPart], sheet: SheetSize) -> LayoutMetrics:
    """
    Compute sheets required, utilization and waste for a layout.

    An empty layout (or zero placed area) reports 0% utilization instead of
    dividing by zero.
    """
    if not layout:
        logger.warning("No parts placed - utilization reported as 0%")
        return LayoutMetrics(0, 0, 0.0, 0.0, 0.0)

    sheets_required = max(p.sheet_index for p in layout) + 1
    consumed_area = sheets_required * sheet.area
    placed_area = sum(p.area for p in layout)

    if consumed_area > 0 and placed_area > 0:
        utilization = min(100.0, placed_area / consumed_area * 100)
    else:
        logger.warning(f"Degenerate utilization (placed area {placed_area:.1f}, "
                       f"sheet area {consumed_area:.1f}) - reported as 0%")
        utilization = 0.0

    return LayoutMetrics(
        sheets_required=sheets_required,
        parts_per_sheet=math.ceil(len(layout) / sheets_required),
        placed_area=placed_area,
        utilization=utilization,
        waste_area=max(0.0, consumed_area - placed_area)
    )


def make_placement(unit: PartUnit, sheet_index: int, x: float, y: float,
                   rotated: bool) -> PlacedPart:
    """Layout entry for a unit at (x, y), dimensions swapped when rotated."""
    part = unit.part
    return PlacedPart(
        part_id=unit.unit_id,
        sheet_index=sheet_index,
        x=x,
        y=y,
        rotation=90 if rotated else 0,
        width=part.height if rotated else part.width,
        height=part.width if rotated else part.height,
        source=part
    )


class PackingStrategy(ABC):
    """
    Placement algorithm.

    Implementations receive the flattened unit list and return one layout
    entry per unit. Sheets are consumed in order; a unit that does not fit
    the current sheet opens the next one.
    """

    algorithm: Algorithm

    def __init__(self, config: Optional[NestingConfig] = None):
        self.config = config or NestingConfig()

    @abstractmethod
    def place(self, units: List[PartUnit], sheet: SheetSize, allow_rotation: bool,
              rng: Optional[random.Random] = None) -> List[PlacedPart]:
        """
        Place every unit.

        Args:
            units: Units in input order
            sheet: Sheet format used for every sheet
            allow_rotation: Global switch, combined with each part's ``rotatable``
            rng: Random source, only consumed by stochastic strategies

        Returns:
            Layout entries
        """

    @staticmethod
    def can_rotate(unit: PartUnit, allow_rotation: bool) -> bool:
        return allow_rotation and unit.part.rotatable
