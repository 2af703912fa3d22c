"""
Cut Path Optimizer - greedy nearest-neighbour cutting sequence.

Each sheet is processed on its own, starting from the sheet origin. From the
current head position the nearest unvisited part corner is chosen, the head
travels there (MOVE) and cuts the part rectangle (four CUT segments), ending
back at the corner it started from.

Time estimate:
    time_s = (cut_length / cut_rate + move_length / move_rate) * 60
             + pierce_count * pierce_time_s
"""

import math
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from ..models.nesting_result import PlacedPart, SheetSize
from ..models.machine_config import MachineConfig

logger = logging.getLogger(__name__)


class SegmentType(Enum):
    MOVE = "MOVE"       # Rapid traverse, beam off
    CUT = "CUT"         # Cutting, beam on


@dataclass(frozen=True)
class CutSegment:
    """Path segment ending at (x, y)."""
    x: float
    y: float
    type: SegmentType
    sheet_index: int = 0

    def to_dict(self) -> Dict:
        return {
            'x': self.x,
            'y': self.y,
            'type': self.type.value,
            'sheet_index': self.sheet_index
        }


@dataclass
class CutPathResult:
    """Cutting sequence with lengths and time estimate."""
    path: List[CutSegment] = field(default_factory=list)
    total_cut_length: float = 0.0       # [mm]
    total_move_length: float = 0.0      # [mm]
    estimated_time_seconds: float = 0.0
    pierce_count: int = 0

    def to_dict(self) -> Dict:
        return {
            'path': [s.to_dict() for s in self.path],
            'total_cut_length': self.total_cut_length,
            'total_move_length': self.total_move_length,
            'estimated_time_seconds': self.estimated_time_seconds,
            'pierce_count': self.pierce_count
        }


class CutPathOptimizer:
    """
    Greedy cut sequence for a layout.

    Usage:
        optimizer = CutPathOptimizer()
        path = optimizer.optimize_path(result.layout, result.sheet)
        print(f"{path.estimated_time_seconds:.1f} s")
    """

    def __init__(self, machine_config: Optional[MachineConfig] = None):
        self.machine = machine_config or MachineConfig()

    def optimize_path(self, layout: List[PlacedPart],
                      sheet: Optional[SheetSize] = None) -> CutPathResult:
        """
        Build the cutting sequence.

        Args:
            layout: Layout entries (any sheet order)
            sheet: Sheet format, informational only

        Returns:
            CutPathResult
        """
        result = CutPathResult()

        sheet_indices = sorted({p.sheet_index for p in layout})
        for sheet_index in sheet_indices:
            entries = [p for p in layout if p.sheet_index == sheet_index]
            self._sequence_sheet(entries, sheet_index, result)

        result.pierce_count = len(layout)
        result.estimated_time_seconds = self.estimate_time(
            result.total_cut_length, result.total_move_length, result.pierce_count
        )

        logger.debug(f"Cut path: {len(sheet_indices)} sheets, "
                     f"cut {result.total_cut_length:.1f}mm, "
                     f"move {result.total_move_length:.1f}mm, "
                     f"{result.estimated_time_seconds:.1f}s")
        return result

    def estimate_time(self, cut_length: float, move_length: float,
                      pierce_count: int = 0) -> float:
        """Seconds for the given lengths at the configured feed rates."""
        minutes = (cut_length / self.machine.cut_rate_mm_min +
                   move_length / self.machine.move_rate_mm_min)
        return minutes * 60 + pierce_count * self.machine.pierce_time_s

    def _sequence_sheet(self, entries: List[PlacedPart], sheet_index: int,
                        result: CutPathResult):
        remaining = list(entries)
        current_x, current_y = 0.0, 0.0

        while remaining:
            nearest_idx = 0
            nearest_dist = math.inf
            for i, placed in enumerate(remaining):
                dist = math.hypot(placed.x - current_x, placed.y - current_y)
                if dist < nearest_dist:
                    nearest_dist = dist
                    nearest_idx = i

            placed = remaining.pop(nearest_idx)

            result.path.append(CutSegment(placed.x, placed.y, SegmentType.MOVE, sheet_index))
            result.total_move_length += nearest_dist

            # Rectangle outline, counter-clockwise back to the start corner
            corners = [
                (placed.x + placed.width, placed.y),
                (placed.x + placed.width, placed.y + placed.height),
                (placed.x, placed.y + placed.height),
                (placed.x, placed.y),
            ]
            for x, y in corners:
                result.path.append(CutSegment(x, y, SegmentType.CUT, sheet_index))
            result.total_cut_length += 2 * (placed.width + placed.height)

            current_x, current_y = placed.x, placed.y
