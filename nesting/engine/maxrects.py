"""
MaxRects packing with Best-Short-Side-Fit scoring.

Per sheet a list of free rectangles is kept, seeded with the full sheet.
Each unit goes to the free rectangle (and orientation) leaving the smallest
short-side remainder, anchored at the rectangle origin.

Free rectangle update after a placement (``FreeRectSplit``):
- MAXRECTS: every overlapped rectangle is split into up to four maximal
  residuals (left, right, below, above the part), then rectangles contained
  in another one are pruned.
- REMOVE_OVERLAPPING: every overlapped rectangle is dropped. Cheaper but
  partially covered space is lost, so utilization is lower.
"""

import random
import logging
from typing import List, Optional, Tuple

from core.exceptions import NoFeasibleSheetError
from ..models.nesting_result import (
    Algorithm, SheetSize, PartUnit, PlacedPart, FreeRectangle
)
from ..models.machine_config import FreeRectSplit
from .base_strategy import PackingStrategy, make_placement

logger = logging.getLogger(__name__)


def find_best_position(free_rects: List[FreeRectangle], width: float, height: float,
                       allow_rotation: bool) -> Optional[Tuple[float, float, bool]]:
    """
    Best-Short-Side-Fit search.

    Returns:
        (x, y, rotated) of the best free rectangle origin, None if nothing fits.
        Ties keep the first rectangle; unrotated beats rotated.
    """
    best_score = float('inf')
    best: Optional[Tuple[float, float, bool]] = None

    for rect in free_rects:
        if width <= rect.width and height <= rect.height:
            score = min(rect.width - width, rect.height - height)
            if score < best_score:
                best_score = score
                best = (rect.x, rect.y, False)

        if allow_rotation and height <= rect.width and width <= rect.height:
            score = min(rect.width - height, rect.height - width)
            if score < best_score:
                best_score = score
                best = (rect.x, rect.y, True)

    return best


def split_free_rects(free_rects: List[FreeRectangle],
                     placed: PlacedPart) -> List[FreeRectangle]:
    """Canonical MaxRects split followed by containment pruning."""
    x, y, w, h = placed.x, placed.y, placed.width, placed.height
    result: List[FreeRectangle] = []

    for rect in free_rects:
        if not rect.overlaps(x, y, w, h):
            result.append(rect)
            continue

        if x > rect.x:
            result.append(FreeRectangle(rect.x, rect.y, x - rect.x, rect.height))
        if x + w < rect.right:
            result.append(FreeRectangle(x + w, rect.y, rect.right - (x + w), rect.height))
        if y > rect.y:
            result.append(FreeRectangle(rect.x, rect.y, rect.width, y - rect.y))
        if y + h < rect.top:
            result.append(FreeRectangle(rect.x, y + h, rect.width, rect.top - (y + h)))

    return prune_free_rects(result)


def prune_free_rects(free_rects: List[FreeRectangle]) -> List[FreeRectangle]:
    """Drop rectangles contained in another one; of identical ones the first stays."""
    pruned = []
    for i, rect in enumerate(free_rects):
        redundant = False
        for j, other in enumerate(free_rects):
            if i == j or not other.contains(rect):
                continue
            if other == rect and j > i:
                continue
            redundant = True
            break
        if not redundant:
            pruned.append(rect)
    return pruned


def remove_overlapping_rects(free_rects: List[FreeRectangle],
                             placed: PlacedPart) -> List[FreeRectangle]:
    """Legacy update: keep only rectangles untouched by the placement."""
    return [
        rect for rect in free_rects
        if not rect.overlaps(placed.x, placed.y, placed.width, placed.height)
    ]


class MaxRectsStrategy(PackingStrategy):
    """MaxRects Best-Short-Side-Fit (default strategy)."""

    algorithm = Algorithm.MAXRECT

    def place(self, units: List[PartUnit], sheet: SheetSize, allow_rotation: bool,
              rng: Optional[random.Random] = None) -> List[PlacedPart]:
        split_mode = self.config.free_rect_split
        if split_mode == FreeRectSplit.REMOVE_OVERLAPPING:
            logger.warning("MaxRects in REMOVE_OVERLAPPING mode - partially covered "
                           "free space is discarded, utilization will be lower")

        layout: List[PlacedPart] = []
        sheet_index = 0
        free_rects = [self._full_sheet(sheet)]

        for unit in units:
            part = unit.part
            rotatable = self.can_rotate(unit, allow_rotation)

            position = find_best_position(free_rects, part.width, part.height, rotatable)

            if position is None:
                # Close the current sheet and retry once on a fresh one
                sheet_index += 1
                free_rects = [self._full_sheet(sheet)]
                logger.debug(f"MaxRects: opened sheet {sheet_index} for {unit.unit_id}")
                position = find_best_position(free_rects, part.width, part.height, rotatable)

                if position is None:
                    raise NoFeasibleSheetError(part.part_id, part.width, part.height,
                                               sheet.width, sheet.length)

            x, y, rotated = position
            placed = make_placement(unit, sheet_index, x, y, rotated)
            layout.append(placed)

            if split_mode == FreeRectSplit.REMOVE_OVERLAPPING:
                free_rects = remove_overlapping_rects(free_rects, placed)
            else:
                free_rects = split_free_rects(free_rects, placed)

        return layout

    @staticmethod
    def _full_sheet(sheet: SheetSize) -> FreeRectangle:
        return FreeRectangle(0.0, 0.0, sheet.width, sheet.length)
