"""
Guillotine (shelf) packing.

Parts are laid left to right in rows ("shelves"); a row is as tall as its
tallest part. Every layout produced this way can be cut with straight
end-to-end cuts. The shelf placer also serves as the deterministic fitness
evaluator of the genetic strategy, which feeds it units in its own order.
"""

import random
import logging
from typing import List, Optional, Tuple

from ..models.nesting_result import Algorithm, SheetSize, PartUnit, PlacedPart
from .base_strategy import PackingStrategy, make_placement

logger = logging.getLogger(__name__)


def shelf_orientation(unit: PartUnit, sheet: SheetSize,
                      rotatable: bool) -> Tuple[float, float, bool]:
    """
    Orientation used on the shelf: landscape when the part may rotate.

    Falls back to the other orientation when the preferred one does not fit
    an empty sheet.
    """
    w, h = unit.part.width, unit.part.height

    if rotatable and h > w and sheet.fits(h, w, allow_rotation=False):
        return h, w, True
    if rotatable and not sheet.fits(w, h, allow_rotation=False):
        return h, w, True
    return w, h, False


def shelf_pack(units: List[PartUnit], sheet: SheetSize,
               allow_rotation: bool) -> List[PlacedPart]:
    """
    Shelf-pack units in the given order.

    Args:
        units: Units, packed exactly in this order
        sheet: Sheet format
        allow_rotation: Global rotation switch

    Returns:
        Layout entries
    """
    layout: List[PlacedPart] = []
    sheet_index = 0
    current_x = 0.0
    current_y = 0.0
    shelf_height = 0.0

    for unit in units:
        rotatable = allow_rotation and unit.part.rotatable
        width, height, rotated = shelf_orientation(unit, sheet, rotatable)

        # Row full - next shelf
        if current_x + width > sheet.width:
            current_x = 0.0
            current_y += shelf_height
            shelf_height = 0.0

        # Sheet full - next sheet
        if current_y + height > sheet.length:
            sheet_index += 1
            current_x = 0.0
            current_y = 0.0
            shelf_height = 0.0

        layout.append(make_placement(unit, sheet_index, current_x, current_y, rotated))

        current_x += width
        shelf_height = max(shelf_height, height)

    return layout


class GuillotineStrategy(PackingStrategy):
    """Shelf packing of units sorted by their longer side, largest first."""

    algorithm = Algorithm.GUILLOTINE

    def place(self, units: List[PartUnit], sheet: SheetSize, allow_rotation: bool,
              rng: Optional[random.Random] = None) -> List[PlacedPart]:
        ordered = sorted(
            units,
            key=lambda u: max(u.part.width, u.part.height),
            reverse=True
        )
        layout = shelf_pack(ordered, sheet, allow_rotation)
        logger.debug(f"Guillotine: {len(layout)} units on "
                     f"{(layout[-1].sheet_index + 1) if layout else 0} sheets")
        return layout
