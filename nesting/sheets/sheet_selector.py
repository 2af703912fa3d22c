"""
Sheet Selector - stock sheet choice for a part and quantity.

Rules:
- only catalog sheets holding the part in some orientation are candidates
- no candidate: a custom sheet is synthesised from the larger part side
- large quantities take the largest candidate (fewer sheet changeovers)
- otherwise the candidate with the best grid-fit material efficiency wins
- multi-part jobs: only sheets holding every part are candidates
"""

import math
import logging
from typing import List, Optional

from core.exceptions import InvalidGeometryError, InvalidFieldValueError, NoFeasibleSheetError
from ..models.nesting_result import Part, SheetSize
from ..models.machine_config import SelectorConfig

logger = logging.getLogger(__name__)


class SheetCatalog:
    """Ordered list of standard sheet formats (smallest first by convention)."""

    def __init__(self, sheets: List[SheetSize]):
        self.sheets = list(sheets)

    @classmethod
    def from_config(cls, config: SelectorConfig) -> 'SheetCatalog':
        return cls([SheetSize(w, l) for w, l in config.standard_sheets])

    def candidates_for(self, part_width: float, part_height: float) -> List[SheetSize]:
        """Sheets that can contain the part unrotated or rotated, catalog order kept."""
        return [s for s in self.sheets if s.fits(part_width, part_height)]

    def __len__(self):
        return len(self.sheets)

    def __iter__(self):
        return iter(self.sheets)


def grid_capacity(sheet: SheetSize, part_width: float, part_height: float) -> int:
    """Parts per sheet in a plain unrotated grid, 0 when the part only fits rotated."""
    return math.floor(sheet.width / part_width) * math.floor(sheet.length / part_height)


def grid_efficiency(sheet: SheetSize, part_width: float, part_height: float,
                    quantity: int) -> float:
    """Part area over consumed sheet area for a grid layout of ``quantity`` parts."""
    per_sheet = grid_capacity(sheet, part_width, part_height)
    if per_sheet <= 0:
        return 0.0
    sheets_needed = math.ceil(quantity / per_sheet)
    return (quantity * part_width * part_height) / (sheets_needed * sheet.area)


class SheetSelector:
    """Chooses a stock sheet when the caller does not pin one."""

    def __init__(self, config: Optional[SelectorConfig] = None,
                 catalog: Optional[SheetCatalog] = None):
        self.config = config or SelectorConfig()
        self.catalog = catalog or SheetCatalog.from_config(self.config)

    def select_sheet(self, part_width: float, part_height: float,
                     quantity: int = 1) -> SheetSize:
        """
        Select the sheet format for a part.

        Args:
            part_width: Effective part width [mm]
            part_height: Effective part height [mm]
            quantity: Requested quantity

        Returns:
            Catalog sheet or a synthesised custom sheet
        """
        for name, value in (('width', part_width), ('height', part_height)):
            if value is None or value <= 0:
                raise InvalidGeometryError('sheet_selection', name, value, "must be greater than zero")
        if quantity is None or quantity < 1:
            raise InvalidFieldValueError('quantity', quantity, "must be >= 1")

        candidates = self.catalog.candidates_for(part_width, part_height)

        if not candidates:
            return self._custom_sheet(part_width, part_height, quantity)

        return self._choose(candidates, part_width, part_height, quantity)

    def select_sheet_for_parts(self, parts: List[Part], allow_rotation: bool = True) -> SheetSize:
        """
        Select one sheet format for a multi-part job.

        Only catalog sheets holding every part are candidates. The largest
        part by area and the total unit count drive the scoring.
        """
        if not parts:
            raise InvalidGeometryError('job', 'parts', 0, "no parts to nest")

        total_units = sum(p.quantity for p in parts)
        candidates = [
            sheet for sheet in self.catalog
            if all(sheet.fits(p.width, p.height, allow_rotation and p.rotatable) for p in parts)
        ]

        if not candidates:
            # Custom sheet contains a square on the longest side, so every part fits unrotated
            widest = max(parts, key=lambda p: max(p.width, p.height))
            return self._custom_sheet(widest.width, widest.height, total_units)

        largest = max(parts, key=lambda p: p.area)
        return self._choose(candidates, largest.width, largest.height, total_units)

    def _choose(self, candidates: List[SheetSize], part_width: float, part_height: float,
                quantity: int) -> SheetSize:
        if quantity > self.config.large_quantity_threshold:
            sheet = candidates[-1]
            logger.debug(f"Quantity {quantity} > {self.config.large_quantity_threshold}: "
                         f"largest sheet {sheet.width:.0f}x{sheet.length:.0f}")
            return sheet

        best_sheet = candidates[0]
        best_efficiency = 0.0

        for sheet in candidates:
            efficiency = grid_efficiency(sheet, part_width, part_height, quantity)
            if efficiency > best_efficiency:
                best_efficiency = efficiency
                best_sheet = sheet

        logger.debug(f"Selected sheet {best_sheet.width:.0f}x{best_sheet.length:.0f} "
                     f"(grid efficiency {best_efficiency:.1%})")
        return best_sheet

    def _custom_sheet(self, part_width: float, part_height: float,
                      quantity: int) -> SheetSize:
        """Sheet sized from the larger part side when nothing in the catalog fits."""
        side = max(part_width, part_height)
        sheet = SheetSize(
            width=side * self.config.custom_sheet_growth_factor,
            length=side * math.ceil(quantity / 2)
        )

        if not sheet.fits(part_width, part_height):
            raise NoFeasibleSheetError('custom_sheet', part_width, part_height,
                                       sheet.width, sheet.length)

        logger.info(f"No catalog sheet fits {part_width:.1f}x{part_height:.1f}mm, "
                    f"custom sheet {sheet.width:.1f}x{sheet.length:.1f}mm")
        return sheet
