"""
Packing Engine
==============
Entry point of the nesting computation.

Validates the job, flattens every part into its units, hands them to the
strategy registered for the requested algorithm and assembles a fresh
NestingResult with metrics, SVG and JSON renderings.
"""

import random
import logging
from typing import Dict, List, Optional, Type

from core.exceptions import InvalidFieldValueError, InvalidGeometryError, NoFeasibleSheetError
from ..models.nesting_result import (
    Algorithm, Part, SheetSize, NestingOptions, NestingResult, flatten_units
)
from ..models.machine_config import NestingConfig
from ..reports.layout_presenter import LayoutPresenter
from .base_strategy import PackingStrategy, layout_metrics
from .maxrects import MaxRectsStrategy
from .guillotine import GuillotineStrategy
from .genetic import GeneticStrategy

logger = logging.getLogger(__name__)


STRATEGIES: Dict[Algorithm, Type[PackingStrategy]] = {
    Algorithm.MAXRECT: MaxRectsStrategy,
    Algorithm.GUILLOTINE: GuillotineStrategy,
    Algorithm.GENETIC: GeneticStrategy,
}


def get_strategy(algorithm: Algorithm, config: Optional[NestingConfig] = None) -> PackingStrategy:
    """Instantiate the strategy registered for an algorithm."""
    algorithm = Algorithm.parse(algorithm)
    return STRATEGIES[algorithm](config)


class PackingEngine:
    """
    Places part units on sheets of a single format.

    Usage:
        engine = PackingEngine()
        result = engine.optimize([Part("bracket", 100, 50, quantity=10)],
                                 SheetSize(1000, 2000))
    """

    def __init__(self, config: Optional[NestingConfig] = None,
                 presenter: Optional[LayoutPresenter] = None):
        self.config = config or NestingConfig()
        self.presenter = presenter or LayoutPresenter(scale=self.config.svg_scale)

    def optimize(self, parts: List[Part], sheet: SheetSize,
                 options: Optional[NestingOptions] = None,
                 rng: Optional[random.Random] = None) -> NestingResult:
        """
        Nest all units of the given parts.

        Args:
            parts: Parts with effective dimensions and quantities
            sheet: Sheet format used for every sheet
            options: Rotation switch, algorithm, seed, material id
            rng: Random source; built from the seed when omitted

        Returns:
            NestingResult

        Raises:
            InvalidGeometryError: Non-positive sheet dimensions
            InvalidFieldValueError: Duplicate part ids
            NoFeasibleSheetError: A part does not fit an empty sheet
        """
        options = options or NestingOptions()

        self._validate(parts, sheet, options.allow_rotation)

        if rng is None:
            seed = options.seed if options.seed is not None else self.config.genetic.seed
            rng = random.Random(seed)

        units = flatten_units(parts)
        strategy = get_strategy(options.algorithm, self.config)

        layout = strategy.place(units, sheet, options.allow_rotation, rng)
        metrics = layout_metrics(layout, sheet)
        layout_svg, layout_json = self.presenter.render(layout, sheet)

        result = NestingResult(
            sheet_width=sheet.width,
            sheet_length=sheet.length,
            parts_per_sheet=metrics.parts_per_sheet,
            sheets_required=metrics.sheets_required,
            utilization=metrics.utilization,
            waste_area=metrics.waste_area,
            layout=layout,
            layout_svg=layout_svg,
            layout_json=layout_json,
            algorithm=strategy.algorithm,
            material_id=options.material_id
        )

        logger.info(f"Nesting {strategy.algorithm.value}: {len(units)} units -> "
                    f"{result.sheets_required} sheets, {result.utilization:.1f}%")
        return result

    @staticmethod
    def _validate(parts: List[Part], sheet: SheetSize, allow_rotation: bool):
        for name in ('width', 'length'):
            value = getattr(sheet, name)
            if value is None or value <= 0:
                raise InvalidGeometryError('sheet', name, value, "must be greater than zero")

        seen = set()
        for part in parts:
            if part.part_id in seen:
                raise InvalidFieldValueError('part_id', part.part_id, "duplicate part id")
            seen.add(part.part_id)

            if not sheet.fits(part.width, part.height, allow_rotation and part.rotatable):
                raise NoFeasibleSheetError(part.part_id, part.width, part.height,
                                           sheet.width, sheet.length)
