"""
Nesting Service - facade for callers holding raw part geometry.

Turns a geometry record (bounding box plus optional outline) into an
effective Part by adding kerf and spacing, picks a stock sheet when none is
pinned, runs the packing engine and optionally sequences the cut path.

Usage:
    service = NestingService()
    result = service.optimize_nesting(
        {"boundingBox": {"width": 100, "height": 50}},
        {"quantity": 10, "algorithm": "MAXRECT"}
    )
    path = service.optimize_cut_path(result)
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from core.exceptions import NestingError, InvalidGeometryError
from ..config import create_nesting_config_from_config
from ..models.nesting_result import Part, SheetSize, NestingOptions, NestingResult
from ..models.machine_config import NestingConfig
from ..engine.packing_engine import PackingEngine
from ..sheets.sheet_selector import SheetSelector
from ..toolpath.cut_path import CutPathOptimizer, CutPathResult

logger = logging.getLogger(__name__)

DEFAULT_PART_ID = "part_1"

OptionsLike = Union[NestingOptions, Dict[str, Any], None]


def _coerce_options(options: OptionsLike) -> NestingOptions:
    if isinstance(options, NestingOptions):
        return options
    return NestingOptions.from_dict(options)


def _outline_points(outline: Sequence[Any]) -> List[Tuple[float, float]]:
    """Accept [{'x': .., 'y': ..}, ...] or [(x, y), ...]."""
    points = []
    for point in outline:
        if isinstance(point, dict):
            points.append((float(point['x']), float(point['y'])))
        else:
            x, y = point
            points.append((float(x), float(y)))
    return points


class NestingService:
    """Single- and multi-part nesting jobs plus cut path sequencing."""

    def __init__(self, config: Optional[NestingConfig] = None):
        self.config = config or create_nesting_config_from_config()
        self.engine = PackingEngine(self.config)
        self.selector = SheetSelector(self.config.selector)
        self.cut_path_optimizer = CutPathOptimizer(self.config.machine)

    # ============================================================
    # Part preparation
    # ============================================================

    def build_part(self, geometry: Dict[str, Any], quantity: int = 1,
                   rotatable: bool = True) -> Part:
        """
        Effective part from a geometry record.

        The bounding box grows by kerf + spacing on both axes. An outline is
        normalised to the bounding box origin and centred in the grown box.
        """
        geometry = geometry or {}
        part_id = str(geometry.get('partId') or geometry.get('id') or DEFAULT_PART_ID)

        bbox = geometry.get('boundingBox')
        if not bbox:
            raise InvalidGeometryError(part_id, 'boundingBox', bbox, "missing")

        width = bbox.get('width')
        height = bbox.get('height')
        for name, value in (('width', width), ('height', height)):
            if not isinstance(value, (int, float)) or value <= 0:
                raise InvalidGeometryError(part_id, name, value, "must be greater than zero")

        allowance = self.config.machine.part_allowance_mm

        outline = None
        if geometry.get('outline'):
            points = _outline_points(geometry['outline'])
            min_x = min(x for x, _ in points)
            min_y = min(y for _, y in points)
            offset = allowance / 2
            outline = tuple((x - min_x + offset, y - min_y + offset) for x, y in points)

        return Part(
            part_id=part_id,
            width=width + allowance,
            height=height + allowance,
            quantity=quantity,
            rotatable=rotatable,
            outline=outline
        )

    # ============================================================
    # Nesting
    # ============================================================

    def optimize_nesting(self, geometry: Dict[str, Any],
                         options: OptionsLike = None) -> NestingResult:
        """
        Nest one part geometry.

        Args:
            geometry: {"boundingBox": {"width", "height"}, "outline": [...]}
            options: NestingOptions or dict with sheetSize, quantity,
                allowRotation, algorithm, seed, materialId

        Returns:
            NestingResult with layout, SVG and JSON
        """
        logger.info("Optimizing nesting layout...")
        opts = _coerce_options(options)

        try:
            part = self.build_part(geometry, opts.quantity, opts.allow_rotation)
            sheet = opts.sheet_size or self.selector.select_sheet(
                part.width, part.height, opts.quantity
            )
            return self.engine.optimize([part], sheet, opts)
        except NestingError as e:
            logger.error(f"Nesting failed: {e}")
            raise

    def optimize_parts(self, parts: List[Part],
                       options: OptionsLike = None) -> NestingResult:
        """
        Nest several parts with effective dimensions on one sheet format.

        Without a pinned sheet the format is chosen among the sheets holding
        every part, scored for the largest part and the total unit count.
        """
        opts = _coerce_options(options)

        try:
            sheet = opts.sheet_size or self.selector.select_sheet_for_parts(
                parts, opts.allow_rotation
            )
            return self.engine.optimize(parts, sheet, opts)
        except NestingError as e:
            logger.error(f"Nesting failed: {e}")
            raise

    def select_sheet(self, part_width: float, part_height: float,
                     quantity: int = 1) -> SheetSize:
        return self.selector.select_sheet(part_width, part_height, quantity)

    # ============================================================
    # Cut path
    # ============================================================

    def optimize_cut_path(self, result: NestingResult) -> CutPathResult:
        """Cutting sequence and time estimate for a nesting result."""
        return self.cut_path_optimizer.optimize_path(result.layout, result.sheet)
