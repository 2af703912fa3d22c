"""
Data Models for Nesting.

Defines the contract between the packing engine and its callers:
parts and sheets going in, placements and summary metrics coming out.
All lengths are in millimetres.
"""

import json
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Any

from shapely.geometry import Polygon

from core.exceptions import InvalidGeometryError, InvalidFieldValueError


class Algorithm(Enum):
    """Packing strategy."""
    GUILLOTINE = "GUILLOTINE"
    MAXRECT = "MAXRECT"
    GENETIC = "GENETIC"

    @classmethod
    def parse(cls, value) -> 'Algorithm':
        """Accept an Algorithm, its name in any case, or None (default MAXRECT)."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.MAXRECT
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise InvalidFieldValueError(
                'algorithm', value,
                f"expected one of {', '.join(a.value for a in cls)}"
            ) from None


@dataclass(frozen=True)
class SheetSize:
    """Stock sheet format."""
    width: float
    length: float
    thickness: Optional[float] = None

    @property
    def area(self) -> float:
        return self.width * self.length

    def fits(self, width: float, height: float, allow_rotation: bool = True) -> bool:
        """Check whether a width x height rectangle fits on an empty sheet."""
        if width <= self.width and height <= self.length:
            return True
        return allow_rotation and height <= self.width and width <= self.length

    def to_dict(self) -> Dict:
        result = {'width': self.width, 'length': self.length}
        if self.thickness is not None:
            result['thickness'] = self.thickness
        return result

    @classmethod
    def from_dict(cls, data: Dict) -> 'SheetSize':
        return cls(
            width=float(data['width']),
            length=float(data['length']),
            thickness=data.get('thickness')
        )


@dataclass(frozen=True)
class Part:
    """
    Part submitted for nesting.

    ``width`` and ``height`` are the effective dimensions the packer works
    with (kerf and spacing already added). ``outline`` is an optional polygon
    in part-local coordinates; packing always uses the bounding rectangle.
    """
    part_id: str
    width: float
    height: float
    quantity: int = 1
    rotatable: bool = True
    outline: Optional[Tuple[Tuple[float, float], ...]] = None

    def __post_init__(self):
        for name in ('width', 'height'):
            value = getattr(self, name)
            if value is None or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise InvalidGeometryError(self.part_id, name, value, "must be a finite number")
            if value <= 0:
                raise InvalidGeometryError(self.part_id, name, value, "must be greater than zero")

        if not isinstance(self.quantity, int) or self.quantity < 1:
            raise InvalidFieldValueError('quantity', self.quantity, "must be an integer >= 1")

        if self.outline is not None:
            points = tuple((float(x), float(y)) for x, y in self.outline)
            if len(points) < 3:
                raise InvalidGeometryError(
                    self.part_id, 'outline', len(points), "needs at least 3 vertices"
                )
            polygon = Polygon(points)
            if not polygon.is_valid or polygon.area <= 0:
                raise InvalidGeometryError(
                    self.part_id, 'outline', points, "not a valid simple polygon"
                )
            object.__setattr__(self, 'outline', points)

    @property
    def area(self) -> float:
        """Bounding rectangle area used by the packer."""
        return self.width * self.height

    @property
    def outline_area(self) -> float:
        """Net outline area, bounding rectangle area when no outline is set."""
        if not self.outline:
            return self.area
        return Polygon(self.outline).area

    def unit_id(self, index: int) -> str:
        return f"{self.part_id}_{index}"

    def to_dict(self) -> Dict:
        return {
            'part_id': self.part_id,
            'width': self.width,
            'height': self.height,
            'quantity': self.quantity,
            'rotatable': self.rotatable,
            'outline': [list(p) for p in self.outline] if self.outline else None
        }


@dataclass(frozen=True)
class PartUnit:
    """One unit of a part's requested quantity."""
    part: Part
    index: int

    @property
    def unit_id(self) -> str:
        return self.part.unit_id(self.index)


def flatten_units(parts: List[Part]) -> List[PartUnit]:
    """Expand every part into its individual units, preserving input order."""
    return [PartUnit(part, i) for part in parts for i in range(part.quantity)]


@dataclass(frozen=True)
class FreeRectangle:
    """Empty axis-aligned region of the current sheet."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height

    def overlaps(self, x: float, y: float, width: float, height: float) -> bool:
        """Interior intersection with the given rectangle (touching edges do not count)."""
        return not (
            self.right <= x or
            self.x >= x + width or
            self.top <= y or
            self.y >= y + height
        )

    def contains(self, other: 'FreeRectangle') -> bool:
        return (
            other.x >= self.x and
            other.y >= self.y and
            other.right <= self.right and
            other.top <= self.top
        )


@dataclass(frozen=True)
class PlacedPart:
    """Part unit placed on a sheet."""
    part_id: str
    sheet_index: int
    x: float
    y: float
    rotation: int               # 0 or 90 degrees
    width: float                # After rotation
    height: float               # After rotation
    source: Optional[Part] = field(default=None, compare=False, repr=False)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def overlaps(self, other: 'PlacedPart') -> bool:
        """Interior intersection on the same sheet."""
        if self.sheet_index != other.sheet_index:
            return False
        return not (
            self.right <= other.x or
            self.x >= other.right or
            self.top <= other.y or
            self.y >= other.top
        )

    def get_placed_outline(self) -> List[Tuple[float, float]]:
        """Outline in sheet coordinates, rectangle when the part has no outline."""
        if self.source is None or not self.source.outline:
            return [
                (self.x, self.y),
                (self.x + self.width, self.y),
                (self.x + self.width, self.y + self.height),
                (self.x, self.y + self.height)
            ]

        result = []
        for px, py in self.source.outline:
            if self.rotation == 90:
                # Rotated 90 deg CCW and shifted back into the positive quadrant
                result.append((self.x + self.source.height - py, self.y + px))
            else:
                result.append((self.x + px, self.y + py))
        return result

    def to_dict(self) -> Dict:
        return {
            'part_id': self.part_id,
            'sheet_index': self.sheet_index,
            'x': self.x,
            'y': self.y,
            'rotation': self.rotation,
            'width': self.width,
            'height': self.height
        }


@dataclass(frozen=True)
class SheetSummary:
    """Per-sheet usage figures."""
    sheet_index: int
    part_count: int
    used_area: float
    utilization: float          # Percentage of this sheet's area


def summarize_sheets(layout: List[PlacedPart], sheet: SheetSize) -> List[SheetSummary]:
    """Group a layout by sheet index (ascending) and compute usage per sheet."""
    grouped: Dict[int, List[PlacedPart]] = {}
    for placed in layout:
        grouped.setdefault(placed.sheet_index, []).append(placed)

    summaries = []
    for sheet_index in sorted(grouped):
        entries = grouped[sheet_index]
        used_area = sum(p.area for p in entries)
        utilization = used_area / sheet.area * 100 if sheet.area > 0 else 0.0
        summaries.append(SheetSummary(
            sheet_index=sheet_index,
            part_count=len(entries),
            used_area=used_area,
            utilization=utilization
        ))
    return summaries


@dataclass(frozen=True)
class NestingResult:
    """Complete nesting result for one optimize call."""
    sheet_width: float
    sheet_length: float
    parts_per_sheet: int
    sheets_required: int
    utilization: float          # Percentage of consumed sheet area
    waste_area: float
    layout: List[PlacedPart] = field(default_factory=list)
    layout_svg: str = ""
    layout_json: Dict[str, Any] = field(default_factory=dict)
    algorithm: Algorithm = Algorithm.MAXRECT
    material_id: Optional[str] = None

    @property
    def sheet(self) -> SheetSize:
        return SheetSize(self.sheet_width, self.sheet_length)

    @property
    def placed_area(self) -> float:
        return sum(p.area for p in self.layout)

    def sheet_summaries(self) -> List[SheetSummary]:
        return summarize_sheets(self.layout, self.sheet)

    def parts_on_sheet(self, sheet_index: int) -> List[PlacedPart]:
        return [p for p in self.layout if p.sheet_index == sheet_index]

    def to_dict(self) -> Dict:
        return {
            'material_id': self.material_id,
            'algorithm': self.algorithm.value,
            'sheet_width': self.sheet_width,
            'sheet_length': self.sheet_length,
            'parts_per_sheet': self.parts_per_sheet,
            'sheets_required': self.sheets_required,
            'utilization': self.utilization,
            'waste_area': self.waste_area,
            'layout': [p.to_dict() for p in self.layout],
            'layout_svg': self.layout_svg,
            'layout_json': self.layout_json
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}


def parse_bool(field_name: str, value) -> bool:
    """Boolean option from a bool, 0/1 or a common true/false string."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise InvalidFieldValueError(field_name, value, "expected a boolean")


@dataclass
class NestingOptions:
    """Caller options for one nesting run."""
    sheet_size: Optional[SheetSize] = None
    quantity: int = 1
    allow_rotation: bool = True
    algorithm: Algorithm = Algorithm.MAXRECT
    seed: Optional[int] = None
    material_id: Optional[str] = None

    def __post_init__(self):
        self.algorithm = Algorithm.parse(self.algorithm)
        self.allow_rotation = parse_bool('allow_rotation', self.allow_rotation)
        if self.quantity is None:
            self.quantity = 1
        if not isinstance(self.quantity, int) or self.quantity < 1:
            raise InvalidFieldValueError('quantity', self.quantity, "must be an integer >= 1")
        if isinstance(self.sheet_size, dict):
            self.sheet_size = SheetSize.from_dict(self.sheet_size)

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'NestingOptions':
        """Build from snake_case or camelCase keys."""
        data = data or {}

        def pick(snake: str, camel: str, default=None):
            if snake in data and data[snake] is not None:
                return data[snake]
            if camel in data and data[camel] is not None:
                return data[camel]
            return default

        return cls(
            sheet_size=pick('sheet_size', 'sheetSize'),
            quantity=pick('quantity', 'quantity', 1),
            allow_rotation=pick('allow_rotation', 'allowRotation', True),
            algorithm=pick('algorithm', 'algorithm'),
            seed=pick('seed', 'seed'),
            material_id=pick('material_id', 'materialId')
        )
