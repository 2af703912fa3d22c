"""
Engine configuration models.

Kerf, spacing and machine feed rates vary per machine and material, so they
are carried in these dataclasses instead of module constants. Values are
loaded from JSON by ``nesting.config``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple, Any


class FreeRectSplit(Enum):
    """Free rectangle update rule used by the MaxRects strategy."""
    MAXRECTS = "MAXRECTS"                       # Split into up to 4 maximal residuals
    REMOVE_OVERLAPPING = "REMOVE_OVERLAPPING"   # Legacy: drop every overlapped rectangle


# Standard sheet formats [mm] as (width, length)
DEFAULT_STANDARD_SHEETS: List[Tuple[float, float]] = [
    (1000.0, 2000.0),   # 1m x 2m
    (1219.0, 2438.0),   # 4' x 8'
    (1500.0, 3000.0),   # 1.5m x 3m
    (1524.0, 3048.0),   # 5' x 10'
    (2000.0, 4000.0),   # 2m x 4m
]


@dataclass
class MachineConfig:
    """Cutting machine constants."""
    kerf_width_mm: float = 0.3          # Material removed by the beam [mm]
    part_spacing_mm: float = 3.0        # Gap between nested parts [mm]
    cut_rate_mm_min: float = 3000.0     # Cutting feed [mm/min]
    move_rate_mm_min: float = 30000.0   # Rapid traverse [mm/min]
    pierce_time_s: float = 0.0          # Time per pierce [s]

    @property
    def part_allowance_mm(self) -> float:
        """Size added to each bounding box dimension before nesting."""
        return self.kerf_width_mm + self.part_spacing_mm

    def to_dict(self) -> Dict:
        return {
            'kerf_width_mm': self.kerf_width_mm,
            'part_spacing_mm': self.part_spacing_mm,
            'cut_rate_mm_min': self.cut_rate_mm_min,
            'move_rate_mm_min': self.move_rate_mm_min,
            'pierce_time_s': self.pierce_time_s
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'MachineConfig':
        return cls(
            kerf_width_mm=data.get('kerf_width_mm', 0.3),
            part_spacing_mm=data.get('part_spacing_mm', 3.0),
            cut_rate_mm_min=data.get('cut_rate_mm_min', 3000.0),
            move_rate_mm_min=data.get('move_rate_mm_min', 30000.0),
            pierce_time_s=data.get('pierce_time_s', 0.0)
        )


@dataclass
class GeneticConfig:
    """Genetic search parameters."""
    population_size: int = 50
    generations: int = 100
    mutation_rate: float = 0.1
    seed: int = 42
    workers: int = 1                    # >1 evaluates fitness in a thread pool

    def to_dict(self) -> Dict:
        return {
            'population_size': self.population_size,
            'generations': self.generations,
            'mutation_rate': self.mutation_rate,
            'seed': self.seed,
            'workers': self.workers
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'GeneticConfig':
        return cls(
            population_size=data.get('population_size', 50),
            generations=data.get('generations', 100),
            mutation_rate=data.get('mutation_rate', 0.1),
            seed=data.get('seed', 42),
            workers=data.get('workers', 1)
        )


@dataclass
class SelectorConfig:
    """Sheet selection parameters."""
    large_quantity_threshold: int = 50
    custom_sheet_growth_factor: float = 2.0
    standard_sheets: List[Tuple[float, float]] = field(
        default_factory=lambda: list(DEFAULT_STANDARD_SHEETS)
    )

    def to_dict(self) -> Dict:
        return {
            'large_quantity_threshold': self.large_quantity_threshold,
            'custom_sheet_growth_factor': self.custom_sheet_growth_factor,
            'standard_sheets': [
                {'width': w, 'length': l} for w, l in self.standard_sheets
            ]
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'SelectorConfig':
        sheets = data.get('standard_sheets')
        if sheets:
            standard = [(float(s['width']), float(s['length'])) for s in sheets]
        else:
            standard = list(DEFAULT_STANDARD_SHEETS)
        return cls(
            large_quantity_threshold=data.get('large_quantity_threshold', 50),
            custom_sheet_growth_factor=data.get('custom_sheet_growth_factor', 2.0),
            standard_sheets=standard
        )


@dataclass
class NestingConfig:
    """Complete engine configuration."""
    machine: MachineConfig = field(default_factory=MachineConfig)
    genetic: GeneticConfig = field(default_factory=GeneticConfig)
    selector: SelectorConfig = field(default_factory=SelectorConfig)
    free_rect_split: FreeRectSplit = FreeRectSplit.MAXRECTS
    svg_scale: float = 0.5

    def to_dict(self) -> Dict[str, Any]:
        return {
            'machine_profile': self.machine.to_dict(),
            'genetic': self.genetic.to_dict(),
            'sheet_selection': self.selector.to_dict(),
            'free_rect_split': self.free_rect_split.value,
            'svg_scale': self.svg_scale
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NestingConfig':
        return cls(
            machine=MachineConfig.from_dict(data.get('machine_profile', {})),
            genetic=GeneticConfig.from_dict(data.get('genetic', {})),
            selector=SelectorConfig.from_dict(data.get('sheet_selection', {})),
            free_rect_split=FreeRectSplit(data.get('free_rect_split', 'MAXRECTS')),
            svg_scale=data.get('svg_scale', 0.5)
        )
