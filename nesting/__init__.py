"""
Sheet Nesting Module - rectangular nesting of sheet-metal parts.

Main components:
- sheets: Standard sheet catalog and sheet selection
- engine: PackingEngine with MaxRects, Guillotine and Genetic strategies
- toolpath: Greedy cut path and cutting time estimate
- reports: SVG/JSON layout presenter and DXF export
- models: Data models (Part, SheetSize, PlacedPart, NestingResult)
- services: NestingService facade
"""

from .services.nesting_service import NestingService
from .models.nesting_result import (
    Algorithm,
    Part,
    SheetSize,
    PlacedPart,
    SheetSummary,
    NestingResult,
    NestingOptions
)
from .models.machine_config import (
    FreeRectSplit,
    MachineConfig,
    GeneticConfig,
    SelectorConfig,
    NestingConfig
)
from .engine.packing_engine import PackingEngine
from .sheets.sheet_selector import SheetCatalog, SheetSelector
from .toolpath.cut_path import CutPathOptimizer, CutPathResult, CutSegment
from .reports.layout_presenter import LayoutPresenter
from .reports.dxf_export import export_dxf, export_all_dxf
from .config import (
    load_config,
    save_config,
    create_nesting_config_from_config,
    create_machine_config_from_config
)

__all__ = [
    # Services
    'NestingService',

    # Models
    'Algorithm',
    'Part',
    'SheetSize',
    'PlacedPart',
    'SheetSummary',
    'NestingResult',
    'NestingOptions',
    'FreeRectSplit',
    'MachineConfig',
    'GeneticConfig',
    'SelectorConfig',
    'NestingConfig',

    # Engine
    'PackingEngine',
    'SheetCatalog',
    'SheetSelector',

    # Toolpath
    'CutPathOptimizer',
    'CutPathResult',
    'CutSegment',

    # Reports
    'LayoutPresenter',
    'export_dxf',
    'export_all_dxf',

    # Config
    'load_config',
    'save_config',
    'create_nesting_config_from_config',
    'create_machine_config_from_config',
]
