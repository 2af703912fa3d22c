"""Data models for nesting."""

from .nesting_result import (
    Algorithm,
    SheetSize,
    Part,
    PartUnit,
    FreeRectangle,
    PlacedPart,
    SheetSummary,
    NestingResult,
    NestingOptions,
    flatten_units,
    summarize_sheets
)
from .machine_config import (
    FreeRectSplit,
    MachineConfig,
    GeneticConfig,
    SelectorConfig,
    NestingConfig,
    DEFAULT_STANDARD_SHEETS
)

__all__ = [
    'Algorithm',
    'SheetSize',
    'Part',
    'PartUnit',
    'FreeRectangle',
    'PlacedPart',
    'SheetSummary',
    'NestingResult',
    'NestingOptions',
    'flatten_units',
    'summarize_sheets',
    'FreeRectSplit',
    'MachineConfig',
    'GeneticConfig',
    'SelectorConfig',
    'NestingConfig',
    'DEFAULT_STANDARD_SHEETS'
]
