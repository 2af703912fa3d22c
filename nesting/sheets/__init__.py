"""Stock sheet catalog and selection."""

from .sheet_selector import (
    SheetCatalog,
    SheetSelector,
    grid_capacity,
    grid_efficiency
)

__all__ = [
    'SheetCatalog',
    'SheetSelector',
    'grid_capacity',
    'grid_efficiency'
]
