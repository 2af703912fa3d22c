"""
Packing engine and its strategies.
"""

from .base_strategy import PackingStrategy, LayoutMetrics, layout_metrics, make_placement
from .maxrects import (
    MaxRectsStrategy, find_best_position, split_free_rects,
    prune_free_rects, remove_overlapping_rects
)
from .guillotine import GuillotineStrategy, shelf_pack, shelf_orientation
from .genetic import GeneticStrategy
from .packing_engine import PackingEngine, STRATEGIES, get_strategy

__all__ = [
    'PackingStrategy',
    'LayoutMetrics',
    'layout_metrics',
    'make_placement',
    'MaxRectsStrategy',
    'find_best_position',
    'split_free_rects',
    'prune_free_rects',
    'remove_overlapping_rects',
    'GuillotineStrategy',
    'shelf_pack',
    'shelf_orientation',
    'GeneticStrategy',
    'PackingEngine',
    'STRATEGIES',
    'get_strategy',
]
