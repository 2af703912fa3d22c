"""Cutting sequence and time estimation."""

from .cut_path import CutPathOptimizer, CutPathResult, CutSegment, SegmentType

__all__ = [
    'CutPathOptimizer',
    'CutPathResult',
    'CutSegment',
    'SegmentType',
]
