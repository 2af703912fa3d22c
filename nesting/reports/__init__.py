"""
Nesting reports: SVG/JSON layout rendering and DXF export.
"""

from .layout_presenter import LayoutPresenter
from .dxf_export import DXFNestingExporter, export_dxf, export_all_dxf

__all__ = [
    'LayoutPresenter',
    'DXFNestingExporter',
    'export_dxf',
    'export_all_dxf',
]
