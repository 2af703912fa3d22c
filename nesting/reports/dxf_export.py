"""
DXF Nesting Export
==================
Export of nesting results to DXF files for CNC machines.

One file per sheet: sheet frame, part outlines (polygon when the part has an
outline, bounding rectangle otherwise) and part id labels.
"""

import logging
from pathlib import Path
from typing import List

import ezdxf
from ezdxf import units
from ezdxf.enums import TextEntityAlignment

from ..models.nesting_result import NestingResult

logger = logging.getLogger(__name__)


class DXFNestingExporter:
    """Nesting result to DXF exporter"""

    # Layer colors (AutoCAD indices)
    COLOR_SHEET = 7       # White - sheet frame
    COLOR_PARTS = 3       # Green - part outlines
    COLOR_BOUNDS = 8      # Grey - bounding rectangles of outlined parts
    COLOR_LABELS = 4      # Cyan - labels

    LABEL_HEIGHT = 5.0

    def __init__(self, result: NestingResult):
        self.result = result

    def export_sheet(self, filepath: str, sheet_index: int = 0) -> bool:
        """
        Export a single sheet to DXF.

        Args:
            filepath: Output file path
            sheet_index: Sheet to export (0-based)

        Returns:
            True on success, False if the sheet does not exist
        """
        if sheet_index < 0 or sheet_index >= self.result.sheets_required:
            logger.error(f"Sheet {sheet_index} not in result "
                         f"({self.result.sheets_required} sheets)")
            return False

        doc = ezdxf.new('R2010')
        doc.units = units.MM
        msp = doc.modelspace()

        for name, color in (('SHEET', self.COLOR_SHEET), ('PARTS', self.COLOR_PARTS),
                            ('BOUNDS', self.COLOR_BOUNDS), ('LABELS', self.COLOR_LABELS)):
            doc.layers.add(name, color=color)

        w, h = self.result.sheet_width, self.result.sheet_length
        msp.add_lwpolyline(
            [(0, 0), (w, 0), (w, h), (0, h)],
            close=True,
            dxfattribs={'layer': 'SHEET', 'color': self.COLOR_SHEET}
        )

        for placed in self.result.parts_on_sheet(sheet_index):
            outline = placed.get_placed_outline()
            msp.add_lwpolyline(outline, close=True,
                               dxfattribs={'layer': 'PARTS', 'color': self.COLOR_PARTS})

            if placed.source is not None and placed.source.outline:
                msp.add_lwpolyline(
                    [(placed.x, placed.y), (placed.right, placed.y),
                     (placed.right, placed.top), (placed.x, placed.top)],
                    close=True,
                    dxfattribs={'layer': 'BOUNDS', 'color': self.COLOR_BOUNDS}
                )

            text = msp.add_text(
                placed.part_id,
                dxfattribs={'layer': 'LABELS', 'height': self.LABEL_HEIGHT}
            )
            text.set_placement(
                (placed.x + placed.width / 2, placed.y + placed.height / 2),
                align=TextEntityAlignment.MIDDLE_CENTER
            )

        doc.saveas(filepath)
        logger.info(f"Exported sheet {sheet_index} to: {filepath}")
        return True

    def export_all_sheets(self, base_filepath: str) -> List[str]:
        """
        Export every sheet, one file each.

        ``parts.dxf`` becomes ``parts.dxf`` for a single sheet and
        ``parts_sheet1.dxf``, ``parts_sheet2.dxf``... otherwise.
        """
        path = Path(base_filepath)
        suffix = path.suffix or '.dxf'
        saved_files = []

        for i in range(self.result.sheets_required):
            if self.result.sheets_required == 1:
                filepath = path.with_suffix(suffix)
            else:
                filepath = path.with_name(f"{path.stem}_sheet{i + 1}{suffix}")

            if self.export_sheet(str(filepath), i):
                saved_files.append(str(filepath))

        logger.info(f"Exported {len(saved_files)} DXF files")
        return saved_files


def export_dxf(result: NestingResult, filepath: str, sheet_index: int = 0) -> bool:
    """Export one sheet of a result to DXF."""
    return DXFNestingExporter(result).export_sheet(filepath, sheet_index)


def export_all_dxf(result: NestingResult, base_filepath: str) -> List[str]:
    """Export every sheet of a result to DXF."""
    return DXFNestingExporter(result).export_all_sheets(base_filepath)
