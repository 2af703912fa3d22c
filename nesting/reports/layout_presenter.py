"""
Layout Presenter
================
SVG diagram and JSON summary of a nesting layout.

Sheets are stacked vertically in the SVG, one <g> group per sheet. The
layout origin (lower-left) is drawn at the bottom-left of each sheet.
"""

import logging
from typing import Any, Dict, List, Tuple
from xml.sax.saxutils import escape

from ..models.nesting_result import PlacedPart, SheetSize, summarize_sheets

logger = logging.getLogger(__name__)

SHEET_FILL = "#f5f5f5"
SHEET_STROKE = "#333"
PART_FILL = "#4CAF50"
PART_STROKE = "#2E7D32"
ROTATED_PART_FILL = "#e74c3c"
LABEL_COLOR = "#666"

MARGIN = 10
SHEET_GAP = 30


def _fmt(value: float) -> str:
    text = f"{value:.2f}".rstrip('0').rstrip('.')
    return text if text not in ('', '-0') else '0'


class LayoutPresenter:
    """Renders a layout for callers (SVG string and JSON-ready dict)."""

    def __init__(self, scale: float = 0.5):
        self.scale = scale

    def render(self, layout: List[PlacedPart], sheet: SheetSize) -> Tuple[str, Dict[str, Any]]:
        return self.generate_layout_svg(layout, sheet), self.generate_layout_json(layout, sheet)

    def generate_layout_svg(self, layout: List[PlacedPart], sheet: SheetSize) -> str:
        """
        Self-contained SVG of every sheet and its parts.

        Args:
            layout: Layout entries
            sheet: Sheet format

        Returns:
            SVG document as string
        """
        scale = self.scale
        svg_width = sheet.width * scale
        svg_height = sheet.length * scale

        grouped: Dict[int, List[PlacedPart]] = {}
        for placed in layout:
            grouped.setdefault(placed.sheet_index, []).append(placed)

        groups = []
        y_offset = 0.0

        for sheet_index in sorted(grouped):
            lines = [
                f'  <g id="sheet-{sheet_index}" transform="translate({MARGIN}, {_fmt(y_offset + MARGIN)})">',
                f'    <rect x="0" y="0" width="{_fmt(svg_width)}" height="{_fmt(svg_height)}" '
                f'fill="{SHEET_FILL}" stroke="{SHEET_STROKE}" stroke-width="2"/>',
                f'    <text x="5" y="15" font-size="12" fill="{LABEL_COLOR}">Sheet {sheet_index + 1}</text>',
            ]

            for placed in grouped[sheet_index]:
                x = placed.x * scale
                # Flip Y so the layout origin sits at the bottom-left corner
                y = (sheet.length - placed.y - placed.height) * scale
                width = placed.width * scale
                height = placed.height * scale
                fill = ROTATED_PART_FILL if placed.rotation else PART_FILL

                lines.append(
                    f'    <rect x="{_fmt(x)}" y="{_fmt(y)}" width="{_fmt(width)}" height="{_fmt(height)}" '
                    f'fill="{fill}" stroke="{PART_STROKE}" stroke-width="1" opacity="0.8"/>'
                )
                lines.append(
                    f'    <text x="{_fmt(x + width / 2)}" y="{_fmt(y + height / 2)}" '
                    f'text-anchor="middle" dominant-baseline="middle" font-size="10" '
                    f'fill="white">{escape(placed.part_id)}</text>'
                )

            lines.append('  </g>')
            groups.append('\n'.join(lines))
            y_offset += svg_height + SHEET_GAP

        total_width = svg_width + 2 * MARGIN
        total_height = max(y_offset, 2 * MARGIN)

        header = (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{_fmt(total_width)}" '
            f'height="{_fmt(total_height)}" viewBox="0 0 {_fmt(total_width)} {_fmt(total_height)}">'
        )
        return '\n'.join([header] + groups + ['</svg>'])

    def generate_layout_json(self, layout: List[PlacedPart], sheet: SheetSize) -> Dict[str, Any]:
        """Machine-readable layout grouped per sheet."""
        grouped: Dict[int, List[PlacedPart]] = {}
        for placed in layout:
            grouped.setdefault(placed.sheet_index, []).append(placed)

        sheets = []
        for summary in summarize_sheets(layout, sheet):
            sheets.append({
                'sheetIndex': summary.sheet_index,
                'sheetSize': {
                    'width': sheet.width,
                    'length': sheet.length,
                },
                'partCount': summary.part_count,
                'utilization': summary.utilization,
                'parts': [
                    {
                        'partId': p.part_id,
                        'position': {'x': p.x, 'y': p.y},
                        'size': {'width': p.width, 'height': p.height},
                        'rotation': p.rotation,
                    }
                    for p in grouped[summary.sheet_index]
                ],
            })

        return {
            'totalSheets': len(sheets),
            'sheets': sheets,
        }
