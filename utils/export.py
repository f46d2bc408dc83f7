"""
utils/export.py - Excel export of a garden plan using openpyxl.

Generates an .xlsx workbook with two sheets and styled header rows:
- "Plan": one row per placed plant (cell, plant, family, stage, planted at)
- "Calendar": the zone's planting events for the plants in the garden
"""

from io import BytesIO
from typing import Optional

import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

from models import Garden
from plant_catalog import PLANTS, get_family_name
from planting_calendar import compute_calendar_events, EVENT_LABELS


# Category colors for the plant category column
CATEGORY_FILLS = {
    'vegetable': PatternFill(start_color='4CAF50', end_color='4CAF50', fill_type='solid'),
    'herb': PatternFill(start_color='00897B', end_color='00897B', fill_type='solid'),
    'fruit': PatternFill(start_color='D32F2F', end_color='D32F2F', fill_type='solid'),
    'flower': PatternFill(start_color='7B1FA2', end_color='7B1FA2', fill_type='solid'),
}

HEADER_FONT = Font(name='Calibri', bold=True, color='FFFFFF', size=11)
HEADER_FILL = PatternFill(start_color='2E7D32', end_color='2E7D32', fill_type='solid')
HEADER_ALIGNMENT = Alignment(horizontal='center', vertical='center', wrap_text=True)
HEADER_BORDER = Border(
    bottom=Side(style='thin', color='1B5E20'),
    right=Side(style='thin', color='E2E8F0'),
)
CELL_BORDER = Border(
    bottom=Side(style='thin', color='E2E8F0'),
    right=Side(style='thin', color='E2E8F0'),
)


def _write_header(ws, columns, widths):
    for col_idx, col_name in enumerate(columns, 1):
        cell = ws.cell(row=1, column=col_idx, value=col_name)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = HEADER_ALIGNMENT
        cell.border = HEADER_BORDER
    for letter, width in zip('ABCDEFGH', widths):
        ws.column_dimensions[letter].width = width
    ws.freeze_panes = 'A2'


def _build_plan_sheet(ws, garden: Garden, catalog):
    """One row per placed plant, ordered row by row across the grid."""
    _write_header(
        ws,
        ['Cell', 'Plant', 'Category', 'Family', 'Stage', 'Planted'],
        [10, 20, 14, 18, 12, 22],
    )

    row_idx = 2
    for placed in sorted(garden.plants, key=lambda p: (p.y, p.x)):
        plant = catalog.get(placed.plant_id)
        name = f"{plant.emoji} {plant.name}" if plant else placed.plant_id
        category = plant.category if plant else ''
        family = get_family_name(plant.family) if plant and plant.family else ''

        ws.cell(row=row_idx, column=1, value=f"({placed.x}, {placed.y})").border = CELL_BORDER
        ws.cell(row=row_idx, column=2, value=name).border = CELL_BORDER

        cat_cell = ws.cell(row=row_idx, column=3, value=category)
        cat_cell.border = CELL_BORDER
        if category in CATEGORY_FILLS:
            cat_cell.fill = CATEGORY_FILLS[category]
            cat_cell.font = Font(color='FFFFFF', bold=True)

        ws.cell(row=row_idx, column=4, value=family).border = CELL_BORDER
        ws.cell(row=row_idx, column=5, value=placed.stage).border = CELL_BORDER
        ws.cell(row=row_idx, column=6, value=placed.planted_at or '').border = CELL_BORDER
        row_idx += 1


def _build_calendar_sheet(ws, events):
    _write_header(ws, ['Date', 'Week', 'Plant', 'Task'], [14, 8, 20, 20])

    row_idx = 2
    for event in events:
        ws.cell(row=row_idx, column=1, value=event.date).border = CELL_BORDER
        ws.cell(row=row_idx, column=1).number_format = 'yyyy-mm-dd'
        ws.cell(row=row_idx, column=2, value=event.week).border = CELL_BORDER
        ws.cell(row=row_idx, column=3, value=event.plant_name).border = CELL_BORDER
        ws.cell(row=row_idx, column=4, value=EVENT_LABELS.get(event.type, event.type)).border = CELL_BORDER
        row_idx += 1


def generate_garden_excel(garden: Garden, zone: int, year: Optional[int] = None, catalog=None):
    """Generate an Excel workbook for one garden.

    Returns:
        (BytesIO buffer, filename) on success, (None, None) if the garden is empty.
    """
    catalog = PLANTS if catalog is None else catalog
    if not garden.plants:
        return None, None

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = 'Plan'
    _build_plan_sheet(ws, garden, catalog)

    events = compute_calendar_events([p.plant_id for p in garden.plants], zone, year, catalog)
    _build_calendar_sheet(wb.create_sheet('Calendar'), events)

    buffer = BytesIO()
    wb.save(buffer)
    buffer.seek(0)

    safe_name = ''.join(c if c.isalnum() else '_' for c in garden.name).strip('_') or 'garden'
    filename = f"garden_{safe_name}_zone{zone}.xlsx"
    return buffer, filename
