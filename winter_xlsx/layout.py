"""
Workbook layout.

Row 1 title, row 2 subtitle, row 4 header, data from row 5, totals directly
below the data and the "Udtrukket" footer two rows below that. Empty sheets
get no totals row; their footer sits two rows below the header.
"""

from __future__ import annotations

import io
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE, Cell
from openpyxl.styles import Alignment, Border, Font, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .locale_numbers import excel_number_format
from .models import TypedSheet
from .rules import (
    FOOTER_COLUMNS,
    FOOTER_GAP,
    HEADER_ROW_HEIGHT,
    HEADER_ROW_INDEX,
    SUBTITLE_ROW_INDEX,
    TITLE_ROW_INDEX,
)

_SIDE = Side(style="thin", color="FF000000")
BORDER = Border(top=_SIDE, left=_SIDE, right=_SIDE, bottom=_SIDE)

TITLE_FONT = Font(bold=True, size=12)
SUBTITLE_FONT = Font(italic=True, size=10, color="FF333333")
HEADER_FONT = Font(bold=True)
TOTAL_FONT = Font(bold=True)
FOOTER_FONT = Font(italic=True, size=9, color="FF444444")


def write_text(ws: Worksheet, row: int, column: int, text: str) -> Cell:
    """A plain string cell; a leading "=" stays text, control characters are dropped."""
    cell = ws.cell(row=row, column=column)
    cell.value = ILLEGAL_CHARACTERS_RE.sub("", text)
    cell.data_type = "s"
    return cell


def _merge_row(ws: Worksheet, row: int, start_col: int, end_col: int) -> None:
    if end_col > start_col:
        ws.merge_cells(start_row=row, start_column=start_col, end_row=row, end_column=end_col)


def set_banner(ws: Worksheet, row: int, text: str, font: Font, total_cols: int) -> None:
    if not text:
        return
    cell = write_text(ws, row, 1, text)
    cell.font = font
    _merge_row(ws, row, 1, total_cols)


def write_header(ws: Worksheet, labels: Sequence[str]) -> None:
    for i, label in enumerate(labels, start=1):
        cell = write_text(ws, HEADER_ROW_INDEX, i, label)
        cell.font = HEADER_FONT
        cell.alignment = Alignment(vertical="center", horizontal="left", wrap_text=True)
        cell.border = BORDER
    ws.row_dimensions[HEADER_ROW_INDEX].height = HEADER_ROW_HEIGHT


def add_borders(ws: Worksheet, start_row: int, end_row: int, start_col: int, end_col: int) -> None:
    for r in range(start_row, end_row + 1):
        for c in range(start_col, end_col + 1):
            ws.cell(row=r, column=c).border = BORDER


def write_footer(ws: Worksheet, after_row: int, extracted_at: str) -> int:
    row = after_row + FOOTER_GAP
    cell = write_text(ws, row, 1, f"Udtrukket {extracted_at}")
    cell.font = FOOTER_FONT
    cell.alignment = Alignment(horizontal="left", vertical="center")
    _merge_row(ws, row, 1, FOOTER_COLUMNS)
    return row


def set_widths(ws: Worksheet, widths: Sequence[float]) -> None:
    for i, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(i)].width = width


def write_sheet(ws: Worksheet, sheet: TypedSheet, widths: Sequence[float], extracted_at: str) -> Optional[int]:
    """Lay one typed sheet out on ws. Returns the totals row, or None when there is no data."""
    ncols = len(sheet.columns)
    number_formats = {
        label: excel_number_format(fmt) for label, fmt in sheet.formats.items()
    }

    set_widths(ws, widths)
    set_banner(ws, TITLE_ROW_INDEX, sheet.title, TITLE_FONT, ncols)
    set_banner(ws, SUBTITLE_ROW_INDEX, sheet.subtitle, SUBTITLE_FONT, ncols)
    write_header(ws, sheet.columns)

    first = HEADER_ROW_INDEX + 1
    r = first
    for values in sheet.rows:
        for c, (label, value) in enumerate(zip(sheet.columns, values), start=1):
            if isinstance(value, Decimal):
                cell = ws.cell(row=r, column=c, value=value)
                cell.number_format = number_formats[label]
            elif value is not None:
                write_text(ws, r, c, value).number_format = "@"
        r += 1
    last = r - 1

    if last < first:
        write_footer(ws, HEADER_ROW_INDEX, extracted_at)
        return None

    add_borders(ws, first, last, 1, ncols)

    totals_row = last + 1
    for label, total in sheet.totals.items():
        cell = ws.cell(row=totals_row, column=sheet.columns.index(label) + 1, value=total)
        cell.number_format = number_formats[label]
        cell.font = TOTAL_FONT
    add_borders(ws, totals_row, totals_row, 1, ncols)

    write_footer(ws, totals_row, extracted_at)
    return totals_row


def render_workbook(sheets: Sequence[Tuple[str, TypedSheet, List[float]]], extracted_at: str) -> bytes:
    """Write (name, typed sheet, column widths) triples, in order, to xlsx bytes."""
    wb = Workbook()
    wb.remove(wb.active)
    for name, sheet, widths in sheets:
        write_sheet(wb.create_sheet(title=name), sheet, widths, extracted_at)

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()
