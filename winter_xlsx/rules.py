"""
Deterministic schema rules.

This file pins down the two known report schemas (detail + SAP summary),
their column roles and the layout constants. Nothing here is mutable at
runtime.
"""

from __future__ import annotations

import re

from .models import ColumnRole

DELIMITER_CANDIDATES = (";", ",", "\t")  # preference order, ties keep the first
HEADER_SCAN_ROWS = 12

TITLE_SENTINEL = "periode"      # "Periode: 01-12-2024 - 31-12-2024"
FOOTER_SENTINEL = "udtrukket"   # "Udtrukket 02-01-2025 08:14"
SUBTITLE_JOINER = "  "

DAY_LABEL_RE = re.compile(r"^\d{1,2}$")
DAY_RANGE = range(1, 32)

# Output grouping glyph; also recognised (and stripped) on input.
GROUPING_GLYPH = ";"

# --- Sheet layout (1-based worksheet rows) ---
SHEET_DETAIL = "Detaljeret oversigt"
SHEET_SUMMARY = "SAP"

TITLE_ROW_INDEX = 1
SUBTITLE_ROW_INDEX = 2
HEADER_ROW_INDEX = 4
FOOTER_GAP = 2
FOOTER_COLUMNS = 3
HEADER_ROW_HEIGHT = 18

# --- SAP summary schema (10 fixed columns) ---
SUMMARY_HEADERS = [
    "Kontrakt", "Position", "Artskonto", "Besrkivelse", "Profitcenter",
    "Pris inkl. moms", "Momskode", "Pris ex. moms", "Lokation/rute", "Kunde",
]
SUMMARY_WIDTHS = [9.0, 8.43, 9.71, 34.43, 11.86, 14.86, 10.86, 13.71, 19.29, 33.57]

SUMMARY_ROLES = {
    "Pris inkl. moms": ColumnRole.MONEY,
    "Pris ex. moms": ColumnRole.MONEY,
}
SUMMARY_SUMMED = ("Pris ex. moms",)

# --- Detail schema (23 base columns + observed day columns) ---
DETAIL_BASE_HEADERS = [
    "Øko-ID", "Vintercentral", "Område", "Distrikt", "Rute/lokation", "Lokationsnavn", "Evt. id",
    "Lokationsadresse", "Lokationspostnr", "I alt, kr", "Saltning, kr", "Salt, antal", "Salt, gns. pris",
    "Kombi, kr", "Kombi, antal", "Kombi, gns. pris", "Snerydning, kr", "Sne, antal", "Sne, gns. pris",
    "Andet, kr", "Andet, antal", "Andet, gns. pris", "Salt, kg",
]
DETAIL_BASE_WIDTHS = [
    9.0, 12.71, 15.86, 7.71, 19.29, 33.57, 6.57, 19.29, 15.71,
    9.14, 11.0, 9.86, 13.14, 9.43, 12.14, 15.43, 14.0, 9.86, 13.14,
    9.0, 11.71, 15.0, 7.43,
]
DAY_COL_WIDTH = 3.0

DETAIL_ROLES = {
    "I alt, kr": ColumnRole.MONEY,
    "Saltning, kr": ColumnRole.MONEY,
    "Salt, antal": ColumnRole.COUNT,
    "Salt, gns. pris": ColumnRole.AVERAGE_PRICE,
    "Kombi, kr": ColumnRole.MONEY,
    "Kombi, antal": ColumnRole.COUNT,
    "Kombi, gns. pris": ColumnRole.AVERAGE_PRICE,
    "Snerydning, kr": ColumnRole.MONEY,
    "Sne, antal": ColumnRole.COUNT,
    "Sne, gns. pris": ColumnRole.AVERAGE_PRICE,
    "Andet, kr": ColumnRole.MONEY,
    "Andet, antal": ColumnRole.COUNT,
    "Andet, gns. pris": ColumnRole.AVERAGE_PRICE,
    "Salt, kg": ColumnRole.COUNT,
}
# Averages are not summed; a sum of averages means nothing.
DETAIL_SUMMED = tuple(
    label for label, role in DETAIL_ROLES.items()
    if role in (ColumnRole.MONEY, ColumnRole.COUNT)
)

DAY_LABELS = [str(d) for d in DAY_RANGE]
DETAIL_EXPECTED = DETAIL_BASE_HEADERS + DAY_LABELS

# --- Response ---
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
DEFAULT_FILE_NAME = "winter_fg.xlsx"
FOOTER_DATE_FORMAT = "%d-%m-%Y"
