"""
CSV text -> typed sheets -> xlsx bytes.

Both documents run through the same stages; only the column list, the role
declarations and the summed columns differ.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

from .columns import is_day_label, type_records
from .layout import render_workbook
from .locale_numbers import format_number
from .models import ShapeDescriptor, TypedSheet
from .rows import Record, normalize_rows
from .rules import (
    DAY_COL_WIDTH,
    DAY_RANGE,
    DETAIL_BASE_HEADERS,
    DETAIL_BASE_WIDTHS,
    DETAIL_EXPECTED,
    DETAIL_ROLES,
    DETAIL_SUMMED,
    FOOTER_DATE_FORMAT,
    SHEET_DETAIL,
    SHEET_SUMMARY,
    SUMMARY_HEADERS,
    SUMMARY_ROLES,
    SUMMARY_SUMMED,
    SUMMARY_WIDTHS,
)
from .shape import detect_shape, split_rows

logger = logging.getLogger(__name__)


@dataclass
class ParsedDocument:
    shape: ShapeDescriptor
    headers: List[str]
    records: List[Record]


def parse_document(text: str, expected_labels: Sequence[str]) -> ParsedDocument:
    shape = detect_shape(text, expected_labels)
    rows = split_rows(text, shape.delimiter)
    headers = []
    if shape.header_row_index < len(rows):
        headers = [(v or "").strip() for v in rows[shape.header_row_index]]
    records = normalize_rows(rows, shape.header_row_index)
    return ParsedDocument(shape=shape, headers=headers, records=records)


def observed_days(headers: Sequence[str]) -> List[str]:
    """Day-of-month labels present in the header, deduplicated, ascending."""
    days = {int(h) for h in headers if is_day_label(h) and int(h) in DAY_RANGE}
    return [str(d) for d in sorted(days)]


def detail_columns(parsed: ParsedDocument) -> List[str]:
    return DETAIL_BASE_HEADERS + observed_days(parsed.headers)


def detail_widths(columns: Sequence[str]) -> List[float]:
    extra = len(columns) - len(DETAIL_BASE_WIDTHS)
    return DETAIL_BASE_WIDTHS + [DAY_COL_WIDTH] * extra


def type_detail(parsed: ParsedDocument) -> TypedSheet:
    return type_records(parsed.records, detail_columns(parsed), DETAIL_ROLES, DETAIL_SUMMED)


def type_summary(parsed: ParsedDocument) -> TypedSheet:
    return type_records(parsed.records, SUMMARY_HEADERS, SUMMARY_ROLES, SUMMARY_SUMMED)


def today_dk(today: Optional[date] = None) -> str:
    return (today or date.today()).strftime(FOOTER_DATE_FORMAT)


def build_workbook(detail_text: str, summary_text: str, extracted_at: Optional[str] = None) -> bytes:
    """Full conversion of the two CSV documents into one workbook."""
    detail = parse_document(detail_text, DETAIL_EXPECTED)
    summary = parse_document(summary_text, SUMMARY_HEADERS)

    det_sheet = type_detail(detail)
    det_sheet.title = detail.shape.title or summary.shape.title
    det_sheet.subtitle = detail.shape.subtitle or summary.shape.subtitle

    sap_sheet = type_summary(summary)
    sap_sheet.title = summary.shape.title or detail.shape.title
    sap_sheet.subtitle = summary.shape.subtitle or detail.shape.subtitle

    logger.info("detail sheet: %s", det_sheet.summary())
    logger.info("summary sheet: %s", sap_sheet.summary())
    for name, sheet in ((SHEET_DETAIL, det_sheet), (SHEET_SUMMARY, sap_sheet)):
        for label, total in sheet.totals.items():
            fmt = sheet.formats[label]
            logger.debug("%s total %r = %s", name, label, format_number(total, fmt.decimals, fmt.grouping))

    return render_workbook(
        [
            (SHEET_DETAIL, det_sheet, detail_widths(det_sheet.columns)),
            (SHEET_SUMMARY, sap_sheet, list(SUMMARY_WIDTHS)),
        ],
        extracted_at or today_dk(),
    )
