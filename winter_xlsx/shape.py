"""
Tabular shape detection.

Finds the delimiter, the header row and the optional title/subtitle lines of
a loosely structured CSV export. Exports put a "Periode ..." line, maybe a
subtitle line and maybe blank lines above the header, so the header row is
found by scoring, not assumed.

Detection never drops rows; noise filtering happens in rows.py.
"""

from __future__ import annotations

import csv
import io
import logging
from typing import List, Sequence, Tuple

from .models import ShapeDescriptor
from .rows import label_key
from .rules import DELIMITER_CANDIDATES, HEADER_SCAN_ROWS, SUBTITLE_JOINER, TITLE_SENTINEL

logger = logging.getLogger(__name__)


def strip_bom(text: str) -> str:
    return text[1:] if text.startswith("\ufeff") else text


def split_rows(text: str, delimiter: str) -> List[List[str]]:
    """Split text into rows, keeping blank lines as empty rows."""
    reader = csv.reader(io.StringIO(strip_bom(text or ""), newline=""), delimiter=delimiter)
    return [row for row in reader]


def score_row(row: Sequence[str], expected_keys: Sequence[str]) -> int:
    """Number of expected labels found among the row's cells."""
    cells = {label_key(v) for v in row}
    cells.discard("")
    return sum(1 for key in expected_keys if key in cells)


def find_header_index(rows: Sequence[Sequence[str]], expected: Sequence[str]) -> Tuple[int, int]:
    """(index, score) of the best-matching row in the scan window; ties keep the first."""
    expected_keys = list(dict.fromkeys(label_key(h) for h in expected))
    best_idx, best_score = 0, 0
    for i, row in enumerate(rows[:HEADER_SCAN_ROWS]):
        score = score_row(row, expected_keys)
        if score > best_score:
            best_idx, best_score = i, score
    return best_idx, best_score


def _title(rows: Sequence[Sequence[str]]) -> str:
    if not rows or not rows[0]:
        return ""
    first = (rows[0][0] or "").strip().strip('"').strip()
    return first if first.lower().startswith(TITLE_SENTINEL) else ""


def _subtitle(rows: Sequence[Sequence[str]], header_idx: int) -> str:
    for i in range(1, header_idx):
        pieces = [v.strip() for v in rows[i] if v and v.strip()]
        if pieces:
            return SUBTITLE_JOINER.join(pieces)
    return ""


def detect_shape(raw_text: str, expected_labels: Sequence[str]) -> ShapeDescriptor:
    """
    Pick the delimiter/header row combination matching the most expected labels.

    Candidates are tried in DELIMITER_CANDIDATES order and only a strictly
    better score replaces the current best. With no match at all the first
    delimiter and row 0 are returned with score 0 (confident is False).
    """
    best_rows: List[List[str]] = []
    best = (DELIMITER_CANDIDATES[0], 0, -1)  # delimiter, header index, score

    for delimiter in DELIMITER_CANDIDATES:
        rows = split_rows(raw_text, delimiter)
        idx, score = find_header_index(rows, expected_labels)
        if score > best[2]:
            best = (delimiter, idx, score)
            best_rows = rows

    delimiter, header_idx, score = best
    shape = ShapeDescriptor(
        delimiter=delimiter,
        header_row_index=header_idx,
        title=_title(best_rows),
        subtitle=_subtitle(best_rows, header_idx),
        score=max(score, 0),
    )

    if shape.confident:
        logger.debug(
            "shape: delimiter=%r header_row=%d score=%d", delimiter, header_idx, score
        )
    elif best_rows:
        logger.warning("shape: no header row matched expected labels, using row 0")
    return shape
