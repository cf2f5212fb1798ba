"""
Row normalization: header labels + raw rows -> ordered Records.

Noise rows (fully blank, or the trailing "Udtrukket ..." stamp) are dropped
here and nowhere else. Sparse rows are kept: detail rows legitimately leave
most optional columns empty.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Sequence

from .rules import FOOTER_SENTINEL

_PUNCT_RE = re.compile(r"[^\w\s]")
_WS_RE = re.compile(r"\s+")


def label_key(label: object) -> str:
    """Join key for column labels: case, whitespace and punctuation insensitive."""
    text = "" if label is None else str(label)
    text = _PUNCT_RE.sub("", text.strip().lower())
    return _WS_RE.sub(" ", text).strip()


@dataclass
class Record:
    """One data row: header label -> raw cell text, with its 1-based source line."""

    row_number: int
    cells: Dict[str, str]

    def get(self, label: str) -> str:
        if label in self.cells:
            return self.cells[label]
        wanted = label_key(label)
        for name, value in self.cells.items():
            if label_key(name) == wanted:
                return value
        # day columns: "01" and "1" name the same day
        if wanted.isdigit():
            for name, value in self.cells.items():
                key = label_key(name)
                if key.isdigit() and int(key) == int(wanted):
                    return value
        return ""


def _cell(value: object) -> str:
    return "" if value is None else str(value).strip()


def is_noise_row(row: Sequence[object]) -> bool:
    if all(_cell(v) == "" for v in row):
        return True
    return _cell(row[0]).lower().startswith(FOOTER_SENTINEL)


def header_labels(row: Sequence[object]) -> List[str]:
    return [_cell(v) or f"col_{i + 1}" for i, v in enumerate(row)]


def normalize_rows(rows: Sequence[Sequence[object]], header_row_index: int) -> List[Record]:
    """Every non-noise row after the header, zipped with the header labels."""
    if header_row_index >= len(rows):
        return []
    labels = header_labels(rows[header_row_index])

    records: List[Record] = []
    for i in range(header_row_index + 1, len(rows)):
        row = rows[i]
        if is_noise_row(row):
            continue
        cells = {}
        for c, label in enumerate(labels):
            cells[label] = "" if c >= len(row) or row[c] is None else str(row[c])
        records.append(Record(row_number=i + 1, cells=cells))
    return records
