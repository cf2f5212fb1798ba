"""
Column typing and display formats.

Each column has a role. Numeric roles are resolved with resolve_number();
a column's display format (decimals, grouping) is only known after the last
row, so stats are collected first and the format is applied afterwards.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .locale_numbers import resolve_number
from .models import CellValue, ColumnRole, ColumnStats, TypedSheet
from .rows import Record
from .rules import DAY_LABEL_RE

logger = logging.getLogger(__name__)


def is_day_label(label: str) -> bool:
    return bool(DAY_LABEL_RE.match((label or "").strip()))


def role_for_label(label: str, declared: Mapping[str, ColumnRole]) -> ColumnRole:
    if label in declared:
        return declared[label]
    if is_day_label(label):
        return ColumnRole.DAY_MARKER
    return ColumnRole.TEXT


def type_cell(raw: Optional[str], role: ColumnRole, stats: Optional[ColumnStats] = None) -> CellValue:
    text = "" if raw is None else str(raw).strip()
    if not text:
        return None
    if not role.numeric:
        return text

    number = resolve_number(text)
    if number is None:
        # keep the original text; it shows up in the sheet and not in the total
        if stats is not None:
            stats.failed += 1
        return text
    if stats is not None:
        stats.observe(number)
    return number.value


def type_records(
    records: Iterable[Record],
    columns: Sequence[str],
    declared: Mapping[str, ColumnRole],
    summed: Sequence[str] = (),
) -> TypedSheet:
    """Type every record against the ordered column list."""
    roles: Dict[str, ColumnRole] = {label: role_for_label(label, declared) for label in columns}
    stats: Dict[str, ColumnStats] = {
        label: ColumnStats() for label, role in roles.items() if role.numeric
    }

    rows: List[List[CellValue]] = []
    for record in records:
        rows.append([type_cell(record.get(label), roles[label], stats.get(label)) for label in columns])

    formats = {label: s.finalize() for label, s in stats.items()}
    totals: Dict[str, Decimal] = {
        label: stats[label].running_sum for label in summed if label in stats
    }

    for label, s in stats.items():
        if s.failed:
            logger.warning(
                "column %r: %d of %d values not numeric (%.0f%%), kept as text",
                label, s.failed, s.parsed + s.failed, s.failure_rate * 100,
            )

    return TypedSheet(
        columns=list(columns),
        roles=roles,
        rows=rows,
        formats=formats,
        stats=stats,
        totals=totals,
    )
