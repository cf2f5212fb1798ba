from __future__ import annotations

import enum
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


# --- API envelope ---


class BuildRequest(BaseModel):
    # sheet1 = SAP summary, sheet2 = detail ("Detaljeret oversigt")
    sheet1_url: Optional[str] = None
    sheet1_csv: Optional[str] = None
    sheet1_headers: Dict[str, str] = Field(default_factory=dict)
    sheet2_url: Optional[str] = None
    sheet2_csv: Optional[str] = None
    sheet2_headers: Dict[str, str] = Field(default_factory=dict)
    extracted_at: Optional[str] = Field(default=None, examples=["02-01-2025"])
    file_name: Optional[str] = Field(default=None, examples=["winter_fg.xlsx"])


class ErrorResponse(BaseModel):
    error: str
    stack: Optional[str] = None


class HealthResponse(BaseModel):
    ok: bool = True


# --- Pipeline values ---


class ColumnRole(str, enum.Enum):
    TEXT = "text"
    MONEY = "money"
    AVERAGE_PRICE = "average_price"
    COUNT = "count"
    DAY_MARKER = "day_marker"

    @property
    def numeric(self) -> bool:
        return self in (ColumnRole.MONEY, ColumnRole.AVERAGE_PRICE, ColumnRole.COUNT)


@dataclass(frozen=True)
class ParsedNumber:
    """A numeric token resolved to its canonical value."""

    value: Decimal
    decimal_digits: int = 0
    grouping_observed: bool = False


@dataclass(frozen=True)
class ShapeDescriptor:
    """Inferred delimiter, header position and title lines of one document."""

    delimiter: str
    header_row_index: int = 0
    title: str = ""
    subtitle: str = ""
    score: int = 0

    @property
    def confident(self) -> bool:
        return self.score > 0


@dataclass(frozen=True)
class ColumnFormat:
    decimals: int = 0
    grouping: bool = False


@dataclass
class ColumnStats:
    """Running aggregate for one column, finalized into a ColumnFormat."""

    max_decimal_digits: int = 0
    any_grouping_observed: bool = False
    running_sum: Decimal = Decimal(0)
    parsed: int = 0
    failed: int = 0

    def observe(self, number: ParsedNumber) -> None:
        self.parsed += 1
        self.max_decimal_digits = max(self.max_decimal_digits, number.decimal_digits)
        self.any_grouping_observed = self.any_grouping_observed or number.grouping_observed
        self.running_sum += number.value

    @property
    def failure_rate(self) -> float:
        seen = self.parsed + self.failed
        return self.failed / seen if seen else 0.0

    def finalize(self) -> ColumnFormat:
        return ColumnFormat(decimals=self.max_decimal_digits, grouping=self.any_grouping_observed)


CellValue = Union[None, str, Decimal]


@dataclass
class TypedSheet:
    columns: List[str]
    roles: Dict[str, ColumnRole]
    rows: List[List[CellValue]]
    formats: Dict[str, ColumnFormat] = field(default_factory=dict)
    stats: Dict[str, ColumnStats] = field(default_factory=dict)
    totals: Dict[str, Decimal] = field(default_factory=dict)
    title: str = ""
    subtitle: str = ""

    def summary(self) -> Dict[str, Any]:
        return {
            "rows": len(self.rows),
            "columns": len(self.columns),
            "parse_failures": {k: s.failed for k, s in self.stats.items() if s.failed},
        }
