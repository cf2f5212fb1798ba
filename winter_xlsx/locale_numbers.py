"""
Locale-ambiguous number parsing.

Danish ("1.234,56") and US ("1,234.56") conventions show up side by side in
the same export, and nothing in the file says which one a cell uses. The
rules below resolve a token without a locale hint. Their order matters:

1. blank -> not a number
2. strip spaces and the ";" grouping glyph, accept a leading sign
3. both "." and "," -> the last one is the decimal separator
4. only "," -> a single comma with digits after it is decimal, else grouping
5. only "." -> "1.234" / "1.234.567" are grouped integers, a single dot with
   1-3 digits after it is decimal, anything else is grouping
6. no separator -> integer
7. result must be finite
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from .models import ColumnFormat, ParsedNumber
from .rules import GROUPING_GLYPH

_SPACE_RE = re.compile(r"\s+")
_BODY_RE = re.compile(r"^([+-]?)([\d.,]+)$", re.ASCII)
_DOT_GROUPED_RE = re.compile(r"^\d{1,3}(\.\d{3})+$", re.ASCII)
_SINGLE_COMMA_DECIMAL_RE = re.compile(r"^\d*,\d+$", re.ASCII)
_SINGLE_DOT_DECIMAL_RE = re.compile(r"^\d*\.\d{1,3}$", re.ASCII)


def _split_decimal(body: str, decimal: str, grouping: str) -> Optional[tuple[str, str]]:
    int_part, _, frac = body.rpartition(decimal)
    if decimal in int_part:
        return None
    return int_part.replace(grouping, ""), frac


def resolve_number(token: Optional[str]) -> Optional[ParsedNumber]:
    """Resolve a raw cell token to a ParsedNumber, or None when it is not numeric.

    Never raises for text input; callers keep the token as text on None.
    """
    if token is None:
        return None
    s = str(token).strip()
    if not s:
        return None

    compact = _SPACE_RE.sub("", s).replace(GROUPING_GLYPH, "")
    grouping = compact != s

    m = _BODY_RE.match(compact)
    if m is None:
        return None
    sign, body = m.groups()
    if not any(ch.isdigit() for ch in body):
        return None

    has_dot = "." in body
    has_comma = "," in body

    if has_dot and has_comma:
        decimal = "," if body.rfind(",") > body.rfind(".") else "."
        other = "." if decimal == "," else ","
        split = _split_decimal(body, decimal, other)
        if split is None:
            return None
        int_part, frac = split
        grouping = True
    elif has_comma:
        if _SINGLE_COMMA_DECIMAL_RE.match(body):
            int_part, frac = body.split(",")
        else:
            int_part, frac = body.replace(",", ""), ""
            grouping = True
    elif has_dot:
        if _DOT_GROUPED_RE.match(body):
            int_part, frac = body.replace(".", ""), ""
            grouping = True
        elif _SINGLE_DOT_DECIMAL_RE.match(body):
            int_part, frac = body.split(".")
        else:
            int_part, frac = body.replace(".", ""), ""
            grouping = True
    else:
        int_part, frac = body, ""

    if not int_part and not frac:
        return None
    if not (int_part or "0").isdigit() or (frac and not frac.isdigit()):
        return None

    text = f"{sign}{int_part or '0'}" + (f".{frac}" if frac else "")
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return ParsedNumber(value=value, decimal_digits=len(frac), grouping_observed=grouping)


def format_number(value: Decimal, decimals: int = 0, grouping: bool = False, glyph: str = ",") -> str:
    """
    Render value with a fixed number of decimals and '.' as decimal point.

    format_number(Decimal("1234567.5"), 2, True, ";") -> "1;234;567.50"
    """
    text = f"{value:,.{decimals}f}" if grouping else f"{value:.{decimals}f}"
    if grouping and glyph != ",":
        text = text.replace(",", glyph)
    return text


def excel_number_format(fmt: ColumnFormat) -> str:
    """Spreadsheet number format code for a column format."""
    base = "#,##0" if fmt.grouping else "0"
    if fmt.decimals:
        return f"{base}.{'0' * fmt.decimals}"
    return base
