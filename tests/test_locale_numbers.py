from decimal import Decimal

import pytest

from winter_xlsx.locale_numbers import excel_number_format, format_number, resolve_number
from winter_xlsx.models import ColumnFormat, ParsedNumber


@pytest.mark.parametrize("token", [None, "", "   ", "\t"])
def test_blank_is_not_a_number(token):
    assert resolve_number(token) is None


@pytest.mark.parametrize("token", ["abc", "12 kr", "1.234,56 kr", "-", ".", ",", "1-2", "K"])
def test_text_is_not_a_number(token):
    assert resolve_number(token) is None


def test_danish_grouped_decimal():
    assert resolve_number("1.234,56") == ParsedNumber(Decimal("1234.56"), 2, True)


def test_us_grouped_decimal():
    assert resolve_number("1,234,567.89") == ParsedNumber(Decimal("1234567.89"), 2, True)


def test_last_separator_is_decimal():
    assert resolve_number("1,234.5").value == Decimal("1234.5")
    assert resolve_number("1.234.567,125") == ParsedNumber(Decimal("1234567.125"), 3, True)


@pytest.mark.parametrize(
    "token, expected",
    [
        ("123", "123"),
        ("1.234", "1234"),
        ("1.234.567", "1234567"),
        ("12,5", "12.5"),
        ("1,234", "1.234"),
        ("123,4567", "123.4567"),
        ("1.234,5", "1234.5"),
        ("999.999.999,01", "999999999.01"),
    ],
)
def test_dot_grouping_comma_decimal_tokens(token, expected):
    # ^\d{1,3}(\.\d{3})*(,\d+)?$ -> drop dots, comma becomes the decimal point
    assert resolve_number(token).value == Decimal(expected)


@pytest.mark.parametrize(
    "token, expected",
    [
        ("1,234,567", "1234567"),
        ("12,345.6", "12345.6"),
        ("100,000,000.125", "100000000.125"),
    ],
)
def test_comma_grouping_tokens(token, expected):
    assert resolve_number(token).value == Decimal(expected)


def test_single_comma_is_decimal():
    n = resolve_number("1,5")
    assert n == ParsedNumber(Decimal("1.5"), 1, False)


def test_single_dot_with_short_tail_is_decimal():
    assert resolve_number("1.5") == ParsedNumber(Decimal("1.5"), 1, False)
    assert resolve_number("1234.567") == ParsedNumber(Decimal("1234.567"), 3, False)
    assert resolve_number("0.25").value == Decimal("0.25")


def test_thousand_dot_is_grouping():
    n = resolve_number("1.234")
    assert n.value == Decimal("1234")
    assert n.decimal_digits == 0
    assert n.grouping_observed is True


def test_single_dot_with_long_tail_is_grouping():
    assert resolve_number("1.23456") == ParsedNumber(Decimal("123456"), 0, True)


def test_spaces_and_glyph_are_grouping():
    assert resolve_number("1 234,50") == ParsedNumber(Decimal("1234.50"), 2, True)
    assert resolve_number("1 234") == ParsedNumber(Decimal("1234"), 0, True)
    assert resolve_number("1;111.111") == ParsedNumber(Decimal("1111.111"), 3, True)


def test_surrounding_whitespace_is_not_grouping():
    assert resolve_number("  42 ") == ParsedNumber(Decimal("42"), 0, False)


def test_sign():
    assert resolve_number("-1.234,5").value == Decimal("-1234.5")
    assert resolve_number("+7").value == Decimal("7")


def test_malformed_mixed_separators():
    assert resolve_number("1,2,3.4.5") is None


def test_trailing_decimal_separator_after_grouping():
    assert resolve_number("1.234,") == ParsedNumber(Decimal("1234"), 0, True)


def test_decimal_digits_keep_trailing_zeros():
    n = resolve_number("10,00")
    assert n.decimal_digits == 2
    assert n.value == Decimal("10.00")


def test_format_number():
    assert format_number(Decimal("1234567.5"), 2, True, ";") == "1;234;567.50"
    assert format_number(Decimal("1234.5"), 0) == "1234"
    assert format_number(Decimal("1234.5"), 3, True) == "1,234.500"


@pytest.mark.parametrize(
    "fmt, code",
    [
        (ColumnFormat(0, False), "0"),
        (ColumnFormat(0, True), "#,##0"),
        (ColumnFormat(2, True), "#,##0.00"),
        (ColumnFormat(3, False), "0.000"),
    ],
)
def test_excel_number_format(fmt, code):
    assert excel_number_format(fmt) == code
