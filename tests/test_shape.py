from winter_xlsx.rules import SUMMARY_HEADERS
from winter_xlsx.shape import detect_shape, find_header_index, split_rows

EXPECTED = ["Kontrakt", "Position", "Pris ex. moms"]


def test_split_rows_keeps_blank_lines():
    rows = split_rows("a;b\n\nc;d\n", ";")
    assert rows == [["a", "b"], [], ["c", "d"]]


def test_split_rows_strips_bom():
    assert split_rows("\ufeffKontrakt;Position", ";") == [["Kontrakt", "Position"]]


def test_semicolon_header_after_title_and_subtitle():
    text = (
        "Periode: 01-12-2024 - 31-12-2024\n"
        "Region Syd;;Vintertjeneste\n"
        "\n"
        "Kontrakt;Position;Pris ex. moms\n"
        "1;2;3\n"
    )
    shape = detect_shape(text, EXPECTED)
    assert shape.delimiter == ";"
    assert shape.header_row_index == 3
    assert shape.score == 3
    assert shape.confident
    assert shape.title == "Periode: 01-12-2024 - 31-12-2024"
    assert shape.subtitle == "Region Syd  Vintertjeneste"


def test_comma_delimited_with_quoted_labels():
    text = '"Kontrakt","Position","Pris ex. moms"\n"1","2","1.000,00"\n'
    shape = detect_shape(text, EXPECTED)
    assert shape.delimiter == ","
    assert shape.header_row_index == 0
    assert shape.title == ""
    assert shape.subtitle == ""


def test_tab_delimited():
    text = "Kontrakt\tPosition\tPris ex. moms\n1\t2\t3\n"
    assert detect_shape(text, EXPECTED).delimiter == "\t"


def test_header_drift_still_matches():
    text = "KONTRAKT;position ;Pris ex moms\n"
    shape = detect_shape(text, EXPECTED)
    assert shape.score == 3


def test_no_match_falls_back_to_first_row():
    shape = detect_shape("foo;bar\n1;2\n", EXPECTED)
    assert shape.header_row_index == 0
    assert shape.score == 0
    assert not shape.confident
    assert shape.delimiter == ";"


def test_empty_text():
    shape = detect_shape("", SUMMARY_HEADERS)
    assert shape.header_row_index == 0
    assert not shape.confident


def test_title_needs_sentinel_in_first_row():
    text = "Rapport\nKontrakt;Position\n"
    shape = detect_shape(text, EXPECTED)
    assert shape.header_row_index == 1
    assert shape.title == ""


def test_quoted_title_is_unwrapped():
    text = '"""Periode 2024"""\nKontrakt;Position\n'
    assert detect_shape(text, EXPECTED).title == "Periode 2024"


def test_header_outside_scan_window_is_not_found():
    text = "\n" * 12 + "Kontrakt;Position;Pris ex. moms\n"
    assert detect_shape(text, EXPECTED).score == 0


def test_ties_keep_first_row():
    rows = [["Kontrakt"], ["Position"], ["Kontrakt", "Position"], ["Kontrakt", "Position"]]
    assert find_header_index(rows, EXPECTED) == (2, 2)
