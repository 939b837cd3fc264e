"""Tests for CSV parsing and export of analytics reports."""
import pytest

from contentops.config import settings
from contentops.services.report_csv import (
    EMPTY_EXPORT,
    CSVParseError,
    build_metadata,
    export_report_csv,
    parse_csv_text,
    rows_to_csv,
)


def test_parse_headers_and_rows():
    headers, rows = parse_csv_text("Date,Views,Title\n2024-01-01,100,Launch\n2024-01-02,12.5,Recap\n")
    assert headers == ["Date", "Views", "Title"]
    assert rows[0] == {
        "row_index": 0,
        "Date": "2024-01-01",
        "Date_is_date": True,
        "Views": 100,
        "Title": "Launch",
    }
    assert rows[1]["row_index"] == 1
    assert rows[1]["Views"] == 12.5


def test_parse_quoted_cells_and_blank_lines():
    text = 'Title,Impressions\n"Hello, world",1500\n\n"Second",  20\n'
    _, rows = parse_csv_text(text)
    assert len(rows) == 2
    assert rows[0]["Title"] == "Hello, world"
    assert rows[1]["Impressions"] == 20


def test_parse_short_rows_are_padded():
    _, rows = parse_csv_text("Title,Views,Likes\nOnly title\n")
    assert rows[0]["Views"] == ""
    assert rows[0]["Likes"] == ""


def test_thousands_separator_kept_as_text():
    _, rows = parse_csv_text('Views\n"1,234"\n')
    assert rows[0]["Views"] == "1,234"


@pytest.mark.parametrize("text", ["", "   \n\n", ",,\n1,2,3\n", "Views\n"])
def test_parse_rejects_unusable_text(text):
    with pytest.raises(CSVParseError):
        parse_csv_text(text)


def test_parse_rejects_too_many_rows(monkeypatch):
    monkeypatch.setattr(settings, "CSV_MAX_ROWS", 2)
    with pytest.raises(CSVParseError, match="more than 2"):
        parse_csv_text("Views\n1\n2\n3\n")


def test_build_metadata():
    headers, rows = parse_csv_text("Views\n1\n2\n")
    meta = build_metadata(headers, rows)
    assert meta["headers"] == ["Views"]
    assert meta["row_count"] == 2
    assert "import_date" in meta


def test_rows_to_csv_drops_importer_keys():
    _, rows = parse_csv_text("Date,Views\n2024-01-01,100\n")
    assert rows_to_csv(rows) == "Date,Views\n2024-01-01,100\n"


def test_rows_to_csv_without_rows():
    assert rows_to_csv([]) == EMPTY_EXPORT
    assert rows_to_csv(None) == EMPTY_EXPORT
    assert rows_to_csv(["junk"]) == EMPTY_EXPORT


def test_export_prefers_original_text():
    assert export_report_csv("A,B\n1,2\n", [{"A": 9}]) == "A,B\n1,2\n"
    assert export_report_csv(None, [{"A": 9}]) == "A\n9\n"


def test_quoted_cell_keeps_embedded_line_break():
    text = 'Title,Views\n"Line one\nLine two",10\n'
    _, rows = parse_csv_text(text)
    assert len(rows) == 1
    assert rows[0]["Title"] == "Line one\nLine two"
    assert rows[0]["Views"] == 10


def test_unicode_line_separator_stays_inside_cell():
    text = "Title,Views\nBefore\u2028after,7\nTab\x0bbed\x0cpage,8\n"
    _, rows = parse_csv_text(text)
    assert [row["Title"] for row in rows] == ["Before\u2028after", "Tab\x0bbed\x0cpage"]
    assert [row["Views"] for row in rows] == [7, 8]


def test_all_empty_rows_are_skipped_without_taking_an_index():
    _, rows = parse_csv_text("\n\nTitle,Views\n,\nFirst,1\n , \nSecond,2\n")
    assert [row["Title"] for row in rows] == ["First", "Second"]
    assert [row["row_index"] for row in rows] == [0, 1]


def test_overflowing_number_kept_as_text():
    _, rows = parse_csv_text("Views,Reach\n1e999,-1e999\n")
    assert rows[0]["Views"] == "1e999"
    assert rows[0]["Reach"] == "-1e999"


def test_headers_clashing_with_importer_keys_are_renamed():
    headers, rows = parse_csv_text("row_index,Launch_is_date,Date\n99,yes,2024-01-01\n")
    assert headers == ["row_index_column", "Launch_is_date_column", "Date"]
    assert rows[0]["row_index"] == 0
    assert rows[0]["row_index_column"] == 99
    assert rows[0]["Launch_is_date_column"] == "yes"
    assert rows[0]["Date_is_date"] is True
    assert rows_to_csv(rows) == "row_index_column,Launch_is_date_column,Date\n99,yes,2024-01-01\n"
