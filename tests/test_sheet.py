import pytest
import requests

from conftest import FakeResponse
from sheet import (
    SheetLoadError,
    build_export_url,
    fetch_csv,
    load_links,
    locate_columns,
    parse_csv,
)


def test_parse_projects_rows_by_header_name(sample_csv):
    records = parse_csv(sample_csv)
    assert records == [
        {"name": "beta", "url": "https://b.example.com", "used_for": "Docs"},
        {"name": "Alpha", "url": "https://a.example.com", "used_for": "Search, mostly"},
        {"name": "Charlie", "url": "https://c.example.com", "used_for": ""},
    ]


def test_parse_is_idempotent(sample_csv):
    assert parse_csv(sample_csv) == parse_csv(sample_csv)


def test_parse_handles_doubled_quotes():
    text = 'Name,URL\n"Say ""hi""",https://x.example.com\n'
    assert parse_csv(text) == [{"name": 'Say "hi"', "url": "https://x.example.com"}]


def test_parse_skips_blank_lines_and_trims_values():
    text = "Name,URL,Used for\n\n  Tool  , https://t.example.com ,  testing \n   \n"
    assert parse_csv(text) == [
        {"name": "Tool", "url": "https://t.example.com", "used_for": "testing"}
    ]


def test_short_row_leaves_field_none():
    records = parse_csv("Name,URL,Used for\nOnly name\n")
    assert records == [{"name": "Only name", "url": None, "used_for": None}]


def test_missing_column_is_absent_from_records():
    records = parse_csv("Name,Link\nTool,https://t.example.com\n")
    assert records == [{"name": "Tool"}]


def test_locate_columns_case_and_position_independent():
    headers = ["Timestamp", "Tool url", "What is it USED FOR?", "Your name"]
    assert locate_columns(headers) == {"name": 3, "url": 1, "used_for": 2}


def test_locate_columns_first_match_wins_and_strips_quotes():
    headers = ['"Name"', "Nickname", "\ufeffURL"]
    assert locate_columns(headers) == {"name": 0, "url": 2}


def test_empty_text_raises():
    with pytest.raises(SheetLoadError):
        parse_csv("")


def test_header_only_gives_no_records():
    assert parse_csv("Name,URL,Used for\n") == []


def test_build_export_url():
    assert build_export_url("abc", "42") == (
        "https://docs.google.com/spreadsheets/d/abc/export?format=csv&gid=42"
    )


def test_fetch_csv_returns_utf8_text(fake_get):
    resp = FakeResponse("Name\nCafé\n")
    fake_get.set_response(resp)
    assert fetch_csv("https://sheet.example.com/csv") == "Name\nCafé\n"
    assert resp.encoding == "utf-8"
    assert fake_get == ["https://sheet.example.com/csv"]


def test_fetch_csv_http_error_raises(fake_get):
    fake_get.set_response(FakeResponse("", status_code=404))
    with pytest.raises(SheetLoadError, match="404"):
        fetch_csv("https://sheet.example.com/csv")


def test_fetch_csv_network_error_raises(fake_get):
    fake_get.set_response(requests.ConnectionError("boom"))
    with pytest.raises(SheetLoadError, match="boom"):
        fetch_csv("https://sheet.example.com/csv")


def test_load_links(fake_get):
    records = load_links("https://sheet.example.com/csv")
    assert [r["name"] for r in records] == ["beta", "Alpha", "Charlie"]


def test_oversized_field_raises_sheet_load_error():
    import csv

    text = "Name,URL\n" + "x" * (csv.field_size_limit() + 1) + ",https://t.example.com\n"
    with pytest.raises(SheetLoadError, match="Malformed CSV"):
        parse_csv(text)
