"""
Sheet Links Live — Google Sheet fetch + CSV parsing

Turns a published sheet into link records:
    {"name": "...", "url": "...", "used_for": "..."}
"""

import csv
import io
import logging
import re

import requests

log = logging.getLogger("sheet-links-live.sheet")

# Record field → header substring that identifies its column
FIELD_HEADERS = {
    "name": "Name",
    "url": "URL",
    "used_for": "Used for",
}

_HTTP_HEADERS = {"User-Agent": "SheetLinksLive/1.0"}


class SheetLoadError(Exception):
    """The sheet could not be fetched or parsed."""


def build_export_url(sheet_id, gid="0"):
    """Build the CSV export URL for one tab of a public Google Sheet."""
    return (
        f"https://docs.google.com/spreadsheets/d/{sheet_id}"
        f"/export?format=csv&gid={gid}"
    )


def fetch_csv(url, timeout=15):
    """GET the sheet CSV and return its text. Raises SheetLoadError on any failure."""
    log.info(f"Fetching sheet CSV: {url}")
    try:
        resp = requests.get(url, headers=_HTTP_HEADERS, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise SheetLoadError(f"Sheet fetch failed: {e}") from e

    # Sheets omits the charset, requests would fall back to ISO-8859-1
    resp.encoding = "utf-8"
    return resp.text


def _clean_header(header):
    return re.sub(r'^"|"$', "", header.lstrip("\ufeff").strip())


def locate_columns(headers):
    """Map each record field to the index of the first header containing its name.

    Matching ignores case and position within the header, so
    "Timestamp, Tool URL, What is it used for?, Your name" still resolves.
    Fields with no matching header are left out of the result.
    """
    cleaned = [_clean_header(h).lower() for h in headers]
    columns = {}
    for field, needle in FIELD_HEADERS.items():
        needle = needle.lower()
        for idx, header in enumerate(cleaned):
            if needle in header:
                columns[field] = idx
                break
    return columns


def _is_blank(row):
    return not row or (len(row) == 1 and not row[0].strip())


def parse_csv(text):
    """Parse sheet CSV text into a list of link records (header row skipped).

    Text with no rows at all raises SheetLoadError rather than giving an
    empty table: a published sheet always has a header row, so an empty body
    means the export went wrong and the page shows the error row. A header
    with no data rows is a valid, empty table.

    Tokenizer errors (e.g. a field over csv.field_size_limit()) are raised
    as SheetLoadError too.
    """
    try:
        rows = list(csv.reader(io.StringIO(text)))
    except csv.Error as e:
        raise SheetLoadError(f"Malformed CSV: {e}") from e

    if not rows:
        raise SheetLoadError("Sheet CSV is empty (no header row)")

    columns = locate_columns(rows[0])
    if not columns:
        log.warning(f"No Name/URL/Used for columns in header: {rows[0]}")

    records = []
    for row in rows[1:]:
        if _is_blank(row):
            continue
        record = {}
        for field, idx in columns.items():
            record[field] = row[idx].strip() if idx < len(row) else None
        records.append(record)

    log.debug(f"Parsed {len(records)} records (columns: {columns})")
    return records


def load_links(url, timeout=15):
    """Fetch the sheet and parse it into link records."""
    return parse_csv(fetch_csv(url, timeout=timeout))
