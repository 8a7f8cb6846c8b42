import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / "server"))

import csv, io

import config
from sheet import fetch_csv, locate_columns, parse_csv

url = sys.argv[1] if len(sys.argv) > 1 else config.SHEET_URL
text = fetch_csv(url, timeout=30)
rows = list(csv.reader(io.StringIO(text)))

print(f"Rows: {len(rows)}, Cols: {len(rows[0]) if rows else 0}")

print(f"\n=== ALL HEADERS ===")
for i, h in enumerate(rows[0] if rows else []):
    if h.strip():
        print(f"  col {i}: '{h.strip()}'")

print(f"\n=== LOCATED COLUMNS ===")
columns = locate_columns(rows[0]) if rows else {}
for field in ("name", "url", "used_for"):
    idx = columns.get(field)
    print(f"  {field}: {'MISSING' if idx is None else f'col {idx}'}")

print(f"\n=== FIRST 5 RECORDS ===")
for rec in parse_csv(text)[:5]:
    print(f"  {rec}")
