"""
Sheet Links Live — HTML rendering for the links table

render_header / render_page build URLs with flask.url_for, so they need an
app or request context.
"""

import html

from flask import url_for

import config
from table import COLUMNS, SortState

NA = "N/A"

ERROR_ROW = '<tr><td colspan="3">Error loading data. Check console.</td></tr>'

# Header labels, in COLUMNS order
COLUMN_LABELS = {
    "name": "Name",
    "url": "URL",
    "used_for": "Used For",
}

_ARROWS = {"asc": "▲", "desc": "▼"}


def _text(value):
    """Escaped cell text, N/A when missing or blank."""
    if value is None or not value.strip():
        return NA
    return html.escape(value)


def render_row(item):
    """Render one record as <tr>: Name, URL (new-tab link), Used For."""
    url = item.get("url")
    if url:
        safe_url = html.escape(url, quote=True)
        url_cell = f'<a href="{safe_url}" target="_blank" rel="noopener">{safe_url}</a>'
    else:
        url_cell = NA

    return (
        "<tr>"
        f"<td>{_text(item.get('name'))}</td>"
        f"<td>{url_cell}</td>"
        f"<td>{_text(item.get('used_for'))}</td>"
        "</tr>"
    )


def render_rows(records):
    return "\n".join(render_row(item) for item in records)


def render_error_row():
    return ERROR_ROW


def render_header(state):
    """Header row; each cell links to the viewer's next sort and marks the active one."""
    cells = []
    for column in COLUMNS:
        label = COLUMN_LABELS[column]
        arrow = f" {_ARROWS[state.order]}" if column == state.column else ""
        next_order = state.next_order(column)
        href = html.escape(url_for("serve_index", sort=column, order=next_order), quote=True)
        cells.append(f'<th><a href="{href}" title="Sort {next_order}">{label}{arrow}</a></th>')
    return "<tr>" + "".join(cells) + "</tr>"


def render_page(records, state=None, title=None, error=False):
    """Full HTML page. With error=True the body holds only the static error row."""
    state = state or SortState()
    body = render_error_row() if error else render_rows(records)
    safe_title = html.escape(title or config.PAGE_TITLE)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{safe_title}</title>
  <style>
    body {{ font-family: Arial, sans-serif; margin: 24px; }}
    table {{ border-collapse: collapse; width: 100%; }}
    th, td {{ border: 1px solid #ddd; padding: 8px; text-align: left; }}
    th {{ background: #f2f2f2; }}
    th a {{ color: inherit; text-decoration: none; display: block; }}
    tr:nth-child(even) {{ background: #fafafa; }}
  </style>
</head>
<body>
  <h1>{safe_title}</h1>
  <table id="links-table">
    <thead>
      {render_header(SortState() if error else state)}
    </thead>
    <tbody id="table-body">
{body}
    </tbody>
  </table>
</body>
</html>
"""
