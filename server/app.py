"""
Sheet Links Live — Flask Server
Serves a sortable HTML table of links kept in a published Google Sheet.

The sheet is fetched as CSV, parsed into {name, url, used_for} records and
rendered server-side. Clicking a column header reloads the page with
?sort=<column>&order=<asc|desc>, so every viewer toggles their own sort.
"""

import logging
import os
import threading
from datetime import datetime, timezone

from flask import Flask, abort, jsonify, request
from flask_cors import CORS
from cachetools import TTLCache

import config
from render import render_page
from sheet import SheetLoadError, load_links
from table import LinkTable, SortState

# ─── Setup ───
app = Flask(__name__, static_folder=None)
CORS(app, resources={r"/api/*": {"origins": "*"}})
logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
log = logging.getLogger("sheet-links-live")

# ─── Cache + shared table ───
# The cache only marks the table as fresh; the rows live in link_table.
# Both are touched only while holding _table_lock (threaded=True).
links_cache = TTLCache(maxsize=1, ttl=config.SHEET_CACHE_TTL_SECONDS)
link_table = LinkTable()
_table_lock = threading.Lock()


# ═══════════════════════════════════════
# LINKS (Google Sheets)
# ═══════════════════════════════════════

def fetch_links():
    """Make sure the shared link table is fresh, refetching the sheet once the cache expires.

    Raises SheetLoadError; nothing is cached on failure. The fetch runs under
    the lock, so concurrent requests on a cold cache trigger one download.
    """
    with _table_lock:
        if "links" in links_cache:
            log.debug("Links cache hit")
            return len(link_table)

        records = load_links(config.SHEET_URL, timeout=config.SHEET_TIMEOUT_SECONDS)
        link_table.replace(records)
        links_cache["links"] = datetime.now(timezone.utc).isoformat()

    if records:
        log.info(f"Cached {len(records)} links from Google Sheet")
    else:
        log.warning("Google Sheet returned a header but no link rows")
    return len(records)


def sorted_links(state):
    """Sort the shared table for one viewer and return a snapshot of its rows."""
    with _table_lock:
        link_table.sort(state)
        return list(link_table.records)


def _sort_state_from_request():
    try:
        return SortState.from_args(request.args.get("sort"), request.args.get("order"))
    except ValueError as e:
        log.info(f"Rejected sort args {dict(request.args)}: {e}")
        abort(400)


# ═══════════════════════════════════════
# ROUTES
# ═══════════════════════════════════════

@app.route("/")
def serve_index():
    """Serve the links table page, sorted per ?sort=&order=."""
    state = _sort_state_from_request()
    try:
        fetch_links()
    except SheetLoadError as e:
        log.error(f"Error loading data: {e}")
        return render_page([], title=config.PAGE_TITLE, error=True)

    return render_page(sorted_links(state), state, title=config.PAGE_TITLE)


@app.route("/api/links")
def api_links():
    """Return link records, sorted per ?sort=&order=."""
    state = _sort_state_from_request()
    try:
        fetch_links()
    except SheetLoadError as e:
        log.error(f"Error loading data: {e}")
        return jsonify({"error": "Error loading data", "links": [], "count": 0}), 502

    links = sorted_links(state)
    return jsonify({
        "links": links,
        "count": len(links),
        "sort": state.as_dict(),
    })


@app.route("/api/status")
def api_status():
    """Health check — returns cache state of the sheet source."""
    with _table_lock:
        sheet = {
            "cached": "links" in links_cache,
            "fetched_at": links_cache.get("links"),
            "last_count": len(link_table),
        }
    return jsonify({
        "ok": True,
        "sources": {"sheet": sheet},
        "timestamp": datetime.now(timezone.utc).isoformat(),
    })


# ═══════════════════════════════════════
# CACHE PRE-WARM
# ═══════════════════════════════════════

def _prewarm_cache():
    """Load the sheet in the background so the first page view is instant."""
    import time
    time.sleep(1)  # let server finish binding

    log.info("Pre-warming links cache (background)...")
    try:
        fetch_links()
    except SheetLoadError as e:
        log.warning(f"Pre-warm links failed: {e}")
        return
    log.info("Cache pre-warm complete")


# ═══════════════════════════════════════
# STARTUP
# ═══════════════════════════════════════

def main():
    log.info("=" * 50)
    log.info("Sheet Links Live — Starting server")
    log.info(f"Sheet source: {config.SHEET_URL}")
    log.info(f"Server: http://localhost:{config.SERVER_PORT}")
    log.info("=" * 50)

    # Only in the actual server process, not the reloader
    if os.environ.get("WERKZEUG_RUN_MAIN") == "true" or not config.DEBUG:
        threading.Thread(target=_prewarm_cache, daemon=True).start()

    app.run(
        host=config.SERVER_HOST,
        port=config.SERVER_PORT,
        debug=config.DEBUG,
        threaded=True,
    )


if __name__ == "__main__":
    main()
