"""
Sheet Links Live — Configuration
Edit this file to point the server at your own published sheet.
"""

# ═══════════════════════════════════════
# GOOGLE SHEET SOURCE
# ═══════════════════════════════════════

# Published CSV export of the sheet (File → Share → Publish to web → CSV)
# The sheet needs columns whose headers contain "Name", "URL" and "Used for".
# Google Forms usually adds a "Timestamp" column first; it is ignored.
SHEET_URL = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vQCrVbu8yeirQ22dEWvc3jEYKURyehJZJnZd96OZweB7NgAOCr0RFoZwSCe_tF7_JcKl5n_pc5oc6AD"
    "/pub?gid=474045884&single=true&output=csv"
)

SHEET_TIMEOUT_SECONDS = 15           # HTTP timeout for the CSV fetch
SHEET_CACHE_TTL_SECONDS = 120        # Cache lifetime before refetch (2 min)


# ═══════════════════════════════════════
# PAGE
# ═══════════════════════════════════════

PAGE_TITLE = "Useful Links"


# ═══════════════════════════════════════
# SERVER
# ═══════════════════════════════════════

SERVER_HOST = "0.0.0.0"
SERVER_PORT = 5000
DEBUG = True
