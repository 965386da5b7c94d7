import os
from pathlib import Path

DB_PATH = os.environ.get("PAGETRAIL_DB_PATH", str(Path.cwd() / "pagetrail.db"))
DATABASE_URL = os.environ.get("PAGETRAIL_DATABASE_URL", f"sqlite+aiosqlite:///{DB_PATH}")

LOG_LEVEL = os.environ.get("PAGETRAIL_LOG_LEVEL", "INFO")

# Open Library API settings
OPENLIBRARY_BASE_URL = os.environ.get("PAGETRAIL_OL_BASE_URL", "https://openlibrary.org")
OPENLIBRARY_COVERS_URL = os.environ.get("PAGETRAIL_OL_COVERS_URL", "https://covers.openlibrary.org")
OPENLIBRARY_TIMEOUT = float(os.environ.get("PAGETRAIL_OL_TIMEOUT", "10.0"))
PLACEHOLDER_COVER_URL = os.environ.get(
    "PAGETRAIL_PLACEHOLDER_COVER_URL", "https://via.placeholder.com/150x200?text=No+Cover"
)

# Upper bound for one work's bibliographic enrichment, on top of the per-request timeout
ENRICHMENT_TIMEOUT = float(os.environ.get("PAGETRAIL_ENRICHMENT_TIMEOUT", "15.0"))

SESSION_COOKIE = os.environ.get("PAGETRAIL_SESSION_COOKIE", "pagetrail_session")

# Credentials the MCP server signs in with
MCP_EMAIL = os.environ.get("PAGETRAIL_MCP_EMAIL")
MCP_PASSWORD = os.environ.get("PAGETRAIL_MCP_PASSWORD")
