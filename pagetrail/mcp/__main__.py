import asyncio
import logging
import subprocess
import sys
from pathlib import Path

from httpx import ASGITransport, AsyncClient

from pagetrail.app import create_app
from pagetrail.config import DB_PATH, MCP_EMAIL, MCP_PASSWORD
from pagetrail.database import engine
from pagetrail.mcp.client import PagetrailClient
from pagetrail.mcp.server import create_mcp_server

logger = logging.getLogger(__name__)


def run_migrations():
    """Run Alembic migrations before starting the MCP server."""
    # Ensure the database directory exists
    Path(DB_PATH).parent.mkdir(parents=True, exist_ok=True)

    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        capture_output=False,
    )
    if result.returncode != 0:
        sys.exit(1)


async def sign_in(client: PagetrailClient) -> dict:
    try:
        return await client.login(MCP_EMAIL, MCP_PASSWORD)
    finally:
        # pooled connections belong to this loop; the MCP server runs its own
        await engine.dispose()


def main():
    run_migrations()

    app = create_app()
    if not (MCP_EMAIL and MCP_PASSWORD):
        logger.error("PAGETRAIL_MCP_EMAIL and PAGETRAIL_MCP_PASSWORD must be set")
        sys.exit(1)

    transport = ASGITransport(app=app)
    http = AsyncClient(transport=transport, base_url="http://localhost")
    client = PagetrailClient(http)
    result = asyncio.run(sign_in(client))
    if result.get("error"):
        logger.error("MCP sign-in failed: %s", result.get("detail"))
        sys.exit(1)

    mcp = create_mcp_server(client)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
