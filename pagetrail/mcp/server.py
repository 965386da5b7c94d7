from fastmcp import FastMCP

from pagetrail.mcp.client import PagetrailClient
from pagetrail.mcp.tools.catalog import (
    get_catalog_work as _get_catalog_work,
    search_catalog as _search_catalog,
    trending_books as _trending_books,
)
from pagetrail.mcp.tools.library import (
    add_work as _add_work,
    check_progress as _check_progress,
    get_work as _get_work,
    list_library as _list_library,
    log_session as _log_session,
)


def create_mcp_server(client: PagetrailClient) -> FastMCP:
    mcp = FastMCP(
        name="pagetrail",
        instructions=(
            "Pagetrail tracks reading progress on books from Open Library. Use these "
            "tools to find books in the catalog, add them to your library, log reading "
            "sessions, and review progress. Library books are identified by the numeric "
            "id returned when they are added."
        ),
    )

    @mcp.tool()
    async def search_catalog(query: str, limit: int = 10) -> list[dict] | dict:
        """Search the Open Library catalog by free text. Results carry the
        open_library_key needed to add a book to the library."""
        return await _search_catalog(client, query=query, limit=limit)

    @mcp.tool()
    async def trending_books() -> list[dict] | dict:
        """List currently trending books from Open Library."""
        return await _trending_books(client)

    @mcp.tool()
    async def get_catalog_work(work_key: str) -> dict:
        """Get full catalog details for a work (e.g. '/works/OL45804W'),
        including description, subjects, covers and author biographies."""
        return await _get_catalog_work(client, work_key=work_key)

    @mcp.tool()
    async def add_work(
        open_library_key: str,
        title: str,
        author_name: str,
        image_url: str | None = None,
    ) -> dict:
        """Add a catalog work to your library. Each work can only be added once."""
        return await _add_work(
            client, open_library_key=open_library_key, title=title,
            author_name=author_name, image_url=image_url,
        )

    @mcp.tool()
    async def list_library() -> list[dict] | dict:
        """List every book in your library with Open Library details and
        reading sessions (newest first)."""
        return await _list_library(client)

    @mcp.tool()
    async def get_work(work_id: int) -> dict:
        """Get one library book with its details and reading timeline."""
        return await _get_work(client, work_id=work_id)

    @mcp.tool()
    async def log_session(work_id: int, pages_read: int, notes: str | None = None) -> dict:
        """Log a reading session. pages_read is the number of pages read in
        this session and must be positive; the current page advances by it."""
        return await _log_session(client, work_id=work_id, pages_read=pages_read, notes=notes)

    @mcp.tool()
    async def check_progress(work_id: int, repair: bool = False) -> dict:
        """Compare a book's current page with the sum of its reading sessions.
        With repair=true, rewrite the current page from the sessions."""
        return await _check_progress(client, work_id=work_id, repair=repair)

    return mcp
