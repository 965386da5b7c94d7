"""Tests for MCP tools. Each test gets a signed-in PagetrailClient backed by
the test httpx client fixture, then calls the tool function directly."""

import pytest
from sqlalchemy.exc import OperationalError

from pagetrail.mcp.client import PagetrailClient
from pagetrail.mcp.tools.catalog import get_catalog_work, search_catalog, trending_books
from pagetrail.mcp.tools.library import add_work, check_progress, get_work, list_library, log_session
from pagetrail.services.ledger_store import LedgerStore


@pytest.fixture
async def pt(client):
    await client.post("/api/auth/signup", json={"username": "mcp", "email": "mcp@example.com", "password": "pw"})
    client.cookies.clear()
    pt = PagetrailClient(client)
    await pt.login("mcp@example.com", "pw")
    return pt


async def _dune(pt):
    return await add_work(pt, open_library_key="/works/OL1W", title="Dune", author_name="Frank Herbert")


# --- catalog ---

@pytest.mark.asyncio
async def test_search_catalog(pt):
    result = await search_catalog(pt, query="dune")
    assert result[0]["open_library_key"] == "/works/OL1W"


@pytest.mark.asyncio
async def test_trending_books(pt):
    result = await trending_books(pt)
    assert len(result) == 1


@pytest.mark.asyncio
async def test_get_catalog_work_accepts_full_key(pt):
    result = await get_catalog_work(pt, work_key="/works/OL1W")
    assert result["title"] == "Dune"


# --- library ---

@pytest.mark.asyncio
async def test_add_work_returns_work(pt):
    work = await _dune(pt)
    assert work["title"] == "Dune"
    assert work["current_page_number"] == 0


@pytest.mark.asyncio
async def test_add_work_duplicate(pt):
    await _dune(pt)
    result = await _dune(pt)
    assert result["error"] is True
    assert result["status"] == 409


@pytest.mark.asyncio
async def test_log_session_and_get_work(pt):
    work = await _dune(pt)
    result = await log_session(pt, work_id=work["id"], pages_read=42, notes="Chapter one")
    assert result["updated_current_page"] == 42

    detail = await get_work(pt, work_id=work["id"])
    assert detail["current_page_number"] == 42
    assert detail["reading_sessions"][0]["notes"] == "Chapter one"


@pytest.mark.asyncio
async def test_log_session_invalid(pt):
    work = await _dune(pt)
    result = await log_session(pt, work_id=work["id"], pages_read=0)
    assert result["error"] is True
    assert result["status"] == 400


@pytest.mark.asyncio
async def test_log_session_partial_failure(pt, monkeypatch):
    work = await _dune(pt)

    async def broken_update(self, user_id, work_id, new_value):
        raise OperationalError("UPDATE user_books", {}, Exception("database is locked"))

    monkeypatch.setattr(LedgerStore, "update_current_page", broken_update)

    result = await log_session(pt, work_id=work["id"], pages_read=5)
    assert result["error"] is True
    assert result["partial"] is True
    assert result["session"]["pages_read_in_session"] == 5


@pytest.mark.asyncio
async def test_list_library(pt):
    assert await list_library(pt) == []
    await _dune(pt)
    result = await list_library(pt)
    assert [w["title"] for w in result] == ["Dune"]


@pytest.mark.asyncio
async def test_check_progress(pt):
    work = await _dune(pt)
    await log_session(pt, work_id=work["id"], pages_read=10)

    report = await check_progress(pt, work_id=work["id"])
    assert report["drifted"] is False
    assert report["recomputed_page"] == 10

    repaired = await check_progress(pt, work_id=work["id"], repair=True)
    assert repaired["work"]["current_page_number"] == 10
