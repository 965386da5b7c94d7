"""Tests for merging tracked works with catalog data and session history."""

import asyncio

import pytest
from sqlalchemy.exc import OperationalError

from pagetrail.services.enrichment import EnrichmentAssembler
from pagetrail.services.openlibrary import Enrichment


@pytest.fixture
async def work(store):
    return await store.create_tracked_work("alice", "/works/OL1W", "Dune", "Frank Herbert", None)


@pytest.mark.asyncio
async def test_assemble_merges_enrichment_and_sessions(catalog, store, work):
    await store.append_progress_event(work.id, 10)
    await store.append_progress_event(work.id, 20)

    view = await EnrichmentAssembler(catalog, store).assemble(work)

    assert catalog.bib_calls == ["OL1W"]
    assert view.work.id == work.id
    assert view.enriched is True
    assert view.enrichment.number_of_pages == 412
    assert [s.pages_read_in_session for s in view.sessions] == [20, 10]


@pytest.mark.asyncio
async def test_assemble_empty_enrichment_uses_defaults(catalog, store, work):
    catalog.failing.add("OL1W")
    await store.append_progress_event(work.id, 10)

    view = await EnrichmentAssembler(catalog, store).assemble(work)

    assert view.enriched is False
    assert view.enrichment == Enrichment()
    assert view.enrichment.description == "N/A"
    assert len(view.sessions) == 1


@pytest.mark.asyncio
async def test_assemble_catalog_exception_is_contained(catalog, store, work, monkeypatch):
    async def explode(olid):
        raise RuntimeError("catalog client bug")

    monkeypatch.setattr(catalog, "fetch_bibliographic_data", explode)

    view = await EnrichmentAssembler(catalog, store).assemble(work)
    assert view.enriched is False
    assert view.enrichment == Enrichment()


@pytest.mark.asyncio
async def test_assemble_slow_catalog_times_out(catalog, store, work, monkeypatch):
    async def slow(olid):
        await asyncio.sleep(5)
        return Enrichment(description="too late")

    monkeypatch.setattr(catalog, "fetch_bibliographic_data", slow)
    await store.append_progress_event(work.id, 3)

    view = await EnrichmentAssembler(catalog, store, timeout=0.05).assemble(work)
    assert view.enriched is False
    assert view.enrichment.description == "N/A"
    assert len(view.sessions) == 1


@pytest.mark.asyncio
async def test_assemble_session_failure_keeps_enrichment(catalog, store, work, monkeypatch):
    async def broken(work_id):
        raise OperationalError("SELECT reading_sessions", {}, Exception("disk I/O error"))

    monkeypatch.setattr(store, "list_progress_events", broken)

    view = await EnrichmentAssembler(catalog, store).assemble(work)
    assert view.sessions == []
    assert view.enriched is True


@pytest.mark.asyncio
async def test_assemble_key_without_work_prefix_skips_catalog(catalog, store):
    work = await store.create_tracked_work("alice", "OL9M", "Edition", "Someone", None)

    view = await EnrichmentAssembler(catalog, store).assemble(work)
    assert catalog.bib_calls == []
    assert view.enriched is False
