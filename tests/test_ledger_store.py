"""Tests for the tracked-work and reading-session store."""

import pytest

from pagetrail.errors import Conflict


async def _add(store, user_id="alice", key="/works/OL1W", title="Dune"):
    return await store.create_tracked_work(user_id, key, title, "Frank Herbert", None)


@pytest.mark.asyncio
async def test_create_tracked_work_defaults(store):
    work = await _add(store)
    assert work.current_page_number == 0
    assert work.status == "to-read"
    assert work.image_url is None
    assert work.start_date is None


@pytest.mark.asyncio
async def test_find_tracked_work_scoped_by_user(store):
    await _add(store, user_id="alice")
    assert await store.find_tracked_work("alice", "/works/OL1W") is not None
    assert await store.find_tracked_work("bob", "/works/OL1W") is None


@pytest.mark.asyncio
async def test_create_tracked_work_rejects_duplicate(store):
    await _add(store)
    with pytest.raises(Conflict):
        await _add(store)
    assert len(await store.list_tracked_works("alice")) == 1


@pytest.mark.asyncio
async def test_same_work_for_two_users(store):
    a = await _add(store, user_id="alice")
    b = await _add(store, user_id="bob")
    assert a.id != b.id


@pytest.mark.asyncio
async def test_list_tracked_works(store):
    await _add(store, key="/works/OL1W", title="Dune")
    await _add(store, key="/works/OL2W", title="Dune Messiah")
    await _add(store, user_id="bob", key="/works/OL3W", title="Neuromancer")

    titles = {w.title for w in await store.list_tracked_works("alice")}
    assert titles == {"Dune", "Dune Messiah"}
    assert await store.list_tracked_works("carol") == []


@pytest.mark.asyncio
async def test_get_tracked_work_requires_owner(store):
    work = await _add(store)
    assert (await store.get_tracked_work("alice", work.id)).title == "Dune"
    assert await store.get_tracked_work("bob", work.id) is None


@pytest.mark.asyncio
async def test_progress_events_newest_first(store):
    work = await _add(store)
    first = await store.append_progress_event(work.id, 10, "prologue")
    second = await store.append_progress_event(work.id, 20, None)
    third = await store.append_progress_event(work.id, 5, "short one")

    events = await store.list_progress_events(work.id)
    assert [e.id for e in events] == [third.id, second.id, first.id]
    assert events[-1].notes == "prologue"
    assert events[0].session_date is not None


@pytest.mark.asyncio
async def test_update_current_page(store):
    work = await _add(store)
    updated = await store.update_current_page("alice", work.id, 42)
    assert updated.current_page_number == 42
    assert (await store.get_tracked_work("alice", work.id)).current_page_number == 42


@pytest.mark.asyncio
async def test_update_current_page_other_user(store):
    work = await _add(store)
    assert await store.update_current_page("bob", work.id, 42) is None
    assert (await store.get_tracked_work("alice", work.id)).current_page_number == 0


@pytest.mark.asyncio
async def test_sum_pages_read(store):
    work = await _add(store)
    assert await store.sum_pages_read(work.id) == 0
    await store.append_progress_event(work.id, 10)
    await store.append_progress_event(work.id, 32)
    assert await store.sum_pages_read(work.id) == 42


@pytest.mark.asyncio
async def test_keys_differing_only_in_case_are_distinct_works(store):
    upper = await _add(store, key="/works/OL1W")
    lower = await _add(store, key="/works/ol1w")
    assert upper.id != lower.id
    assert len(await store.list_tracked_works("alice")) == 2


@pytest.mark.asyncio
async def test_long_catalog_key(store):
    key = "/works/" + "OL" * 100 + "W"
    work = await _add(store, key=key)
    assert (await store.find_tracked_work("alice", key)).id == work.id
