import asyncio
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from tripwise.schemas.itinerary import SavedItinerary
from tripwise.services.itinerary_store import ItineraryStore


def _itinerary(name="Trip", created_at=None, cost=0.0) -> SavedItinerary:
    fields = dict(
        name=name,
        origin="JFK",
        travelers=1,
        legs=[],
        estimated_total_cost=cost,
        total_nights=0,
    )
    if created_at is not None:
        fields["created_at"] = created_at
    return SavedItinerary(**fields)


@pytest.mark.asyncio
async def test_list_newest_first():
    store = ItineraryStore()
    now = datetime.now(timezone.utc)
    older = await store.add(_itinerary("older", now - timedelta(hours=1)))
    newest = await store.add(_itinerary("newest", now))
    middle = await store.add(_itinerary("middle", now - timedelta(minutes=5)))

    assert [i.id for i in await store.list_all()] == [newest.id, middle.id, older.id]


@pytest.mark.asyncio
async def test_remove_then_get():
    store = ItineraryStore()
    item = await store.add(_itinerary())

    assert await store.remove(item.id) is True
    assert await store.get(item.id) is None
    assert await store.remove(item.id) is False


@pytest.mark.asyncio
async def test_update_unknown_id():
    store = ItineraryStore()

    async def _mutate(current):
        raise AssertionError("must not be called")

    assert await store.update(uuid.uuid4(), _mutate) is None


@pytest.mark.asyncio
async def test_concurrent_updates_are_not_lost():
    store = ItineraryStore()
    item = await store.add(_itinerary(cost=100.0))

    async def _bump(current):
        await asyncio.sleep(0)
        return current.model_copy(update={"estimated_total_cost": current.estimated_total_cost + 1})

    await asyncio.gather(*(store.update(item.id, _bump) for _ in range(20)))

    assert (await store.get(item.id)).estimated_total_cost == 120.0


@pytest.mark.asyncio
async def test_delete_during_update_discards_result():
    store = ItineraryStore()
    item = await store.add(_itinerary())
    entered = asyncio.Event()
    release = asyncio.Event()

    async def _slow(current):
        entered.set()
        await release.wait()
        return current.model_copy(update={"name": "changed"})

    update_task = asyncio.create_task(store.update(item.id, _slow))
    await entered.wait()
    assert await store.remove(item.id) is True
    release.set()

    assert await update_task is None
    assert await store.get(item.id) is None


@pytest.mark.asyncio
async def test_updates_to_different_ids_do_not_block():
    store = ItineraryStore()
    first = await store.add(_itinerary("first"))
    second = await store.add(_itinerary("second"))
    release = asyncio.Event()

    async def _blocked(current):
        await release.wait()
        return current

    async def _rename(current):
        return current.model_copy(update={"name": "renamed"})

    blocked = asyncio.create_task(store.update(first.id, _blocked))
    await asyncio.sleep(0)

    renamed = await asyncio.wait_for(store.update(second.id, _rename), timeout=1)
    assert renamed.name == "renamed"

    release.set()
    await blocked


@pytest.mark.asyncio
async def test_updates_to_unknown_ids_leave_no_locks():
    store = ItineraryStore()

    async def _mutate(current):
        return current

    for _ in range(50):
        assert await store.update(uuid.uuid4(), _mutate) is None

    assert store._key_locks == {}


@pytest.mark.asyncio
async def test_key_lock_dropped_with_itinerary():
    store = ItineraryStore()
    item = await store.add(_itinerary())

    async def _mutate(current):
        return current

    await store.update(item.id, _mutate)
    assert item.id in store._key_locks

    await store.remove(item.id)
    assert await store.update(item.id, _mutate) is None
    assert store._key_locks == {}
