"""In-memory itinerary store with single-writer-per-key updates."""

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Callable

from tripwise.schemas.itinerary import SavedItinerary

logger = logging.getLogger(__name__)


class ItineraryStore:
    """Holds saved itineraries for the lifetime of the process.

    Insert, replace and remove are atomic. `update` holds a per-itinerary lock
    across its read-modify-write so concurrent updates to one id never lose
    each other's changes. Key locks exist only for stored itineraries and
    are dropped together with them.
    """

    def __init__(self):
        self._items: dict[uuid.UUID, SavedItinerary] = {}
        self._key_locks: dict[uuid.UUID, asyncio.Lock] = {}
        self._map_lock = asyncio.Lock()

    async def add(self, itinerary: SavedItinerary) -> SavedItinerary:
        async with self._map_lock:
            self._items[itinerary.id] = itinerary
        return itinerary

    async def get(self, itinerary_id: uuid.UUID) -> SavedItinerary | None:
        return self._items.get(itinerary_id)

    async def list_all(self) -> list[SavedItinerary]:
        """All itineraries, newest first."""
        return sorted(self._items.values(), key=lambda i: i.created_at, reverse=True)

    async def remove(self, itinerary_id: uuid.UUID) -> bool:
        async with self._map_lock:
            removed = self._items.pop(itinerary_id, None)
            self._key_locks.pop(itinerary_id, None)
        return removed is not None

    async def update(
        self,
        itinerary_id: uuid.UUID,
        mutate: Callable[[SavedItinerary], Awaitable[SavedItinerary]],
    ) -> SavedItinerary | None:
        """
        Apply `mutate` to the current itinerary and store the result.

        Returns None when the id is unknown, or when the itinerary is deleted
        while the update is in flight.
        """
        async with self._map_lock:
            if itinerary_id not in self._items:
                return None
            lock = self._key_locks.setdefault(itinerary_id, asyncio.Lock())

        async with lock:
            current = self._items.get(itinerary_id)
            if current is None:
                return None

            updated = await mutate(current)

            async with self._map_lock:
                if itinerary_id not in self._items:
                    logger.info(f"Itinerary {itinerary_id} deleted during update; discarding")
                    return None
                self._items[itinerary_id] = updated
            return updated

    async def clear(self) -> None:
        async with self._map_lock:
            self._items.clear()
            self._key_locks.clear()


itinerary_store = ItineraryStore()
