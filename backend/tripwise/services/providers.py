"""Flight and hotel provider interfaces consumed by the planning services."""

import uuid
from abc import ABC, abstractmethod
from datetime import date

from tripwise.schemas.inventory import Flight, Hotel, HotelAvailability


class FlightProvider(ABC):
    """Flight inventory. Implementations must be safe to call concurrently."""

    @abstractmethod
    async def search_flights(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        passengers: int = 1,
    ) -> list[Flight]:
        ...

    @abstractmethod
    async def get_flight_by_id(self, flight_id: uuid.UUID) -> Flight | None:
        ...


class HotelProvider(ABC):
    """Hotel inventory. Implementations must be safe to call concurrently."""

    @abstractmethod
    async def search_hotels(
        self,
        location: str,
        check_in: date,
        check_out: date,
        guests: int = 1,
        rooms: int = 1,
    ) -> list[HotelAvailability]:
        ...

    @abstractmethod
    async def get_hotel_by_id(self, hotel_id: uuid.UUID) -> Hotel | None:
        ...


def cheapest_flight(flights: list[Flight]) -> Flight | None:
    return min(flights, key=lambda f: f.price, default=None)


def cheapest_hotel(hotels: list[HotelAvailability]) -> HotelAvailability | None:
    return min(hotels, key=lambda h: h.total_price, default=None)
