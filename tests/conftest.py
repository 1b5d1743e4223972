from __future__ import annotations

import asyncio
import os
import tempfile
import uuid
from datetime import date, datetime, time, timedelta, timezone

import pytest

os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="tripwise-logs-"))

from tripwise.schemas.inventory import Flight, Hotel, HotelAvailability  # noqa: E402
from tripwise.services.airport_service import AirportService  # noqa: E402
from tripwise.services.providers import FlightProvider, HotelProvider  # noqa: E402


def make_flight(origin: str, destination: str, day: date, price: float, seats: int = 100) -> Flight:
    departure = datetime.combine(day, time(9, 0), tzinfo=timezone.utc)
    return Flight(
        airline="Test Air",
        flight_number=f"TA{abs(hash((origin, destination, day, price))) % 9000 + 100}",
        origin=origin,
        destination=destination,
        departure_time=departure,
        arrival_time=departure + timedelta(hours=3),
        price=price,
        available_seats=seats,
    )


def make_hotel(city: str, stars: int, nightly: float, rooms: int = 10) -> Hotel:
    return Hotel(
        name=f"{stars}-Star {city}",
        location=city,
        address=f"1 Main Street, {city}",
        star_rating=stars,
        price_per_night=nightly,
        available_rooms=rooms,
        amenities=["Free WiFi"],
    )


class FakeInventory(FlightProvider, HotelProvider):
    """Scriptable provider that records every call it receives."""

    def __init__(self):
        self.flights: dict[tuple[str, str, date], list[Flight]] = {}
        self.hotels: dict[str, list[Hotel]] = {}
        self.extra_flights: list[Flight] = []
        self.fail_on: set[tuple[str, str, date]] = set()
        self.delay = 0.0
        self.flight_calls: list[tuple[str, str, date, int]] = []
        self.hotel_calls: list[tuple[str, date, date, int, int]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def add_flight(self, origin: str, destination: str, day: date, price: float, seats: int = 100) -> Flight:
        flight = make_flight(origin, destination, day, price, seats)
        self.flights.setdefault((origin, destination, day), []).append(flight)
        return flight

    def add_unlisted_flight(self, origin: str, destination: str, day: date, price: float) -> Flight:
        """A flight reachable only through get_flight_by_id."""
        flight = make_flight(origin, destination, day, price)
        self.extra_flights.append(flight)
        return flight

    def add_hotel(self, city: str, stars: int, nightly: float, rooms: int = 10) -> Hotel:
        hotel = make_hotel(city, stars, nightly, rooms)
        self.hotels.setdefault(city, []).append(hotel)
        return hotel

    async def _enter(self):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        if self.delay:
            await asyncio.sleep(self.delay)
        else:
            await asyncio.sleep(0)

    async def search_flights(self, origin, destination, departure_date, passengers=1):
        self.flight_calls.append((origin, destination, departure_date, passengers))
        await self._enter()
        try:
            if (origin, destination, departure_date) in self.fail_on:
                raise RuntimeError("provider unavailable")
            return [
                f for f in self.flights.get((origin, destination, departure_date), [])
                if f.available_seats >= passengers
            ]
        finally:
            self.in_flight -= 1

    async def get_flight_by_id(self, flight_id: uuid.UUID):
        for flights in self.flights.values():
            for f in flights:
                if f.id == flight_id:
                    return f
        return next((f for f in self.extra_flights if f.id == flight_id), None)

    async def search_hotels(self, location, check_in, check_out, guests=1, rooms=1):
        self.hotel_calls.append((location, check_in, check_out, guests, rooms))
        await self._enter()
        try:
            nights = (check_out - check_in).days
            if nights <= 0:
                return []
            offers = [
                HotelAvailability(
                    hotel=h,
                    nights=nights,
                    total_price=round(h.price_per_night * nights * rooms, 2),
                )
                for h in self.hotels.get(location, [])
                if h.available_rooms >= rooms
            ]
            return sorted(offers, key=lambda h: h.total_price)
        finally:
            self.in_flight -= 1

    async def get_hotel_by_id(self, hotel_id: uuid.UUID):
        for hotels in self.hotels.values():
            for h in hotels:
                if h.id == hotel_id:
                    return h
        return None


@pytest.fixture()
def inventory() -> FakeInventory:
    return FakeInventory()


@pytest.fixture()
def airports() -> AirportService:
    return AirportService()
