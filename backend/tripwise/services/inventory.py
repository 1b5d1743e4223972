"""Seeded in-memory flights and hotels behind the provider interfaces."""

import hashlib
import logging
import random
import uuid
from datetime import date, datetime, time, timedelta, timezone

from tripwise.config import settings
from tripwise.data.destinations import AIRPORT_CODES, CITY_NAMES
from tripwise.schemas.inventory import Flight, Hotel, HotelAvailability
from tripwise.services.providers import FlightProvider, HotelProvider

logger = logging.getLogger(__name__)

AIRLINES = ["TripWise Airways", "SkyHigh Airlines", "Global Express", "Pacific Wings", "Atlantic Jet"]

HOTEL_NAMES = [
    "Grand Palace Hotel", "Seaside Resort", "Mountain View Lodge", "City Center Inn",
    "Luxury Suites", "Comfort Stay", "Royal Gardens Hotel", "Sunset Beach Resort",
]

STREETS = ["Main", "Oak", "Park", "Cedar", "Elm", "View", "Lake", "Hill", "River", "Ocean"]

AMENITY_SETS = [
    ["Free WiFi", "Pool", "Gym", "Restaurant", "Bar", "Spa"],
    ["Free WiFi", "Pool", "Gym", "Room Service", "Parking"],
    ["Free WiFi", "Gym", "Business Center", "Restaurant"],
    ["Free WiFi", "Pool", "Beach Access", "Restaurant", "Bar", "Spa", "Tennis Court"],
    ["Free WiFi", "Gym", "Parking", "Pet Friendly"],
]


def _seeded_rng(seed_str: str) -> random.Random:
    seed = int(hashlib.md5(seed_str.encode()).hexdigest()[:8], 16)
    return random.Random(seed)


def _seeded_uuid(rng: random.Random) -> uuid.UUID:
    return uuid.UUID(int=rng.getrandbits(128), version=4)


class InventoryService(FlightProvider, HotelProvider):
    """Generates a deterministic inventory for the supported destinations.

    Flights cover the next `horizon_days` days and are regenerated when the UTC
    date rolls over. Hotels are generated once per city.
    """

    def __init__(
        self,
        seed: str | None = None,
        horizon_days: int | None = None,
        airports: list[str] | None = None,
        cities: list[str] | None = None,
    ):
        self._seed = seed or settings.inventory_seed
        self._horizon_days = horizon_days or settings.inventory_horizon_days
        self._airports = airports or AIRPORT_CODES
        self._cities = cities or CITY_NAMES
        self._flights: list[Flight] = []
        self._flights_by_id: dict[uuid.UUID, Flight] = {}
        self._flights_by_route: dict[tuple[str, str, date], list[Flight]] = {}
        self._hotels: list[Hotel] = []
        self._hotels_by_id: dict[uuid.UUID, Hotel] = {}
        self._hotels_by_city: dict[str, list[Hotel]] = {}
        self._generated_for: date | None = None

    # ─── Generation ───

    def _ensure_generated(self, today: date | None = None) -> None:
        today = today or datetime.now(timezone.utc).date()
        if self._generated_for == today and self._flights:
            return
        self._flights = self._generate_flights(today)
        self._flights_by_id = {f.id: f for f in self._flights}
        self._flights_by_route = {}
        for f in self._flights:
            key = (f.origin, f.destination, f.departure_time.date())
            self._flights_by_route.setdefault(key, []).append(f)
        for flights in self._flights_by_route.values():
            flights.sort(key=lambda f: f.departure_time)

        if not self._hotels:
            self._hotels = self._generate_hotels()
            self._hotels_by_id = {h.id: h for h in self._hotels}
            for h in self._hotels:
                self._hotels_by_city.setdefault(h.location.lower(), []).append(h)
        self._generated_for = today
        logger.info(
            f"Inventory generated for {today.isoformat()}: "
            f"{len(self._flights)} flights, {len(self._hotels)} hotels"
        )

    def _generate_flights(self, today: date) -> list[Flight]:
        flights = []
        for origin in self._airports:
            for destination in self._airports:
                if origin == destination:
                    continue
                for day_offset in range(1, self._horizon_days + 1):
                    departure_date = today + timedelta(days=day_offset)
                    flights.extend(self._route_day_flights(origin, destination, departure_date))
        return flights

    def _route_day_flights(self, origin: str, destination: str, departure_date: date) -> list[Flight]:
        """Deterministic 2-3 flights for one route and day."""
        rng = _seeded_rng(f"{self._seed}:{origin}{destination}{departure_date.isoformat()}")
        flights = []
        for _ in range(rng.randint(2, 3)):
            airline = rng.choice(AIRLINES)
            dep_time = datetime.combine(
                departure_date,
                time(rng.randint(6, 21), rng.choice([0, 15, 30, 45])),
                tzinfo=timezone.utc,
            )
            duration = timedelta(hours=rng.randint(2, 11), minutes=rng.choice([0, 15, 30, 45]))
            flights.append(Flight(
                id=_seeded_uuid(rng),
                airline=airline,
                flight_number=f"{airline[:2].upper()}{rng.randint(100, 9999)}",
                origin=origin,
                destination=destination,
                departure_time=dep_time,
                arrival_time=dep_time + duration,
                price=round(rng.uniform(150, 950), 2),
                available_seats=rng.randint(5, 179),
            ))
        return flights

    def _generate_hotels(self) -> list[Hotel]:
        hotels = []
        for city in self._cities:
            rng = _seeded_rng(f"{self._seed}:hotel_{city}")
            for _ in range(rng.randint(3, 7)):
                stars = rng.randint(2, 5)
                hotels.append(Hotel(
                    id=_seeded_uuid(rng),
                    name=f"{rng.choice(HOTEL_NAMES)} {city}",
                    location=city,
                    address=f"{rng.randint(1, 998)} {rng.choice(STREETS)} Street, {city}",
                    star_rating=stars,
                    price_per_night=round(stars * 50 + rng.uniform(0, 200), 2),
                    available_rooms=rng.randint(5, 49),
                    amenities=list(rng.choice(AMENITY_SETS)),
                ))
        return hotels

    # ─── FlightProvider ───

    async def search_flights(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        passengers: int = 1,
    ) -> list[Flight]:
        self._ensure_generated()
        route = (origin.upper(), destination.upper(), departure_date)
        return [
            f for f in self._flights_by_route.get(route, [])
            if f.available_seats >= passengers
        ]

    async def get_flight_by_id(self, flight_id: uuid.UUID) -> Flight | None:
        self._ensure_generated()
        return self._flights_by_id.get(flight_id)

    # ─── HotelProvider ───

    async def search_hotels(
        self,
        location: str,
        check_in: date,
        check_out: date,
        guests: int = 1,
        rooms: int = 1,
    ) -> list[HotelAvailability]:
        self._ensure_generated()
        nights = (check_out - check_in).days
        if nights <= 0:
            return []

        matches = [
            HotelAvailability(
                hotel=h,
                nights=nights,
                total_price=round(h.price_per_night * nights * rooms, 2),
            )
            for h in self._hotels_by_city.get(location.lower(), [])
            if h.available_rooms >= rooms
        ]
        return sorted(matches, key=lambda h: h.total_price)

    async def get_hotel_by_id(self, hotel_id: uuid.UUID) -> Hotel | None:
        self._ensure_generated()
        return self._hotels_by_id.get(hotel_id)

    def list_hotels(self, location: str | None = None) -> list[Hotel]:
        self._ensure_generated()
        if location is None:
            return list(self._hotels)
        return list(self._hotels_by_city.get(location.lower(), []))


inventory_service = InventoryService()
