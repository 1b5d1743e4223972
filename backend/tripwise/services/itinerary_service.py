"""Itinerary service — composes and edits saved multi-city itineraries."""

import logging
import uuid
from datetime import date, datetime, timezone

from tripwise.schemas.inventory import Flight, HotelAvailability
from tripwise.schemas.itinerary import (
    CreateItineraryRequest,
    ItineraryLeg,
    ItinerarySegmentUpdate,
    ItineraryStatus,
    SavedItinerary,
    UpdateItineraryRequest,
)
from tripwise.services.airport_service import AirportService, airport_service
from tripwise.services.inventory import inventory_service
from tripwise.services.itinerary_store import ItineraryStore, itinerary_store
from tripwise.services.providers import (
    FlightProvider,
    HotelProvider,
    cheapest_flight,
    cheapest_hotel,
)

logger = logging.getLogger(__name__)


def leg_cost(flight: Flight | None, hotel: HotelAvailability | None, travelers: int) -> float:
    flight_cost = flight.price * travelers if flight else 0.0
    hotel_cost = hotel.total_price if hotel else 0.0
    return round(flight_cost + hotel_cost, 2)


def build_leg(
    leg_number: int,
    from_location: str,
    to_location: str,
    flight_date: date,
    travelers: int,
    flights: list[Flight],
    hotels: list[HotelAvailability],
    selected_flight: Flight | None,
    selected_hotel: HotelAvailability | None,
    hotel_check_in: date | None = None,
    hotel_check_out: date | None = None,
) -> ItineraryLeg:
    """Build a leg with its cost and alternatives fixed at construction."""
    return ItineraryLeg(
        leg_number=leg_number,
        from_location=from_location,
        to_location=to_location,
        flight_date=flight_date,
        hotel_check_in=hotel_check_in,
        hotel_check_out=hotel_check_out,
        selected_flight=selected_flight,
        selected_hotel=selected_hotel,
        alternative_flights=[
            f for f in flights if selected_flight is None or f.id != selected_flight.id
        ],
        alternative_hotels=[
            h for h in hotels if selected_hotel is None or h.hotel.id != selected_hotel.hotel.id
        ],
        leg_cost=leg_cost(selected_flight, selected_hotel, travelers),
    )


def _pick_flight(flights: list[Flight], preferred_id: uuid.UUID | None) -> Flight | None:
    if preferred_id is not None:
        preferred = next((f for f in flights if f.id == preferred_id), None)
        if preferred is not None:
            return preferred
    return cheapest_flight(flights)


def _pick_hotel(
    hotels: list[HotelAvailability], preferred_id: uuid.UUID | None
) -> HotelAvailability | None:
    if preferred_id is not None:
        preferred = next((h for h in hotels if h.hotel.id == preferred_id), None)
        if preferred is not None:
            return preferred
    return cheapest_hotel(hotels)


class ItineraryService:
    """Builds itineraries leg by leg and applies per-leg flight/hotel swaps."""

    def __init__(
        self,
        flights: FlightProvider | None = None,
        hotels: HotelProvider | None = None,
        store: ItineraryStore | None = None,
        airports: AirportService | None = None,
    ):
        self._flights = flights or inventory_service
        self._hotels = hotels or inventory_service
        self._store = store or itinerary_store
        self._airports = airports or airport_service

    async def create_itinerary(self, request: CreateItineraryRequest) -> SavedItinerary:
        """
        Resolve every segment in order, then close the loop with a return leg.

        Each leg departs from the previous leg's destination. The return leg
        flies from the last destination back to the origin on the last
        segment's departure date and carries no hotel.
        """
        legs: list[ItineraryLeg] = []
        total_cost = 0.0
        total_nights = 0
        previous_location = request.origin

        for number, segment in enumerate(request.segments, start=1):
            airport, city = self._airports.resolve(segment.destination)

            flights = await self._flights.search_flights(
                previous_location, airport, segment.arrival_date, request.travelers
            )
            hotels = await self._hotels.search_hotels(
                city, segment.arrival_date, segment.departure_date,
                guests=request.travelers, rooms=1,
            )

            leg = build_leg(
                leg_number=number,
                from_location=previous_location,
                to_location=airport,
                flight_date=segment.arrival_date,
                travelers=request.travelers,
                flights=flights,
                hotels=hotels,
                selected_flight=_pick_flight(flights, segment.preferred_flight_id),
                selected_hotel=_pick_hotel(hotels, segment.preferred_hotel_id),
                hotel_check_in=segment.arrival_date,
                hotel_check_out=segment.departure_date,
            )
            legs.append(leg)
            total_cost += leg.leg_cost
            total_nights += (segment.departure_date - segment.arrival_date).days
            previous_location = airport

        return_date = request.segments[-1].departure_date
        return_flights = await self._flights.search_flights(
            previous_location, request.origin, return_date, request.travelers
        )
        return_leg = build_leg(
            leg_number=len(legs) + 1,
            from_location=previous_location,
            to_location=request.origin,
            flight_date=return_date,
            travelers=request.travelers,
            flights=return_flights,
            hotels=[],
            selected_flight=cheapest_flight(return_flights),
            selected_hotel=None,
        )
        legs.append(return_leg)
        total_cost += return_leg.leg_cost

        itinerary = SavedItinerary(
            name=request.name,
            description=request.description,
            origin=request.origin,
            travelers=request.travelers,
            legs=legs,
            estimated_total_cost=round(total_cost, 2),
            total_nights=total_nights,
            status=ItineraryStatus.DRAFT,
        )
        await self._store.add(itinerary)
        logger.info(
            f"Itinerary {itinerary.id} created: {len(legs)} legs, "
            f"{total_nights} nights, est. {itinerary.estimated_total_cost}"
        )
        return itinerary

    async def get_itinerary(self, itinerary_id: uuid.UUID) -> SavedItinerary | None:
        return await self._store.get(itinerary_id)

    async def list_itineraries(self) -> list[SavedItinerary]:
        return await self._store.list_all()

    async def delete_itinerary(self, itinerary_id: uuid.UUID) -> bool:
        deleted = await self._store.remove(itinerary_id)
        if deleted:
            logger.info(f"Itinerary {itinerary_id} deleted")
        return deleted

    async def update_itinerary(
        self,
        itinerary_id: uuid.UUID,
        request: UpdateItineraryRequest,
    ) -> SavedItinerary | None:
        """
        Apply top-level field changes and per-leg flight/hotel swaps in place.

        Returns None when the itinerary does not exist.
        """

        async def _apply(existing: SavedItinerary) -> SavedItinerary:
            legs = list(existing.legs)
            total = existing.estimated_total_cost

            for update in request.segment_updates or []:
                index = next(
                    (i for i, leg in enumerate(legs) if leg.leg_number == update.leg_number),
                    None,
                )
                if index is None:
                    logger.warning(
                        f"Itinerary {itinerary_id}: no leg {update.leg_number}, update skipped"
                    )
                    continue

                old_leg = legs[index]
                new_leg = await self._apply_leg_update(old_leg, update, existing.travelers)
                legs[index] = new_leg
                total = total - old_leg.leg_cost + new_leg.leg_cost

            return existing.model_copy(update={
                "name": request.name if request.name is not None else existing.name,
                "description": (
                    request.description if request.description is not None else existing.description
                ),
                "travelers": request.travelers if request.travelers is not None else existing.travelers,
                "status": request.status if request.status is not None else existing.status,
                "legs": legs,
                "estimated_total_cost": round(total, 2),
                "last_modified": datetime.now(timezone.utc),
            })

        updated = await self._store.update(itinerary_id, _apply)
        if updated is not None:
            logger.info(
                f"Itinerary {itinerary_id} updated: "
                f"{len(request.segment_updates or [])} leg changes, est. {updated.estimated_total_cost}"
            )
        return updated

    async def _apply_leg_update(
        self,
        leg: ItineraryLeg,
        update: ItinerarySegmentUpdate,
        travelers: int,
    ) -> ItineraryLeg:
        flight = leg.selected_flight
        hotel = leg.selected_hotel
        alternative_flights = leg.alternative_flights
        alternative_hotels = leg.alternative_hotels

        if update.new_flight_id is not None:
            flight = next(
                (f for f in leg.alternative_flights if f.id == update.new_flight_id),
                None,
            ) or await self._flights.get_flight_by_id(update.new_flight_id)

            # the replaced flight goes back into the alternatives
            pool = list(leg.alternative_flights)
            if leg.selected_flight is not None and all(f.id != leg.selected_flight.id for f in pool):
                pool.append(leg.selected_flight)
            alternative_flights = [f for f in pool if flight is None or f.id != flight.id]

        if (
            update.new_hotel_id is not None
            and leg.hotel_check_in is not None
            and leg.hotel_check_out is not None
        ):
            hotels = await self._hotels.search_hotels(
                self._airports.city_for(leg.to_location),
                leg.hotel_check_in,
                leg.hotel_check_out,
                guests=travelers,
                rooms=1,
            )
            hotel = next((h for h in hotels if h.hotel.id == update.new_hotel_id), None)
            alternative_hotels = [h for h in hotels if hotel is None or h.hotel.id != hotel.hotel.id]

        return leg.model_copy(update={
            "selected_flight": flight,
            "selected_hotel": hotel,
            "alternative_flights": alternative_flights,
            "alternative_hotels": alternative_hotels,
            "leg_cost": leg_cost(flight, hotel, travelers),
        })


itinerary_service = ItineraryService()
