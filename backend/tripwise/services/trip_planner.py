"""Trip planner: single round-trip plans and a deal finder across dates and destinations."""

import asyncio
import logging
from datetime import date, timedelta
from functools import partial

from tripwise.schemas.inventory import Flight, HotelAvailability
from tripwise.schemas.planning import (
    DealFinderRequest,
    DealFinderResponse,
    TripDeal,
    TripPlan,
    TripPlanRequest,
    TripRecommendation,
    TripSummary,
)
from tripwise.services.airport_service import AirportService, airport_service
from tripwise.services.fanout import gather_bounded
from tripwise.services.inventory import inventory_service
from tripwise.services.providers import (
    FlightProvider,
    HotelProvider,
    cheapest_flight,
    cheapest_hotel,
)

logger = logging.getLogger(__name__)


def _trip_price(outbound: Flight, inbound: Flight, hotel: HotelAvailability, travelers: int) -> float:
    return (outbound.price + inbound.price) * travelers + hotel.total_price


class TripPlanner:
    def __init__(
        self,
        flights: FlightProvider | None = None,
        hotels: HotelProvider | None = None,
        airports: AirportService | None = None,
    ):
        self._flights = flights or inventory_service
        self._hotels = hotels or inventory_service
        self._airports = airports or airport_service

    # ─── Single trip ───

    async def plan_trip(self, request: TripPlanRequest, timeout: float | None = None) -> TripPlan:
        """
        Search outbound flights, return flights and hotels for one trip at once
        and recommend the cheapest combination.

        With a budget there is no recommendation unless the cheapest combination
        fits. A search that fails contributes an empty list.
        """
        origin = self._airports.airport_for(request.origin)
        airport, city = self._airports.resolve(request.destination)
        nights = (request.return_date - request.departure_date).days
        logger.info(
            f"Planning trip {origin} -> {airport} "
            f"{request.departure_date.isoformat()}..{request.return_date.isoformat()} "
            f"for {request.travelers} travelers"
        )

        async def _outbound():
            return "outbound", await self._flights.search_flights(
                origin, airport, request.departure_date, request.travelers
            )

        async def _return():
            return "return", await self._flights.search_flights(
                airport, origin, request.return_date, request.travelers
            )

        async def _hotels():
            return "hotels", await self._hotels.search_hotels(
                city, request.departure_date, request.return_date,
                guests=request.travelers, rooms=request.rooms,
            )

        found = dict(await gather_bounded(
            [_outbound, _return, _hotels], timeout=timeout, label="plan-trip"
        ))
        outbound_flights = found.get("outbound", [])
        return_flights = found.get("return", [])
        hotels = found.get("hotels", [])

        return TripPlan(
            origin=origin,
            destination=airport,
            destination_city=city,
            departure_date=request.departure_date,
            return_date=request.return_date,
            travelers=request.travelers,
            nights=nights,
            outbound_flights=outbound_flights,
            return_flights=return_flights,
            hotels=hotels,
            recommendation=self._recommend(request, outbound_flights, return_flights, hotels),
            summary=self._summarize(request, outbound_flights, return_flights, hotels),
        )

    @staticmethod
    def _recommend(
        request: TripPlanRequest,
        outbound_flights: list[Flight],
        return_flights: list[Flight],
        hotels: list[HotelAvailability],
    ) -> TripRecommendation | None:
        if not (outbound_flights and return_flights and hotels):
            return None

        outbound = cheapest_flight(outbound_flights)
        inbound = cheapest_flight(return_flights)
        hotel = cheapest_hotel(hotels)
        total = _trip_price(outbound, inbound, hotel, request.travelers)
        if request.max_budget is None or total <= request.max_budget:
            return TripRecommendation(
                outbound_flight=outbound,
                return_flight=inbound,
                hotel=hotel,
                total_price=round(total, 2),
                recommendation_reason="Best value combination based on lowest total price",
            )

        # every other combination costs at least as much as the cheapest one
        logger.info(f"Cheapest combination ${total:.2f} exceeds the ${request.max_budget:.2f} budget")
        return None

    @staticmethod
    def _summarize(
        request: TripPlanRequest,
        outbound_flights: list[Flight],
        return_flights: list[Flight],
        hotels: list[HotelAvailability],
    ) -> TripSummary:
        outbound = cheapest_flight(outbound_flights)
        inbound = cheapest_flight(return_flights)
        hotel = cheapest_hotel(hotels)

        flight_price = (
            (outbound.price if outbound else 0) + (inbound.price if inbound else 0)
        ) * request.travelers
        hotel_price = hotel.total_price if hotel else 0
        return TripSummary(
            total_outbound_flights=len(outbound_flights),
            total_return_flights=len(return_flights),
            total_hotels=len(hotels),
            cheapest_flight_price=round(flight_price, 2),
            cheapest_hotel_price=round(hotel_price, 2),
            cheapest_total_trip=round(flight_price + hotel_price, 2),
        )

    # ─── Deals ───

    async def find_deals(
        self,
        request: DealFinderRequest,
        timeout: float | None = None,
    ) -> DealFinderResponse:
        """Cheapest fixed-length trips for every start date and destination, by price per person."""
        origin = self._airports.airport_for(request.origin)
        units = []
        departure = request.start_date
        while departure + timedelta(days=request.nights) <= request.end_date:
            for destination in request.destinations:
                units.append(partial(self._search_deal, request, origin, destination, departure))
            departure += timedelta(days=1)

        logger.info(
            f"Finding {request.nights}-night deals from {origin}: "
            f"{len(units)} date/destination pairs"
        )
        deals = await gather_bounded(units, timeout=timeout, label="find-deals")
        deals.sort(key=lambda d: d.price_per_person)

        return DealFinderResponse(deals=deals, best_deal=deals[0] if deals else None)

    async def _search_deal(
        self,
        request: DealFinderRequest,
        origin: str,
        destination: str,
        departure_date: date,
    ) -> TripDeal | None:
        airport, city = self._airports.resolve(destination)
        return_date = departure_date + timedelta(days=request.nights)

        outbound_flights, return_flights, hotels = await asyncio.gather(
            self._flights.search_flights(origin, airport, departure_date, request.travelers),
            self._flights.search_flights(airport, origin, return_date, request.travelers),
            self._hotels.search_hotels(
                city, departure_date, return_date, guests=request.travelers, rooms=1
            ),
        )

        outbound = cheapest_flight(outbound_flights)
        inbound = cheapest_flight(return_flights)
        hotel = cheapest_hotel(hotels)
        if outbound is None or inbound is None or hotel is None:
            return None

        total = _trip_price(outbound, inbound, hotel, request.travelers)
        return TripDeal(
            destination=city,
            departure_date=departure_date,
            return_date=return_date,
            outbound_flight=outbound,
            return_flight=inbound,
            hotel=hotel,
            total_price=round(total, 2),
            price_per_person=round(total / request.travelers, 2),
            price_per_night=round(total / request.nights, 2),
        )


trip_planner = TripPlanner()
