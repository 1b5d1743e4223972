"""Destination comparator — prices one set of travel dates across several destinations."""

import asyncio
import logging
from functools import partial

from tripwise.schemas.planning import (
    ComparisonSummary,
    DestinationComparison,
    PriceComparisonRequest,
    PriceComparisonResponse,
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

# A destination needs at least this much choice to qualify as "best value"
BEST_VALUE_MIN_FLIGHT_OPTIONS = 2
BEST_VALUE_MIN_HOTEL_OPTIONS = 2


class DestinationComparator:
    """Compares total trip cost across destinations for fixed dates."""

    def __init__(
        self,
        flights: FlightProvider | None = None,
        hotels: HotelProvider | None = None,
        airports: AirportService | None = None,
    ):
        self._flights = flights or inventory_service
        self._hotels = hotels or inventory_service
        self._airports = airports or airport_service

    async def compare(
        self,
        request: PriceComparisonRequest,
        timeout: float | None = None,
    ) -> PriceComparisonResponse:
        logger.info(
            f"Comparing {len(request.destinations)} destinations from {request.origin} "
            f"for {request.departure_date.isoformat()}..{request.return_date.isoformat()}"
        )
        units = [partial(self._compare_destination, request, dest) for dest in request.destinations]
        comparisons = await gather_bounded(units, timeout=timeout, label="compare-destinations")
        comparisons.sort(key=lambda c: c.total_cost)

        cheapest = comparisons[0] if comparisons else None
        best_value = next(
            (
                c for c in comparisons
                if c.available_flight_options >= BEST_VALUE_MIN_FLIGHT_OPTIONS
                and c.available_hotel_options >= BEST_VALUE_MIN_HOTEL_OPTIONS
            ),
            cheapest,
        )

        return PriceComparisonResponse(
            comparisons=comparisons,
            cheapest_destination=cheapest,
            best_value_destination=best_value,
            summary=self._summarize(comparisons),
        )

    async def _compare_destination(
        self,
        request: PriceComparisonRequest,
        destination: str,
    ) -> DestinationComparison | None:
        airport, city = self._airports.resolve(destination)

        searches = [
            self._flights.search_flights(
                request.origin, airport, request.departure_date, request.travelers
            ),
            self._flights.search_flights(
                airport, request.origin, request.return_date, request.travelers
            ),
        ]
        if request.include_hotels:
            searches.append(
                self._hotels.search_hotels(
                    city, request.departure_date, request.return_date,
                    guests=request.travelers, rooms=1,
                )
            )

        results = await asyncio.gather(*searches)
        outbound_flights, return_flights = results[0], results[1]
        hotels = results[2] if request.include_hotels else []

        outbound = cheapest_flight(outbound_flights)
        inbound = cheapest_flight(return_flights)
        if outbound is None or inbound is None:
            return None

        hotel = cheapest_hotel(hotels)
        flight_cost = (outbound.price + inbound.price) * request.travelers
        hotel_cost = hotel.total_price if hotel else None

        return DestinationComparison(
            destination=airport,
            destination_city=city,
            cheapest_outbound_flight=outbound,
            cheapest_return_flight=inbound,
            cheapest_hotel=hotel,
            flight_cost=round(flight_cost, 2),
            hotel_cost=round(hotel_cost, 2) if hotel_cost is not None else None,
            total_cost=round(flight_cost + (hotel_cost or 0), 2),
            available_flight_options=len(outbound_flights) + len(return_flights),
            available_hotel_options=len(hotels),
        )

    @staticmethod
    def _summarize(comparisons: list[DestinationComparison]) -> ComparisonSummary:
        if not comparisons:
            return ComparisonSummary()

        totals = [c.total_cost for c in comparisons]
        return ComparisonSummary(
            destinations_compared=len(comparisons),
            cheapest_total_price=min(totals),
            most_expensive_total_price=max(totals),
            average_price=round(sum(totals) / len(totals), 2),
        )


destination_comparator = DestinationComparator()
