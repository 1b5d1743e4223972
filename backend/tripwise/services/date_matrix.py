"""Flexible date search — prices every departure/return pair in a date window."""

import asyncio
import logging
from datetime import date, timedelta
from functools import partial

from tripwise.schemas.planning import (
    DatePriceOption,
    FlexibleDateSearchRequest,
    FlexibleDateSearchResponse,
    FlexibleDateSummary,
)
from tripwise.services.fanout import gather_bounded
from tripwise.services.inventory import inventory_service
from tripwise.services.providers import FlightProvider, cheapest_flight

logger = logging.getLogger(__name__)

WEEKEND_DAYS = {5, 6}  # Saturday, Sunday


def date_pairs(start_date: date, end_date: date, trip_length: int) -> list[tuple[date, date]]:
    """Every (departure, return) pair whose return still falls inside the window."""
    pairs = []
    departure = start_date
    while departure + timedelta(days=trip_length) <= end_date:
        pairs.append((departure, departure + timedelta(days=trip_length)))
        departure += timedelta(days=1)
    return pairs


class FlexibleDateSearch:
    """Searches a sliding window of date pairs for one route."""

    def __init__(self, flights: FlightProvider | None = None):
        self._flights = flights or inventory_service

    async def search(
        self,
        request: FlexibleDateSearchRequest,
        timeout: float | None = None,
    ) -> FlexibleDateSearchResponse:
        """Evaluate all date pairs concurrently and rank them by total flight cost."""
        pairs = date_pairs(request.start_date, request.end_date, request.trip_length)
        logger.info(
            f"Flexible date search {request.origin}->{request.destination}: "
            f"{len(pairs)} date pairs"
        )

        units = [
            partial(
                self._price_date_pair,
                request.origin, request.destination,
                departure, return_date, request.passengers,
            )
            for departure, return_date in pairs
        ]
        options = await gather_bounded(units, timeout=timeout, label="flexible-dates")
        options.sort(key=lambda o: o.total_flight_cost)

        cheapest = options[0] if options else None
        best_value = next((o for o in options if not o.is_weekend), cheapest)

        return FlexibleDateSearchResponse(
            options=options,
            cheapest_option=cheapest,
            best_value_option=best_value,
            summary=self._summarize(options),
        )

    async def _price_date_pair(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        return_date: date,
        passengers: int,
    ) -> DatePriceOption | None:
        outbound_flights, return_flights = await asyncio.gather(
            self._flights.search_flights(origin, destination, departure_date, passengers),
            self._flights.search_flights(destination, origin, return_date, passengers),
        )

        outbound = cheapest_flight(outbound_flights)
        inbound = cheapest_flight(return_flights)
        if outbound is None or inbound is None:
            return None

        total = (outbound.price + inbound.price) * passengers
        return DatePriceOption(
            departure_date=departure_date,
            return_date=return_date,
            outbound_flight=outbound,
            return_flight=inbound,
            total_flight_cost=round(total, 2),
            price_per_person=round(total / passengers, 2),
            day_of_week=departure_date.strftime("%A"),
            is_weekend=departure_date.weekday() in WEEKEND_DAYS,
        )

    @staticmethod
    def _summarize(options: list[DatePriceOption]) -> FlexibleDateSummary:
        if not options:
            return FlexibleDateSummary()

        prices = [o.total_flight_cost for o in options]
        return FlexibleDateSummary(
            average_price=round(sum(prices) / len(prices), 2),
            lowest_price=min(prices),
            highest_price=max(prices),
            potential_savings=round(max(prices) - min(prices), 2),
            total_options_searched=len(options),
        )


flexible_date_search = FlexibleDateSearch()
