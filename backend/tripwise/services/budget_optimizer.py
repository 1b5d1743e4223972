"""Budget optimizer — finds the best-value trips that fit inside a budget."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from functools import partial

from tripwise.config import settings
from tripwise.schemas.planning import (
    BudgetOption,
    BudgetOptimizerRequest,
    BudgetOptimizerResponse,
    BudgetSummary,
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

# Value score weights
WEIGHT_STARS = 15
WEIGHT_NIGHTS = 10
WEIGHT_BUDGET_HEADROOM = 25

BEST_HOTEL_MIN_STARS = 4


@dataclass(frozen=True)
class TripCandidate:
    """One (destination, departure, stay length) combination to price."""
    airport: str
    city: str
    departure_date: date
    return_date: date
    nights: int


def calculate_value_score(
    star_rating: int, nights: int, remaining_budget: float, budget: float
) -> float:
    """
    Weighted blend of hotel quality, trip length, and budget headroom.

    4 stars, 5 nights, 250 left of 1000: 4*15 + 5*10 + 0.25*25 = 116.25
    """
    return (
        star_rating * WEIGHT_STARS
        + nights * WEIGHT_NIGHTS
        + (remaining_budget / budget) * WEIGHT_BUDGET_HEADROOM
    )


def value_explanation(star_rating: int, nights: int, remaining_budget: float, value_score: float) -> str:
    parts = []
    if star_rating >= 4:
        parts.append(f"{star_rating}-star luxury accommodation")
    elif star_rating == 3:
        parts.append("Comfortable 3-star hotel")

    if nights >= 5:
        parts.append(f"Extended {nights}-night stay")
    else:
        parts.append(f"{nights}-night getaway")

    if remaining_budget > 200:
        parts.append(f"${remaining_budget:.0f} left for activities")

    return ", ".join(parts) + f". Value score: {value_score:.1f}"


class BudgetOptimizer:
    """Enumerates destination x departure x stay-length and ranks what fits the budget."""

    def __init__(
        self,
        flights: FlightProvider | None = None,
        hotels: HotelProvider | None = None,
        airports: AirportService | None = None,
    ):
        self._flights = flights or inventory_service
        self._hotels = hotels or inventory_service
        self._airports = airports or airport_service

    def enumerate_candidates(self, request: BudgetOptimizerRequest) -> list[TripCandidate]:
        candidates = []
        for dest in request.preferred_destinations:
            airport, city = self._airports.resolve(dest)

            departure = request.earliest_departure
            while departure + timedelta(days=request.min_nights) <= request.latest_return:
                for nights in range(request.min_nights, request.max_nights + 1):
                    return_date = departure + timedelta(days=nights)
                    if return_date > request.latest_return:
                        break
                    candidates.append(TripCandidate(airport, city, departure, return_date, nights))
                departure += timedelta(days=1)
        return candidates

    async def optimize(
        self,
        request: BudgetOptimizerRequest,
        timeout: float | None = None,
    ) -> BudgetOptimizerResponse:
        """Price every candidate trip and return the top options by value score."""
        candidates = self.enumerate_candidates(request)
        logger.info(
            f"Budget optimizer from {request.origin}: {len(candidates)} candidate trips "
            f"across {len(request.preferred_destinations)} destinations, budget {request.budget}"
        )

        units = [partial(self._price_candidate, request, c) for c in candidates]
        options = await gather_bounded(units, timeout=timeout, label="optimize-budget")
        options.sort(key=lambda o: o.value_score, reverse=True)

        best_option = options[0] if options else None
        longest_stay = max(options, key=lambda o: o.nights, default=None)
        best_hotel = min(
            (o for o in options if o.hotel.hotel.star_rating >= BEST_HOTEL_MIN_STARS),
            key=lambda o: (-o.hotel.hotel.star_rating, o.total_cost),
            default=None,
        )

        return BudgetOptimizerResponse(
            options=options[:settings.budget_max_results],
            best_option=best_option,
            longest_stay_option=longest_stay,
            best_hotel_option=best_hotel,
            summary=BudgetSummary(
                budget=request.budget,
                total_options_found=len(options),
                destinations_within_budget=len({o.destination for o in options}),
                average_cost_of_options=(
                    round(sum(o.total_cost for o in options) / len(options), 2) if options else 0.0
                ),
            ),
        )

    async def _price_candidate(
        self,
        request: BudgetOptimizerRequest,
        candidate: TripCandidate,
    ) -> BudgetOption | None:
        outbound_flights, return_flights, hotels = await asyncio.gather(
            self._flights.search_flights(
                request.origin, candidate.airport, candidate.departure_date, request.travelers
            ),
            self._flights.search_flights(
                candidate.airport, request.origin, candidate.return_date, request.travelers
            ),
            self._hotels.search_hotels(
                candidate.city, candidate.departure_date, candidate.return_date,
                guests=request.travelers, rooms=1,
            ),
        )

        outbound = cheapest_flight(outbound_flights)
        inbound = cheapest_flight(return_flights)
        hotel = cheapest_hotel(
            [h for h in hotels if h.hotel.star_rating >= request.min_hotel_stars]
        )
        if outbound is None or inbound is None or hotel is None:
            return None

        flight_cost = (outbound.price + inbound.price) * request.travelers
        raw_total = flight_cost + hotel.total_price
        if raw_total > request.budget:
            return None

        total_cost = round(raw_total, 2)

        remaining = round(request.budget - total_cost, 2)
        stars = hotel.hotel.star_rating
        score = calculate_value_score(stars, candidate.nights, remaining, request.budget)

        return BudgetOption(
            destination=candidate.city,
            departure_date=candidate.departure_date,
            return_date=candidate.return_date,
            nights=candidate.nights,
            outbound_flight=outbound,
            return_flight=inbound,
            hotel=hotel,
            total_cost=total_cost,
            remaining_budget=remaining,
            value_score=score,
            value_explanation=value_explanation(stars, candidate.nights, remaining, score),
        )


budget_optimizer = BudgetOptimizer()
