"""Trip analytics — price sampling across destinations and days, with booking tips."""

import logging
from collections import defaultdict
from datetime import date, timedelta

from tripwise.config import settings
from tripwise.schemas.planning import (
    DestinationAnalytics,
    PriceTrendAnalysis,
    TripAnalyticsRequest,
    TripAnalyticsResponse,
)
from tripwise.services.airport_service import AirportService, airport_service
from tripwise.services.inventory import inventory_service
from tripwise.services.providers import FlightProvider, HotelProvider

logger = logging.getLogger(__name__)

BEST_DAY_TO_BOOK = "Tuesday"

STATIC_TIPS = [
    "Book Tuesday or Wednesday for typically lower prices",
    "Consider flexible dates to find the best deals",
]


def _average(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _is_weekend(day: date) -> bool:
    return day.weekday() >= 5


class TripAnalytics:
    """Samples flight and hotel prices day by day and summarizes them.

    Sampling is sequential. Per-weekday prices are bucketed per destination;
    the weekday/weekend buckets are shared across all destinations.
    """

    def __init__(
        self,
        flights: FlightProvider | None = None,
        hotels: HotelProvider | None = None,
        airports: AirportService | None = None,
    ):
        self._flights = flights or inventory_service
        self._hotels = hotels or inventory_service
        self._airports = airports or airport_service

    async def analyze(self, request: TripAnalyticsRequest) -> TripAnalyticsResponse:
        insights: list[DestinationAnalytics] = []
        all_flight_prices: list[float] = []
        all_hotel_prices: list[float] = []
        weekday_prices: list[float] = []
        weekend_prices: list[float] = []

        for dest in request.destinations:
            airport, city = self._airports.resolve(dest)
            flight_prices: list[float] = []
            hotel_prices: list[float] = []
            day_prices: dict[str, list[float]] = defaultdict(list)

            day = request.start_date
            while day <= request.end_date:
                flights = await self._flights.search_flights(request.origin, airport, day, 1)
                for flight in flights:
                    flight_prices.append(flight.price)
                    all_flight_prices.append(flight.price)
                    day_prices[day.strftime("%A")].append(flight.price)
                    if _is_weekend(day):
                        weekend_prices.append(flight.price)
                    else:
                        weekday_prices.append(flight.price)

                next_day = day + timedelta(days=1)
                if next_day <= request.end_date:
                    hotels = await self._hotels.search_hotels(city, day, next_day, guests=1, rooms=1)
                    for availability in hotels:
                        hotel_prices.append(availability.hotel.price_per_night)
                        all_hotel_prices.append(availability.hotel.price_per_night)

                day = next_day

            cheapest_day = min(day_prices, key=lambda d: _average(day_prices[d]), default=None)

            insights.append(DestinationAnalytics(
                destination=city,
                average_flight_price=round(_average(flight_prices), 2),
                average_hotel_price_per_night=round(_average(hotel_prices), 2),
                cheapest_day_to_fly=cheapest_day,
                flight_options_count=len(flight_prices),
                hotel_options_count=len(hotel_prices),
            ))
            logger.debug(
                f"Analytics {request.origin}->{airport}: {len(flight_prices)} flight prices, "
                f"{len(hotel_prices)} hotel prices, cheapest day {cheapest_day}"
            )

        weekend_delta = (
            _average(weekend_prices) - _average(weekday_prices)
            if weekday_prices and weekend_prices
            else 0.0
        )

        return TripAnalyticsResponse(
            destination_insights=insights,
            price_trends=PriceTrendAnalysis(
                overall_average_flight_price=round(_average(all_flight_prices), 2),
                overall_average_hotel_price=round(_average(all_hotel_prices), 2),
                best_day_of_week_to_book=BEST_DAY_TO_BOOK,
                weekday_vs_weekend_price_difference=round(weekend_delta, 2),
            ),
            recommendations=self._recommendations(insights, weekend_delta),
        )

    @staticmethod
    def _recommendations(insights: list[DestinationAnalytics], weekend_delta: float) -> list[str]:
        recommendations = []

        best = min(
            insights,
            key=lambda i: i.average_flight_price + i.average_hotel_price_per_night,
            default=None,
        )
        if best is not None:
            recommendations.append(
                f"Best value destination: {best.destination} with avg flight "
                f"${best.average_flight_price:.0f} and hotel "
                f"${best.average_hotel_price_per_night:.0f}/night"
            )

        if weekend_delta > settings.analytics_weekend_tip_threshold:
            recommendations.append(
                f"Save an average of ${weekend_delta:.0f} by flying on weekdays instead of weekends"
            )

        recommendations.extend(STATIC_TIPS)
        return recommendations


trip_analytics = TripAnalytics()
