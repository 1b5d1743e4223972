from datetime import date

import pytest
from pydantic import ValidationError

from tripwise.schemas.itinerary import CreateItineraryRequest, ItinerarySegment
from tripwise.schemas.planning import (
    DealFinderRequest,
    FlexibleDateSearchRequest,
    PriceComparisonRequest,
    TripAnalyticsRequest,
    TripPlanRequest,
)


def test_flexible_dates_requires_forward_window():
    with pytest.raises(ValidationError, match="End date must be after start date"):
        FlexibleDateSearchRequest(
            origin="JFK", destination="LAX",
            start_date=date(2025, 6, 10), end_date=date(2025, 6, 10),
        )


@pytest.mark.parametrize("field", ["origin", "destination"])
def test_flexible_dates_rejects_blank_route(field):
    fields = dict(origin="JFK", destination="LAX", start_date=date(2025, 6, 1), end_date=date(2025, 6, 5))
    fields[field] = "   "
    with pytest.raises(ValidationError):
        FlexibleDateSearchRequest(**fields)


@pytest.mark.parametrize("override", [{"passengers": 0}, {"trip_length": 0}])
def test_flexible_dates_counts_are_positive(override):
    fields = dict(origin="JFK", destination="LAX", start_date=date(2025, 6, 1), end_date=date(2025, 6, 5))
    fields.update(override)
    with pytest.raises(ValidationError):
        FlexibleDateSearchRequest(**fields)


def test_comparison_needs_destinations():
    with pytest.raises(ValidationError, match="At least one destination is required"):
        PriceComparisonRequest(
            origin="JFK", destinations=["  "],
            departure_date=date(2025, 6, 1), return_date=date(2025, 6, 4),
        )


def test_comparison_return_after_departure():
    with pytest.raises(ValidationError, match="Return date must be after departure date"):
        PriceComparisonRequest(
            origin="JFK", destinations=["Miami"],
            departure_date=date(2025, 6, 4), return_date=date(2025, 6, 1),
        )


def test_analytics_needs_destinations():
    with pytest.raises(ValidationError):
        TripAnalyticsRequest(
            origin="JFK", destinations=[],
            start_date=date(2025, 6, 1), end_date=date(2025, 6, 4),
        )


def test_segment_departure_after_arrival():
    with pytest.raises(ValidationError, match="Segment departure date must be after arrival date"):
        ItinerarySegment(destination="Paris", arrival_date=date(2025, 6, 4), departure_date=date(2025, 6, 4))


def test_itinerary_needs_segments():
    with pytest.raises(ValidationError, match="At least one segment is required"):
        CreateItineraryRequest(name="Empty", origin="JFK", segments=[])


def test_itinerary_needs_name():
    segment = ItinerarySegment(destination="Paris", arrival_date=date(2025, 6, 1), departure_date=date(2025, 6, 4))
    with pytest.raises(ValidationError, match="Itinerary name is required"):
        CreateItineraryRequest(name=" ", origin="JFK", segments=[segment])


def test_trip_plan_return_after_departure():
    with pytest.raises(ValidationError, match="Return date must be after departure date"):
        TripPlanRequest(
            origin="JFK", destination="Miami",
            departure_date=date(2025, 6, 4), return_date=date(2025, 6, 4),
        )


@pytest.mark.parametrize("override", [{"max_budget": 0}, {"rooms": 0}, {"destination": " "}])
def test_trip_plan_rejects_bad_fields(override):
    fields = dict(origin="JFK", destination="Miami", departure_date=date(2025, 6, 1), return_date=date(2025, 6, 4))
    fields.update(override)
    with pytest.raises(ValidationError):
        TripPlanRequest(**fields)


def test_trip_plan_budget_is_optional():
    req = TripPlanRequest(
        origin="JFK", destination="Miami",
        departure_date=date(2025, 6, 1), return_date=date(2025, 6, 4),
    )
    assert req.max_budget is None
    assert (req.travelers, req.rooms) == (1, 1)


def test_deals_need_destinations():
    with pytest.raises(ValidationError, match="At least one destination is required"):
        DealFinderRequest(
            origin="JFK", destinations=[],
            start_date=date(2025, 6, 1), end_date=date(2025, 6, 10),
        )


def test_deals_need_at_least_one_night():
    with pytest.raises(ValidationError):
        DealFinderRequest(
            origin="JFK", destinations=["Miami"],
            start_date=date(2025, 6, 1), end_date=date(2025, 6, 10), nights=0,
        )
