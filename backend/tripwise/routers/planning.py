"""Planning router — flexible dates, destination comparison, budget, trip plans and deals, itineraries, analytics."""

import logging
import uuid
from datetime import date

from fastapi import APIRouter, HTTPException, Query, Response
from pydantic import ValidationError

from tripwise.schemas.itinerary import CreateItineraryRequest, SavedItinerary, UpdateItineraryRequest
from tripwise.schemas.planning import (
    BudgetOptimizerRequest,
    BudgetOptimizerResponse,
    DealFinderRequest,
    DealFinderResponse,
    FlexibleDateSearchRequest,
    FlexibleDateSearchResponse,
    PriceComparisonRequest,
    PriceComparisonResponse,
    TripAnalyticsRequest,
    TripAnalyticsResponse,
    TripPlan,
    TripPlanRequest,
)
from tripwise.services.budget_optimizer import budget_optimizer
from tripwise.services.date_matrix import flexible_date_search
from tripwise.services.destination_comparator import destination_comparator
from tripwise.services.itinerary_service import itinerary_service
from tripwise.services.trip_analytics import trip_analytics
from tripwise.services.trip_planner import trip_planner

logger = logging.getLogger(__name__)

router = APIRouter()


def _split_destinations(raw: str) -> list[str]:
    return [d.strip() for d in raw.split(",") if d.strip()]


def _build(model, **fields):
    """Validate query parameters into a request model, rejecting with 400."""
    try:
        return model(**fields)
    except ValidationError as e:
        messages = "; ".join(err["msg"] for err in e.errors())
        raise HTTPException(status_code=400, detail=messages)


@router.get("/flexible-dates", response_model=FlexibleDateSearchResponse)
async def search_flexible_dates(
    origin: str,
    destination: str,
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    passengers: int = 1,
    trip_length: int = Query(3, alias="tripLength"),
):
    """Find the cheapest departure/return dates for one route across a date window."""
    req = _build(
        FlexibleDateSearchRequest,
        origin=origin,
        destination=destination,
        start_date=start_date,
        end_date=end_date,
        passengers=passengers,
        trip_length=trip_length,
    )
    return await flexible_date_search.search(req)


@router.get("/compare-destinations", response_model=PriceComparisonResponse)
async def compare_destinations(
    origin: str,
    destinations: str,
    departure_date: date = Query(..., alias="departureDate"),
    return_date: date = Query(..., alias="returnDate"),
    travelers: int = 1,
    include_hotels: bool = Query(True, alias="includeHotels"),
):
    """Compare total trip cost across destinations (comma-separated) for fixed dates."""
    req = _build(
        PriceComparisonRequest,
        origin=origin,
        destinations=_split_destinations(destinations),
        departure_date=departure_date,
        return_date=return_date,
        travelers=travelers,
        include_hotels=include_hotels,
    )
    return await destination_comparator.compare(req)


@router.get("/optimize-budget", response_model=BudgetOptimizerResponse)
async def optimize_budget(
    origin: str,
    destinations: str,
    budget: float,
    earliest_departure: date = Query(..., alias="earliestDeparture"),
    latest_return: date = Query(..., alias="latestReturn"),
    travelers: int = 1,
    min_nights: int = Query(2, alias="minNights"),
    max_nights: int = Query(7, alias="maxNights"),
    min_hotel_stars: int = Query(3, alias="minHotelStars"),
):
    """Best-value trips within a budget, ranked by value score."""
    req = _build(
        BudgetOptimizerRequest,
        origin=origin,
        preferred_destinations=_split_destinations(destinations),
        earliest_departure=earliest_departure,
        latest_return=latest_return,
        budget=budget,
        travelers=travelers,
        min_nights=min_nights,
        max_nights=max_nights,
        min_hotel_stars=min_hotel_stars,
    )
    return await budget_optimizer.optimize(req)


@router.get("/analytics", response_model=TripAnalyticsResponse)
async def get_analytics(
    origin: str,
    destinations: str,
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
):
    """Price insights and booking tips across destinations and dates."""
    req = _build(
        TripAnalyticsRequest,
        origin=origin,
        destinations=_split_destinations(destinations),
        start_date=start_date,
        end_date=end_date,
    )
    return await trip_analytics.analyze(req)


@router.get("/plan", response_model=TripPlan)
async def plan_trip(
    origin: str,
    destination: str,
    departure_date: date = Query(..., alias="departureDate"),
    return_date: date = Query(..., alias="returnDate"),
    travelers: int = 1,
    rooms: int = 1,
    max_budget: float | None = Query(None, alias="maxBudget"),
):
    """Flights both ways plus hotels for one trip, with a recommended combination."""
    req = _build(
        TripPlanRequest,
        origin=origin,
        destination=destination,
        departure_date=departure_date,
        return_date=return_date,
        travelers=travelers,
        rooms=rooms,
        max_budget=max_budget,
    )
    return await trip_planner.plan_trip(req)


@router.get("/deals", response_model=DealFinderResponse)
async def find_deals(
    origin: str,
    destinations: str,
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    travelers: int = 1,
    nights: int = 3,
):
    req = _build(
        DealFinderRequest,
        origin=origin,
        destinations=_split_destinations(destinations),
        start_date=start_date,
        end_date=end_date,
        travelers=travelers,
        nights=nights,
    )
    return await trip_planner.find_deals(req)


# ─── Itineraries ───


@router.post("/itineraries", status_code=201, response_model=SavedItinerary)
async def create_itinerary(req: CreateItineraryRequest):
    """Create a multi-city itinerary; flights and hotels are picked per segment."""
    return await itinerary_service.create_itinerary(req)


@router.get("/itineraries", response_model=list[SavedItinerary])
async def list_itineraries():
    """All saved itineraries, newest first."""
    return await itinerary_service.list_itineraries()


@router.get("/itineraries/{itinerary_id}", response_model=SavedItinerary)
async def get_itinerary(itinerary_id: uuid.UUID):
    itinerary = await itinerary_service.get_itinerary(itinerary_id)
    if not itinerary:
        raise HTTPException(status_code=404, detail="Itinerary not found")
    return itinerary


@router.put("/itineraries/{itinerary_id}", response_model=SavedItinerary)
async def update_itinerary(itinerary_id: uuid.UUID, req: UpdateItineraryRequest):
    """Rename, change travelers or status, or swap flights/hotels on specific legs."""
    itinerary = await itinerary_service.update_itinerary(itinerary_id, req)
    if not itinerary:
        raise HTTPException(status_code=404, detail="Itinerary not found")
    return itinerary


@router.delete("/itineraries/{itinerary_id}", status_code=204)
async def delete_itinerary(itinerary_id: uuid.UUID):
    deleted = await itinerary_service.delete_itinerary(itinerary_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Itinerary not found")
    return Response(status_code=204)
