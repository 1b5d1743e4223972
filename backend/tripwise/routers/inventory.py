"""Inventory router — direct flight/hotel lookups and the supported destination list."""

import uuid
from datetime import date

from fastapi import APIRouter, HTTPException, Query

from tripwise.schemas.inventory import Flight, Hotel, HotelAvailability
from tripwise.services.airport_service import airport_service
from tripwise.services.inventory import inventory_service

router = APIRouter()


@router.get("/destinations")
async def list_destinations():
    """Supported cities and their airport codes."""
    return airport_service.list_destinations()


@router.get("/flights", response_model=list[Flight])
async def search_flights(
    origin: str,
    destination: str,
    departure_date: date = Query(..., alias="departureDate"),
    passengers: int = Query(1, ge=1),
):
    """Flights for one route and date. City names are resolved to airport codes."""
    return await inventory_service.search_flights(
        airport_service.airport_for(origin),
        airport_service.airport_for(destination),
        departure_date,
        passengers,
    )


@router.get("/flights/{flight_id}", response_model=Flight)
async def get_flight(flight_id: uuid.UUID):
    flight = await inventory_service.get_flight_by_id(flight_id)
    if not flight:
        raise HTTPException(status_code=404, detail="Flight not found")
    return flight


@router.get("/hotels", response_model=list[HotelAvailability])
async def search_hotels(
    location: str,
    check_in: date = Query(..., alias="checkInDate"),
    check_out: date = Query(..., alias="checkOutDate"),
    guests: int = Query(1, ge=1),
    rooms: int = Query(1, ge=1),
):
    """Hotels available in a city for a stay window. Airport codes are resolved to cities."""
    if check_in >= check_out:
        raise HTTPException(status_code=400, detail="checkInDate must be before checkOutDate")

    return await inventory_service.search_hotels(
        airport_service.city_for(location), check_in, check_out, guests=guests, rooms=rooms
    )


@router.get("/hotels/all", response_model=list[Hotel])
async def list_hotels(location: str | None = None):
    """Every hotel in the inventory, optionally for one city."""
    return inventory_service.list_hotels(airport_service.city_for(location) if location else None)


@router.get("/hotels/{hotel_id}", response_model=Hotel)
async def get_hotel(hotel_id: uuid.UUID):
    hotel = await inventory_service.get_hotel_by_id(hotel_id)
    if not hotel:
        raise HTTPException(status_code=404, detail="Hotel not found")
    return hotel
