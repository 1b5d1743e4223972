import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class Flight(BaseModel):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    airline: str
    flight_number: str
    origin: str
    destination: str
    departure_time: datetime
    arrival_time: datetime
    price: float
    available_seats: int

    model_config = {"frozen": True}


class Hotel(BaseModel):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str
    location: str
    address: str
    star_rating: int
    price_per_night: float
    available_rooms: int
    amenities: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class HotelAvailability(BaseModel):
    """A hotel priced for one stay window."""

    hotel: Hotel
    nights: int
    total_price: float

    model_config = {"frozen": True}
