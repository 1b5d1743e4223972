import uuid
from datetime import date, datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from tripwise.schemas.inventory import Flight, HotelAvailability


class ItineraryStatus(str, Enum):
    DRAFT = "draft"
    CONFIRMED = "confirmed"
    BOOKED = "booked"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ItinerarySegment(BaseModel):
    destination: str
    arrival_date: date
    departure_date: date
    preferred_flight_id: uuid.UUID | None = None
    preferred_hotel_id: uuid.UUID | None = None

    @field_validator("destination")
    @classmethod
    def _destination_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Segment destination is required")
        return v

    @model_validator(mode="after")
    def _check_stay(self):
        if self.departure_date <= self.arrival_date:
            raise ValueError("Segment departure date must be after arrival date")
        return self


class CreateItineraryRequest(BaseModel):
    name: str
    description: str | None = None
    origin: str
    segments: list[ItinerarySegment]
    travelers: int = Field(1, ge=1)

    @field_validator("name", "origin")
    @classmethod
    def _not_blank(cls, v: str, info) -> str:
        v = v.strip()
        if not v:
            raise ValueError(f"Itinerary {info.field_name} is required")
        return v

    @field_validator("segments")
    @classmethod
    def _has_segments(cls, v: list[ItinerarySegment]) -> list[ItinerarySegment]:
        if not v:
            raise ValueError("At least one segment is required")
        return v


class ItinerarySegmentUpdate(BaseModel):
    leg_number: int
    new_flight_id: uuid.UUID | None = None
    new_hotel_id: uuid.UUID | None = None


class UpdateItineraryRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    travelers: int | None = Field(None, ge=1)
    status: ItineraryStatus | None = None
    segment_updates: list[ItinerarySegmentUpdate] | None = None


class ItineraryLeg(BaseModel):
    leg_number: int
    from_location: str
    to_location: str
    flight_date: date
    hotel_check_in: date | None = None
    hotel_check_out: date | None = None
    selected_flight: Flight | None = None
    selected_hotel: HotelAvailability | None = None
    alternative_flights: list[Flight] = Field(default_factory=list)
    alternative_hotels: list[HotelAvailability] = Field(default_factory=list)
    leg_cost: float = 0.0

    model_config = {"frozen": True}


class SavedItinerary(BaseModel):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str
    description: str | None = None
    origin: str
    travelers: int
    legs: list[ItineraryLeg]
    estimated_total_cost: float
    total_nights: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    last_modified: datetime | None = None
    status: ItineraryStatus = ItineraryStatus.DRAFT

    model_config = {"frozen": True}
