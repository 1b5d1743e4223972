"""Request and response models for the search-and-optimization endpoints."""

import uuid
from datetime import date

from pydantic import BaseModel, Field, field_validator, model_validator

from tripwise.schemas.inventory import Flight, HotelAvailability


def _require_text(value: str, label: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{label} is required")
    return value


def _clean_destinations(values: list[str]) -> list[str]:
    cleaned = [v.strip() for v in values if v and v.strip()]
    if not cleaned:
        raise ValueError("At least one destination is required")
    return cleaned


# ─── Flexible dates ───


class FlexibleDateSearchRequest(BaseModel):
    origin: str
    destination: str
    start_date: date
    end_date: date
    passengers: int = Field(1, ge=1)
    trip_length: int = Field(3, ge=1)

    @field_validator("origin", "destination")
    @classmethod
    def _not_blank(cls, v: str, info) -> str:
        return _require_text(v, info.field_name.capitalize())

    @model_validator(mode="after")
    def _check_range(self):
        if self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        return self


class DatePriceOption(BaseModel):
    departure_date: date
    return_date: date
    outbound_flight: Flight
    return_flight: Flight
    total_flight_cost: float
    price_per_person: float
    day_of_week: str
    is_weekend: bool

    model_config = {"frozen": True}


class FlexibleDateSummary(BaseModel):
    average_price: float = 0.0
    lowest_price: float = 0.0
    highest_price: float = 0.0
    potential_savings: float = 0.0
    total_options_searched: int = 0


class FlexibleDateSearchResponse(BaseModel):
    options: list[DatePriceOption]
    cheapest_option: DatePriceOption | None = None
    best_value_option: DatePriceOption | None = None
    summary: FlexibleDateSummary


# ─── Destination comparison ───


class PriceComparisonRequest(BaseModel):
    origin: str
    destinations: list[str]
    departure_date: date
    return_date: date
    travelers: int = Field(1, ge=1)
    include_hotels: bool = True

    @field_validator("origin")
    @classmethod
    def _origin_not_blank(cls, v: str) -> str:
        return _require_text(v, "Origin")

    @field_validator("destinations")
    @classmethod
    def _has_destinations(cls, v: list[str]) -> list[str]:
        return _clean_destinations(v)

    @model_validator(mode="after")
    def _check_range(self):
        if self.return_date <= self.departure_date:
            raise ValueError("Return date must be after departure date")
        return self


class DestinationComparison(BaseModel):
    destination: str
    destination_city: str
    cheapest_outbound_flight: Flight
    cheapest_return_flight: Flight
    cheapest_hotel: HotelAvailability | None = None
    flight_cost: float
    hotel_cost: float | None = None
    total_cost: float
    available_flight_options: int
    available_hotel_options: int = 0

    model_config = {"frozen": True}


class ComparisonSummary(BaseModel):
    destinations_compared: int = 0
    cheapest_total_price: float = 0.0
    most_expensive_total_price: float = 0.0
    average_price: float = 0.0


class PriceComparisonResponse(BaseModel):
    comparisons: list[DestinationComparison]
    cheapest_destination: DestinationComparison | None = None
    best_value_destination: DestinationComparison | None = None
    summary: ComparisonSummary


# ─── Budget optimizer ───


class BudgetOptimizerRequest(BaseModel):
    origin: str
    preferred_destinations: list[str]
    earliest_departure: date
    latest_return: date
    budget: float = Field(gt=0)
    travelers: int = Field(1, ge=1)
    min_nights: int = Field(2, ge=1)
    max_nights: int = Field(7, ge=1)
    min_hotel_stars: int = Field(3, ge=1, le=5)

    @field_validator("origin")
    @classmethod
    def _origin_not_blank(cls, v: str) -> str:
        return _require_text(v, "Origin")

    @field_validator("preferred_destinations")
    @classmethod
    def _has_destinations(cls, v: list[str]) -> list[str]:
        return _clean_destinations(v)

    @model_validator(mode="after")
    def _check_bounds(self):
        if self.latest_return <= self.earliest_departure:
            raise ValueError("Latest return must be after earliest departure")
        if self.max_nights < self.min_nights:
            raise ValueError("max_nights must be greater than or equal to min_nights")
        return self


class BudgetOption(BaseModel):
    destination: str
    departure_date: date
    return_date: date
    nights: int
    outbound_flight: Flight
    return_flight: Flight
    hotel: HotelAvailability
    total_cost: float
    remaining_budget: float
    value_score: float
    value_explanation: str

    model_config = {"frozen": True}


class BudgetSummary(BaseModel):
    budget: float
    total_options_found: int = 0
    destinations_within_budget: int = 0
    average_cost_of_options: float = 0.0


class BudgetOptimizerResponse(BaseModel):
    options: list[BudgetOption]
    best_option: BudgetOption | None = None
    longest_stay_option: BudgetOption | None = None
    best_hotel_option: BudgetOption | None = None
    summary: BudgetSummary


# ─── Analytics ───


class TripAnalyticsRequest(BaseModel):
    origin: str
    destinations: list[str]
    start_date: date
    end_date: date

    @field_validator("origin")
    @classmethod
    def _origin_not_blank(cls, v: str) -> str:
        return _require_text(v, "Origin")

    @field_validator("destinations")
    @classmethod
    def _has_destinations(cls, v: list[str]) -> list[str]:
        return _clean_destinations(v)

    @model_validator(mode="after")
    def _check_range(self):
        if self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        return self


class DestinationAnalytics(BaseModel):
    destination: str
    average_flight_price: float = 0.0
    average_hotel_price_per_night: float = 0.0
    cheapest_day_to_fly: str | None = None
    flight_options_count: int = 0
    hotel_options_count: int = 0


class PriceTrendAnalysis(BaseModel):
    overall_average_flight_price: float = 0.0
    overall_average_hotel_price: float = 0.0
    best_day_of_week_to_book: str | None = None
    weekday_vs_weekend_price_difference: float = 0.0


class TripAnalyticsResponse(BaseModel):
    destination_insights: list[DestinationAnalytics]
    price_trends: PriceTrendAnalysis
    recommendations: list[str]


# ─── Trip plans and deals ───


class TripPlanRequest(BaseModel):
    origin: str
    destination: str
    departure_date: date
    return_date: date
    travelers: int = Field(1, ge=1)
    rooms: int = Field(1, ge=1)
    max_budget: float | None = Field(None, gt=0)

    @field_validator("origin", "destination")
    @classmethod
    def _not_blank(cls, v: str, info) -> str:
        return _require_text(v, info.field_name.capitalize())

    @model_validator(mode="after")
    def _check_range(self):
        if self.return_date <= self.departure_date:
            raise ValueError("Return date must be after departure date")
        return self


class TripRecommendation(BaseModel):
    outbound_flight: Flight
    return_flight: Flight
    hotel: HotelAvailability
    total_price: float
    recommendation_reason: str

    model_config = {"frozen": True}


class TripSummary(BaseModel):
    total_outbound_flights: int = 0
    total_return_flights: int = 0
    total_hotels: int = 0
    cheapest_flight_price: float = 0.0
    cheapest_hotel_price: float = 0.0
    cheapest_total_trip: float = 0.0


class TripPlan(BaseModel):
    plan_id: uuid.UUID = Field(default_factory=uuid.uuid4)
    origin: str
    destination: str
    destination_city: str
    departure_date: date
    return_date: date
    travelers: int
    nights: int
    outbound_flights: list[Flight]
    return_flights: list[Flight]
    hotels: list[HotelAvailability]
    recommendation: TripRecommendation | None = None
    summary: TripSummary


class DealFinderRequest(BaseModel):
    origin: str
    destinations: list[str]
    start_date: date
    end_date: date
    travelers: int = Field(1, ge=1)
    nights: int = Field(3, ge=1)

    @field_validator("origin")
    @classmethod
    def _origin_not_blank(cls, v: str) -> str:
        return _require_text(v, "Origin")

    @field_validator("destinations")
    @classmethod
    def _has_destinations(cls, v: list[str]) -> list[str]:
        return _clean_destinations(v)

    @model_validator(mode="after")
    def _check_range(self):
        if self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        return self


class TripDeal(BaseModel):
    destination: str
    departure_date: date
    return_date: date
    outbound_flight: Flight
    return_flight: Flight
    hotel: HotelAvailability
    total_price: float
    price_per_person: float
    price_per_night: float

    model_config = {"frozen": True}


class DealFinderResponse(BaseModel):
    deals: list[TripDeal]
    best_deal: TripDeal | None = None
