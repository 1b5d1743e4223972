from tripwise.schemas.inventory import Flight, Hotel, HotelAvailability
from tripwise.schemas.itinerary import (
    CreateItineraryRequest,
    ItineraryLeg,
    ItinerarySegment,
    ItinerarySegmentUpdate,
    ItineraryStatus,
    SavedItinerary,
    UpdateItineraryRequest,
)
from tripwise.schemas.planning import (
    BudgetOption,
    BudgetOptimizerRequest,
    BudgetOptimizerResponse,
    DatePriceOption,
    DealFinderRequest,
    DealFinderResponse,
    DestinationComparison,
    FlexibleDateSearchRequest,
    FlexibleDateSearchResponse,
    PriceComparisonRequest,
    PriceComparisonResponse,
    TripAnalyticsRequest,
    TripAnalyticsResponse,
    TripDeal,
    TripPlan,
    TripPlanRequest,
)
