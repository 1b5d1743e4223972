from datetime import date

import pytest

from tripwise.schemas.planning import DealFinderRequest, TripPlanRequest
from tripwise.services.errors import SearchTimeoutError
from tripwise.services.trip_planner import TripPlanner

DEPART = date(2025, 7, 10)
RETURN = date(2025, 7, 13)


@pytest.fixture()
def miami(inventory):
    inventory.add_flight("JFK", "MIA", DEPART, 260)
    inventory.add_flight("JFK", "MIA", DEPART, 200)
    inventory.add_flight("MIA", "JFK", RETURN, 180)
    inventory.add_flight("MIA", "JFK", RETURN, 150)
    inventory.add_hotel("Miami", 4, 200)
    inventory.add_hotel("Miami", 3, 120)
    return inventory


def _plan_request(**overrides) -> TripPlanRequest:
    fields = dict(
        origin="JFK",
        destination="Miami",
        departure_date=DEPART,
        return_date=RETURN,
        travelers=2,
    )
    fields.update(overrides)
    return TripPlanRequest(**fields)


def _deal_request(**overrides) -> DealFinderRequest:
    fields = dict(
        origin="JFK",
        destinations=["Miami", "LAX"],
        start_date=date(2025, 7, 10),
        end_date=date(2025, 7, 14),
        travelers=2,
        nights=3,
    )
    fields.update(overrides)
    return DealFinderRequest(**fields)


# ─── Single trip ───


@pytest.mark.asyncio
async def test_plan_recommends_cheapest_combination(miami, airports):
    plan = await TripPlanner(miami, miami, airports).plan_trip(_plan_request())

    assert plan.destination == "MIA"
    assert plan.destination_city == "Miami"
    assert plan.nights == 3
    assert len(plan.outbound_flights) == len(plan.return_flights) == len(plan.hotels) == 2

    rec = plan.recommendation
    assert rec.outbound_flight.price == 200
    assert rec.return_flight.price == 150
    assert rec.hotel.hotel.star_rating == 3
    # (200 + 150) * 2 travelers + 3 nights at $120
    assert rec.total_price == 1060
    assert rec.recommendation_reason == "Best value combination based on lowest total price"


@pytest.mark.asyncio
async def test_plan_summary(miami, airports):
    plan = await TripPlanner(miami, miami, airports).plan_trip(_plan_request())

    assert plan.summary.total_outbound_flights == 2
    assert plan.summary.total_return_flights == 2
    assert plan.summary.total_hotels == 2
    assert plan.summary.cheapest_flight_price == 700
    assert plan.summary.cheapest_hotel_price == 360
    assert plan.summary.cheapest_total_trip == 1060


@pytest.mark.parametrize("budget, recommended", [(1060, True), (5000, True), (1059.99, False)])
@pytest.mark.asyncio
async def test_plan_budget_applies_to_cheapest_combination(miami, airports, budget, recommended):
    plan = await TripPlanner(miami, miami, airports).plan_trip(_plan_request(max_budget=budget))

    assert (plan.recommendation is not None) == recommended
    # the summary is reported either way
    assert plan.summary.cheapest_total_trip == 1060


@pytest.mark.asyncio
async def test_plan_searches_hotels_with_requested_rooms(miami, airports):
    plan = await TripPlanner(miami, miami, airports).plan_trip(_plan_request(rooms=2))

    assert miami.hotel_calls == [("Miami", DEPART, RETURN, 2, 2)]
    assert plan.summary.cheapest_hotel_price == 720
    assert plan.recommendation.total_price == 1420


@pytest.mark.asyncio
async def test_failed_search_leaves_partial_plan(miami, airports):
    miami.fail_on.add(("JFK", "MIA", DEPART))

    plan = await TripPlanner(miami, miami, airports).plan_trip(_plan_request())

    assert plan.outbound_flights == []
    assert len(plan.return_flights) == 2
    assert plan.recommendation is None
    assert plan.summary.cheapest_flight_price == 300
    assert plan.summary.cheapest_total_trip == 660


@pytest.mark.asyncio
async def test_plan_for_unknown_destination_is_empty(inventory, airports):
    plan = await TripPlanner(inventory, inventory, airports).plan_trip(
        _plan_request(destination="Atlantis")
    )

    assert (plan.destination, plan.destination_city) == ("Atlantis", "Atlantis")
    assert plan.recommendation is None
    assert plan.summary.cheapest_total_trip == 0


@pytest.mark.asyncio
async def test_plan_searches_run_concurrently(miami, airports):
    miami.delay = 0.05

    await TripPlanner(miami, miami, airports).plan_trip(_plan_request())

    assert miami.max_in_flight == 3


@pytest.mark.asyncio
async def test_plan_timeout(miami, airports):
    miami.delay = 0.5

    with pytest.raises(SearchTimeoutError):
        await TripPlanner(miami, miami, airports).plan_trip(_plan_request(), timeout=0.05)


# ─── Deals ───


@pytest.fixture()
def deals_inventory(inventory):
    inventory.add_flight("JFK", "MIA", date(2025, 7, 10), 200)
    inventory.add_flight("MIA", "JFK", date(2025, 7, 13), 150)
    inventory.add_flight("JFK", "MIA", date(2025, 7, 11), 100)
    inventory.add_flight("MIA", "JFK", date(2025, 7, 14), 100)
    inventory.add_hotel("Miami", 3, 100)
    # Los Angeles only flies on the 10th
    inventory.add_flight("JFK", "LAX", date(2025, 7, 10), 300)
    inventory.add_flight("LAX", "JFK", date(2025, 7, 13), 300)
    inventory.add_hotel("Los Angeles", 2, 80)
    return inventory


@pytest.mark.asyncio
async def test_deals_ranked_by_price_per_person(deals_inventory, airports):
    result = await TripPlanner(deals_inventory, deals_inventory, airports).find_deals(_deal_request())

    assert [(d.destination, d.departure_date.day) for d in result.deals] == [
        ("Miami", 11), ("Miami", 10), ("Los Angeles", 10),
    ]
    assert result.best_deal == result.deals[0]

    best = result.best_deal
    assert best.return_date == date(2025, 7, 14)
    assert best.total_price == 700
    assert best.price_per_person == 350
    assert best.price_per_night == pytest.approx(233.33, abs=0.01)


@pytest.mark.asyncio
async def test_deals_search_every_start_date_and_destination(deals_inventory, airports):
    await TripPlanner(deals_inventory, deals_inventory, airports).find_deals(_deal_request())

    # departures on the 10th and 11th, two destinations, two flight legs each
    assert len(deals_inventory.flight_calls) == 8
    assert len(deals_inventory.hotel_calls) == 4
    assert ("Los Angeles", date(2025, 7, 11), date(2025, 7, 14), 2, 1) in deals_inventory.hotel_calls


@pytest.mark.asyncio
async def test_failed_deal_is_skipped(deals_inventory, airports):
    deals_inventory.fail_on.add(("JFK", "MIA", date(2025, 7, 11)))

    result = await TripPlanner(deals_inventory, deals_inventory, airports).find_deals(_deal_request())

    assert [(d.destination, d.departure_date.day) for d in result.deals] == [
        ("Miami", 10), ("Los Angeles", 10),
    ]


@pytest.mark.asyncio
async def test_stay_longer_than_window_finds_nothing(deals_inventory, airports):
    result = await TripPlanner(deals_inventory, deals_inventory, airports).find_deals(
        _deal_request(end_date=date(2025, 7, 12))
    )

    assert result.deals == []
    assert result.best_deal is None
    assert deals_inventory.flight_calls == []
