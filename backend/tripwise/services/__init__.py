"""Planning services.

Modules:
    providers               Flight/hotel provider interfaces
    inventory               Seeded in-memory inventory implementing the providers
    airport_service         City <-> airport code resolution
    fanout                  Bounded concurrent fan-out with per-unit failure isolation
    date_matrix             Flexible date search over a sliding window
    destination_comparator  Same-dates comparison across destinations
    budget_optimizer        Destination x date x stay-length search within a budget
    itinerary_store         In-memory itinerary store with per-key locking
    itinerary_service       Multi-leg itinerary composition and edits
    trip_analytics          Sequential price sampling and booking tips
    trip_planner            Single-trip plans with a recommendation, and the deal finder
"""
