"""City name to airport code table for the supported destinations."""

# City → primary airport
CITY_TO_AIRPORT: dict[str, str] = {
    # North America
    "New York": "JFK",
    "Los Angeles": "LAX",
    "Chicago": "ORD",
    "Dallas": "DFW",
    "Denver": "DEN",
    "San Francisco": "SFO",
    "Seattle": "SEA",
    "Miami": "MIA",
    "Boston": "BOS",
    "Atlanta": "ATL",
    # Europe
    "London": "LHR",
    "Paris": "CDG",
    "Frankfurt": "FRA",
    # Asia-Pacific
    "Tokyo": "NRT",
    "Sydney": "SYD",
}

AIRPORT_CODES: list[str] = list(CITY_TO_AIRPORT.values())
CITY_NAMES: list[str] = list(CITY_TO_AIRPORT.keys())
