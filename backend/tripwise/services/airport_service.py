"""Airport service — resolves destination identifiers to airport codes and city names."""

import logging

from tripwise.data.destinations import CITY_TO_AIRPORT

logger = logging.getLogger(__name__)


class AirportService:
    """Case-insensitive bidirectional lookup between cities and airport codes.

    Unknown identifiers are echoed back unchanged.
    """

    def __init__(
        self,
        city_to_airport: dict[str, str] | None = None,
    ):
        table = city_to_airport if city_to_airport is not None else CITY_TO_AIRPORT
        self._by_city = {city.lower(): code for city, code in table.items()}
        self._by_code = {code.lower(): city for city, code in table.items()}
        self._table = dict(table)

    def airport_for(self, identifier: str) -> str:
        """Airport code for a city name, or the input when it is not a known city."""
        return self._by_city.get(identifier.strip().lower(), identifier)

    def city_for(self, identifier: str) -> str:
        """City name for an airport code, or the input when it is not a known code."""
        return self._by_code.get(identifier.strip().lower(), identifier)

    def resolve(self, identifier: str) -> tuple[str, str]:
        """Returns (airport_code, city_name) for a city name or airport code."""
        return self.airport_for(identifier), self.city_for(identifier)

    def list_destinations(self) -> list[dict]:
        """All supported destinations, ordered by city name."""
        return [
            {"city": city, "iata": code}
            for city, code in sorted(self._table.items())
        ]


airport_service = AirportService()
