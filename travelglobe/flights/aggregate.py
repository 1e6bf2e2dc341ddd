from dataclasses import dataclass
from typing import Dict, Iterable

from travelglobe.flights.airports import AirportRecord
from travelglobe.flights.parser import FlightRecord


@dataclass
class DestinationAggregate:
    code: str
    name: str
    city: str
    country: str
    latitude: float
    longitude: float
    visit_count: int = 1

    @classmethod
    def from_airport(cls, airport: AirportRecord) -> "DestinationAggregate":
        return cls(
            code=airport.code,
            name=airport.name,
            city=airport.city,
            country=airport.country,
            latitude=airport.latitude,
            longitude=airport.longitude,
        )


def aggregate_destinations(flights: Iterable[FlightRecord]) -> Dict[str, DestinationAggregate]:
    """Count arrivals per destination airport code."""
    destinations: Dict[str, DestinationAggregate] = {}
    for flight in flights:
        airport = flight.to_airport
        if airport is None:
            continue
        existing = destinations.get(airport.code)
        if existing is None:
            destinations[airport.code] = DestinationAggregate.from_airport(airport)
        else:
            existing.visit_count += 1
    return destinations


def count_countries(destinations: Dict[str, DestinationAggregate]) -> int:
    return len({destination.country for destination in destinations.values()})
