"""
Static airport directory.
Resolves 3-letter IATA codes to display name, city, country and coordinates.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Optional

from travelglobe.flights.airport_data import AIRPORT_ROWS


@dataclass(frozen=True)
class AirportRecord:
    code: str
    name: str
    city: str
    country: str
    latitude: float
    longitude: float


class AirportDirectory:
    """Read-only lookup from airport code to :class:`AirportRecord`.

    Built once at process start and injected wherever codes need resolving.
    Lookups are case-insensitive; unknown codes return ``None``.
    """

    def __init__(self, airports: Iterable[AirportRecord]):
        table = {}
        for airport in airports:
            table[airport.code.strip().upper()] = airport
        self._airports = MappingProxyType(table)

    @classmethod
    def from_rows(cls, rows) -> "AirportDirectory":
        return cls(AirportRecord(code, name, city, country, float(lat), float(lon))
                   for code, name, city, country, lat, lon in rows)

    @classmethod
    def default(cls) -> "AirportDirectory":
        return cls.from_rows(AIRPORT_ROWS)

    def lookup(self, code: Optional[str]) -> Optional[AirportRecord]:
        code = (code or "").strip().upper()
        if not code:
            return None
        return self._airports.get(code)

    def all(self) -> List[AirportRecord]:
        return list(self._airports.values())

    def __contains__(self, code) -> bool:
        return self.lookup(code) is not None

    def __len__(self) -> int:
        return len(self._airports)
