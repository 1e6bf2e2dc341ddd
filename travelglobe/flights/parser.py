"""
Flight CSV export parsing.

The export has a header row followed by one flight per line. Columns are read
by fixed position; the header text itself is only used to count the expected
number of fields.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from travelglobe.flights.airports import AirportDirectory, AirportRecord

logger = logging.getLogger(__name__)

COL_DATE = 0
COL_AIRLINE = 1
COL_FLIGHT_NUMBER = 2
COL_FROM = 3
COL_TO = 4
COL_DEPARTURE_SCHEDULED = 11
COL_DEPARTURE_ACTUAL = 12
COL_ARRIVAL_SCHEDULED = 16
COL_ARRIVAL_ACTUAL = 17
COL_AIRCRAFT = 19


@dataclass
class FlightRecord:
    line: int
    date: str
    airline: str
    flight_number: str
    origin: str
    destination: str
    departure_scheduled: Optional[str] = None
    departure_actual: Optional[str] = None
    arrival_scheduled: Optional[str] = None
    arrival_actual: Optional[str] = None
    aircraft: Optional[str] = None
    from_airport: Optional[AirportRecord] = None
    to_airport: Optional[AirportRecord] = None
    raw: str = ""

    @property
    def id(self) -> str:
        return f"flight-{self.line}"

    @property
    def key(self) -> Tuple[str, str, str, str, str]:
        """Identity of a flight when merging exports."""
        return (self.date, self.airline, self.flight_number, self.origin, self.destination)


def parse_line(line: str) -> List[str]:
    """Split one CSV line into trimmed fields.

    A double quote toggles quoting and is never copied into the field; commas
    inside quotes are kept. Escaped quotes are not supported.
    """
    fields = []
    current = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == ',' and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    fields.append("".join(current).strip())
    return fields


def _lines(csv_text: str) -> List[str]:
    return [line.rstrip("\r") for line in csv_text.strip().split("\n")]


def _column(values: List[str], index: int) -> str:
    return values[index] if index < len(values) else ""


def _optional(values: List[str], index: int) -> Optional[str]:
    return _column(values, index) or None


def count_rows(csv_text: str) -> int:
    """Number of non-blank data lines below the header."""
    if not csv_text or not csv_text.strip():
        return 0
    return sum(1 for line in _lines(csv_text)[1:] if line.strip())


def extract_flights(csv_text: str, directory: AirportDirectory) -> List[FlightRecord]:
    """Parse a full export into flights whose origin and destination both resolve."""
    if not csv_text or not csv_text.strip():
        return []

    lines = _lines(csv_text)
    # header split ignores quoting
    expected = len(lines[0].split(','))

    flights = []
    short_rows = 0
    unresolved = 0
    for number, line in enumerate(lines[1:], start=1):
        values = parse_line(line)
        if len(values) < expected:
            short_rows += 1
            continue

        flight = FlightRecord(
            line=number,
            date=_column(values, COL_DATE),
            airline=_column(values, COL_AIRLINE),
            flight_number=_column(values, COL_FLIGHT_NUMBER),
            origin=_column(values, COL_FROM),
            destination=_column(values, COL_TO),
            departure_scheduled=_optional(values, COL_DEPARTURE_SCHEDULED),
            departure_actual=_optional(values, COL_DEPARTURE_ACTUAL),
            arrival_scheduled=_optional(values, COL_ARRIVAL_SCHEDULED),
            arrival_actual=_optional(values, COL_ARRIVAL_ACTUAL),
            aircraft=_optional(values, COL_AIRCRAFT),
            raw=line,
        )
        flight.from_airport = directory.lookup(flight.origin)
        flight.to_airport = directory.lookup(flight.destination)

        if flight.from_airport is None or flight.to_airport is None:
            unresolved += 1
            continue
        flights.append(flight)

    if short_rows or unresolved:
        logger.debug("Skipped %d short rows and %d rows with unknown airports", short_rows, unresolved)
    return flights
