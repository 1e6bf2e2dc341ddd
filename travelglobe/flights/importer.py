"""
Flight history import.

Turns a flight CSV export into ``visited`` locations: one row per destination
airport, tagged in its notes with ``Flight destination: <CODE>`` so later runs
can find, refresh, or remove the rows they own. Manually entered locations are
never touched; a destination lying within COORD_TOLERANCE degrees of any
existing location is not added again.
"""

import logging
import re
import threading
from dataclasses import asdict, dataclass
from typing import Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from travelglobe.flights.aggregate import DestinationAggregate, aggregate_destinations, count_countries
from travelglobe.flights.airports import AirportDirectory
from travelglobe.flights.errors import NoFlightsError
from travelglobe.flights.parser import count_rows, extract_flights
from travelglobe.models.location import Location
from travelglobe.storage import LocationStore, SettingStore

logger = logging.getLogger(__name__)

IMPORT_MARKER = "Flight destination"
COORD_TOLERANCE = 0.01
COUNTRIES_SETTING = "countries_visited"

_MARKER_CODE = re.compile(re.escape(IMPORT_MARKER) + r":\s*([A-Za-z0-9]+)")


@dataclass
class ImportResult:
    flights_processed: int = 0
    destinations_added: int = 0
    destinations_updated: int = 0
    destinations_removed: int = 0
    countries: int = 0
    skipped: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class MergeResult:
    text: str
    processed: int
    added: int
    duplicates: int


def destination_notes(destination: DestinationAggregate) -> str:
    count = destination.visit_count
    return f"{IMPORT_MARKER}: {destination.code} ({count} visit{'s' if count > 1 else ''})"


def destination_name(destination: DestinationAggregate) -> str:
    return f"{destination.city}, {destination.country}"


def is_imported(location: Location) -> bool:
    return location.type == "visited" and bool(location.notes) and IMPORT_MARKER in location.notes


def imported_code(location: Location) -> Optional[str]:
    match = _MARKER_CODE.search(location.notes or "")
    return match.group(1).upper() if match else None


def within_tolerance(location: Location, latitude: float, longitude: float,
                     tolerance: float = COORD_TOLERANCE) -> bool:
    return (abs(location.latitude - latitude) < tolerance
            and abs(location.longitude - longitude) < tolerance)


class FlightImporter:
    """Refreshes importer-owned ``visited`` locations from a flight CSV.

    ``run_import`` is safe to call from a startup hook and from request
    handlers at the same time: runs are serialized per process.
    """

    _lock = threading.Lock()

    def __init__(self, directory: AirportDirectory, session_factory: Callable[[], Session]):
        self.directory = directory
        self.session_factory = session_factory

    def run_import(self, source) -> ImportResult:
        with self._lock:
            try:
                text = source.fetch()
            except Exception:
                logger.exception("Failed to read flight CSV from %r", source)
                return ImportResult(skipped=True)

            if text is None:
                logger.info("No flight data available from %r, skipping import", source)
                return ImportResult(skipped=True)

            try:
                flights = extract_flights(text, self.directory)
                destinations = aggregate_destinations(flights)
            except Exception:
                logger.exception("Failed to parse flight CSV from %r", source)
                return ImportResult(skipped=True)

            dropped = count_rows(text) - len(flights)
            if dropped:
                logger.info("Dropped %d flight rows (malformed or unknown airports)", dropped)

            db = self.session_factory()
            try:
                result = self._sync(db, destinations)
            except Exception:
                db.rollback()
                logger.exception("Flight import aborted while writing locations")
                return ImportResult(flights_processed=len(flights), skipped=True)
            finally:
                db.close()

            result.flights_processed = len(flights)
            logger.info(
                "Imported flight destinations from %d flights: %d added, %d updated, %d removed, %d countries",
                result.flights_processed, result.destinations_added, result.destinations_updated,
                result.destinations_removed, result.countries,
            )
            return result

    def _sync(self, db: Session, destinations: Dict[str, DestinationAggregate]) -> ImportResult:
        store = LocationStore(db)
        result = ImportResult()

        owned: Dict[str, Location] = {}
        for location in store.list_by_type("visited"):
            if not is_imported(location):
                continue
            code = imported_code(location)
            if code in destinations and code not in owned:
                owned[code] = location
            else:
                # stale destination, unreadable marker, or a duplicate row for the same code
                store.delete(location.id)
                result.destinations_removed += 1

        for code, destination in destinations.items():
            try:
                if code in owned:
                    location = owned[code]
                    if self._already_present(store, destination, exclude_id=location.id):
                        # another location now covers this airport
                        store.delete(location.id)
                        result.destinations_removed += 1
                    elif self._refresh(store, location, destination):
                        result.destinations_updated += 1
                    continue
                if self._already_present(store, destination):
                    continue
                store.create({
                    "name": destination_name(destination),
                    "latitude": destination.latitude,
                    "longitude": destination.longitude,
                    "type": "visited",
                    "visit_date": None,
                    "notes": destination_notes(destination),
                })
                result.destinations_added += 1
            except Exception:
                db.rollback()
                logger.exception("Failed to store flight destination %s", code)

        result.countries = count_countries(destinations)
        try:
            SettingStore(db).set(COUNTRIES_SETTING, str(result.countries))
        except Exception:
            db.rollback()
            logger.exception("Failed to update %s setting", COUNTRIES_SETTING)
        return result

    @staticmethod
    def _already_present(store: LocationStore, destination: DestinationAggregate,
                         exclude_id: Optional[int] = None) -> bool:
        return any(within_tolerance(location, destination.latitude, destination.longitude)
                   for location in store.list() if location.id != exclude_id)

    @staticmethod
    def _refresh(store: LocationStore, location: Location, destination: DestinationAggregate) -> bool:
        fields = {
            "name": destination_name(destination),
            "latitude": destination.latitude,
            "longitude": destination.longitude,
            "notes": destination_notes(destination),
        }
        changed = {key: value for key, value in fields.items() if getattr(location, key) != value}
        if not changed:
            return False
        store.update(location.id, changed)
        return True


def merge_flight_csv(existing_text: Optional[str], new_text: str, directory: AirportDirectory) -> MergeResult:
    """Append flights from ``new_text`` that ``existing_text`` does not already contain.

    Raises NoFlightsError when the upload has no usable flight.
    """
    new_flights = extract_flights(new_text, directory)
    if not new_flights:
        raise NoFlightsError("No valid flight data found in CSV")

    if not existing_text or not existing_text.strip():
        return MergeResult(text=new_text, processed=len(new_flights), added=len(new_flights), duplicates=0)

    known = {flight.key for flight in extract_flights(existing_text, directory)}
    fresh: List[str] = []
    for flight in new_flights:
        if flight.key in known:
            continue
        known.add(flight.key)
        fresh.append(flight.raw)

    merged = existing_text.rstrip("\r\n")
    if fresh:
        merged = merged + "\n" + "\n".join(fresh)
    merged += "\n"
    return MergeResult(
        text=merged,
        processed=len(new_flights),
        added=len(fresh),
        duplicates=len(new_flights) - len(fresh),
    )
