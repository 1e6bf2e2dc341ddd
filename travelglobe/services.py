from travelglobe.config import settings
from travelglobe.database import SessionLocal
from travelglobe.flights.airports import AirportDirectory
from travelglobe.flights.importer import FlightImporter
from travelglobe.flights.sources import FileCsvSource, source_from_settings

# loaded once at process start, read-only afterwards
airport_directory = AirportDirectory.default()


def get_airport_directory() -> AirportDirectory:
    return airport_directory


def get_flight_importer() -> FlightImporter:
    return FlightImporter(airport_directory, SessionLocal)


def get_csv_source():
    return source_from_settings(settings)


def get_flight_file() -> FileCsvSource:
    """Local copy of the flight history that uploads are merged into."""
    return FileCsvSource(settings.FLIGHT_CSV_PATH)
