from travelglobe.flights.aggregate import DestinationAggregate, aggregate_destinations
from travelglobe.flights.airports import AirportDirectory, AirportRecord
from travelglobe.flights.importer import FlightImporter, ImportResult, merge_flight_csv
from travelglobe.flights.parser import FlightRecord, extract_flights, parse_line
from travelglobe.flights.sources import FileCsvSource, HttpCsvSource, TextCsvSource

__all__ = [
    "AirportDirectory",
    "AirportRecord",
    "DestinationAggregate",
    "FileCsvSource",
    "FlightImporter",
    "FlightRecord",
    "HttpCsvSource",
    "ImportResult",
    "TextCsvSource",
    "aggregate_destinations",
    "extract_flights",
    "merge_flight_csv",
    "parse_line",
]
