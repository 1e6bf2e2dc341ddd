import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from travelglobe.config import settings
from travelglobe.flights.airports import AirportDirectory
from travelglobe.flights.errors import FlightImportError, UnsupportedUploadError
from travelglobe.flights.importer import FlightImporter, merge_flight_csv
from travelglobe.flights.parser import extract_flights
from travelglobe.flights.sources import FileCsvSource, TextCsvSource
from travelglobe.permissions import has_permission
from travelglobe.services import get_airport_directory, get_csv_source, get_flight_file, get_flight_importer

logger = logging.getLogger(__name__)

flight_router = APIRouter()


def _endpoint(airport):
    return {
        "code": airport.code,
        "name": airport.city,
        "latitude": airport.latitude,
        "longitude": airport.longitude,
    }


def _read_upload(csv_file: UploadFile) -> str:
    filename = csv_file.filename or ""
    if csv_file.content_type != "text/csv" and not filename.lower().endswith(".csv"):
        raise UnsupportedUploadError("Only CSV files are allowed")
    content = csv_file.file.read(settings.MAX_UPLOAD_BYTES + 1)
    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="CSV file is too large")
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise UnsupportedUploadError("CSV file must be UTF-8 encoded")


# [...] get flight routes for the globe arcs
@flight_router.get("/routes")
def get_flight_routes(source=Depends(get_csv_source),
                      directory: AirportDirectory = Depends(get_airport_directory)):
    text = source.fetch()
    if text is None:
        return {"status": "ok", "message": "No flight data", "routes": []}
    routes = [
        {
            "id": flight.id,
            "from": _endpoint(flight.from_airport),
            "to": _endpoint(flight.to_airport),
            "date": flight.date,
            "airline": flight.airline,
            "flight_number": flight.flight_number,
        }
        for flight in extract_flights(text, directory)
    ]
    return {"status": "ok", "message": "List of flight routes", "routes": routes}


# [...] upload a flight CSV export and refresh visited destinations
@flight_router.post("/upload", dependencies=[Depends(has_permission("write:flights"))])
def upload_flights(csv_file: UploadFile = File(...),
                   flight_file: FileCsvSource = Depends(get_flight_file),
                   directory: AirportDirectory = Depends(get_airport_directory),
                   importer: FlightImporter = Depends(get_flight_importer)):
    if settings.FLIGHT_CSV_URL:
        # imports read the remote source, never the local file uploads merge into
        raise HTTPException(status_code=status.HTTP_409_CONFLICT,
                            detail="Flight history is read from a remote source; upload the CSV there instead")
    try:
        text = _read_upload(csv_file)
        merged = merge_flight_csv(flight_file.fetch(), text, directory)
    except FlightImportError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if merged.added:
        flight_file.save(merged.text)
    logger.info("Flight upload: %d flights, %d new, %d duplicates", merged.processed, merged.added, merged.duplicates)

    result = importer.run_import(TextCsvSource(merged.text))
    if merged.added:
        message = (f"Successfully processed {merged.processed} flights. Added {merged.added} new flights "
                   f"and {result.destinations_added} destinations. Updated {result.countries} countries visited.")
    else:
        message = f"All {merged.processed} flights already exist in the system. No new flights added."
    return {
        "status": "ok",
        "message": message,
        "processed": merged.processed,
        "added": merged.added,
        "duplicates": merged.duplicates,
        "destinations": result.destinations_added,
        "countries": result.countries,
        "import": result.to_dict(),
    }


# [...] re-run the import against the configured flight source
@flight_router.post("/import", dependencies=[Depends(has_permission("write:flights"))])
def run_flight_import(source=Depends(get_csv_source),
                      importer: FlightImporter = Depends(get_flight_importer)):
    result = importer.run_import(source)
    return {"status": "ok", "message": "Flight import finished", "import": result.to_dict()}
