from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, status

from travelglobe.flights.airports import AirportDirectory
from travelglobe.services import get_airport_directory

airport_router = APIRouter()


# [...] get a single airport record
@airport_router.get("/{airport_code}")
def get_airport(airport_code: str, directory: AirportDirectory = Depends(get_airport_directory)):
    airport = directory.lookup(airport_code)
    if not airport:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Airport not found")
    return {"status": "ok", "message": "Airport found", "airport": asdict(airport)}
