from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from travelglobe.database import get_db
from travelglobe.permissions import has_permission
from travelglobe.schemas.location import (CurrentLocationSchema, ListLocationResponse, LocationCreateSchema,
                                          LocationResponse, LocationUpdateSchema)
from travelglobe.storage import LocationStore

location_router = APIRouter()


# [...] get all location records
@location_router.get("/", response_model=ListLocationResponse)
def get_locations(db: Session = Depends(get_db)):
    locations = LocationStore(db).list()
    return {"status": "ok", "message": "List of locations", "locations": locations}


# [...] get the current location
@location_router.get("/current", response_model=LocationResponse)
def get_current_location(db: Session = Depends(get_db)):
    location = LocationStore(db).get_singleton("current")
    if not location:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Current location not found")
    return {"status": "ok", "message": "Current location", "location": location}


# [...] get the home location
@location_router.get("/home", response_model=LocationResponse)
def get_home_location(db: Session = Depends(get_db)):
    location = LocationStore(db).get_singleton("home")
    if not location:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Home location not found")
    return {"status": "ok", "message": "Home location", "location": location}


# [...] get visited locations
@location_router.get("/visited", response_model=ListLocationResponse)
def get_visited_locations(db: Session = Depends(get_db)):
    locations = LocationStore(db).list_by_type("visited")
    return {"status": "ok", "message": "List of visited locations", "locations": locations}


# [...] add a new location record
@location_router.post("/", response_model=LocationResponse, status_code=status.HTTP_201_CREATED,
                      dependencies=[Depends(has_permission("write:locations"))])
def add_location(location: LocationCreateSchema, db: Session = Depends(get_db)):
    new_location = LocationStore(db).create(location.model_dump())
    return {"status": "ok", "message": "Location added", "location": new_location}


# [...] replace the current location, creating it if missing
@location_router.put("/current", response_model=LocationResponse, dependencies=[Depends(has_permission("write:locations"))])
def update_current_location(location: CurrentLocationSchema, db: Session = Depends(get_db)):
    current = LocationStore(db).upsert_singleton("current", location.model_dump())
    return {"status": "ok", "message": "Current location updated", "location": current}


# [...] edit a location record
@location_router.put("/{location_id}", response_model=LocationResponse, dependencies=[Depends(has_permission("write:locations"))])
def update_location(location_id: int, location: LocationUpdateSchema, db: Session = Depends(get_db)):
    location_record = LocationStore(db).update(location_id, location.model_dump(exclude_unset=True))
    if not location_record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Location not found")
    return {"status": "ok", "message": "Location updated", "location": location_record}


# [...] get a single location record
@location_router.get("/{location_id}", response_model=LocationResponse)
def get_location(location_id: int, db: Session = Depends(get_db)):
    location_record = LocationStore(db).get(location_id)
    if not location_record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Location not found")
    return {"status": "ok", "message": "Location found", "location": location_record}


# [...] delete a location record
@location_router.delete("/{location_id}", dependencies=[Depends(has_permission("write:locations"))])
def delete_location(location_id: int, db: Session = Depends(get_db)):
    if not LocationStore(db).delete(location_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Location not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
