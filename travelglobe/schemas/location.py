from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

LocationType = Literal["current", "home", "visited"]


class LocationCreateSchema(BaseModel):
    name: str = Field(min_length=1)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    type: LocationType
    visit_date: Optional[str] = None
    notes: Optional[str] = None


class CurrentLocationSchema(BaseModel):
    name: str = Field(min_length=1)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    visit_date: Optional[str] = None
    notes: Optional[str] = None


class LocationUpdateSchema(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    type: Optional[LocationType] = None
    visit_date: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name", "latitude", "longitude", "type")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class LocationBaseSchema(BaseModel):
    id: int
    name: str
    latitude: float
    longitude: float
    type: str
    visit_date: Optional[str] = None
    notes: Optional[str] = None
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ListLocationResponse(BaseModel):
    status: str
    message: str
    locations: List[LocationBaseSchema]


class LocationResponse(BaseModel):
    status: str
    message: str
    location: LocationBaseSchema
