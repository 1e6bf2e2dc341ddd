from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict


class SettingBaseSchema(BaseModel):
    id: int
    key: str
    value: str
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SettingUpdateSchema(BaseModel):
    value: str


class ListSettingResponse(BaseModel):
    status: str
    message: str
    settings: List[SettingBaseSchema]


class SettingResponse(BaseModel):
    status: str
    message: str
    setting: SettingBaseSchema
