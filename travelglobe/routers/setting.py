from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from travelglobe.database import get_db
from travelglobe.permissions import has_permission
from travelglobe.schemas.setting import ListSettingResponse, SettingResponse, SettingUpdateSchema
from travelglobe.storage import SettingStore

setting_router = APIRouter()


# [...] get all settings
@setting_router.get("/", response_model=ListSettingResponse)
def get_settings(db: Session = Depends(get_db)):
    settings = SettingStore(db).list()
    return {"status": "ok", "message": "List of settings", "settings": settings}


# [...] get a single setting
@setting_router.get("/{key}", response_model=SettingResponse)
def get_setting(key: str, db: Session = Depends(get_db)):
    setting = SettingStore(db).get(key)
    if not setting:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Setting not found")
    return {"status": "ok", "message": "Setting found", "setting": setting}


# [...] set a setting value
@setting_router.put("/{key}", response_model=SettingResponse, dependencies=[Depends(has_permission("write:settings"))])
def update_setting(key: str, setting: SettingUpdateSchema, db: Session = Depends(get_db)):
    if not setting.value.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Value is required")
    record = SettingStore(db).set(key, setting.value.strip())
    return {"status": "ok", "message": "Setting updated", "setting": record}
