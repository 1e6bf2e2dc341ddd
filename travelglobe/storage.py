from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from travelglobe.models.location import Location
from travelglobe.models.setting import Setting

LOCATION_FIELDS = ("name", "latitude", "longitude", "type", "visit_date", "notes")


class LocationStore:
    """CRUD over the locations table. Every write commits on its own."""

    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[Location]:
        return self.db.query(Location).order_by(Location.id).all()

    def list_by_type(self, location_type: str) -> List[Location]:
        return self.db.query(Location).filter(Location.type == location_type).order_by(Location.id).all()

    def get(self, location_id: int) -> Optional[Location]:
        return self.db.query(Location).filter(Location.id == location_id).first()

    def get_singleton(self, location_type: str) -> Optional[Location]:
        """First row of a type callers treat as unique ('current' or 'home')."""
        return self.db.query(Location).filter(Location.type == location_type).order_by(Location.id).first()

    def create(self, fields: Dict[str, Any]) -> Location:
        location = Location(**{key: fields.get(key) for key in LOCATION_FIELDS})
        self.db.add(location)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(location)
        return location

    def update(self, location_id: int, fields: Dict[str, Any]) -> Optional[Location]:
        location = self.get(location_id)
        if not location:
            return None
        for key, value in fields.items():
            if key in LOCATION_FIELDS:
                setattr(location, key, value)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(location)
        return location

    def delete(self, location_id: int) -> bool:
        location = self.get(location_id)
        if not location:
            return False
        self.db.delete(location)
        self.db.commit()
        return True

    def upsert_singleton(self, location_type: str, fields: Dict[str, Any]) -> Location:
        fields = dict(fields, type=location_type)
        existing = self.get_singleton(location_type)
        if existing:
            return self.update(existing.id, fields)
        return self.create(fields)


class SettingStore:
    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[Setting]:
        return self.db.query(Setting).order_by(Setting.key).all()

    def get(self, key: str) -> Optional[Setting]:
        return self.db.query(Setting).filter(Setting.key == key).first()

    def set(self, key: str, value: str) -> Setting:
        setting = self.get(key)
        if setting:
            setting.value = value
        else:
            setting = Setting(key=key, value=value)
            self.db.add(setting)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(setting)
        return setting
