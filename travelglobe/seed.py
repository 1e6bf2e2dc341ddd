"""Default rows created on first start."""

import logging

from sqlalchemy.orm import Session

from travelglobe.flights.importer import COUNTRIES_SETTING
from travelglobe.storage import LocationStore, SettingStore

logger = logging.getLogger(__name__)

DEFAULT_HOME = {
    "name": "Brooklyn, NY",
    "latitude": 40.7128,
    "longitude": -74.0060,
    "notes": "Home base in Brooklyn",
}

DEFAULT_CURRENT = {
    "name": "Brooklyn, NY",
    "latitude": 40.7128,
    "longitude": -74.0060,
    "notes": "Currently in Brooklyn",
}

DEFAULT_COUNTRIES_VISITED = "0"


def seed_defaults(db: Session) -> None:
    locations = LocationStore(db)
    if locations.get_singleton("home") is None:
        locations.create(dict(DEFAULT_HOME, type="home"))
        logger.info("Created home location")
    if locations.get_singleton("current") is None:
        locations.create(dict(DEFAULT_CURRENT, type="current"))
        logger.info("Created current location")

    settings = SettingStore(db)
    if settings.get(COUNTRIES_SETTING) is None:
        settings.set(COUNTRIES_SETTING, DEFAULT_COUNTRIES_VISITED)
        logger.info("Created %s setting", COUNTRIES_SETTING)
