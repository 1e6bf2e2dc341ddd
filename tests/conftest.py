"""
Pytest fixtures.
Every test gets a fresh in-memory SQLite database shared by the API and the importer.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["IMPORT_ON_STARTUP"] = "false"
os.environ["SEED_DEFAULTS"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from travelglobe import models  # noqa: F401  (registers tables)
from travelglobe.config import settings
from travelglobe.database import Base, get_db
from travelglobe.flights.airports import AirportDirectory
from travelglobe.flights.importer import FlightImporter
from travelglobe.flights.sources import FileCsvSource
from travelglobe.main import app
from travelglobe.services import get_csv_source, get_flight_file, get_flight_importer


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def directory():
    return AirportDirectory.default()


@pytest.fixture
def importer(directory, session_factory):
    return FlightImporter(directory, session_factory)


@pytest.fixture
def flight_file(tmp_path):
    return FileCsvSource(str(tmp_path / "attached_assets" / "flights.csv"))


@pytest.fixture
def client(session_factory, importer, flight_file):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_flight_importer] = lambda: importer
    app.dependency_overrides[get_flight_file] = lambda: flight_file
    app.dependency_overrides[get_csv_source] = lambda: flight_file
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    r = client.post(
        "/api/auth/",
        data={"username": settings.ADMIN_USERNAME, "password": settings.ADMIN_DASHBOARD_PASSWORD},
    )
    assert r.status_code == 200, (r.status_code, r.text)
    return {"Authorization": f"Bearer {r.json()['access_token']}"}
