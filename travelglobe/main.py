import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.concurrency import run_in_threadpool
from starlette.middleware.cors import CORSMiddleware

from travelglobe.config import settings
from travelglobe.database import Base, SessionLocal, engine
from travelglobe.routers import airport_router, auth_router, flight_router, location_router, setting_router
from travelglobe.seed import seed_defaults
from travelglobe.services import get_csv_source, get_flight_importer

# START COMMAND:
# uvicorn travelglobe.main:app --reload

logger = logging.getLogger(__name__)


def init_db():
    Base.metadata.create_all(bind=engine)
    if not settings.SEED_DEFAULTS:
        return
    db = SessionLocal()
    try:
        seed_defaults(db)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await run_in_threadpool(init_db)
    if settings.IMPORT_ON_STARTUP:
        await run_in_threadpool(get_flight_importer().run_import, get_csv_source())
    yield


app = FastAPI(title="travelglobe", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(location_router, prefix="/api/locations", tags=["locations"])
app.include_router(setting_router, prefix="/api/settings", tags=["settings"])
app.include_router(flight_router, prefix="/api/flights", tags=["flights"])
app.include_router(airport_router, prefix="/api/airports", tags=["airports"])
app.include_router(auth_router, prefix="/api/auth", tags=["auth"])


@app.get("/")
async def read_root():
    return {"status": "ok", "message": "travelglobe API"}
