from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str = "sqlite:///./travelglobe.db"
    SQL_ECHO: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    ADMIN_USERNAME: str = "admin"
    ADMIN_DASHBOARD_PASSWORD: str = "admin123"

    # a remote pre-signed URL wins over the local file when both are set
    FLIGHT_CSV_PATH: str = "attached_assets/flights.csv"
    FLIGHT_CSV_URL: Optional[str] = None
    FLIGHT_CSV_TIMEOUT: float = 10.0

    IMPORT_ON_STARTUP: bool = True
    SEED_DEFAULTS: bool = True
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    CORS_ORIGINS: List[str] = [
        "http://localhost",
        "http://localhost:8000",
        "http://localhost:5173",
    ]


settings = Settings()
