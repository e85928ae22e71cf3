"""
Configuration settings for the Owner Occupancy Forecast API.
"""
from pathlib import Path
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # SQLite store holding owner properties and rental bookings
    database_path: Path = Path(__file__).parent / "db" / "data" / "dashboard.db"

    # Forecast panel defaults
    default_months_back: int = 12
    default_horizon_months: int = 3

    # Upper bound on bookings read per request (bounded batch read)
    booking_fetch_limit: int = 1000

    # Frontend origin allowed by CORS (Netlify URL in production)
    frontend_url: str = ""

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
