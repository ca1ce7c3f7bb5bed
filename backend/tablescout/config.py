"""
Application settings (Pydantic Settings).
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

# .env next to backend/ (parent of tablescout/)
_env_path = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/tablescout.db"
    # Mapbox: MAPBOX_ACCESS_TOKEN in .env
    mapbox_access_token: str = ""
    mapbox_base_url: str = "https://api.mapbox.com"
    # Mapbox free tier is 50,000 requests/month; we cap per day
    geocode_daily_quota_limit: int = 50000
    geocode_quota_timezone: str = "UTC"
    geocode_timeout_seconds: float | None = None  # None = no timeout
    geocode_cache_max_entries: int | None = None  # None = unbounded cache
    log_level: str = "INFO"

    class Config:
        env_file = _env_path
        extra = "ignore"

    @field_validator("mapbox_access_token", mode="after")
    @classmethod
    def strip_token(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("geocode_daily_quota_limit", mode="after")
    @classmethod
    def non_negative_limit(cls, v: int) -> int:
        return max(0, v)


settings = Settings()
