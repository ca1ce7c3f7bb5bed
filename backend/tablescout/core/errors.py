"""
Centralized error types and user-facing messages for location resolution.

Geocoding failures are never raised from GeocodeCache.resolve; they surface as a
GeocodeStatus. Only the location layer raises, so callers get one exception
family (LocationError) with a message ready to show.
"""
from __future__ import annotations

# ---------------------------------------------------------------------------
# Constants: user-facing messages
# ---------------------------------------------------------------------------

MSG_CITY_REQUIRED = "Please enter a city name"
MSG_GEOCODE_QUOTA_EXHAUSTED = (
    "Mapbox geocoding service has reached daily limit ({used}/{limit}). "
    "Please use one of these supported cities: {cities}"
)
MSG_MAPBOX_NOT_CONFIGURED = "MAPBOX_ACCESS_TOKEN not configured"


class LocationError(Exception):
    """Base for errors resolving a search location."""


class InvalidLocationError(LocationError):
    """Blank or unusable city input."""

    def __init__(self, message: str = MSG_CITY_REQUIRED) -> None:
        super().__init__(message)


class LocationNotFoundError(LocationError):
    """Location could not be resolved and no fallback applies (daily geocode quota exhausted)."""

    def __init__(self, used: int, limit: int, supported_cities: list[str]) -> None:
        self.used = used
        self.limit = limit
        self.supported_cities = supported_cities
        super().__init__(
            MSG_GEOCODE_QUOTA_EXHAUSTED.format(used=used, limit=limit, cities=", ".join(supported_cities))
        )
