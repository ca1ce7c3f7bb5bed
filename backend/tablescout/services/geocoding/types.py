"""Result types for geocode resolution and quota checks."""
from enum import Enum
from typing import NamedTuple

from tablescout.core.geo import Coordinate


class GeocodeStatus(str, Enum):
    """Why resolve() returned what it did. Everything except CACHE_HIT/GEOCODED yields no coordinate."""

    CACHE_HIT = "cache_hit"
    GEOCODED = "geocoded"
    QUOTA_EXHAUSTED = "quota_exhausted"
    PROVIDER_UNAVAILABLE = "provider_unavailable"  # network/HTTP failure or missing credential
    NO_RESULTS = "no_results"  # provider answered, nothing found; still billed
    INVALID_QUERY = "invalid_query"  # blank after normalization


class GeocodeResolution(NamedTuple):
    coordinate: Coordinate | None
    status: GeocodeStatus

    @property
    def found(self) -> bool:
        return self.coordinate is not None


class QuotaStatus(NamedTuple):
    available: bool
    used: int
    limit: int
