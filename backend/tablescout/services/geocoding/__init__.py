"""
Geocoding: address normalization, Mapbox client, daily quota and the persisted geocode cache.
"""
from tablescout.services.geocoding.base import GeocodingProvider
from tablescout.services.geocoding.cache import GeocodeCache
from tablescout.services.geocoding.client import MapboxClient
from tablescout.services.geocoding.config import MapboxConfig
from tablescout.services.geocoding.normalize import normalize_address
from tablescout.services.geocoding.quota import QuotaTracker
from tablescout.services.geocoding.types import GeocodeResolution, GeocodeStatus, QuotaStatus

__all__ = [
    "GeocodeCache",
    "GeocodeResolution",
    "GeocodeStatus",
    "GeocodingProvider",
    "MapboxClient",
    "MapboxConfig",
    "QuotaStatus",
    "QuotaTracker",
    "normalize_address",
]
