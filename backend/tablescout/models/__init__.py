from tablescout.models.geocode_cache_entry import GeocodeCacheEntry
from tablescout.models.geocode_quota import GeocodeQuota

__all__ = [
    "GeocodeCacheEntry",
    "GeocodeQuota",
]
