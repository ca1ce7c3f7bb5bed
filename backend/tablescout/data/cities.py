"""
Cities with fixed search coordinates. Resolved without touching the geocoder.
Keys are normalized city names (see normalize_city_name); locality is what Resy
puts in hit.locality for venues in that city.
"""
from typing import TypedDict


class KnownCity(TypedDict):
    lat: float
    lng: float
    locality: str


KNOWN_CITIES: dict[str, KnownCity] = {
    "san francisco": {"lat": 37.7577, "lng": -122.4376, "locality": "San Francisco"},
    "new york": {"lat": 40.7589, "lng": -73.9851, "locality": "New York"},
    "los angeles": {"lat": 34.0549, "lng": -118.2426, "locality": "Los Angeles"},
    "chicago": {"lat": 41.8758, "lng": -87.6206, "locality": "Chicago"},
    "boston": {"lat": 42.3582, "lng": -71.0636, "locality": "Boston"},
    "washington dc": {"lat": 38.8947, "lng": -77.0365, "locality": "Washington"},
    "miami": {"lat": 25.7743, "lng": -80.1937, "locality": "Miami"},
    "philadelphia": {"lat": 39.9527, "lng": -75.1635, "locality": "Philadelphia"},
    "seattle": {"lat": 47.6205, "lng": -122.3493, "locality": "Seattle"},
    "denver": {"lat": 39.7399, "lng": -104.9903, "locality": "Denver"},
    "atlanta": {"lat": 33.7490, "lng": -84.3880, "locality": "Atlanta"},
    "dallas": {"lat": 32.7767, "lng": -96.7970, "locality": "Dallas"},
    "austin": {"lat": 30.2672, "lng": -97.7431, "locality": "Austin"},
}

# Common abbreviations -> KNOWN_CITIES key
CITY_ALIASES: dict[str, str] = {
    "ny": "new york",
    "nyc": "new york",
    "new york city": "new york",
    "sf": "san francisco",
    "la": "los angeles",
    "dc": "washington dc",
    "philly": "philadelphia",
}

# Used when geocoding fails for a reason other than the daily quota
FALLBACK_CITY = "san francisco"


def supported_localities() -> list[str]:
    """Distinct localities, sorted, for error messages."""
    return sorted({c["locality"] for c in KNOWN_CITIES.values()})
