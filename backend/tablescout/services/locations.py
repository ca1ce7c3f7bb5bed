"""
Search location: city text -> reference coordinate + expected locality.

Order: known-city table (no geocoder call), then the geocode cache, then a
San Francisco fallback. The fallback is skipped when the daily geocode quota is
the reason for the miss; the caller gets LocationNotFoundError instead so the
user can pick a supported city.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, NamedTuple

from tablescout.core.errors import InvalidLocationError, LocationNotFoundError
from tablescout.core.geo import Coordinate
from tablescout.data.cities import CITY_ALIASES, FALLBACK_CITY, KNOWN_CITIES, supported_localities
from tablescout.services.geocoding.cache import GeocodeCache
from tablescout.services.geocoding.types import GeocodeStatus

logger = logging.getLogger(__name__)

SOURCE_KNOWN_CITY = "known_city"
SOURCE_GEOCODED = "geocoded"
SOURCE_FALLBACK = "fallback"


class SearchLocation(NamedTuple):
    coordinate: Coordinate
    locality: str
    source: str  # known_city | geocoded | fallback
    query: str


def normalize_city_name(city: str | None) -> str:
    normalized = (city or "").strip().lower()
    return CITY_ALIASES.get(normalized, normalized)


def _known(city_key: str, query: str, source: str = SOURCE_KNOWN_CITY) -> SearchLocation:
    data = KNOWN_CITIES[city_key]
    return SearchLocation(Coordinate(lat=data["lat"], lng=data["lng"]), data["locality"], source, query)


def resolve_search_location(city: str | None, geocoder: GeocodeCache) -> SearchLocation:
    """Resolve city text to a SearchLocation. Raises InvalidLocationError or LocationNotFoundError."""
    if not city or not city.strip():
        raise InvalidLocationError()
    city_key = normalize_city_name(city)
    if city_key in KNOWN_CITIES:
        return _known(city_key, city)

    resolution = geocoder.resolve_with_status(city)
    if resolution.coordinate is not None:
        # For geocoded locations the raw input is the expected locality
        return SearchLocation(resolution.coordinate, city.strip(), SOURCE_GEOCODED, city)

    if resolution.status is GeocodeStatus.QUOTA_EXHAUSTED:
        quota = geocoder.quota_status()
        raise LocationNotFoundError(quota.used, quota.limit, supported_localities())

    logger.warning("Unable to geocode %r (%s). Defaulting to %s.", city, resolution.status.value, FALLBACK_CITY)
    return _known(FALLBACK_CITY, city, SOURCE_FALLBACK)


def locality_matches(venue_locality: str | None, location: SearchLocation) -> bool:
    """
    Known/fallback cities: equality or either string containing the other.
    Geocoded: compare against the first comma-separated part of the raw query.
    """
    if not venue_locality:
        return False
    venue_loc = venue_locality.strip().lower()
    if not venue_loc:
        return False
    if location.source == SOURCE_GEOCODED:
        main_city = location.query.split(",")[0].strip().lower()
        return bool(main_city) and (main_city in venue_loc or venue_loc in main_city)
    expected = location.locality.lower()
    return venue_loc == expected or expected in venue_loc or venue_loc in expected


def filter_by_locality(venues: Iterable[dict[str, Any]], location: SearchLocation) -> list[dict[str, Any]]:
    """Drop hits outside the searched city (Resy geo search bleeds across city lines)."""
    return [venue for venue in venues if locality_matches(venue.get("locality"), location)]
