"""Coordinate value and great-circle distance."""
import math
from typing import NamedTuple

from tablescout.core.constants import EARTH_RADIUS_MILES


class Coordinate(NamedTuple):
    lat: float
    lng: float


def haversine_miles(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates in miles (haversine, R = 3959)."""
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_MILES * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
