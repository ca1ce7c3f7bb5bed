"""Mapbox geocoding client: lowest level, sends request only. No caching, no quota."""
import logging
from typing import Any
from urllib.parse import quote

import httpx

from tablescout.core.errors import MSG_MAPBOX_NOT_CONFIGURED
from tablescout.core.geo import Coordinate
from tablescout.services.geocoding.config import PLACES_ENDPOINT, MapboxConfig

logger = logging.getLogger(__name__)


class MapboxClient:
    """Mapbox forward geocoding (places endpoint, first feature only)."""

    provider_id = "mapbox"

    def __init__(self, config: MapboxConfig | None = None, *, transport: httpx.BaseTransport | None = None) -> None:
        self._config = config or MapboxConfig()
        self._transport = transport

    def is_configured(self) -> bool:
        return self._config.is_configured()

    def _credentials_error(self) -> dict[str, Any]:
        return {"error": f"{MSG_MAPBOX_NOT_CONFIGURED}. Add MAPBOX_ACCESS_TOKEN to .env."}

    def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        if not self._config.is_configured():
            return self._credentials_error()
        url = f"{self._config.base_url}{path}"
        try:
            with httpx.Client(timeout=self._config.timeout, transport=self._transport) as c:
                r = c.get(url, params={**params, "access_token": self._config.access_token})
        except httpx.HTTPError as e:
            return {"error": str(e) or type(e).__name__}
        if not r.is_success:
            return {"error": f"Mapbox Geocoding API error: {r.status_code}", "detail": (r.text[:500] if r.text else None)}
        try:
            data = r.json() if r.content else {}
        except ValueError:
            return {"error": "Mapbox Geocoding API returned a non-JSON body", "detail": r.text[:500]}
        if not isinstance(data, dict):
            return {"error": "Mapbox Geocoding API returned an unexpected body"}
        return data

    def geocode(self, query: str) -> dict[str, Any]:
        """GET /geocoding/v5/mapbox.places/{query}.json?limit=1 with the raw (non-normalized) query."""
        return self._get(f"{PLACES_ENDPOINT}/{quote(query, safe='')}.json", {"limit": 1})


def first_coordinate(result: dict[str, Any]) -> Coordinate | None:
    """Coordinate of the first feature (Mapbox center is [lng, lat]), or None when there are no usable results."""
    features = result.get("features") or []
    if not features or not isinstance(features[0], dict):
        return None
    center = features[0].get("center") or []
    if len(center) < 2:
        return None
    try:
        lng, lat = float(center[0]), float(center[1])
    except (TypeError, ValueError):
        logger.warning("Mapbox feature has a malformed center: %r", center)
        return None
    return Coordinate(lat=lat, lng=lng)


def first_place_name(result: dict[str, Any]) -> str | None:
    features = result.get("features") or []
    if features and isinstance(features[0], dict):
        return features[0].get("place_name")
    return None
