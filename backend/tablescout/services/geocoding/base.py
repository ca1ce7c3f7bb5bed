"""Protocol for geocoding providers. GeocodeCache only depends on this contract."""
from typing import Any, Protocol


class GeocodingProvider(Protocol):
    """Interface for Mapbox (or a test double). Same contract; only fetch differs."""

    @property
    def provider_id(self) -> str:
        """Unique id (e.g. 'mapbox') for logs."""
        ...

    def is_configured(self) -> bool:
        """False when the credential is missing; the cache then skips the call entirely."""
        ...

    def geocode(self, query: str) -> dict[str, Any]:
        """
        Forward-geocode a raw query. Never raises.
        Returns the provider JSON (Mapbox FeatureCollection) on success, {"error": ...} on failure.
        A success with an empty "features" list means no results.
        """
        ...
