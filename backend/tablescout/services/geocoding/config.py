"""Mapbox geocoding config. Credential from settings (MAPBOX_ACCESS_TOKEN) or MapboxClient args."""
from tablescout.config import Settings, settings as default_settings

PLACES_ENDPOINT = "/geocoding/v5/mapbox.places"


class MapboxConfig:
    """Access token, base URL and request timeout for Mapbox.

    Arguments left as None are read from `source` (the process settings by default).
    """

    __slots__ = ("access_token", "base_url", "timeout")

    def __init__(
        self,
        *,
        access_token: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        source: Settings | None = None,
    ) -> None:
        s = source or default_settings
        token = s.mapbox_access_token if access_token is None else access_token
        self.access_token = (token or "").strip()
        self.base_url = (s.mapbox_base_url if base_url is None else base_url).rstrip("/")
        self.timeout = s.geocode_timeout_seconds if timeout is None else timeout

    @classmethod
    def from_settings(cls, source: Settings) -> "MapboxConfig":
        """Config taken entirely from one Settings object."""
        return cls(source=source)

    def is_configured(self) -> bool:
        return bool(self.access_token)
