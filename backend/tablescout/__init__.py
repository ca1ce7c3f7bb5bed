"""tablescout: geocode cache with daily quota, and venue ranking over Resy search results."""

__version__ = "0.1.0"
