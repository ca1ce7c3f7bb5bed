"""
Centralized constants for geocoding and venue ranking.

Change labels, defaults and physical constants here instead of scattering literals.
"""

# Haversine on a spherical Earth, miles
EARTH_RADIUS_MILES = 3959

# Venue display fallbacks
UNKNOWN_VENUE_NAME = "Unknown Restaurant"
PRICE_LABELS = {1: "$", 2: "$$", 3: "$$$"}

# Venue content blocks: nested shape is keyed by language code
DEFAULT_CONTENT_LANGUAGE = "en-us"

# Resy booking page: /cities/{loc}/venues/{slug}?date=YYYY-MM-DD&seats=N
RESY_VENUE_BASE = "https://resy.com"
DEFAULT_LOCATION_SLUG = "san-francisco-ca"
