"""
Typed definitions for the Resy venue search hits the ranking engine reads.

Hits stay plain dicts (search.hits[] from POST /3/venuesearch/search); these
TypedDicts only document the fields we touch. Every field is optional.
"""

from typing import Any, TypedDict


class ResySlotDate(TypedDict, total=False):
    """Slot date range from availability.slots[].date."""
    start: str  # e.g. "2026-02-18 20:30:00" (venue-local wall clock)
    end: str


class ResySlot(TypedDict, total=False):
    """One availability slot from hit.availability.slots[]."""
    date: ResySlotDate
    config: dict[str, Any]  # {id, token, type}; type is the table area e.g. "Dining Room"
    shift: dict[str, Any]
    template: dict[str, Any]
    reservation_config: dict[str, Any]
    exclusive: dict[str, Any]
    display_config: dict[str, Any]
    is_global_dining_access: bool
    has_add_ons: bool


class ResyAvailability(TypedDict, total=False):
    slots: list[ResySlot]


class ResyGeolocation(TypedDict):
    lat: float
    lng: float


class ResyRating(TypedDict, total=False):
    average: float
    count: int


class ResyContentItem(TypedDict, total=False):
    name: str  # topic: "about", "need_to_know", "why_we_like_it"
    body: str


class ResyHighlightValue(TypedDict, total=False):
    value: str
    matchLevel: str
    matchedWords: list[str]


class ResyHighlightResult(TypedDict, total=False):
    name: ResyHighlightValue
    locality: ResyHighlightValue
    neighborhood: ResyHighlightValue
    cuisine: list[ResyHighlightValue]


class ResyLocation(TypedDict, total=False):
    """Location object on a hit (city/region)."""
    name: str
    id: int
    code: str
    url_slug: str  # e.g. "san-francisco-ca"; used to build venue page URL


class ResyVenue(TypedDict, total=False):
    """
    One hit from Resy venue search (search.hits[]).
    content is either a flat list of ResyContentItem or {"en-us": {topic: ResyContentItem}}.
    """
    objectID: str
    id: dict[str, Any]  # {"resy": 60029}
    name: str
    url_slug: str
    locality: str
    location: ResyLocation
    price_range_id: int  # 1..3
    rating: ResyRating
    availability: ResyAvailability
    content: list[ResyContentItem] | dict[str, Any]
    _geoloc: ResyGeolocation
    _highlightResult: ResyHighlightResult
