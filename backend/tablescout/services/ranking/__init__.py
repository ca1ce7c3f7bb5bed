"""
Venue ranking: filters, sorts and display fields over a batch of Resy search hits.
"""
from tablescout.services.ranking.engine import SortMode, VenueRankingEngine
from tablescout.services.ranking.types import ResySlot, ResyVenue
from tablescout.services.ranking.venues import (
    content_for,
    display_name,
    price_label,
    slot_duration_minutes,
)

__all__ = [
    "ResySlot",
    "ResyVenue",
    "SortMode",
    "VenueRankingEngine",
    "content_for",
    "display_name",
    "price_label",
    "slot_duration_minutes",
]
