"""
Venue ranking: filter and order one batch of Resy hits for display.

The engine holds the batch (copied to a tuple) and an optional reference
coordinate, usually the geocoded search location. Every method returns a new
list; the batch and its hits are never mutated, so one engine can serve any
number of concurrent readers.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterable, Sequence

from tablescout.core.geo import Coordinate, haversine_miles
from tablescout.services.ranking import venues as v

logger = logging.getLogger(__name__)


class SortMode(str, Enum):
    RATING = "rating"
    DISTANCE = "distance"
    AVAILABILITY = "availability"
    DEFAULT = "default"

    @classmethod
    def parse(cls, value: SortMode | str | None) -> SortMode:
        """Unknown or empty modes fall through to DEFAULT."""
        try:
            return cls(value)
        except ValueError:
            return cls.DEFAULT


class VenueRankingEngine:
    """Filters, sorts and formats a batch of venues. Pure: no I/O, no shared mutable state."""

    def __init__(self, venues: Iterable[dict[str, Any]] | None, reference: Coordinate | None = None) -> None:
        self._venues: tuple[dict[str, Any], ...] = tuple(venues or ())
        self.reference = reference

    @classmethod
    def from_search_response(cls, response: dict[str, Any], reference: Coordinate | None = None) -> VenueRankingEngine:
        """Build from a venue search response ({"search": {"hits": [...]}, "searchLocation": {lat, lng}})."""
        search = response.get("search")
        hits = (search.get("hits") if isinstance(search, dict) else None) or []
        if reference is None:
            loc = response.get("searchLocation")
            if isinstance(loc, dict) and isinstance(loc.get("lat"), (int, float)) and isinstance(loc.get("lng"), (int, float)):
                reference = Coordinate(lat=float(loc["lat"]), lng=float(loc["lng"]))
        return cls(hits, reference)

    def venues(self) -> list[dict[str, Any]]:
        return list(self._venues)

    def total_count(self) -> int:
        return len(self._venues)

    def available_count(self) -> int:
        return len(self.with_availability())

    # -------------------------------------------------------------------------
    # Filters
    # -------------------------------------------------------------------------

    def with_availability(self) -> list[dict[str, Any]]:
        return [venue for venue in self._venues if v.has_availability(venue)]

    def by_price_tier(self, tiers: Iterable[int], venues: Sequence[dict[str, Any]] | None = None) -> list[dict[str, Any]]:
        """Keep venues whose price tier is in tiers. No tiers selected means no filtering."""
        source = self._venues if venues is None else venues
        wanted = set(tiers or ())
        if not wanted:
            return list(source)
        return [venue for venue in source if v.price_tier(venue) in wanted]

    def by_time_window(self, start_minutes: int, end_minutes: int) -> list[dict[str, Any]]:
        """Venues with at least one slot overlapping [start_minutes, end_minutes) (minutes since midnight)."""
        return [
            venue
            for venue in self._venues
            if any(v.slot_overlaps_window(slot, start_minutes, end_minutes) for slot in v.venue_slots(venue))
        ]

    def combined_filter(
        self,
        start_minutes: int,
        end_minutes: int,
        tiers: Iterable[int] = (),
    ) -> list[dict[str, Any]]:
        """Time window first, then price tier."""
        return self.by_price_tier(tiers, self.by_time_window(start_minutes, end_minutes))

    # -------------------------------------------------------------------------
    # Sorting
    # -------------------------------------------------------------------------

    def distance_miles(self, venue: dict[str, Any]) -> float | None:
        """Haversine miles from the reference coordinate; None without a reference or venue coordinate."""
        coord = v.venue_coordinate(venue)
        if self.reference is None or coord is None:
            return None
        return haversine_miles(self.reference, coord)

    def _distance_key(self, venue: dict[str, Any]) -> float:
        d = self.distance_miles(venue)
        return float("inf") if d is None else d

    def sort_by(
        self,
        mode: SortMode | str | None,
        venues: Sequence[dict[str, Any]] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Stable sort of a copy of venues (default: the whole batch).

        rating: highest average first, missing = 0.
        distance: closest first, no coordinate = last; identity without a reference.
        availability: most slots first.
        default: fewest slots first. Inverse of availability; kept that way on purpose.
        """
        source = list(self._venues if venues is None else venues)
        sort_mode = SortMode.parse(mode)

        if sort_mode is SortMode.RATING:
            return sorted(source, key=v.rating_average, reverse=True)
        if sort_mode is SortMode.DISTANCE:
            if self.reference is None:
                logger.warning("No search location available for distance sorting")
                return source
            return sorted(source, key=self._distance_key)
        if sort_mode is SortMode.AVAILABILITY:
            return sorted(source, key=v.slot_count, reverse=True)
        return sorted(source, key=v.slot_count)

    # -------------------------------------------------------------------------
    # Presentation
    # -------------------------------------------------------------------------

    @staticmethod
    def content_for(venue: dict[str, Any], topic: str) -> str | None:
        return v.content_for(venue, topic)

    @staticmethod
    def display_name(venue: dict[str, Any]) -> str:
        return v.display_name(venue)

    @staticmethod
    def price_label(venue: dict[str, Any]) -> str:
        return v.price_label(venue)

    @staticmethod
    def slot_duration_minutes(slot: dict[str, Any]) -> int:
        return v.slot_duration_minutes(slot)

    @staticmethod
    def format_slot_time(slot: dict[str, Any]) -> str:
        return v.format_slot_time(slot)

    @staticmethod
    def cuisine_types(venue: dict[str, Any]) -> list[str]:
        return v.cuisine_types(venue)

    @staticmethod
    def neighborhood(venue: dict[str, Any]) -> str | None:
        return v.neighborhood(venue)

    @staticmethod
    def venue_url(venue: dict[str, Any], date_str: str, party_size: int | str) -> str:
        return v.venue_url(venue, date_str, party_size)

    def summarize(self, venue: dict[str, Any]) -> dict[str, Any]:
        """Display-ready fields for one venue."""
        distance = self.distance_miles(venue)
        return {
            "name": v.display_name(venue),
            "price": v.price_label(venue),
            "rating": v.rating_average(venue),
            "neighborhood": v.neighborhood(venue),
            "cuisines": v.cuisine_types(venue),
            "slot_count": v.slot_count(venue),
            "slot_times": [v.format_slot_time(s) for s in v.venue_slots(venue)],
            "distance_miles": round(distance, 2) if distance is not None else None,
        }
