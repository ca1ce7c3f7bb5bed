"""
Pure accessors over Resy venue hits and slots.

Hits are read-only; nothing here mutates its input. Missing or malformed fields
degrade to defaults (0 rating, "" price label, "Unknown Restaurant") instead of raising.
"""
from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any

from tablescout.core.constants import (
    DEFAULT_CONTENT_LANGUAGE,
    DEFAULT_LOCATION_SLUG,
    PRICE_LABELS,
    RESY_VENUE_BASE,
    UNKNOWN_VENUE_NAME,
)
from tablescout.core.geo import Coordinate

_CLOCK_RE = re.compile(r"^(\d{1,2})(?::(\d{2}))?$")


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def venue_slots(venue: dict[str, Any]) -> list[dict[str, Any]]:
    slots = _as_dict(venue.get("availability")).get("slots") or []
    return slots if isinstance(slots, list) else []


def slot_count(venue: dict[str, Any]) -> int:
    return len(venue_slots(venue))


def has_availability(venue: dict[str, Any]) -> bool:
    """True if the hit has at least one availability slot."""
    return slot_count(venue) > 0


# -----------------------------------------------------------------------------
# Slots
# -----------------------------------------------------------------------------

def parse_slot_time(value: Any) -> datetime | None:
    """Parse "YYYY-MM-DD HH:MM:SS" (or ISO with offset). Returns None if invalid."""
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None


def slot_bounds(slot: dict[str, Any]) -> tuple[datetime, datetime] | None:
    date_obj = _as_dict(_as_dict(slot).get("date"))
    start = parse_slot_time(date_obj.get("start"))
    end = parse_slot_time(date_obj.get("end"))
    if start is None or end is None:
        return None
    return start, end


def minutes_of_day(dt: datetime) -> int:
    """Minutes since midnight on dt's own wall clock (no timezone conversion)."""
    return dt.hour * 60 + dt.minute


def slot_overlaps_window(slot: dict[str, Any], start_minutes: int, end_minutes: int) -> bool:
    """Half-open overlap of [slot start, slot end) with [start_minutes, end_minutes). Touching is not overlapping."""
    bounds = slot_bounds(slot)
    if bounds is None:
        return False
    slot_start = minutes_of_day(bounds[0])
    slot_end = minutes_of_day(bounds[1])
    return slot_start < end_minutes and slot_end > start_minutes


def slot_duration_minutes(slot: dict[str, Any]) -> int:
    """Minutes between slot end and start, rounded half up. 0 when the slot has no parseable dates."""
    bounds = slot_bounds(slot)
    if bounds is None:
        return 0
    start, end = bounds
    try:
        seconds = (end - start).total_seconds()
    except TypeError:
        # one side has an offset, the other does not
        return 0
    return math.floor(seconds / 60 + 0.5)


def format_slot_time(slot: dict[str, Any]) -> str:
    """Slot start as 12-hour clock, e.g. "7:30 PM". Empty string if unparseable."""
    bounds = slot_bounds(slot)
    if bounds is None:
        return ""
    start = bounds[0]
    hour = start.hour % 12 or 12
    suffix = "AM" if start.hour < 12 else "PM"
    return f"{hour}:{start.minute:02d} {suffix}"


# -----------------------------------------------------------------------------
# Venue fields
# -----------------------------------------------------------------------------

def price_tier(venue: dict[str, Any]) -> int | None:
    tier = venue.get("price_range_id")
    if isinstance(tier, bool) or not isinstance(tier, int):
        return None
    return tier


def price_label(venue: dict[str, Any]) -> str:
    """1/2/3 -> "$"/"$$"/"$$$"; anything else (including absent) -> ""."""
    return PRICE_LABELS.get(price_tier(venue), "")


def rating_average(venue: dict[str, Any]) -> float:
    avg = _as_dict(venue.get("rating")).get("average")
    if isinstance(avg, bool) or not isinstance(avg, (int, float)):
        return 0.0
    return float(avg)


def venue_coordinate(venue: dict[str, Any]) -> Coordinate | None:
    geo = _as_dict(venue.get("_geoloc"))
    lat, lng = geo.get("lat"), geo.get("lng")
    if not isinstance(lat, (int, float)) or not isinstance(lng, (int, float)):
        return None
    return Coordinate(lat=float(lat), lng=float(lng))


def _highlight(venue: dict[str, Any]) -> dict[str, Any]:
    return _as_dict(venue.get("_highlightResult"))


def display_name(venue: dict[str, Any]) -> str:
    """Search-highlight name, else the venue name, else "Unknown Restaurant"."""
    highlighted = _as_dict(_highlight(venue).get("name")).get("value")
    return highlighted or venue.get("name") or UNKNOWN_VENUE_NAME


def cuisine_types(venue: dict[str, Any]) -> list[str]:
    cuisines = _highlight(venue).get("cuisine")
    if not isinstance(cuisines, list):
        return []
    return [c["value"] for c in cuisines if isinstance(c, dict) and c.get("value")]


def neighborhood(venue: dict[str, Any]) -> str | None:
    return _as_dict(_highlight(venue).get("neighborhood")).get("value") or None


def content_for(venue: dict[str, Any], topic: str) -> str | None:
    """
    Body text for a content topic ("about", "need_to_know", "why_we_like_it").
    Tries the flat list shape [{name, body}] first, then {"en-us": {topic: {body}}}.
    """
    content = venue.get("content")
    if not content:
        return None
    if isinstance(content, list):
        for item in content:
            if isinstance(item, dict) and item.get("name") == topic:
                return item.get("body") or None
        return None
    if isinstance(content, dict):
        lang_content = content.get(DEFAULT_CONTENT_LANGUAGE)
        if isinstance(lang_content, dict):
            item = lang_content.get(topic)
            if isinstance(item, dict):
                return item.get("body") or None
    return None


def venue_url(venue: dict[str, Any], date_str: str, party_size: int | str) -> str:
    """Resy booking page: /cities/{loc}/venues/{slug}?date=YYYY-MM-DD&seats=N."""
    loc = (_as_dict(venue.get("location")).get("url_slug") or DEFAULT_LOCATION_SLUG).strip() or DEFAULT_LOCATION_SLUG
    slug = (venue.get("url_slug") or "").strip()
    return f"{RESY_VENUE_BASE}/cities/{loc}/venues/{slug}?date={date_str}&seats={party_size}"


def clock_to_minutes(value: str | None) -> int | None:
    """Parse "HH:MM" (or "H") to minutes since midnight. Returns None if invalid."""
    s = (value or "").strip()
    m = _CLOCK_RE.match(s)
    if not m:
        return None
    hour, minute = int(m.group(1)), int(m.group(2) or 0)
    if hour > 24 or minute > 59 or (hour == 24 and minute):
        return None
    return hour * 60 + minute
