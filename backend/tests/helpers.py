"""Builders for Resy-shaped venue hits and a scriptable geocoding provider."""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

SF = (37.7749, -122.4194)
MISSION = (37.7599, -122.4148)


def make_slot(start: str, end: str, *, table_type: str = "Dining Room") -> dict[str, Any]:
    return {
        "date": {"start": start, "end": end},
        "config": {"id": 1, "token": f"rgs://resy/1/{start}", "type": table_type},
        "shift": {"id": 7, "day": start[:10], "service": {"type": {"id": 3}}},
    }


def make_venue(
    name: str | None,
    *,
    slots: list[dict[str, Any]] | None = None,
    price: int | None = None,
    rating: float | None = None,
    geo: tuple[float, float] | None = None,
    locality: str | None = "San Francisco",
    **extra: Any,
) -> dict[str, Any]:
    venue: dict[str, Any] = {"objectID": f"id-{name}", "availability": {"slots": list(slots or [])}}
    if name is not None:
        venue["name"] = name
    if price is not None:
        venue["price_range_id"] = price
    if rating is not None:
        venue["rating"] = {"average": rating, "count": 100}
    if geo is not None:
        venue["_geoloc"] = {"lat": geo[0], "lng": geo[1]}
    if locality is not None:
        venue["locality"] = locality
    venue.update(extra)
    return venue


def slots_at(*hours: int, day: str = "2026-10-19", minutes: int = 60) -> list[dict[str, Any]]:
    """One slot per hour given, each `minutes` long."""
    out = []
    for h in hours:
        start = datetime.fromisoformat(f"{day} {h:02d}:00:00")
        end = start + timedelta(minutes=minutes)
        out.append(make_slot(start.strftime("%Y-%m-%d %H:%M:%S"), end.strftime("%Y-%m-%d %H:%M:%S")))
    return out


def mapbox_result(lat: float, lng: float, place_name: str = "Somewhere") -> dict[str, Any]:
    return {"type": "FeatureCollection", "features": [{"center": [lng, lat], "place_name": place_name}]}


class FakeProvider:
    """GeocodingProvider double. Answers from a dict keyed by raw query; unknown queries get no results."""

    provider_id = "fake"

    def __init__(self, answers: dict[str, dict[str, Any]] | None = None, *, configured: bool = True) -> None:
        self.answers = dict(answers or {})
        self.configured = configured
        self.calls: list[str] = []

    def is_configured(self) -> bool:
        return self.configured

    def geocode(self, query: str) -> dict[str, Any]:
        self.calls.append(query)
        return self.answers.get(query, {"type": "FeatureCollection", "features": []})


class FixedClock:
    """Callable clock the tests can move forward."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)
