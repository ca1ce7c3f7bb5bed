#!/usr/bin/env python3
"""Filter and rank a saved Resy venue search response.

Run from backend:
  python scripts/rank_venues.py search.json --city "sf" --sort distance --from 18:00 --to 21:00 --price 2,3

search.json is the body of POST /3/venuesearch/search ({"search": {"hits": [...]}}).
With --city the reference point comes from the known-city table or the geocode cache.
"""
import argparse
import json
import logging
import sys

from tablescout.config import settings
from tablescout.core.errors import LocationError
from tablescout.services.geocoding import GeocodeCache
from tablescout.services.locations import filter_by_locality, resolve_search_location
from tablescout.services.ranking import SortMode, VenueRankingEngine
from tablescout.services.ranking.venues import clock_to_minutes


def _tiers(raw: str) -> list[int]:
    out = []
    for s in (raw or "").split(","):
        s = s.strip()
        if s.isdigit():
            out.append(int(s))
    return out


def main() -> int:
    parser = argparse.ArgumentParser(description="Filter and rank venues from a saved search response")
    parser.add_argument("path", help="JSON file with the venue search response")
    parser.add_argument("--city", help="Search city; used for distance sorting and locality filtering")
    parser.add_argument("--sort", default=SortMode.DEFAULT.value, choices=[m.value for m in SortMode])
    parser.add_argument("--from", dest="time_from", help="Window start, HH:MM")
    parser.add_argument("--to", dest="time_to", help="Window end, HH:MM")
    parser.add_argument("--price", default="", help="Comma-separated price tiers, e.g. 1,2")
    parser.add_argument("--limit", type=int, default=20)
    args = parser.parse_args()
    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    with open(args.path, encoding="utf-8") as f:
        response = json.load(f)

    engine = VenueRankingEngine.from_search_response(response)
    if args.city:
        with GeocodeCache.from_settings() as cache:
            try:
                location = resolve_search_location(args.city, cache)
            except LocationError as e:
                print(f"Location error: {e}", file=sys.stderr)
                return 2
        print(f"Location: {location.locality} ({location.source}) {location.coordinate.lat:.4f}, {location.coordinate.lng:.4f}")
        engine = VenueRankingEngine(filter_by_locality(engine.venues(), location), location.coordinate)

    tiers = _tiers(args.price)
    start = clock_to_minutes(args.time_from)
    end = clock_to_minutes(args.time_to)
    if start is not None and end is not None:
        selected = engine.combined_filter(start, end, tiers)
    else:
        selected = engine.by_price_tier(tiers)

    ranked = engine.sort_by(args.sort, selected)
    print(f"Venues: {engine.total_count()} total, {engine.available_count()} with availability, {len(ranked)} selected")
    print()
    for venue in ranked[: args.limit]:
        s = engine.summarize(venue)
        distance = f"{s['distance_miles']} mi" if s["distance_miles"] is not None else "-"
        times = ", ".join(s["slot_times"][:5]) or "no slots"
        print(f"  {s['name'][:40]:<40} {s['price']:<3} {s['rating']:.1f}  {distance:<9} {times}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
