#!/usr/bin/env python3
"""Resolve a location through the geocode cache and print quota/cache stats.

Run from backend: python scripts/geocode.py "mission district, san francisco"
Uses DATABASE_URL and MAPBOX_ACCESS_TOKEN from .env.
"""
import argparse
import logging
import sys

from tablescout.config import settings
from tablescout.services.geocoding import GeocodeCache


def main() -> int:
    parser = argparse.ArgumentParser(description="Resolve a location to coordinates (cache first, then Mapbox)")
    parser.add_argument("query", nargs="?", help="Free-text address or area")
    parser.add_argument("--stats", action="store_true", help="Only print quota and cache stats")
    args = parser.parse_args()
    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if not args.stats and not args.query:
        parser.error("query is required unless --stats is given")

    with GeocodeCache.from_settings() as cache:
        if not args.stats:
            resolution = cache.resolve_with_status(args.query)
            print(f"Query:        {args.query}")
            print(f"Normalized:   {cache.normalize(args.query)}")
            print(f"Status:       {resolution.status.value}")
            if resolution.coordinate is not None:
                print(f"Coordinates:  {resolution.coordinate.lat:.6f}, {resolution.coordinate.lng:.6f}")
            print()
        quota = cache.quota_stats()
        stats = cache.cache_stats()
        print(f"Mapbox today: {quota['mapbox_usage_today']}/{quota['mapbox_limit']}")
        print(f"Cached:       {stats['total_cached']} entries ({stats['cache_size']})")
        if args.stats:
            return 0
        return 0 if resolution.found else 1


if __name__ == "__main__":
    sys.exit(main())
