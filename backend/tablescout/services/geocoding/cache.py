"""
Geocode cache: free-text location -> coordinates with as few paid Mapbox calls as possible.

Lookup order for resolve():
  1. exact match on the normalized key;
  2. prefix match: shortest stored key that starts with the normalized key
     ("sf" can hit a cached "sf mission district");
  3. Mapbox, if the credential is set and today's quota is not used up.

Quota: only a call that reaches Mapbox and gets a 2xx answer counts, including
answers with no results. Transport errors and non-2xx statuses do not count.

State lives in two tables (geocode_quota, geocode_cache). Build one cache per
process or per test, open() it, and close() it when done; there is no global
instance.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable
from zoneinfo import ZoneInfo

from sqlalchemy import delete, func, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from tablescout.config import Settings, settings as default_settings
from tablescout.core.geo import Coordinate
from tablescout.db.base import Base
from tablescout.db.session import create_db_engine, make_session_factory
from tablescout.db.upsert import upsert_insert
from tablescout.models.geocode_cache_entry import GeocodeCacheEntry
from tablescout.models.geocode_quota import GeocodeQuota
from tablescout.services.geocoding.base import GeocodingProvider
from tablescout.services.geocoding.client import MapboxClient, first_coordinate, first_place_name
from tablescout.services.geocoding.config import MapboxConfig
from tablescout.services.geocoding.normalize import normalize_address
from tablescout.services.geocoding.quota import QuotaTracker
from tablescout.services.geocoding.types import GeocodeResolution, GeocodeStatus, QuotaStatus

logger = logging.getLogger(__name__)

DEFAULT_DAILY_LIMIT = 50000


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GeocodeCache:
    """Normalization-aware geocode cache with a hard daily provider quota."""

    def __init__(
        self,
        database_url: str,
        provider: GeocodingProvider,
        *,
        daily_limit: int = DEFAULT_DAILY_LIMIT,
        quota_timezone: str = "UTC",
        max_entries: int | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.database_url = database_url
        self.provider = provider
        self.daily_limit = max(0, daily_limit)
        self.max_entries = max_entries
        self._tz = ZoneInfo(quota_timezone)
        self._clock = clock
        self._engine: Engine | None = None
        self._session_factory: sessionmaker | None = None
        self._quota: QuotaTracker | None = None

    @classmethod
    def from_settings(
        cls,
        config: Settings | None = None,
        *,
        provider: GeocodingProvider | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> GeocodeCache:
        """Build an (unopened) cache from Settings; provider defaults to a MapboxClient."""
        s = config or default_settings
        if provider is None:
            provider = MapboxClient(MapboxConfig.from_settings(s))
        return cls(
            s.database_url,
            provider,
            daily_limit=s.geocode_daily_quota_limit,
            quota_timezone=s.geocode_quota_timezone,
            max_entries=s.geocode_cache_max_entries,
            clock=clock,
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> GeocodeCache:
        """Create the engine and the two tables if missing. Idempotent."""
        if self._engine is not None:
            return self
        engine = create_db_engine(self.database_url)
        Base.metadata.create_all(engine, tables=[GeocodeQuota.__table__, GeocodeCacheEntry.__table__])
        self._engine = engine
        self._session_factory = make_session_factory(engine)
        self._quota = QuotaTracker(self._session_factory, self.daily_limit)
        logger.info("Geocode cache opened (daily_limit=%s, max_entries=%s)", self.daily_limit, self.max_entries)
        return self

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        self._quota = None

    def __enter__(self) -> GeocodeCache:
        return self.open()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("GeocodeCache is not open; call open() or use it as a context manager")
        return self._session_factory()

    def _tracker(self) -> QuotaTracker:
        if self._quota is None:
            raise RuntimeError("GeocodeCache is not open; call open() or use it as a context manager")
        return self._quota

    def today(self) -> str:
        """Quota date key (YYYY-MM-DD) for the current wall-clock time in the quota timezone."""
        return self._clock().astimezone(self._tz).date().isoformat()

    # -------------------------------------------------------------------------
    # Cache
    # -------------------------------------------------------------------------

    @staticmethod
    def normalize(address: str | None) -> str:
        return normalize_address(address)

    def lookup(self, query: str) -> Coordinate | None:
        """Exact match on the normalized key, else the shortest stored key starting with it."""
        key = normalize_address(query)
        if not key:
            return None
        with self._session() as db:
            exact = db.get(GeocodeCacheEntry, key)
            if exact is not None:
                logger.info("Geocoding cache hit (exact): query=%r normalized=%r", query, key)
                return Coordinate(lat=exact.lat, lng=exact.lng)
            partial = db.execute(
                select(GeocodeCacheEntry)
                .where(GeocodeCacheEntry.normalized_query.startswith(key, autoescape=True))
                .order_by(func.length(GeocodeCacheEntry.normalized_query), GeocodeCacheEntry.normalized_query)
                .limit(1)
            ).scalar_one_or_none()
            if partial is not None:
                logger.info(
                    "Geocoding cache hit (partial): query=%r normalized=%r matched=%r",
                    query,
                    key,
                    partial.normalized_query,
                )
                return Coordinate(lat=partial.lat, lng=partial.lng)
        return None

    def store(self, query: str, coordinate: Coordinate) -> None:
        """Insert or overwrite the entry for query's normalized key (coordinates, original query, timestamp)."""
        key = normalize_address(query)
        if not key:
            return
        now = self._clock()
        with self._session() as db:
            stmt = upsert_insert(db, GeocodeCacheEntry).values(
                normalized_query=key,
                original_query=query,
                lat=coordinate.lat,
                lng=coordinate.lng,
                created_at=now,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["normalized_query"],
                set_={
                    "original_query": stmt.excluded.original_query,
                    "lat": stmt.excluded.lat,
                    "lng": stmt.excluded.lng,
                    "created_at": stmt.excluded.created_at,
                },
            )
            db.execute(stmt)
            if self.max_entries is not None:
                self._evict_overflow(db, keep=key)
            db.commit()

    def _evict_overflow(self, db: Session, keep: str) -> None:
        """Drop the oldest entries (by created_at) beyond max_entries, never the key just written."""
        total = db.execute(select(func.count()).select_from(GeocodeCacheEntry)).scalar_one()
        overflow = total - max(0, self.max_entries or 0)
        if overflow <= 0:
            return
        oldest = (
            select(GeocodeCacheEntry.normalized_query)
            .where(GeocodeCacheEntry.normalized_query != keep)
            .order_by(GeocodeCacheEntry.created_at, GeocodeCacheEntry.normalized_query)
            .limit(overflow)
        )
        keys = list(db.execute(oldest).scalars())
        db.execute(delete(GeocodeCacheEntry).where(GeocodeCacheEntry.normalized_query.in_(keys)))
        logger.info("Geocode cache evicted %s oldest entries (max_entries=%s)", len(keys), self.max_entries)

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def resolve(self, query: str) -> Coordinate | None:
        """Coordinate for query from cache or Mapbox; None for quota exhausted, provider failure or no results."""
        return self.resolve_with_status(query).coordinate

    def resolve_with_status(self, query: str) -> GeocodeResolution:
        """
        Like resolve(), but also reports why no coordinate came back.

        The quota check and the increment are separate statements. Sequential
        callers never exceed daily_limit; concurrent callers that all pass the
        check at used == daily_limit - 1 can each be billed, so the counter may
        end above the limit by the number of in-flight requests.
        """
        if not normalize_address(query):
            return GeocodeResolution(None, GeocodeStatus.INVALID_QUERY)

        cached = self.lookup(query)
        if cached is not None:
            return GeocodeResolution(cached, GeocodeStatus.CACHE_HIT)

        if not self.provider.is_configured():
            logger.error("Geocoding provider %s has no credential; cannot resolve %r", self.provider.provider_id, query)
            return GeocodeResolution(None, GeocodeStatus.PROVIDER_UNAVAILABLE)

        day = self.today()
        quota = self._tracker().status(day)
        if not quota.available:
            logger.warning("Mapbox geocoding quota exceeded: %s/%s for %s", quota.used, quota.limit, day)
            return GeocodeResolution(None, GeocodeStatus.QUOTA_EXHAUSTED)

        logger.info("Mapbox geocoding request: query=%r quota_used=%s quota_limit=%s", query, quota.used, quota.limit)
        result = self.provider.geocode(query)
        if result.get("error"):
            logger.error("Mapbox geocoding failed for %r: %s", query, result["error"])
            return GeocodeResolution(None, GeocodeStatus.PROVIDER_UNAVAILABLE)

        used = self._tracker().increment(day)
        coordinate = first_coordinate(result)
        if coordinate is None:
            logger.warning("Mapbox geocoding found no results for %r (quota %s/%s)", query, used, quota.limit)
            return GeocodeResolution(None, GeocodeStatus.NO_RESULTS)

        self.store(query, coordinate)
        logger.info(
            "Mapbox geocoding success: query=%r coordinate=%s place=%r quota_after_request=%s",
            query,
            coordinate,
            first_place_name(result),
            used,
        )
        return GeocodeResolution(coordinate, GeocodeStatus.GEOCODED)

    # -------------------------------------------------------------------------
    # Quota and stats
    # -------------------------------------------------------------------------

    def quota_status(self) -> QuotaStatus:
        return self._tracker().status(self.today())

    def quota_stats(self) -> dict[str, int]:
        status = self.quota_status()
        return {"mapbox_usage_today": status.used, "mapbox_limit": status.limit}

    def cache_stats(self) -> dict[str, Any]:
        """Entry count and approximate on-disk size of the backing database."""
        with self._session() as db:
            total = db.execute(select(func.count()).select_from(GeocodeCacheEntry)).scalar_one()
            size_bytes = self._database_size_bytes(db)
        return {"total_cached": total, "cache_size": f"{size_bytes / 1024:.2f} KB"}

    @staticmethod
    def _database_size_bytes(db: Session) -> int:
        dialect = db.get_bind().dialect.name
        if dialect == "sqlite":
            page_count = db.execute(text("PRAGMA page_count")).scalar_one()
            page_size = db.execute(text("PRAGMA page_size")).scalar_one()
            return int(page_count) * int(page_size)
        if dialect == "postgresql":
            return int(db.execute(text("SELECT pg_total_relation_size('geocode_cache')")).scalar_one())
        return 0
