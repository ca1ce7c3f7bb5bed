"""
Daily geocoding quota, persisted per calendar day.

The counter only grows within a day; a new day starts at zero because its date
key has no row yet. increment() is a single upsert statement so concurrent
callers never lose an update.
"""
import logging

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from tablescout.db.upsert import upsert_insert
from tablescout.models.geocode_quota import GeocodeQuota
from tablescout.services.geocoding.types import QuotaStatus

logger = logging.getLogger(__name__)


class QuotaTracker:
    """Read and bump the per-day request counter."""

    def __init__(self, session_factory: sessionmaker, daily_limit: int) -> None:
        self._session_factory = session_factory
        self.daily_limit = max(0, daily_limit)

    def used(self, day: str) -> int:
        with self._session_factory() as db:
            count = db.execute(select(GeocodeQuota.request_count).where(GeocodeQuota.date == day)).scalar_one_or_none()
        return count or 0

    def status(self, day: str) -> QuotaStatus:
        used = self.used(day)
        return QuotaStatus(available=used < self.daily_limit, used=used, limit=self.daily_limit)

    def increment(self, day: str) -> int:
        """Add one billed request to day's counter; returns the new count."""
        with self._session_factory() as db:
            stmt = upsert_insert(db, GeocodeQuota).values(date=day, request_count=1)
            stmt = stmt.on_conflict_do_update(
                index_elements=["date"],
                set_={"request_count": GeocodeQuota.request_count + 1},
            ).returning(GeocodeQuota.request_count)
            count = db.execute(stmt).scalar_one()
            db.commit()
        logger.debug("Geocode quota for %s is now %s/%s", day, count, self.daily_limit)
        return count
