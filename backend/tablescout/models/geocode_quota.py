"""Daily Mapbox request counter. One row per calendar day; rows are kept as history."""
from sqlalchemy import Column, Integer, String

from tablescout.db.base import Base


class GeocodeQuota(Base):
    __tablename__ = "geocode_quota"

    date = Column(String(10), primary_key=True)  # YYYY-MM-DD in the quota timezone
    request_count = Column(Integer, nullable=False, default=0, server_default="0")
