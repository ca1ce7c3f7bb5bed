"""Resolved coordinates keyed by normalized address; last write wins."""
from sqlalchemy import Column, DateTime, Float, String, Text
from sqlalchemy.sql import func

from tablescout.db.base import Base


class GeocodeCacheEntry(Base):
    __tablename__ = "geocode_cache"

    normalized_query = Column(String(512), primary_key=True)
    original_query = Column(Text, nullable=True)
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
