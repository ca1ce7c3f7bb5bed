"""
Single source of truth for database tables created by migrations (001).

Use these names when writing raw SQL. Both tables are owned by GeocodeCache.
"""
# All tables that exist in the DB. Must match models and migrations.
ALL_TABLE_NAMES = (
    "geocode_quota",
    "geocode_cache",
)
