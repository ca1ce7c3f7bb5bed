from tablescout.db.base import Base
from tablescout.db.session import create_db_engine, make_session_factory
from tablescout.db.tables import ALL_TABLE_NAMES
from tablescout.db.upsert import upsert_insert

__all__ = ["Base", "create_db_engine", "make_session_factory", "ALL_TABLE_NAMES", "upsert_insert"]
