"""Dialect-aware INSERT ... ON CONFLICT. SQLite and Postgres share the same on_conflict_do_update API."""
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session


def upsert_insert(db: Session, model):
    """Return an insert() construct for model that supports on_conflict_do_update on the session's dialect."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return pg_insert(model)
    if dialect == "sqlite":
        return sqlite_insert(model)
    raise ValueError(f"Upsert not supported for dialect: {dialect}")
