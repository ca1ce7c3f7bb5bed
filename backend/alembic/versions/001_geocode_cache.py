"""geocode_quota (one row per day) and geocode_cache (normalized address -> coordinates).

Revision ID: 001
Revises:
Create Date: (run alembic upgrade head)

- geocode_quota: Mapbox requests billed per calendar day; rows kept as history.
- geocode_cache: last-write-wins coordinates per normalized address.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "geocode_quota",
        sa.Column("date", sa.String(10), primary_key=True),
        sa.Column("request_count", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_table(
        "geocode_cache",
        sa.Column("normalized_query", sa.String(512), primary_key=True),
        sa.Column("original_query", sa.Text(), nullable=True),
        sa.Column("lat", sa.Float(), nullable=False),
        sa.Column("lng", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_geocode_cache_created_at", "geocode_cache", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_geocode_cache_created_at", table_name="geocode_cache")
    op.drop_table("geocode_cache")
    op.drop_table("geocode_quota")
