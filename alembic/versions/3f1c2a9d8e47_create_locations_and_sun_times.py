"""Create locations and sun_times tables

Revision ID: 3f1c2a9d8e47
Revises:
Create Date: 2026-10-18 09:12:31.402117

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d8e47"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "locations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("address", sa.String(length=500), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("timezone", sa.String(length=64), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("is_private", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "sun_times",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("location_id", sa.Uuid(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("sunrise", sa.DateTime(), nullable=False),
        sa.Column("sunset", sa.DateTime(), nullable=False),
        sa.Column("solar_noon", sa.DateTime(), nullable=False),
        sa.Column("golden_morning_start", sa.DateTime(), nullable=False),
        sa.Column("golden_morning_end", sa.DateTime(), nullable=False),
        sa.Column("golden_evening_start", sa.DateTime(), nullable=False),
        sa.Column("golden_evening_end", sa.DateTime(), nullable=False),
        sa.Column("fetched_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["location_id"], ["locations.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("location_id", "date", name="uq_sun_time_location_date"),
    )
    op.create_index(
        op.f("ix_sun_times_location_id"), "sun_times", ["location_id"], unique=False
    )
    op.create_index(op.f("ix_sun_times_date"), "sun_times", ["date"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_sun_times_date"), table_name="sun_times")
    op.drop_index(op.f("ix_sun_times_location_id"), table_name="sun_times")
    op.drop_table("sun_times")
    op.drop_table("locations")
