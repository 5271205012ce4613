"""Create cars and car_tags tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_INDEXED_CAR_COLUMNS = (
    "title",
    "brand",
    "model",
    "body_type",
    "fuel_type",
    "transmission",
    "power_bhp",
    "mileage",
    "price_min",
    "price_max",
    "launch_year",
    "discontinued",
    "is_featured",
    "created_at",
)


def upgrade() -> None:
    op.create_table(
        "cars",
        sa.Column("id", sa.String(length=24), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("brand", sa.String(), nullable=False),
        sa.Column("model", sa.String(), nullable=False),
        sa.Column("body_type", sa.String(), nullable=False),
        sa.Column("fuel_type", sa.String(), nullable=False),
        sa.Column("transmission", sa.String(), nullable=False),
        sa.Column("drive_type", sa.String(), nullable=False, server_default="FWD"),
        sa.Column("engine", sa.JSON(), nullable=False),
        sa.Column("power_bhp", sa.Float(), nullable=True),
        sa.Column("torque_nm", sa.Float(), nullable=True),
        sa.Column("top_speed", sa.Float(), nullable=True),
        sa.Column("zero_to_hundred", sa.Float(), nullable=True),
        sa.Column("mileage", sa.Float(), nullable=True),
        sa.Column("range_km", sa.Float(), nullable=True),
        sa.Column("price_min", sa.Float(), nullable=True),
        sa.Column("price_max", sa.Float(), nullable=True),
        sa.Column("price_currency", sa.String(), nullable=False, server_default="INR"),
        sa.Column("launch_year", sa.Integer(), nullable=True),
        sa.Column("discontinued", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("safety_rating", sa.Float(), nullable=True),
        sa.Column("seating_capacity", sa.Integer(), nullable=False, server_default="5"),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("image", sa.String(), nullable=True),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("key_features", sa.JSON(), nullable=False),
        sa.Column("pros", sa.JSON(), nullable=False),
        sa.Column("cons", sa.JSON(), nullable=False),
        sa.Column("specs", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    for column in _INDEXED_CAR_COLUMNS:
        op.create_index(op.f(f"ix_cars_{column}"), "cars", [column], unique=False)

    # Full-text index over the searchable text fields
    op.execute(
        "CREATE INDEX ix_cars_text_search ON cars USING GIN "
        "(to_tsvector('simple', title || ' ' || brand || ' ' || model))"
    )

    op.create_table(
        "car_tags",
        sa.Column("car_id", sa.String(length=24), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("tag", sa.String(), nullable=False),
        sa.ForeignKeyConstraint(["car_id"], ["cars.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("car_id", "position"),
    )
    op.create_index(op.f("ix_car_tags_tag"), "car_tags", ["tag"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_car_tags_tag"), table_name="car_tags")
    op.drop_table("car_tags")
    op.execute("DROP INDEX IF EXISTS ix_cars_text_search")
    for column in reversed(_INDEXED_CAR_COLUMNS):
        op.drop_index(op.f(f"ix_cars_{column}"), table_name="cars")
    op.drop_table("cars")
