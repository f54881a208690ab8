"""Create catalog tables

Revision ID: 3c9e1b7d4f20
Revises:
Create Date: 2026-10-19 10:42:17.318204

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c9e1b7d4f20"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CAR_STATUS = postgresql.ENUM("AVAILABLE", "UNAVAILABLE", "SOLD", name="car_status")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "car_makes",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("slug", sa.String(length=60), nullable=False),
        sa.Column("country", sa.String(length=60), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )
    op.create_table(
        "car_colors",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("slug", sa.String(length=60), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )

    op.create_table(
        "cars",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("car_make_id", sa.UUID(), nullable=False),
        sa.Column("car_color_id", sa.UUID(), nullable=False),
        sa.Column("model", sa.String(length=50), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("mileage", sa.Integer(), nullable=False),
        sa.Column("fuel_type", sa.String(length=20), nullable=False),
        sa.Column("transmission", sa.String(length=20), nullable=False),
        sa.Column("body_type", sa.String(length=30), nullable=False),
        sa.Column("number_plate", sa.String(length=10), nullable=False),
        sa.Column("seats", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("status", CAR_STATUS, nullable=False),
        sa.Column("featured", sa.Boolean(), server_default=sa.false(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["car_make_id"], ["car_makes.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["car_color_id"], ["car_colors.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    for column in ("car_make_id", "car_color_id", "year", "price", "fuel_type", "body_type", "status"):
        op.create_index(op.f(f"ix_cars_{column}"), "cars", [column], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    for column in ("car_make_id", "car_color_id", "year", "price", "fuel_type", "body_type", "status"):
        op.drop_index(op.f(f"ix_cars_{column}"), table_name="cars")
    op.drop_table("cars")
    op.drop_table("car_colors")
    op.drop_table("car_makes")
    CAR_STATUS.drop(op.get_bind(), checkfirst=True)
