from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    false,
    func,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from car_dealership.domain.enums import CarStatus
from car_dealership.infra.db.models.base import Base
from car_dealership.infra.db.models.car_color import CarColorRow
from car_dealership.infra.db.models.car_make import CarMakeRow


class CarRow(Base):
    __tablename__ = "cars"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    car_make_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("car_makes.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    car_color_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("car_colors.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    model: Mapped[str] = mapped_column(String(50), nullable=False)

    year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2), nullable=False, index=True
    )  # 99,999,999.99
    mileage: Mapped[int] = mapped_column(Integer, nullable=False)

    fuel_type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    transmission: Mapped[str] = mapped_column(String(20), nullable=False)
    body_type: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    number_plate: Mapped[str] = mapped_column(String(10), nullable=False)
    seats: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    status: Mapped[CarStatus] = mapped_column(
        Enum(
            CarStatus,
            name="car_status",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        default=CarStatus.AVAILABLE,
        index=True,
    )
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=false())

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    make: Mapped[CarMakeRow] = relationship()
    color: Mapped[CarColorRow] = relationship()
