# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Shooting location model."""

import uuid as uuid_lib
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Float, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from src.models.sun_time import SunTime


class Location(Base, TimestampMixin):
    """A shooting location with coordinates and its local timezone."""

    __tablename__ = "locations"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default="UTC")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Private locations only expose city-level data publicly
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    sun_times: Mapped[list["SunTime"]] = relationship(
        "SunTime",
        back_populates="location",
        cascade="all, delete-orphan",
    )
