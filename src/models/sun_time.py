# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Sun time cache model for calendar display."""

import uuid as uuid_lib
from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.models.base import Base

if TYPE_CHECKING:
    from src.models.location import Location


class SunTime(Base):
    """Cached solar events of one location on one calendar day.

    All instants are stored as naive UTC datetimes.
    """

    __tablename__ = "sun_times"
    __table_args__ = (
        UniqueConstraint("location_id", "date", name="uq_sun_time_location_date"),
    )

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    location_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("locations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    sunrise: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    sunset: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    solar_noon: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    golden_morning_start: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    golden_morning_end: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    golden_evening_start: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    golden_evening_end: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    fetched_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    # Relationships
    location: Mapped["Location"] = relationship("Location", back_populates="sun_times")
