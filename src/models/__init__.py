# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Database models package."""

from src.models.base import Base, TimestampMixin
from src.models.enums import GoldenHourType, MapProvider, ReportSection
from src.models.location import Location
from src.models.sun_time import SunTime

__all__ = [
    "Base",
    "GoldenHourType",
    "Location",
    "MapProvider",
    "ReportSection",
    "SunTime",
    "TimestampMixin",
]
