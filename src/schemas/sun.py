# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Sun and golden hour schemas."""

import datetime

from pydantic import BaseModel, ConfigDict

from src.models.enums import GoldenHourType


class SunSnapshot(BaseModel):
    """Solar events and sun position for one place and instant.

    Events the sun never reaches (polar day or night) are ``None`` and
    angles that cannot be computed are NaN.
    """

    model_config = ConfigDict(frozen=True)

    sunrise: datetime.datetime | None
    sunset: datetime.datetime | None
    solar_noon: datetime.datetime | None
    azimuth_deg: float
    altitude_deg: float
    day_length_minutes: int | None
    is_daytime: bool


class GoldenHourWindow(BaseModel):
    """A golden hour window, boundaries inclusive."""

    model_config = ConfigDict(frozen=True)

    type: GoldenHourType
    start: datetime.datetime
    end: datetime.datetime

    def contains(self, instant: datetime.datetime) -> bool:
        """Return True if the instant falls inside the window."""
        return self.start <= instant <= self.end


class GoldenHourStatus(BaseModel):
    """Golden hour classification of an instant."""

    is_golden: bool
    type: GoldenHourType
    remaining_minutes: int | None = None


class NextGoldenHour(BaseModel):
    """Start of the next golden hour window."""

    time: datetime.datetime
    type: GoldenHourType


class SunTimes(BaseModel):
    """Solar events of one calendar day in a named timezone."""

    date: datetime.date
    timezone: str
    sunrise: datetime.datetime | None
    sunset: datetime.datetime | None
    solar_noon: datetime.datetime | None
    golden_morning: GoldenHourWindow | None
    golden_evening: GoldenHourWindow | None
    day_length_minutes: int | None


class FormattedSunData(BaseModel):
    """Human readable rendering of a sun snapshot."""

    sunrise: str
    sunset: str
    solar_noon: str
    day_length: str
    position: str
    time_of_day: str


class SunSnapshotResponse(BaseModel):
    """Sun snapshot with its formatted display strings."""

    snapshot: SunSnapshot
    formatted: FormattedSunData
