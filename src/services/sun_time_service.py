# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Cached sun times of stored locations for calendar display."""

import logging
import uuid
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from src.models import Location, SunTime
from src.models.enums import GoldenHourType
from src.schemas.sun import GoldenHourWindow, SunTimes
from src.services import sun_service

logger = logging.getLogger(__name__)

# Days shown by the location calendar panel
DEFAULT_RANGE_DAYS = 7
MAX_RANGE_DAYS = 31


def get_location(db: Session, location_id: uuid.UUID) -> Location | None:
    """Get a location by ID."""
    return db.query(Location).filter(Location.id == location_id).first()


def _to_utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _from_utc(value: datetime, zone: ZoneInfo) -> datetime:
    return value.replace(tzinfo=timezone.utc).astimezone(zone)


def _get_cached(db: Session, location_id: uuid.UUID, day: date) -> SunTime | None:
    return (
        db.query(SunTime)
        .filter(SunTime.location_id == location_id, SunTime.date == day)
        .first()
    )


def _cache(db: Session, location: Location, times: SunTimes) -> bool:
    """Stage a cache row for the day. Days missing any event are skipped."""
    if (
        times.sunrise is None
        or times.sunset is None
        or times.solar_noon is None
        or times.golden_morning is None
        or times.golden_evening is None
    ):
        logger.debug(f"Not caching incomplete sun times for {location.id} on {times.date}")
        return False

    db.add(
        SunTime(
            location_id=location.id,
            date=times.date,
            sunrise=_to_utc(times.sunrise),
            sunset=_to_utc(times.sunset),
            solar_noon=_to_utc(times.solar_noon),
            golden_morning_start=_to_utc(times.golden_morning.start),
            golden_morning_end=_to_utc(times.golden_morning.end),
            golden_evening_start=_to_utc(times.golden_evening.start),
            golden_evening_end=_to_utc(times.golden_evening.end),
        )
    )
    return True


def _from_cache(cached: SunTime, timezone_name: str) -> SunTimes:
    zone = ZoneInfo(timezone_name)
    sunrise = _from_utc(cached.sunrise, zone)
    sunset = _from_utc(cached.sunset, zone)
    return SunTimes(
        date=cached.date,
        timezone=timezone_name,
        sunrise=sunrise,
        sunset=sunset,
        solar_noon=_from_utc(cached.solar_noon, zone),
        golden_morning=GoldenHourWindow(
            type=GoldenHourType.MORNING,
            start=_from_utc(cached.golden_morning_start, zone),
            end=_from_utc(cached.golden_morning_end, zone),
        ),
        golden_evening=GoldenHourWindow(
            type=GoldenHourType.EVENING,
            start=_from_utc(cached.golden_evening_start, zone),
            end=_from_utc(cached.golden_evening_end, zone),
        ),
        day_length_minutes=round((sunset - sunrise).total_seconds() / 60),
    )


def _get_or_compute(db: Session, location: Location, day: date) -> tuple[SunTimes, bool]:
    cached = _get_cached(db, location.id, day)
    if cached is not None:
        return _from_cache(cached, location.timezone), False

    times = sun_service.get_sun_times(
        location.latitude, location.longitude, day, location.timezone
    )
    return times, _cache(db, location, times)


def get_sun_times_for_location(db: Session, location: Location, day: date) -> SunTimes:
    """Get the sun times of a location for one day.

    Returns the cached row when present, otherwise computes the day in the
    location's timezone and caches it.
    """
    times, stored = _get_or_compute(db, location, day)
    if stored:
        db.commit()
    return times


def get_sun_times_range_for_location(
    db: Session,
    location: Location,
    start: date,
    days: int = DEFAULT_RANGE_DAYS,
) -> list[SunTimes]:
    """Get sun times for consecutive days starting at ``start``.

    Raises:
        ValueError: If days is not between 1 and MAX_RANGE_DAYS.
    """
    if not 1 <= days <= MAX_RANGE_DAYS:
        raise ValueError(f"days must be between 1 and {MAX_RANGE_DAYS}")

    result = []
    stored_any = False
    for offset in range(days):
        times, stored = _get_or_compute(db, location, start + timedelta(days=offset))
        result.append(times)
        stored_any = stored_any or stored

    if stored_any:
        db.commit()
        logger.info(f"Cached sun times for location {location.id} from {start}")
    return result
