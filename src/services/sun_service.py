# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Sun position, solar event and golden hour calculations.

Solar events come from astral's implementation of the NOAA solar equations.
Nothing in this module raises for bad coordinates or polar edge cases:
events the sun never reaches come back as ``None`` and angles that cannot
be computed come back as NaN. Callers that need strict validation must
check their inputs themselves.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

from astral import Observer
from astral.sun import azimuth, elevation, noon, sunrise, sunset

from src.config import settings
from src.models.enums import GoldenHourType
from src.schemas.sun import (
    FormattedSunData,
    GoldenHourStatus,
    GoldenHourWindow,
    NextGoldenHour,
    SunSnapshot,
    SunTimes,
)

logger = logging.getLogger(__name__)

# Eight 45 degree buckets, clockwise from North
COMPASS_DIRECTIONS = (
    "North",
    "Northeast",
    "East",
    "Southeast",
    "South",
    "Southwest",
    "West",
    "Northwest",
)

# Golden hour recurs every solar day, so two days always suffice
NEXT_GOLDEN_HOUR_SCAN_DAYS = 2

_SOLAR_ERRORS = (ValueError, OverflowError, ZeroDivisionError)


@dataclass(frozen=True)
class _SolarDay:
    sunrise: datetime | None
    sunset: datetime | None
    solar_noon: datetime | None


def _as_aware(instant: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant


def _in_zone(instant: datetime | None, zone: tzinfo | None) -> datetime | None:
    if instant is None:
        return None
    return instant.astimezone(zone)


def _mean_solar_timezone(longitude: float) -> timezone:
    """Fixed-offset zone following local mean solar time (4 minutes per degree)."""
    return timezone(timedelta(minutes=round(longitude * 4)))


def _solar_event(event, observer: Observer, day: date, zone: tzinfo) -> datetime | None:
    try:
        return event(observer, date=day, tzinfo=zone)
    except _SOLAR_ERRORS as e:
        logger.debug(
            f"No {event.__name__} at ({observer.latitude}, {observer.longitude}) "
            f"on {day}: {e}"
        )
        return None


def _events_for_date(
    latitude: float, longitude: float, day: date, zone: tzinfo
) -> _SolarDay:
    try:
        observer = Observer(latitude=latitude, longitude=longitude)
    except _SOLAR_ERRORS as e:
        logger.debug(f"Invalid observer ({latitude}, {longitude}): {e}")
        return _SolarDay(None, None, None)

    return _SolarDay(
        sunrise=_solar_event(sunrise, observer, day, zone),
        sunset=_solar_event(sunset, observer, day, zone),
        solar_noon=_solar_event(noon, observer, day, zone),
    )


def _solar_day(latitude: float, longitude: float, instant: datetime) -> _SolarDay:
    """Solar events of the solar day containing the instant.

    The day is chosen in local mean solar time so that sunrise, solar noon
    and sunset always belong to the same day regardless of the civil
    timezone the instant is expressed in.
    """
    try:
        zone = _mean_solar_timezone(longitude)
        day = instant.astimezone(zone).date()
    except _SOLAR_ERRORS as e:
        logger.debug(f"Cannot place {instant} at longitude {longitude}: {e}")
        return _SolarDay(None, None, None)
    return _events_for_date(latitude, longitude, day, zone)


def _sun_angles(
    latitude: float, longitude: float, instant: datetime
) -> tuple[float, float]:
    """Return (azimuth, altitude) in degrees, NaN when not computable."""
    try:
        observer = Observer(latitude=latitude, longitude=longitude)
        return float(azimuth(observer, instant)), float(elevation(observer, instant))
    except _SOLAR_ERRORS as e:
        logger.debug(f"Cannot compute sun position at ({latitude}, {longitude}): {e}")
        return math.nan, math.nan


def _golden_windows(
    events: _SolarDay, window_minutes: int | None, zone: tzinfo | None
) -> list[GoldenHourWindow]:
    minutes = (
        settings.golden_hour_window_minutes if window_minutes is None else window_minutes
    )
    half_width = timedelta(minutes=minutes)

    windows = []
    for window_type, event in (
        (GoldenHourType.MORNING, events.sunrise),
        (GoldenHourType.EVENING, events.sunset),
    ):
        if event is None:
            continue
        windows.append(
            GoldenHourWindow(
                type=window_type,
                start=(event - half_width).astimezone(zone),
                end=(event + half_width).astimezone(zone),
            )
        )
    return windows


def compute_sun_snapshot(
    latitude: float, longitude: float, instant: datetime
) -> SunSnapshot:
    """Compute solar events and the sun's position for a place and instant.

    Args:
        latitude: Latitude in degrees, expected within [-90, 90].
        longitude: Longitude in degrees, expected within [-180, 180].
        instant: Point in time. Naive values are treated as UTC.

    Returns:
        SunSnapshot with event times expressed in the instant's timezone.
    """
    instant = _as_aware(instant)
    events = _solar_day(latitude, longitude, instant)
    azimuth_deg, altitude_deg = _sun_angles(latitude, longitude, instant)

    if events.sunrise is not None and events.sunset is not None:
        day_length = round((events.sunset - events.sunrise).total_seconds() / 60)
        is_daytime = events.sunrise <= instant <= events.sunset
    else:
        # Polar day or night: fall back to the sun's altitude
        day_length = None
        is_daytime = altitude_deg > 0

    zone = instant.tzinfo
    return SunSnapshot(
        sunrise=_in_zone(events.sunrise, zone),
        sunset=_in_zone(events.sunset, zone),
        solar_noon=_in_zone(events.solar_noon, zone),
        azimuth_deg=azimuth_deg,
        altitude_deg=altitude_deg,
        day_length_minutes=day_length,
        is_daytime=is_daytime,
    )


def golden_hour_windows(
    latitude: float,
    longitude: float,
    instant: datetime,
    window_minutes: int | None = None,
) -> list[GoldenHourWindow]:
    """Return the morning and evening golden hour windows of the instant's day.

    Each window spans ``window_minutes`` before and after sunrise or sunset.
    Windows whose anchoring event does not occur are omitted.
    """
    instant = _as_aware(instant)
    events = _solar_day(latitude, longitude, instant)
    return _golden_windows(events, window_minutes, instant.tzinfo)


def classify_golden_hour(
    latitude: float,
    longitude: float,
    instant: datetime,
    window_minutes: int | None = None,
) -> GoldenHourStatus:
    """Classify an instant as inside or outside golden hour.

    Outside golden hour the type names the half of the solar day the
    instant falls in.
    """
    instant = _as_aware(instant)
    events = _solar_day(latitude, longitude, instant)

    for window in _golden_windows(events, window_minutes, instant.tzinfo):
        if window.contains(instant):
            remaining = math.ceil((window.end - instant).total_seconds() / 60)
            return GoldenHourStatus(
                is_golden=True, type=window.type, remaining_minutes=remaining
            )

    if events.solar_noon is not None and instant >= events.solar_noon:
        half = GoldenHourType.EVENING
    else:
        half = GoldenHourType.MORNING
    return GoldenHourStatus(is_golden=False, type=half)


def next_golden_hour(
    latitude: float,
    longitude: float,
    from_instant: datetime,
    window_minutes: int | None = None,
) -> NextGoldenHour | None:
    """Find the first golden hour window starting strictly after an instant.

    Scans the instant's solar day and the following one. Returns None when
    neither day has a sunrise or sunset (polar day or night).
    """
    from_instant = _as_aware(from_instant)

    for offset in range(NEXT_GOLDEN_HOUR_SCAN_DAYS):
        day = from_instant + timedelta(days=offset)
        events = _solar_day(latitude, longitude, day)
        for window in _golden_windows(events, window_minutes, from_instant.tzinfo):
            if window.start > from_instant:
                return NextGoldenHour(time=window.start, type=window.type)
    return None


def get_sun_times(
    latitude: float,
    longitude: float,
    day: date,
    timezone_name: str = "UTC",
    window_minutes: int | None = None,
) -> SunTimes:
    """Return the solar events of a calendar day in a named timezone.

    Raises:
        zoneinfo.ZoneInfoNotFoundError: If the timezone name is unknown.
    """
    zone = ZoneInfo(timezone_name)
    events = _events_for_date(latitude, longitude, day, zone)
    windows = {w.type: w for w in _golden_windows(events, window_minutes, zone)}

    day_length = None
    if events.sunrise is not None and events.sunset is not None:
        day_length = round((events.sunset - events.sunrise).total_seconds() / 60)

    return SunTimes(
        date=day,
        timezone=timezone_name,
        sunrise=events.sunrise,
        sunset=events.sunset,
        solar_noon=events.solar_noon,
        golden_morning=windows.get(GoldenHourType.MORNING),
        golden_evening=windows.get(GoldenHourType.EVENING),
        day_length_minutes=day_length,
    )


def get_sun_times_for_date_range(
    latitude: float,
    longitude: float,
    start: date,
    end: date,
    timezone_name: str = "UTC",
    window_minutes: int | None = None,
) -> list[SunTimes]:
    """Return sun times for every day from start to end, inclusive."""
    days = (end - start).days + 1
    return [
        get_sun_times(
            latitude,
            longitude,
            start + timedelta(days=offset),
            timezone_name,
            window_minutes,
        )
        for offset in range(max(days, 0))
    ]


def azimuth_direction(azimuth_deg: float) -> str:
    """Map an azimuth in degrees to one of eight compass directions."""
    if not math.isfinite(azimuth_deg):
        return "Unknown"
    normalized = azimuth_deg % 360
    return COMPASS_DIRECTIONS[int((normalized + 22.5) // 45) % 8]


def format_sun_time(instant: datetime | None) -> str:
    """Format an event time as e.g. ``06:45 AM PST``."""
    if instant is None:
        return "N/A"
    return instant.strftime("%I:%M %p %Z").strip()


def format_sun_position(azimuth_deg: float, altitude_deg: float) -> str:
    """Describe a sun position, e.g. ``42° above horizon, South (180°)``."""
    if not (math.isfinite(azimuth_deg) and math.isfinite(altitude_deg)):
        return "Unknown"
    horizon = "above horizon" if altitude_deg > 0 else "below horizon"
    direction = azimuth_direction(azimuth_deg)
    return f"{round(altitude_deg)}° {horizon}, {direction} ({round(azimuth_deg)}°)"


def format_day_length(minutes: int | None) -> str:
    """Format a day length in minutes as e.g. ``16h 38m``."""
    if minutes is None:
        return "N/A"
    return f"{minutes // 60}h {minutes % 60}m"


def format_sun_snapshot(snapshot: SunSnapshot) -> FormattedSunData:
    """Render every field of a snapshot for display."""
    return FormattedSunData(
        sunrise=format_sun_time(snapshot.sunrise),
        sunset=format_sun_time(snapshot.sunset),
        solar_noon=format_sun_time(snapshot.solar_noon),
        day_length=format_day_length(snapshot.day_length_minutes),
        position=format_sun_position(snapshot.azimuth_deg, snapshot.altitude_deg),
        time_of_day="Daytime" if snapshot.is_daytime else "Nighttime",
    )
