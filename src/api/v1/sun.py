# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Sun position and golden hour API endpoints."""

import datetime
from zoneinfo import ZoneInfoNotFoundError

from fastapi import APIRouter, HTTPException, Query, status

from src.schemas.sun import (
    GoldenHourStatus,
    NextGoldenHour,
    SunSnapshotResponse,
    SunTimes,
)
from src.services import sun_service
from src.services.sun_time_service import DEFAULT_RANGE_DAYS, MAX_RANGE_DAYS

router = APIRouter()


def _instant_or_now(at: datetime.datetime | None) -> datetime.datetime:
    return at if at is not None else datetime.datetime.now(datetime.timezone.utc)


@router.get("/snapshot", response_model=SunSnapshotResponse)
def get_sun_snapshot(
    lat: float = Query(..., ge=-90, le=90, description="Latitude in degrees"),
    lng: float = Query(..., ge=-180, le=180, description="Longitude in degrees"),
    at: datetime.datetime | None = Query(None, description="ISO-8601 instant, defaults to now"),
) -> SunSnapshotResponse:
    """Get solar events and the sun's position for a place and instant."""
    snapshot = sun_service.compute_sun_snapshot(lat, lng, _instant_or_now(at))
    return SunSnapshotResponse(
        snapshot=snapshot,
        formatted=sun_service.format_sun_snapshot(snapshot),
    )


@router.get("/golden-hour", response_model=GoldenHourStatus)
def get_golden_hour(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    at: datetime.datetime | None = Query(None),
    window_minutes: int | None = Query(None, ge=1, le=180),
) -> GoldenHourStatus:
    """Tell whether an instant falls inside golden hour."""
    return sun_service.classify_golden_hour(lat, lng, _instant_or_now(at), window_minutes)


@router.get("/next-golden-hour", response_model=NextGoldenHour)
def get_next_golden_hour(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    at: datetime.datetime | None = Query(None),
    window_minutes: int | None = Query(None, ge=1, le=180),
) -> NextGoldenHour:
    """Get the start of the next golden hour window."""
    result = sun_service.next_golden_hour(lat, lng, _instant_or_now(at), window_minutes)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No golden hour within the next two days at this location",
        )
    return result


@router.get("/times", response_model=list[SunTimes])
def get_sun_times(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    start: datetime.date | None = Query(None, description="First day, defaults to today"),
    days: int = Query(DEFAULT_RANGE_DAYS, ge=1, le=MAX_RANGE_DAYS),
    tz: str = Query("UTC", description="IANA timezone name"),
) -> list[SunTimes]:
    """Get sun times for a range of calendar days."""
    start = start or datetime.date.today()
    end = start + datetime.timedelta(days=days - 1)
    try:
        return sun_service.get_sun_times_for_date_range(lat, lng, start, end, tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise HTTPException(
            status_code=422,
            detail=f"Unknown timezone: {tz}",
        ) from e
