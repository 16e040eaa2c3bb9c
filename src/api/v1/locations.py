# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Location API endpoints for sun times, public data and reverse geocoding."""

import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from src.api.deps import get_db, get_location_or_404
from src.models import Location
from src.models.enums import MapProvider
from src.schemas.location import GeocodingResult, PublicLocationResponse
from src.schemas.sun import SunTimes
from src.services import location_privacy, sun_time_service
from src.services.geocoding_service import GeocodingService

router = APIRouter(prefix="/locations", tags=["locations"])


@router.get("/reverse-geocode", response_model=GeocodingResult)
async def reverse_geocode(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
) -> GeocodingResult:
    """
    Resolve coordinates to an address using OpenStreetMap Nominatim.

    Returns success=false instead of an error when the lookup fails.
    """
    service = GeocodingService()
    try:
        return await service.reverse_geocode(lat, lng)
    finally:
        await service.close()


@router.get("/{location_id}/sun-times", response_model=list[SunTimes])
def get_location_sun_times(
    start: datetime.date | None = Query(None, description="First day, defaults to today"),
    days: int = Query(
        sun_time_service.DEFAULT_RANGE_DAYS, ge=1, le=sun_time_service.MAX_RANGE_DAYS
    ),
    location: Location = Depends(get_location_or_404),
    db: Session = Depends(get_db),
) -> list[SunTimes]:
    """Get cached sun times of a location in its own timezone."""
    return sun_time_service.get_sun_times_range_for_location(
        db, location, start or datetime.date.today(), days
    )


@router.get("/{location_id}/public", response_model=PublicLocationResponse)
def get_public_location(
    provider: MapProvider = Query(MapProvider.GOOGLE),
    location: Location = Depends(get_location_or_404),
) -> PublicLocationResponse:
    """Get location data that is safe to show on public pages."""
    public = location_privacy.create_public_location_data(location)
    return PublicLocationResponse(
        **public.model_dump(),
        map_url=location_privacy.get_privacy_safe_map_url(location, provider),
    )
