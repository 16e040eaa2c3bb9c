# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Location schemas."""

from pydantic import BaseModel


class GeocodingResult(BaseModel):
    """Reverse geocoding outcome."""

    address: str
    success: bool


class PublicLocationData(BaseModel):
    """Location data that is safe to show on public pages."""

    latitude: float
    longitude: float
    address: str
    city_only: bool


class PublicLocationResponse(PublicLocationData):
    """Public location data with a privacy-safe map link."""

    map_url: str
