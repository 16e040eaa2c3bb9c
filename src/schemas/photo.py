# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Photo processing schemas."""

import datetime

from pydantic import BaseModel, Field

from src.schemas.exif import ExifData


class PhotoProcessRequest(BaseModel):
    """Request to extract metadata from a stored photo."""

    image_url: str = Field(..., min_length=1)
    index: int = Field(0, ge=0, description="Position of the photo, used for fallback titles")
    geocode: bool = Field(False, description="Reverse geocode GPS data into a title")


class PhotoProcessResponse(BaseModel):
    """Extracted metadata of a photo."""

    exif: ExifData
    taken_at: datetime.datetime
    latitude: float | None
    longitude: float | None
    title: str
    is_geocoded: bool


class WatermarkRequest(BaseModel):
    """Request to watermark a public image."""

    image_url: str = Field(..., min_length=1)
    watermark_text: str = Field(..., min_length=1, max_length=200)


class WatermarkResponse(BaseModel):
    """Watermarked image as a JPEG data URL."""

    watermarked_image_url: str
