# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Photo metadata schemas."""

import datetime

from pydantic import BaseModel

from src.schemas.sun import SunSnapshot


class GpsData(BaseModel):
    """GPS position in decimal degrees."""

    latitude: float
    longitude: float
    altitude: float | None = None
    latitude_ref: str | None = None
    longitude_ref: str | None = None


class ExposureData(BaseModel):
    """Exposure settings. Shutter speed is in seconds."""

    aperture: float | None = None
    shutter_speed: float | None = None
    iso: int | None = None
    exposure_time: float | None = None
    f_number: float | None = None


class CameraSettings(BaseModel):
    """Camera settings using the raw EXIF codes."""

    focal_length: float | None = None
    flash: int | None = None
    white_balance: int | None = None
    metering_mode: int | None = None
    exposure_mode: int | None = None


class ImageProperties(BaseModel):
    """Pixel dimensions, EXIF orientation and resolution."""

    width: int | None = None
    height: int | None = None
    orientation: int | None = None
    x_resolution: float | None = None
    y_resolution: float | None = None


class ExifData(BaseModel):
    """Metadata extracted from a photo."""

    make: str | None = None
    model: str | None = None
    software: str | None = None
    date_time: datetime.datetime | None = None
    date_time_original: datetime.datetime | None = None
    date_time_digitized: datetime.datetime | None = None
    gps: GpsData | None = None
    exposure: ExposureData | None = None
    camera: CameraSettings | None = None
    image: ImageProperties | None = None
    sun: SunSnapshot | None = None
