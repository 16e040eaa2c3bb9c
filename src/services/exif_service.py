# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Photo metadata extraction with Pillow."""

import io
import logging
from datetime import datetime, timezone

from PIL import ExifTags, Image

from src.schemas.exif import (
    CameraSettings,
    ExifData,
    ExposureData,
    GpsData,
    ImageProperties,
)
from src.services import sun_service

logger = logging.getLogger(__name__)

EXIF_DATETIME_FORMAT = "%Y:%m:%d %H:%M:%S"

Tag = ExifTags.Base
Gps = ExifTags.GPS


def _clean_str(value) -> str | None:
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    cleaned = str(value).strip("\x00 \t\r\n")
    return cleaned or None


def _to_float(value) -> float | None:
    if value is None:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError, ZeroDivisionError):
        return None
    # IFDRational with a zero denominator reads as NaN
    return None if result != result else result


def _apex_power(apex: float | None, scale: float) -> float | None:
    """Return 2 ** (apex * scale), or None when the APEX value is out of range."""
    if apex is None:
        return None
    try:
        return 2 ** (apex * scale)
    except OverflowError:
        return None


def _to_int(value) -> int | None:
    if isinstance(value, tuple | list):
        value = value[0] if value else None
    number = _to_float(value)
    return int(number) if number is not None else None


def _parse_datetime(value, offset=None) -> datetime | None:
    """Parse an EXIF ``YYYY:MM:DD HH:MM:SS`` value.

    Uses the matching OffsetTime tag when present, otherwise UTC.
    """
    text = _clean_str(value)
    if text is None:
        return None
    try:
        parsed = datetime.strptime(text[:19], EXIF_DATETIME_FORMAT)
    except ValueError:
        logger.debug(f"Ignoring unparseable EXIF datetime {text!r}")
        return None

    offset_text = _clean_str(offset)
    if offset_text:
        try:
            return parsed.replace(tzinfo=datetime.strptime(offset_text, "%z").tzinfo)
        except ValueError:
            logger.debug(f"Ignoring unparseable EXIF offset {offset_text!r}")
    return parsed.replace(tzinfo=timezone.utc)


def _dms_to_decimal(dms, ref: str | None) -> float | None:
    if not dms or len(dms) < 3:
        return None
    degrees, minutes, seconds = (_to_float(part) for part in dms[:3])
    if degrees is None or minutes is None or seconds is None:
        return None
    decimal = degrees + minutes / 60 + seconds / 3600
    if ref in ("S", "W"):
        decimal = -decimal
    return decimal


def _extract_gps(gps_ifd) -> GpsData | None:
    lat_ref = _clean_str(gps_ifd.get(Gps.GPSLatitudeRef))
    lng_ref = _clean_str(gps_ifd.get(Gps.GPSLongitudeRef))
    latitude = _dms_to_decimal(gps_ifd.get(Gps.GPSLatitude), lat_ref)
    longitude = _dms_to_decimal(gps_ifd.get(Gps.GPSLongitude), lng_ref)
    if latitude is None or longitude is None:
        return None

    altitude = _to_float(gps_ifd.get(Gps.GPSAltitude))
    # Altitude ref 1 means below sea level
    if altitude is not None and gps_ifd.get(Gps.GPSAltitudeRef) in (1, b"\x01"):
        altitude = -altitude

    return GpsData(
        latitude=latitude,
        longitude=longitude,
        altitude=altitude,
        latitude_ref=lat_ref,
        longitude_ref=lng_ref,
    )


def _extract_exposure(exif_ifd) -> ExposureData | None:
    aperture_apex = _to_float(exif_ifd.get(Tag.ApertureValue))
    shutter_apex = _to_float(exif_ifd.get(Tag.ShutterSpeedValue))

    exposure = ExposureData(
        aperture=_apex_power(aperture_apex, 0.5),
        shutter_speed=_apex_power(shutter_apex, -1),
        iso=_to_int(exif_ifd.get(Tag.ISOSpeedRatings)),
        exposure_time=_to_float(exif_ifd.get(Tag.ExposureTime)),
        f_number=_to_float(exif_ifd.get(Tag.FNumber)),
    )
    return exposure if exposure.model_dump(exclude_none=True) else None


def _extract_camera(exif_ifd) -> CameraSettings | None:
    camera = CameraSettings(
        focal_length=_to_float(exif_ifd.get(Tag.FocalLength)),
        flash=_to_int(exif_ifd.get(Tag.Flash)),
        white_balance=_to_int(exif_ifd.get(Tag.WhiteBalance)),
        metering_mode=_to_int(exif_ifd.get(Tag.MeteringMode)),
        exposure_mode=_to_int(exif_ifd.get(Tag.ExposureMode)),
    )
    return camera if camera.model_dump(exclude_none=True) else None


def extract_exif(data: bytes) -> ExifData:
    """Extract metadata from encoded image bytes.

    Unreadable images yield an empty ExifData rather than an error.
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            exif = image.getexif()
            exif_ifd = exif.get_ifd(ExifTags.IFD.Exif)
            gps_ifd = exif.get_ifd(ExifTags.IFD.GPSInfo)
            width = _to_int(exif_ifd.get(Tag.ExifImageWidth)) or image.width
            height = _to_int(exif_ifd.get(Tag.ExifImageHeight)) or image.height
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        logger.warning(f"Could not read image metadata: {e}")
        return ExifData()

    return ExifData(
        make=_clean_str(exif.get(Tag.Make)),
        model=_clean_str(exif.get(Tag.Model)),
        software=_clean_str(exif.get(Tag.Software)),
        date_time=_parse_datetime(exif.get(Tag.DateTime), exif_ifd.get(Tag.OffsetTime)),
        date_time_original=_parse_datetime(
            exif_ifd.get(Tag.DateTimeOriginal), exif_ifd.get(Tag.OffsetTimeOriginal)
        ),
        date_time_digitized=_parse_datetime(
            exif_ifd.get(Tag.DateTimeDigitized), exif_ifd.get(Tag.OffsetTimeDigitized)
        ),
        gps=_extract_gps(gps_ifd),
        exposure=_extract_exposure(exif_ifd),
        camera=_extract_camera(exif_ifd),
        image=ImageProperties(
            width=width,
            height=height,
            orientation=_to_int(exif.get(Tag.Orientation)),
            x_resolution=_to_float(exif.get(Tag.XResolution)),
            y_resolution=_to_float(exif.get(Tag.YResolution)),
        ),
    )


def resolve_taken_at(exif: ExifData) -> datetime:
    """Capture time: original, then digitized, then modified, then now."""
    for candidate in (exif.date_time_original, exif.date_time_digitized, exif.date_time):
        if candidate is not None:
            return candidate
    return datetime.now(timezone.utc)


def attach_sun_data(exif: ExifData) -> ExifData:
    """Return a copy with sun data for photos with GPS and a capture time."""
    taken_at = exif.date_time_original or exif.date_time_digitized or exif.date_time
    if exif.gps is None or taken_at is None:
        return exif
    snapshot = sun_service.compute_sun_snapshot(
        exif.gps.latitude, exif.gps.longitude, taken_at
    )
    return exif.model_copy(update={"sun": snapshot})
