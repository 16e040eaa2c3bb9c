"""Pydantic schemas package."""
from src.schemas.common import HealthResponse
from src.schemas.exif import (
    CameraSettings,
    ExifData,
    ExposureData,
    GpsData,
    ImageProperties,
)
from src.schemas.location import (
    GeocodingResult,
    PublicLocationData,
    PublicLocationResponse,
)
from src.schemas.photo import (
    PhotoProcessRequest,
    PhotoProcessResponse,
    WatermarkRequest,
    WatermarkResponse,
)
from src.schemas.report import (
    DataFilter,
    PhotoReportPreview,
    PhotoReportRequest,
    ReportPhotoEntry,
)
from src.schemas.sun import (
    FormattedSunData,
    GoldenHourStatus,
    GoldenHourWindow,
    NextGoldenHour,
    SunSnapshot,
    SunSnapshotResponse,
    SunTimes,
)

__all__ = [
    "CameraSettings",
    "DataFilter",
    "ExifData",
    "ExposureData",
    "FormattedSunData",
    "GeocodingResult",
    "GoldenHourStatus",
    "GoldenHourWindow",
    "GpsData",
    "HealthResponse",
    "ImageProperties",
    "NextGoldenHour",
    "PhotoProcessRequest",
    "PhotoProcessResponse",
    "PhotoReportPreview",
    "PhotoReportRequest",
    "PublicLocationData",
    "PublicLocationResponse",
    "ReportPhotoEntry",
    "SunSnapshot",
    "SunSnapshotResponse",
    "SunTimes",
    "WatermarkRequest",
    "WatermarkResponse",
]
