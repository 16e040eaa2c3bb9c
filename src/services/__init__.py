"""Services package."""
from src.services import (
    exif_service,
    geocoding_service,
    image_service,
    location_privacy,
    report_generator,
    sun_service,
    sun_time_service,
)

__all__ = [
    "exif_service",
    "geocoding_service",
    "image_service",
    "location_privacy",
    "report_generator",
    "sun_service",
    "sun_time_service",
]
