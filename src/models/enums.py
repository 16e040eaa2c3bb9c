# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Enumeration types shared by models, schemas and services."""

from enum import Enum


class GoldenHourType(str, Enum):
    """Golden hour window type."""

    MORNING = "morning"
    EVENING = "evening"


class MapProvider(str, Enum):
    """Map provider for external map links."""

    GOOGLE = "google"
    MAPBOX = "mapbox"
    OSM = "osm"


class ReportSection(str, Enum):
    """Metadata sections of a photo report entry, in drawing order.

    The values double as the field names of ``DataFilter``.
    """

    LOCATION = "location"
    DATE_TIME = "date_time"
    CAMERA = "camera"
    EXPOSURE = "exposure"
    SETTINGS = "settings"
    SUN = "sun"
    IMAGE = "image"

    @property
    def heading(self) -> str:
        """Header text drawn above the section."""
        return _SECTION_TITLES[self]


_SECTION_TITLES = {
    ReportSection.LOCATION: "Location",
    ReportSection.DATE_TIME: "Date & Time",
    ReportSection.CAMERA: "Camera",
    ReportSection.EXPOSURE: "Exposure",
    ReportSection.SETTINGS: "Settings",
    ReportSection.SUN: "Sun Data",
    ReportSection.IMAGE: "Image",
}
