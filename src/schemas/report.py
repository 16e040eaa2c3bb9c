# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Photo report schemas."""

from pydantic import BaseModel, Field

from src.models.enums import ReportSection
from src.schemas.exif import ExifData


class DataFilter(BaseModel):
    """Toggles selecting which metadata sections a report renders."""

    location: bool = True
    date_time: bool = True
    camera: bool = True
    exposure: bool = True
    settings: bool = True
    sun: bool = True
    image: bool = True

    @classmethod
    def all_enabled(cls) -> "DataFilter":
        return cls()

    @classmethod
    def none_enabled(cls) -> "DataFilter":
        return cls(**{section.value: False for section in ReportSection})

    @classmethod
    def only(cls, *sections: ReportSection) -> "DataFilter":
        """Filter with exactly the given sections enabled."""
        enabled = set(sections)
        return cls(**{section.value: section in enabled for section in ReportSection})

    def is_enabled(self, section: ReportSection) -> bool:
        return bool(getattr(self, section.value))


class ReportPhotoEntry(BaseModel):
    """One photo of a report, in caller-supplied order."""

    title: str
    image_url: str
    is_geocoded: bool = False
    exif_data: ExifData = Field(default_factory=ExifData)


class PhotoReportRequest(BaseModel):
    """Request body for photo report export."""

    entries: list[ReportPhotoEntry] = Field(default_factory=list)
    filters: DataFilter = Field(default_factory=DataFilter)
    title: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=2000)


class PhotoReportPreview(BaseModel):
    """Summary of a photo report without rendering it."""

    entry_count: int
    geocoded_count: int
    with_gps_count: int
    sections: dict[str, int]
    filename: str
