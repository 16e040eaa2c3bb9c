# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Display formatting shared by the API and the report generator."""

import re
from datetime import datetime, timezone

GOOGLE_MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query={lat},{lng}"

# Longest file name stem produced for exports
MAX_FILENAME_LENGTH = 50

_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]+")


def format_gps(latitude: float, longitude: float) -> str:
    """Format coordinates as e.g. ``51.507400° N, 0.127800° W``."""
    lat_dir = "N" if latitude >= 0 else "S"
    lng_dir = "E" if longitude >= 0 else "W"
    return f"{abs(latitude):.6f}° {lat_dir}, {abs(longitude):.6f}° {lng_dir}"


def google_maps_link(latitude: float, longitude: float) -> str:
    """Build a Google Maps search URL from raw coordinates."""
    return GOOGLE_MAPS_SEARCH_URL.format(lat=latitude, lng=longitude)


def format_date(value: datetime) -> str:
    """Format a datetime as e.g. ``January 15, 2024 10:00:00 AM UTC``.

    Naive datetimes are treated as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return f"{value:%B} {value.day}, {value:%Y %I:%M:%S %p %Z}".strip()


def sanitize_filename(text: str, max_length: int = MAX_FILENAME_LENGTH) -> str:
    """Reduce text to a safe file name stem.

    Every run of characters outside ``[A-Za-z0-9]`` becomes a single
    underscore, leading and trailing underscores are stripped and the result
    is cut to ``max_length``. The operation is idempotent.
    """
    cleaned = _NON_ALPHANUMERIC.sub("_", text).strip("_")
    return cleaned[:max_length].strip("_")
