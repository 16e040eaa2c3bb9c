# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Hide exact coordinates of private locations on public pages."""

import re

from src.models import Location
from src.models.enums import MapProvider
from src.schemas.location import PublicLocationData

# Two decimals is roughly 1 km
OBSCURED_PRECISION = 2
EXACT_PRECISION = 6

_STREET_SUFFIXES = (
    "Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd|Drive|Dr|Lane|Ln|Way|Place|Pl|"
    "Court|Ct|Circle|Cir|Square|Sq|Terrace|Ter|Trail|Trl|Parkway|Pkwy|"
    "Highway|Hwy|Freeway|Fwy"
)

# Tried in order, the first captured group is the city
_CITY_PATTERNS = (
    # "123 Main St, City, ST 12345"
    re.compile(r",\s*([^,]+),\s*[A-Z]{2}(?:\s+\d{5})?$"),
    # "City, ST 12345"
    re.compile(r"^([^,]+),\s*[A-Z]{2}(?:\s+\d{5})?$"),
    # "123 Main St, City"
    re.compile(r",\s*([^,]+)$"),
    re.compile(rf",\s*([^,]+?)(?:\s+(?:{_STREET_SUFFIXES}))?$", re.IGNORECASE),
)


def obscure_coordinates(latitude: float, longitude: float) -> tuple[float, float]:
    """Round coordinates to city-level precision."""
    return round(latitude, OBSCURED_PRECISION), round(longitude, OBSCURED_PRECISION)


def extract_city_from_address(address: str) -> str:
    """Extract the city part of an address, or return it unchanged."""
    for pattern in _CITY_PATTERNS:
        match = pattern.search(address)
        if match and match.group(1):
            return match.group(1).strip()
    return address


def create_public_location_data(location: Location) -> PublicLocationData:
    """Return exact data for public locations, city-level data otherwise."""
    if not location.is_private:
        return PublicLocationData(
            latitude=location.latitude,
            longitude=location.longitude,
            address=location.address,
            city_only=False,
        )

    latitude, longitude = obscure_coordinates(location.latitude, location.longitude)
    return PublicLocationData(
        latitude=latitude,
        longitude=longitude,
        address=extract_city_from_address(location.address),
        city_only=True,
    )


def get_privacy_safe_map_url(
    location: Location, provider: MapProvider = MapProvider.GOOGLE
) -> str:
    """Build a map link pointing at the public coordinates of a location."""
    public = create_public_location_data(location)
    lat, lng = public.latitude, public.longitude

    if provider == MapProvider.MAPBOX:
        return f"https://www.mapbox.com/maps/place/{lat},{lng}"
    if provider == MapProvider.OSM:
        return f"https://www.openstreetmap.org/?mlat={lat}&mlon={lng}#map=14/{lat}/{lng}"
    return f"https://www.google.com/maps/search/?api=1&query={lat},{lng}"


def get_privacy_safe_map_image_url(
    location: Location,
    provider: MapProvider = MapProvider.GOOGLE,
    api_key: str | None = None,
    width: int = 600,
    height: int = 300,
    zoom: int = 14,
) -> str:
    """Build a static map image URL for the public coordinates of a location.

    Raises:
        ValueError: If Google or Mapbox is requested without an API key.
    """
    public = create_public_location_data(location)
    lat, lng = public.latitude, public.longitude

    if provider == MapProvider.GOOGLE:
        if not api_key:
            raise ValueError("Google Maps API key required")
        return (
            f"https://maps.googleapis.com/maps/api/staticmap?center={lat},{lng}"
            f"&zoom={zoom}&size={width}x{height}"
            f"&markers=color:red%7C{lat},{lng}&key={api_key}"
        )
    if provider == MapProvider.MAPBOX:
        if not api_key:
            raise ValueError("Mapbox API key required")
        return (
            "https://api.mapbox.com/styles/v1/mapbox/streets-v11/static/"
            f"{lng},{lat},{zoom},0,0/{width}x{height}?access_token={api_key}"
        )
    return (
        f"https://static.openstreetmap.org/staticmap.php?center={lat},{lng}"
        f"&zoom={zoom}&size={width}x{height}&markers={lat},{lng},red-pushpin"
    )


def format_coordinates_for_display(
    latitude: float,
    longitude: float,
    is_private: bool,
    precision: int | None = None,
) -> str:
    """Format coordinates with reduced precision for private locations."""
    if precision is None:
        precision = OBSCURED_PRECISION if is_private else EXACT_PRECISION
    return f"{latitude:.{precision}f}, {longitude:.{precision}f}"
