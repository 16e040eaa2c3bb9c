# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Reverse geocoding using OpenStreetMap Nominatim."""

import logging
from typing import Any

import httpx

from src.config import settings
from src.schemas.location import GeocodingResult

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = "Unknown Location"


class GeocodingError(Exception):
    """Reverse geocoding request failed."""


def format_address(payload: dict[str, Any]) -> str:
    """Build a short address from a Nominatim reverse geocoding payload.

    Joins street, city/town/village, state/county and country, falling back
    to the display name.
    """
    components = payload.get("address") or {}
    parts = []

    road = components.get("road")
    if road and components.get("house_number"):
        parts.append(f"{components['house_number']} {road}")
    elif road:
        parts.append(road)

    locality = components.get("city") or components.get("town") or components.get("village")
    if locality:
        parts.append(locality)

    region = components.get("state") or components.get("county")
    if region:
        parts.append(region)

    if components.get("country"):
        parts.append(components["country"])

    return ", ".join(parts) or payload.get("display_name") or UNKNOWN_LOCATION


def generate_fallback_title(index: int) -> str:
    """Title for photos without a geocoded address."""
    return f"Photo {index + 1}"


class GeocodingService:
    """Client for the Nominatim reverse geocoding API."""

    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url or settings.nominatim_url
        self.user_agent = user_agent or settings.nominatim_user_agent
        self.timeout = timeout
        self._http_client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent, "Accept-Language": "en"},
            )
        return self._http_client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def fetch_reverse(self, latitude: float, longitude: float) -> dict[str, Any]:
        """Fetch the raw reverse geocoding payload.

        Raises:
            GeocodingError: If the request fails or returns an error status.
        """
        try:
            client = await self._get_client()
            response = await client.get(
                "/reverse",
                params={
                    "format": "json",
                    "lat": latitude,
                    "lon": longitude,
                    "zoom": 18,
                    "addressdetails": 1,
                },
            )
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise GeocodingError(
                f"Reverse geocoding failed for ({latitude}, {longitude}): {e}"
            ) from e

    async def reverse_geocode(self, latitude: float, longitude: float) -> GeocodingResult:
        """Resolve coordinates to a readable address.

        Failures are logged and reported as an unsuccessful result.
        """
        try:
            payload = await self.fetch_reverse(latitude, longitude)
        except GeocodingError as e:
            logger.warning(str(e))
            return GeocodingResult(address="", success=False)

        if not payload or not payload.get("display_name"):
            return GeocodingResult(address="", success=False)
        return GeocodingResult(address=format_address(payload), success=True)
