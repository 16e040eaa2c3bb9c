# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for geocoding_service."""

import httpx
import pytest
import respx
from httpx import Response

from src.services.geocoding_service import (
    GeocodingError,
    GeocodingService,
    format_address,
    generate_fallback_title,
)

REVERSE_URL = "https://nominatim.openstreetmap.org/reverse"

TRAFALGAR_PAYLOAD = {
    "display_name": "Trafalgar Square, St. James's, London, Greater London, England, "
    "WC2N 5DN, United Kingdom",
    "address": {
        "road": "Trafalgar Square",
        "city": "London",
        "state": "England",
        "country": "United Kingdom",
    },
}


@pytest.fixture
def geocoding_service():
    return GeocodingService()


class TestFormatAddress:
    def test_joins_components(self):
        assert format_address(TRAFALGAR_PAYLOAD) == (
            "Trafalgar Square, London, England, United Kingdom"
        )

    def test_house_number_precedes_road(self):
        payload = {
            "address": {
                "house_number": "742",
                "road": "Evergreen Terrace",
                "town": "Springfield",
                "county": "Sangamon County",
                "country": "United States",
            }
        }
        assert format_address(payload) == (
            "742 Evergreen Terrace, Springfield, Sangamon County, United States"
        )

    def test_village_is_a_locality(self):
        payload = {"address": {"village": "Hallstatt", "country": "Austria"}}
        assert format_address(payload) == "Hallstatt, Austria"

    def test_falls_back_to_display_name(self):
        payload = {"display_name": "Somewhere at sea", "address": {}}
        assert format_address(payload) == "Somewhere at sea"

    def test_unknown_location(self):
        assert format_address({}) == "Unknown Location"


def test_generate_fallback_title():
    assert generate_fallback_title(0) == "Photo 1"
    assert generate_fallback_title(9) == "Photo 10"


class TestReverseGeocode:
    """Tests for the Nominatim client."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_returns_formatted_address(self, geocoding_service):
        route = respx.get(REVERSE_URL).mock(
            return_value=Response(200, json=TRAFALGAR_PAYLOAD)
        )

        result = await geocoding_service.reverse_geocode(51.508039, -0.128069)
        await geocoding_service.close()

        assert result.success is True
        assert result.address == "Trafalgar Square, London, England, United Kingdom"
        request = route.calls.last.request
        assert request.url.params["lat"] == "51.508039"
        assert request.url.params["lon"] == "-0.128069"
        assert request.url.params["format"] == "json"
        assert request.headers["User-Agent"].startswith("LocationManager")

    @respx.mock
    @pytest.mark.asyncio
    async def test_reuses_http_client(self, geocoding_service):
        route = respx.get(REVERSE_URL).mock(
            return_value=Response(200, json=TRAFALGAR_PAYLOAD)
        )

        await geocoding_service.reverse_geocode(51.5, -0.12)
        client = geocoding_service._http_client
        await geocoding_service.reverse_geocode(51.5, -0.12)

        assert geocoding_service._http_client is client
        assert route.call_count == 2
        await geocoding_service.close()
        assert geocoding_service._http_client is None

    @respx.mock
    @pytest.mark.asyncio
    async def test_error_payload_is_unsuccessful(self, geocoding_service):
        respx.get(REVERSE_URL).mock(
            return_value=Response(200, json={"error": "Unable to geocode"})
        )

        result = await geocoding_service.reverse_geocode(0.0, -160.0)

        assert result.success is False
        assert result.address == ""

    @respx.mock
    @pytest.mark.asyncio
    async def test_server_error_is_unsuccessful(self, geocoding_service):
        respx.get(REVERSE_URL).mock(return_value=Response(503))

        result = await geocoding_service.reverse_geocode(51.5, -0.12)

        assert result.success is False

    @respx.mock
    @pytest.mark.asyncio
    async def test_fetch_reverse_raises_on_network_error(self, geocoding_service):
        respx.get(REVERSE_URL).mock(side_effect=httpx.ConnectError("offline"))

        with pytest.raises(GeocodingError):
            await geocoding_service.fetch_reverse(51.5, -0.12)

    @respx.mock
    @pytest.mark.asyncio
    async def test_fetch_reverse_raises_on_invalid_json(self, geocoding_service):
        respx.get(REVERSE_URL).mock(return_value=Response(200, text="<html>"))

        with pytest.raises(GeocodingError):
            await geocoding_service.fetch_reverse(51.5, -0.12)

    @respx.mock
    @pytest.mark.asyncio
    async def test_custom_base_url(self):
        respx.get("https://geocode.example.com/reverse").mock(
            return_value=Response(200, json=TRAFALGAR_PAYLOAD)
        )
        service = GeocodingService(base_url="https://geocode.example.com")

        result = await service.reverse_geocode(51.5, -0.12)
        await service.close()

        assert result.success is True
