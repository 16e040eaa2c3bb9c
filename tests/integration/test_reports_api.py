# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Integration tests for photo report API endpoints."""

import io
import zipfile

import pytest
import respx
from httpx import Response


@pytest.fixture
def report_request(jpeg_data_url) -> dict:
    return {
        "title": "Summer Trip",
        "description": "Evening light around Trafalgar Square",
        "filters": {"sun": False},
        "entries": [
            {
                "title": "Nelson's Column",
                "image_url": jpeg_data_url,
                "is_geocoded": True,
                "exif_data": {
                    "make": "Canon",
                    "gps": {"latitude": 51.5077, "longitude": -0.1279},
                    "date_time_original": "2024-06-21T19:30:00Z",
                },
            },
            {"title": "Fountain", "image_url": jpeg_data_url},
        ],
    }


class TestPreviewEndpoint:
    def test_preview(self, client, report_request):
        response = client.post("/api/v1/reports/photo-report/preview", json=report_request)

        assert response.status_code == 200
        data = response.json()
        assert data["entry_count"] == 2
        assert data["geocoded_count"] == 1
        assert data["with_gps_count"] == 1
        assert "sun" not in data["sections"]
        assert data["sections"]["location"] == 1
        assert data["filename"] == "Summer_Trip.zip"

    def test_rejects_long_title(self, client):
        response = client.post(
            "/api/v1/reports/photo-report/preview", json={"title": "x" * 201}
        )
        assert response.status_code == 422


class TestPdfEndpoint:
    def test_download_pdf(self, client, report_request):
        response = client.post("/api/v1/reports/photo-report/pdf", json=report_request)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert (
            response.headers["content-disposition"]
            == 'attachment; filename="Summer_Trip.pdf"'
        )
        assert response.headers["x-report-pages"] == "1"
        assert response.content.startswith(b"%PDF")

    def test_empty_report(self, client):
        response = client.post("/api/v1/reports/photo-report/pdf", json={})

        assert response.status_code == 200
        assert 'filename="Photo_Report.pdf"' in response.headers["content-disposition"]


class TestGenerateEndpoint:
    @respx.mock
    def test_archive_with_missing_image(self, client, report_request):
        respx.get("https://photos.example.com/lost.jpg").mock(return_value=Response(404))
        report_request["entries"].append(
            {"title": "Lost", "image_url": "https://photos.example.com/lost.jpg"}
        )

        response = client.post(
            "/api/v1/reports/photo-report/generate", json=report_request
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/zip"
        assert response.headers["x-missing-images"] == "1"
        with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
            assert sorted(archive.namelist()) == [
                "Summer_Trip.pdf",
                "images/01_Nelson_s_Column.jpg",
                "images/02_Fountain.jpg",
            ]
