# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Integration tests for sun API endpoints."""

from datetime import datetime, timezone

from src.services import sun_service

LONDON = {"lat": 51.5074, "lng": -0.1278}
TROMSO = {"lat": 69.6492, "lng": 18.9553}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


class TestSnapshotEndpoint:
    """Tests for GET /api/v1/sun/snapshot."""

    def test_snapshot(self, client):
        response = client.get(
            "/api/v1/sun/snapshot", params={**LONDON, "at": "2024-06-21T12:00:00Z"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["snapshot"]["is_daytime"] is True
        assert data["snapshot"]["sunrise"].startswith("2024-06-21T03:")
        assert data["formatted"]["time_of_day"] == "Daytime"
        assert "above horizon" in data["formatted"]["position"]

    def test_defaults_to_now(self, client):
        response = client.get("/api/v1/sun/snapshot", params=LONDON)
        assert response.status_code == 200

    def test_polar_day(self, client):
        response = client.get(
            "/api/v1/sun/snapshot", params={**TROMSO, "at": "2024-06-21T00:00:00Z"}
        )

        data = response.json()
        assert data["snapshot"]["sunrise"] is None
        assert data["snapshot"]["day_length_minutes"] is None
        assert data["formatted"]["sunrise"] == "N/A"
        assert data["formatted"]["time_of_day"] == "Daytime"

    def test_rejects_out_of_range_latitude(self, client):
        response = client.get("/api/v1/sun/snapshot", params={"lat": 95, "lng": 0})
        assert response.status_code == 422

    def test_requires_coordinates(self, client):
        response = client.get("/api/v1/sun/snapshot")
        assert response.status_code == 422


class TestGoldenHourEndpoints:
    """Tests for the golden hour endpoints."""

    def test_at_sunrise(self, client):
        sunrise = sun_service.compute_sun_snapshot(
            LONDON["lat"], LONDON["lng"], datetime(2024, 9, 1, 12, tzinfo=timezone.utc)
        ).sunrise

        response = client.get(
            "/api/v1/sun/golden-hour", params={**LONDON, "at": sunrise.isoformat()}
        )

        assert response.status_code == 200
        assert response.json() == {
            "is_golden": True,
            "type": "morning",
            "remaining_minutes": 30,
        }

    def test_custom_window(self, client):
        sunrise = sun_service.compute_sun_snapshot(
            LONDON["lat"], LONDON["lng"], datetime(2024, 9, 1, 12, tzinfo=timezone.utc)
        ).sunrise

        response = client.get(
            "/api/v1/sun/golden-hour",
            params={**LONDON, "at": sunrise.isoformat(), "window_minutes": 45},
        )

        assert response.json()["remaining_minutes"] == 45

    def test_midday_is_not_golden(self, client):
        response = client.get(
            "/api/v1/sun/golden-hour", params={**LONDON, "at": "2024-09-01T13:00:00Z"}
        )

        assert response.json() == {
            "is_golden": False,
            "type": "evening",
            "remaining_minutes": None,
        }

    def test_rejects_zero_window(self, client):
        response = client.get(
            "/api/v1/sun/golden-hour", params={**LONDON, "window_minutes": 0}
        )
        assert response.status_code == 422

    def test_next_golden_hour(self, client):
        response = client.get(
            "/api/v1/sun/next-golden-hour",
            params={**LONDON, "at": "2024-09-01T12:00:00Z"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["type"] == "evening"
        assert data["time"].startswith("2024-09-01T18:")

    def test_no_golden_hour_in_polar_day(self, client):
        response = client.get(
            "/api/v1/sun/next-golden-hour",
            params={**TROMSO, "at": "2024-06-21T12:00:00Z"},
        )
        assert response.status_code == 404


class TestSunTimesEndpoint:
    """Tests for GET /api/v1/sun/times."""

    def test_range_in_timezone(self, client):
        response = client.get(
            "/api/v1/sun/times",
            params={**LONDON, "start": "2024-06-20", "days": 3, "tz": "Europe/London"},
        )

        assert response.status_code == 200
        data = response.json()
        assert [d["date"] for d in data] == ["2024-06-20", "2024-06-21", "2024-06-22"]
        assert data[1]["timezone"] == "Europe/London"
        assert data[1]["sunrise"].endswith("+01:00")
        assert data[1]["golden_morning"]["type"] == "morning"

    def test_defaults_to_a_week(self, client):
        response = client.get("/api/v1/sun/times", params=LONDON)
        assert len(response.json()) == 7

    def test_unknown_timezone(self, client):
        response = client.get(
            "/api/v1/sun/times", params={**LONDON, "tz": "Mars/Olympus_Mons"}
        )
        assert response.status_code == 422

    def test_rejects_too_many_days(self, client):
        response = client.get("/api/v1/sun/times", params={**LONDON, "days": 32})
        assert response.status_code == 422
