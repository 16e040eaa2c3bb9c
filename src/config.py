# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Application configuration loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Every field can be overridden by an environment variable of the same
    name (case-insensitive), e.g. ``DATABASE_URL`` or ``LOG_LEVEL``.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Location Manager"
    database_url: str = "sqlite:///./location_manager.db"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Half-width of the golden hour window around sunrise and sunset
    golden_hour_window_minutes: int = 30

    # Photo report export
    image_fetch_timeout: float = 30.0
    report_image_max_width_px: int = 1200
    report_jpeg_quality: int = 80

    # OpenStreetMap Nominatim reverse geocoding
    nominatim_url: str = "https://nominatim.openstreetmap.org"
    nominatim_user_agent: str = "LocationManager/0.1 (contact@example.com)"


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()


settings = get_settings()
