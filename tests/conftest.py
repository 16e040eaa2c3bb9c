# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
import base64
import io
import os

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Set test environment before importing app
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["LOG_LEVEL"] = "DEBUG"

from src.api.deps import get_db
from src.main import app
from src.models import Location
from src.models.base import Base

# Test database setup
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def london_location(db_session) -> Location:
    """A public location in central London."""
    location = Location(
        title="Trafalgar Square",
        address="Trafalgar Square, London, Greater London, United Kingdom",
        latitude=51.508039,
        longitude=-0.128069,
        timezone="Europe/London",
        is_private=False,
    )
    db_session.add(location)
    db_session.commit()
    db_session.refresh(location)
    return location


def make_jpeg(
    width: int = 64,
    height: int = 48,
    color: tuple[int, int, int] = (200, 120, 40),
    exif: Image.Exif | None = None,
) -> bytes:
    """Encode a solid-colour JPEG, optionally with EXIF data."""
    image = Image.new("RGB", (width, height), color)
    buffer = io.BytesIO()
    if exif is not None:
        image.save(buffer, format="JPEG", exif=exif)
    else:
        image.save(buffer, format="JPEG")
    return buffer.getvalue()


def to_data_url(data: bytes, media_type: str = "image/jpeg") -> str:
    return f"data:{media_type};base64,{base64.b64encode(data).decode('ascii')}"


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_jpeg()


@pytest.fixture
def jpeg_data_url(jpeg_bytes) -> str:
    return to_data_url(jpeg_bytes)


@pytest.fixture
def jpeg_factory():
    """Return the JPEG builder for tests needing custom images."""
    return make_jpeg


@pytest.fixture
def data_url():
    """Return the data URL encoder."""
    return to_data_url
