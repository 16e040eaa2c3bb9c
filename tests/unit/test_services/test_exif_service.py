# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for exif_service."""

from datetime import datetime, timedelta, timezone

import pytest
from PIL import ExifTags, Image
from PIL.TiffImagePlugin import IFDRational

from src.schemas.exif import ExifData, GpsData
from src.services import exif_service

Tag = ExifTags.Base
Gps = ExifTags.GPS


def build_exif() -> Image.Exif:
    """EXIF of a photo taken on Trafalgar Square on a midsummer evening."""
    exif = Image.Exif()
    exif[Tag.Make] = "Canon"
    exif[Tag.Model] = "EOS R5"
    exif[Tag.Orientation] = 1
    exif[Tag.DateTime] = "2024:06:22 08:00:00"
    exif[ExifTags.IFD.Exif] = {
        Tag.DateTimeOriginal: "2024:06:21 19:30:00",
        Tag.OffsetTimeOriginal: "+01:00",
        Tag.ExposureTime: IFDRational(1, 250),
        Tag.FNumber: IFDRational(28, 10),
        Tag.ISOSpeedRatings: 200,
        Tag.ApertureValue: IFDRational(297, 100),
        Tag.ShutterSpeedValue: IFDRational(797, 100),
        Tag.FocalLength: IFDRational(50, 1),
        Tag.Flash: 16,
        Tag.WhiteBalance: 0,
        Tag.MeteringMode: 5,
    }
    exif[ExifTags.IFD.GPSInfo] = {
        Gps.GPSLatitudeRef: "N",
        Gps.GPSLatitude: (IFDRational(51, 1), IFDRational(30, 1), IFDRational(2664, 100)),
        Gps.GPSLongitudeRef: "W",
        Gps.GPSLongitude: (IFDRational(0, 1), IFDRational(7, 1), IFDRational(4008, 100)),
        Gps.GPSAltitudeRef: 1,
        Gps.GPSAltitude: IFDRational(35, 1),
    }
    return exif


@pytest.fixture
def photo(jpeg_factory) -> bytes:
    return jpeg_factory(width=64, height=48, exif=build_exif())


class TestExtractExif:
    """Tests for extract_exif."""

    def test_camera_identity(self, photo):
        exif = exif_service.extract_exif(photo)

        assert exif.make == "Canon"
        assert exif.model == "EOS R5"

    def test_datetime_uses_offset_tag(self, photo):
        exif = exif_service.extract_exif(photo)

        assert exif.date_time_original == datetime(
            2024, 6, 21, 19, 30, tzinfo=timezone(timedelta(hours=1))
        )

    def test_datetime_without_offset_is_utc(self, photo):
        exif = exif_service.extract_exif(photo)
        assert exif.date_time == datetime(2024, 6, 22, 8, 0, tzinfo=timezone.utc)

    def test_gps_in_decimal_degrees(self, photo):
        gps = exif_service.extract_exif(photo).gps

        assert gps.latitude == pytest.approx(51.5074, abs=1e-6)
        assert gps.longitude == pytest.approx(-0.1278, abs=1e-6)
        assert gps.altitude == pytest.approx(-35.0)
        assert gps.latitude_ref == "N"
        assert gps.longitude_ref == "W"

    def test_exposure(self, photo):
        exposure = exif_service.extract_exif(photo).exposure

        assert exposure.exposure_time == pytest.approx(0.004)
        assert exposure.f_number == pytest.approx(2.8)
        assert exposure.iso == 200
        assert exposure.aperture == pytest.approx(2.8, abs=0.01)
        assert 1 / exposure.shutter_speed == pytest.approx(250, rel=0.01)

    def test_camera_settings(self, photo):
        camera = exif_service.extract_exif(photo).camera

        assert camera.focal_length == pytest.approx(50.0)
        assert camera.flash == 16
        assert camera.white_balance == 0
        assert camera.metering_mode == 5

    def test_image_properties(self, photo):
        image = exif_service.extract_exif(photo).image

        assert (image.width, image.height) == (64, 48)
        assert image.orientation == 1

    def test_plain_jpeg_has_only_image_properties(self, jpeg_bytes):
        exif = exif_service.extract_exif(jpeg_bytes)

        assert exif.make is None
        assert exif.gps is None
        assert exif.exposure is None
        assert exif.camera is None
        assert exif.image.width == 64

    def test_unreadable_data_gives_empty_result(self):
        assert exif_service.extract_exif(b"not an image") == ExifData()

    def test_out_of_range_aperture_is_dropped(self, jpeg_factory):
        exif = build_exif()
        exif[ExifTags.IFD.Exif] = {
            Tag.ApertureValue: IFDRational(40000, 1),
            Tag.ISOSpeedRatings: 200,
        }

        exposure = exif_service.extract_exif(jpeg_factory(exif=exif)).exposure

        assert exposure.aperture is None
        assert exposure.iso == 200

    def test_oversized_image_gives_empty_result(self, photo, monkeypatch):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)

        assert exif_service.extract_exif(photo) == ExifData()


class TestResolveTakenAt:
    def test_prefers_original(self):
        original = datetime(2024, 1, 1, tzinfo=timezone.utc)
        exif = ExifData(
            date_time_original=original,
            date_time=datetime(2024, 2, 1, tzinfo=timezone.utc),
        )
        assert exif_service.resolve_taken_at(exif) == original

    def test_falls_back_to_digitized_then_modified(self):
        digitized = datetime(2024, 1, 2, tzinfo=timezone.utc)
        modified = datetime(2024, 1, 3, tzinfo=timezone.utc)

        assert (
            exif_service.resolve_taken_at(
                ExifData(date_time_digitized=digitized, date_time=modified)
            )
            == digitized
        )
        assert exif_service.resolve_taken_at(ExifData(date_time=modified)) == modified

    def test_falls_back_to_now(self):
        before = datetime.now(timezone.utc)
        taken_at = exif_service.resolve_taken_at(ExifData())
        assert before <= taken_at <= datetime.now(timezone.utc)


class TestAttachSunData:
    def test_adds_sun_snapshot(self, photo):
        exif = exif_service.attach_sun_data(exif_service.extract_exif(photo))

        assert exif.sun is not None
        assert exif.sun.is_daytime is True
        assert exif.sun.sunset.utcoffset() == timedelta(hours=1)

    def test_without_gps_is_unchanged(self):
        exif = ExifData(date_time=datetime(2024, 6, 21, tzinfo=timezone.utc))
        assert exif_service.attach_sun_data(exif).sun is None

    def test_without_time_is_unchanged(self):
        exif = ExifData(gps=GpsData(latitude=51.5, longitude=-0.12))
        assert exif_service.attach_sun_data(exif).sun is None
