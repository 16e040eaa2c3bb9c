# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Photo metadata and watermark API endpoints."""

import base64
import logging

from fastapi import APIRouter, HTTPException, status

from src.schemas.photo import (
    PhotoProcessRequest,
    PhotoProcessResponse,
    WatermarkRequest,
    WatermarkResponse,
)
from src.services import exif_service, image_service
from src.services.geocoding_service import GeocodingService, generate_fallback_title
from src.services.report_generator import ImageFetcher, ImageFetchError

logger = logging.getLogger(__name__)

router = APIRouter()


async def _fetch_image(url: str) -> bytes:
    fetcher = ImageFetcher()
    try:
        fetched = await fetcher.fetch(url)
    except ImageFetchError as e:
        logger.warning(str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to download image",
        ) from e
    finally:
        await fetcher.close()
    return fetched.data


@router.post("/process", response_model=PhotoProcessResponse)
async def process_photo(data: PhotoProcessRequest) -> PhotoProcessResponse:
    """Extract EXIF metadata, capture time and sun data from a stored photo."""
    image_bytes = await _fetch_image(data.image_url)

    exif = exif_service.attach_sun_data(exif_service.extract_exif(image_bytes))
    title = generate_fallback_title(data.index)
    is_geocoded = False

    if data.geocode and exif.gps is not None:
        service = GeocodingService()
        try:
            result = await service.reverse_geocode(exif.gps.latitude, exif.gps.longitude)
        finally:
            await service.close()
        if result.success:
            title = result.address
            is_geocoded = True

    return PhotoProcessResponse(
        exif=exif,
        taken_at=exif_service.resolve_taken_at(exif),
        latitude=exif.gps.latitude if exif.gps else None,
        longitude=exif.gps.longitude if exif.gps else None,
        title=title,
        is_geocoded=is_geocoded,
    )


@router.post("/watermark", response_model=WatermarkResponse)
async def watermark_photo(data: WatermarkRequest) -> WatermarkResponse:
    """Apply a text watermark and return the result as a JPEG data URL."""
    image_bytes = await _fetch_image(data.image_url)
    try:
        watermarked = image_service.apply_watermark(image_bytes, data.watermark_text)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to watermark {data.image_url}: {e}")
        raise HTTPException(status_code=422, detail="Image could not be decoded") from e

    encoded = base64.b64encode(watermarked).decode("ascii")
    return WatermarkResponse(watermarked_image_url=f"data:image/jpeg;base64,{encoded}")
