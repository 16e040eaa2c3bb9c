# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Image orientation, compression and watermarking with Pillow."""

import io
import logging
from dataclasses import dataclass

from PIL import ExifTags, Image, ImageDraw, ImageFont

from src.config import settings

logger = logging.getLogger(__name__)

# EXIF orientation tag value -> transpose restoring the upright image
_ORIENTATION_TRANSPOSE = {
    2: Image.Transpose.FLIP_LEFT_RIGHT,
    3: Image.Transpose.ROTATE_180,
    4: Image.Transpose.FLIP_TOP_BOTTOM,
    5: Image.Transpose.TRANSPOSE,
    6: Image.Transpose.ROTATE_270,
    7: Image.Transpose.TRANSVERSE,
    8: Image.Transpose.ROTATE_90,
}

UNCOMPRESSED_JPEG_QUALITY = 95
WATERMARK_JPEG_QUALITY = 90
WATERMARK_MARGIN_PX = 20
# White at 60% opacity
WATERMARK_FILL = (255, 255, 255, 153)


@dataclass
class PreparedImage:
    """JPEG bytes ready for embedding plus their pixel size."""

    data: bytes
    width_px: int
    height_px: int


def needs_rotation(orientation: int | None) -> bool:
    """Return True if the orientation swaps width and height."""
    return orientation is not None and 5 <= orientation <= 8


def corrected_dimensions(
    width: int, height: int, orientation: int | None
) -> tuple[int, int]:
    """Return (width, height) of the image once displayed upright."""
    if needs_rotation(orientation):
        return height, width
    return width, height


def read_orientation(image: Image.Image) -> int | None:
    """Read the EXIF orientation tag of an opened image."""
    value = image.getexif().get(ExifTags.Base.Orientation)
    return int(value) if value is not None else None


def correct_orientation(image: Image.Image, orientation: int | None) -> Image.Image:
    """Rotate and flip an image according to its EXIF orientation.

    Values outside 2-8 (including 1 and None) return the image unchanged.
    """
    method = _ORIENTATION_TRANSPOSE.get(orientation) if orientation else None
    if method is None:
        return image
    return image.transpose(method)


def _to_jpeg(image: Image.Image, quality: int) -> bytes:
    if image.mode not in ("RGB", "L"):
        image = image.convert("RGB")
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=quality, optimize=True)
    return buffer.getvalue()


def prepare_for_embedding(
    data: bytes,
    orientation: int | None = None,
    correct_orientation_enabled: bool = True,
    compress: bool = True,
    max_width_px: int | None = None,
    quality: int | None = None,
) -> PreparedImage:
    """Decode an image and re-encode it as JPEG for embedding in a document.

    Args:
        data: Encoded image bytes.
        orientation: EXIF orientation; read from the image when None.
        correct_orientation_enabled: Apply the orientation before encoding.
        compress: Downscale to ``max_width_px`` and encode at ``quality``.
        max_width_px: Maximum width in pixels, defaults to settings.
        quality: JPEG quality, defaults to settings.

    Raises:
        OSError: If the bytes cannot be decoded (PIL.UnidentifiedImageError).
    """
    max_width_px = max_width_px or settings.report_image_max_width_px
    quality = quality or settings.report_jpeg_quality

    with Image.open(io.BytesIO(data)) as opened:
        opened.load()
        if orientation is None:
            orientation = read_orientation(opened)
        image = opened
        if correct_orientation_enabled:
            image = correct_orientation(image, orientation)

        if compress and image.width > max_width_px:
            height = max(1, round(image.height * max_width_px / image.width))
            image = image.resize((max_width_px, height), Image.Resampling.LANCZOS)

        encoded = _to_jpeg(image, quality if compress else UNCOMPRESSED_JPEG_QUALITY)
        return PreparedImage(data=encoded, width_px=image.width, height_px=image.height)


def watermark_font_size(width: int) -> int:
    return max(16, min(32, width // 20))


def apply_watermark(data: bytes, text: str) -> bytes:
    """Draw text into the bottom-right corner of an image.

    Returns:
        JPEG bytes of the upright, watermarked image.
    """
    with Image.open(io.BytesIO(data)) as opened:
        opened.load()
        upright = correct_orientation(opened, read_orientation(opened))
        base = upright.convert("RGBA")

    overlay = Image.new("RGBA", base.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    font = ImageFont.load_default(size=watermark_font_size(base.width))

    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    x = max(0, base.width - (right - left) - WATERMARK_MARGIN_PX)
    y = max(0, base.height - (bottom - top) - WATERMARK_MARGIN_PX)
    draw.text((x - left, y - top), text, font=font, fill=WATERMARK_FILL)

    combined = Image.alpha_composite(base, overlay).convert("RGB")
    logger.debug(f"Watermarked {combined.width}x{combined.height} image")
    return _to_jpeg(combined, WATERMARK_JPEG_QUALITY)


def should_watermark_image(is_public: bool, watermark_enabled: bool) -> bool:
    """Only public images with watermarking enabled get a watermark."""
    return is_public and watermark_enabled
