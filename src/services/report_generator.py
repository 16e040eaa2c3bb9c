# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Photo report generator producing a paginated PDF and an image archive."""

import asyncio
import base64
import binascii
import io
import logging
import mimetypes
import zipfile
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import PurePosixPath
from urllib.parse import unquote_to_bytes, urlparse

import httpx
from PIL import Image
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from src.config import settings
from src.formatting import format_date, format_gps, google_maps_link, sanitize_filename
from src.models.enums import ReportSection
from src.schemas.report import DataFilter, PhotoReportPreview, ReportPhotoEntry
from src.services import image_service, sun_service
from src.services.image_service import PreparedImage

logger = logging.getLogger(__name__)

DEFAULT_REPORT_TITLE = "Photo Report"
DEFAULT_FILENAME = "photo_report"
DEFAULT_IMAGE_EXTENSION = "jpg"
IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "webp", "heic", "heif", "tif", "tiff"}

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
LINK_LABEL = "Open in Google Maps"

METERING_MODES = {
    0: "Unknown",
    1: "Average",
    2: "Center-weighted average",
    3: "Spot",
    4: "Multi-spot",
    5: "Pattern",
    6: "Partial",
    255: "Other",
}
WHITE_BALANCE_MODES = {0: "Auto", 1: "Manual"}


class ReportGeneratorError(Exception):
    """Base exception for report generator errors."""


class ImageFetchError(ReportGeneratorError):
    """An image could not be fetched from its URL."""


def _default_section_heights() -> dict[ReportSection, float]:
    # Header, rows and trailing spacing of a fully populated section, in mm
    return {
        ReportSection.LOCATION: 26.0,
        ReportSection.DATE_TIME: 26.0,
        ReportSection.CAMERA: 26.0,
        ReportSection.EXPOSURE: 31.0,
        ReportSection.SETTINGS: 31.0,
        ReportSection.SUN: 41.0,
        ReportSection.IMAGE: 26.0,
    }


@dataclass
class RenderOptions:
    """Page geometry and image handling of a report.

    Lengths are in millimetres, except ``page_size`` which is in points as
    reportlab defines it.
    """

    page_size: tuple[float, float] = A4
    margin: float = 10.0
    image_column_width: float = 45.0
    image_max_height: float = 80.0
    image_spacing: float = 5.0
    column_gap: float = 10.0
    label_width: float = 30.0
    line_height: float = 5.0
    title_height: float = 10.0
    entry_header_height: float = 12.0
    identity_height: float = 17.0
    section_header_height: float = 7.0
    section_spacing: float = 3.0
    entry_spacing: float = 10.0
    # Entries may end this far below the bottom margin before a page break
    bottom_tolerance: float = 5.0
    section_heights: dict[ReportSection, float] = field(
        default_factory=_default_section_heights
    )
    title_font_size: float = 18
    entry_font_size: float = 13
    section_font_size: float = 11
    row_font_size: float = 9
    compress_images: bool = True
    correct_orientation: bool = True
    max_image_width_px: int = field(
        default_factory=lambda: settings.report_image_max_width_px
    )
    jpeg_quality: int = field(default_factory=lambda: settings.report_jpeg_quality)

    @property
    def page_width_mm(self) -> float:
        return self.page_size[0] / mm

    @property
    def page_height_mm(self) -> float:
        return self.page_size[1] / mm

    @property
    def content_width(self) -> float:
        return self.page_width_mm - 2 * self.margin

    @property
    def content_bottom(self) -> float:
        return self.page_height_mm - self.margin

    @property
    def image_block_height(self) -> float:
        """Entry header plus the tallest possible image."""
        return self.entry_header_height + self.image_max_height + self.image_spacing

    @property
    def data_x(self) -> float:
        return self.margin + self.image_column_width + self.column_gap

    @property
    def data_column_width(self) -> float:
        return self.page_width_mm - self.margin - self.data_x


@dataclass
class LayoutCursor:
    """Current page (1-based) and distance from the page top in mm."""

    page: int = 1
    y: float = 0.0


@dataclass
class ReportRow:
    """A label/value row, optionally rendered as a hyperlink."""

    label: str
    value: str
    link: str | None = None


@dataclass
class FetchedImage:
    data: bytes
    content_type: str | None = None


@dataclass
class LayoutSummary:
    """What the layouter placed, for callers and tests."""

    page_count: int
    entry_pages: list[int]
    sections: list[tuple[int, ReportSection]]
    missing_images: list[int]


@dataclass
class ReportDocument:
    """Rendered report and the archive bundling it with the original images."""

    pdf: bytes
    archive: bytes
    filename: str
    page_count: int
    missing_images: list[int]


def fit_image(
    width_px: int, height_px: int, max_width: float, max_height: float
) -> tuple[float, float]:
    """Scale an image to fill the column width, then clamp its height.

    Returns:
        Tuple of (width, height) in the unit of the maxima.
    """
    width = max_width
    height = height_px * max_width / width_px
    if height > max_height:
        width *= max_height / height
        height = max_height
    return width, height


def _format_shutter_speed(seconds: float) -> str:
    if seconds <= 0:
        return "N/A"
    if seconds < 1:
        return f"1/{round(1 / seconds)} s"
    return f"{seconds:g} s"


def _location_rows(entry: ReportPhotoEntry) -> list[ReportRow]:
    gps = entry.exif_data.gps
    if gps is None:
        return []
    rows = [ReportRow("Coordinates", format_gps(gps.latitude, gps.longitude))]
    if gps.altitude is not None:
        rows.append(ReportRow("Altitude", f"{gps.altitude:.2f} m"))
    rows.append(
        ReportRow("Google Maps", LINK_LABEL, google_maps_link(gps.latitude, gps.longitude))
    )
    return rows


def _date_time_rows(entry: ReportPhotoEntry) -> list[ReportRow]:
    exif = entry.exif_data
    rows = []
    for label, value in (
        ("Original", exif.date_time_original),
        ("File", exif.date_time),
        ("Digitized", exif.date_time_digitized),
    ):
        if value is not None:
            rows.append(ReportRow(label, format_date(value)))
    return rows


def _camera_rows(entry: ReportPhotoEntry) -> list[ReportRow]:
    exif = entry.exif_data
    return [
        ReportRow(label, value)
        for label, value in (
            ("Make", exif.make),
            ("Model", exif.model),
            ("Software", exif.software),
        )
        if value
    ]


def _exposure_rows(entry: ReportPhotoEntry) -> list[ReportRow]:
    exposure = entry.exif_data.exposure
    if exposure is None:
        return []
    rows = []
    if exposure.aperture is not None:
        rows.append(ReportRow("Aperture", f"f/{exposure.aperture:.1f}"))
    shutter = exposure.shutter_speed
    if shutter is None:
        shutter = exposure.exposure_time
    if shutter is not None:
        rows.append(ReportRow("Shutter Speed", _format_shutter_speed(shutter)))
    if exposure.iso is not None:
        rows.append(ReportRow("ISO", str(exposure.iso)))
    if exposure.f_number is not None:
        rows.append(ReportRow("F-Number", f"f/{exposure.f_number:.1f}"))
    return rows


def _settings_rows(entry: ReportPhotoEntry) -> list[ReportRow]:
    camera = entry.exif_data.camera
    if camera is None:
        return []
    rows = []
    if camera.focal_length is not None:
        rows.append(ReportRow("Focal Length", f"{camera.focal_length:.0f}mm"))
    if camera.flash is not None:
        # Bit 0 of the EXIF flash value tells whether the flash fired
        rows.append(ReportRow("Flash", "On" if camera.flash & 1 else "Off"))
    if camera.white_balance is not None:
        rows.append(
            ReportRow(
                "White Balance",
                WHITE_BALANCE_MODES.get(camera.white_balance, str(camera.white_balance)),
            )
        )
    if camera.metering_mode is not None:
        rows.append(
            ReportRow(
                "Metering Mode",
                METERING_MODES.get(camera.metering_mode, str(camera.metering_mode)),
            )
        )
    return rows


def _sun_rows(entry: ReportPhotoEntry) -> list[ReportRow]:
    if entry.exif_data.sun is None:
        return []
    formatted = sun_service.format_sun_snapshot(entry.exif_data.sun)
    return [
        ReportRow("Sunrise", formatted.sunrise),
        ReportRow("Sunset", formatted.sunset),
        ReportRow("Solar Noon", formatted.solar_noon),
        ReportRow("Day Length", formatted.day_length),
        ReportRow("Sun Position", formatted.position),
        ReportRow("Time of Day", formatted.time_of_day),
    ]


def _image_rows(entry: ReportPhotoEntry) -> list[ReportRow]:
    image = entry.exif_data.image
    if image is None:
        return []
    rows = []
    if image.width and image.height:
        rows.append(ReportRow("Dimensions", f"{image.width} × {image.height}"))
    if image.x_resolution and image.y_resolution:
        rows.append(
            ReportRow(
                "Resolution", f"{image.x_resolution:g} × {image.y_resolution:g} DPI"
            )
        )
    if image.orientation:
        rows.append(ReportRow("Orientation", str(image.orientation)))
    return rows


_SECTION_ROWS = {
    ReportSection.LOCATION: _location_rows,
    ReportSection.DATE_TIME: _date_time_rows,
    ReportSection.CAMERA: _camera_rows,
    ReportSection.EXPOSURE: _exposure_rows,
    ReportSection.SETTINGS: _settings_rows,
    ReportSection.SUN: _sun_rows,
    ReportSection.IMAGE: _image_rows,
}


def entry_sections(
    entry: ReportPhotoEntry, filters: DataFilter
) -> list[tuple[ReportSection, list[ReportRow]]]:
    """Return the sections drawn for an entry, in drawing order.

    A section is drawn when its filter is enabled and the entry has at least
    one row of data for it.
    """
    sections = []
    for section in ReportSection:
        if not filters.is_enabled(section):
            continue
        rows = _SECTION_ROWS[section](entry)
        if rows:
            sections.append((section, rows))
    return sections


def _fit_text(text: str, font: str, size: float, max_width_pt: float) -> str:
    """Cut text with an ellipsis so it fits on one line."""
    if stringWidth(text, font, size) <= max_width_pt:
        return text
    low, high = 0, len(text)
    while low < high:
        middle = (low + high + 1) // 2
        if stringWidth(text[:middle] + "…", font, size) <= max_width_pt:
            low = middle
        else:
            high = middle - 1
    return text[:low] + "…"


class PhotoReportLayouter:
    """Draws report entries onto a reportlab canvas with manual page breaks.

    Pagination is estimate-then-commit: before an entry is drawn its height is
    estimated from fixed per-section constants and a new page is started if
    the estimate does not fit. Nothing is moved once drawn. Individual rows
    still break onto a new page when they reach the bottom margin.
    """

    def __init__(
        self,
        title: str,
        filters: DataFilter,
        options: RenderOptions | None = None,
    ) -> None:
        self.title = title
        self.filters = filters
        self.options = options or RenderOptions()
        self._buffer = io.BytesIO()
        self.canvas = canvas.Canvas(self._buffer, pagesize=self.options.page_size)
        self.canvas.setTitle(title)
        self.canvas.setCreator(settings.app_name)
        self.cursor = LayoutCursor(page=1, y=self.options.margin)
        self.entry_pages: list[int] = []
        self.sections: list[tuple[int, ReportSection]] = []
        # Where free space starts on the current page
        self._page_top = self.options.margin

    @property
    def page_count(self) -> int:
        return self.cursor.page

    def _pt_y(self, y: float) -> float:
        """Convert a distance from the page top in mm to a reportlab y."""
        return self.options.page_size[1] - y * mm

    def _fits(self, height: float) -> bool:
        limit = self.options.content_bottom + self.options.bottom_tolerance
        return self.cursor.y + height <= limit

    def _text(
        self,
        x: float,
        baseline: float,
        text: str,
        font: str = FONT_REGULAR,
        size: float = 9,
        color=colors.black,
    ) -> None:
        self.canvas.setFillColor(color)
        self.canvas.setFont(font, size)
        self.canvas.drawString(x * mm, self._pt_y(baseline), text)

    def new_page(self) -> None:
        """Finish the current page and move the cursor to the next page top."""
        self.canvas.showPage()
        self.cursor.page += 1
        self.cursor.y = self.options.margin
        self._page_top = self.options.margin

    def _ensure_room(self, height: float) -> None:
        if not self._fits(height) and self.cursor.y > self.options.margin:
            self.new_page()

    def _needs_page_break(self, estimate: float) -> bool:
        """Decide whether an entry of the estimated height starts a new page.

        An entry that does not fit moves on when the page already holds
        entry content, including rows spilled over from the previous entry.
        Below the report header only the header and image block must fit;
        the remaining rows continue on the following pages.
        """
        if self._fits(estimate) or self.cursor.y <= self.options.margin:
            return False
        if self.cursor.y > self._page_top:
            return True
        return not self._fits(self.options.image_block_height)

    def estimate_entry_height(self, entry: ReportPhotoEntry) -> float:
        """Estimate an entry's height from fixed constants.

        Sums the entry header, the image block, the title rows and every
        section that will be drawn. The image and data columns sit side by
        side, so this overestimates on purpose.
        """
        o = self.options
        height = o.image_block_height + o.identity_height
        for section, _rows in entry_sections(entry, self.filters):
            height += o.section_heights[section]
        return height

    def draw_header(
        self,
        description: str | None = None,
        generated_at: datetime | None = None,
    ) -> None:
        """Draw the report title, generation time and description."""
        o = self.options
        self._text(o.margin, self.cursor.y + 7, self.title, FONT_BOLD, o.title_font_size)
        self.cursor.y += o.title_height

        generated_at = generated_at or datetime.now(timezone.utc)
        self._text(
            o.margin,
            self.cursor.y + 4,
            f"Generated on: {format_date(generated_at)}",
            size=o.row_font_size,
            color=colors.grey,
        )
        self.cursor.y += o.line_height + 1

        if description:
            for line in simpleSplit(
                description, FONT_REGULAR, o.row_font_size + 1, o.content_width * mm
            ):
                self._ensure_room(o.line_height)
                self._text(
                    o.margin, self.cursor.y + 4, line, size=o.row_font_size + 1
                )
                self.cursor.y += o.line_height

        self.cursor.y += 2 * o.section_spacing
        self._page_top = self.cursor.y

    def _draw_entry_header(self, index: int, entry: ReportPhotoEntry) -> None:
        o = self.options
        self._ensure_room(o.entry_header_height)
        heading = _fit_text(
            f"Photo {index + 1}: {entry.title}",
            FONT_BOLD,
            o.entry_font_size,
            o.content_width * mm,
        )
        self._text(o.margin, self.cursor.y + 6, heading, FONT_BOLD, o.entry_font_size)

        rule_y = self._pt_y(self.cursor.y + 8)
        self.canvas.setStrokeColor(colors.black)
        self.canvas.setLineWidth(0.5)
        self.canvas.line(
            o.margin * mm, rule_y, (o.page_width_mm - o.margin) * mm, rule_y
        )
        self.cursor.y += o.entry_header_height

    def _draw_image(self, image: PreparedImage | None, top: float) -> float:
        """Draw the image at the top of the image column, returning its bottom."""
        if image is None:
            return top
        o = self.options
        width, height = fit_image(
            image.width_px, image.height_px, o.image_column_width, o.image_max_height
        )
        self.canvas.drawImage(
            ImageReader(io.BytesIO(image.data)),
            o.margin * mm,
            self._pt_y(top + height),
            width=width * mm,
            height=height * mm,
        )
        return top + height + o.image_spacing

    def _draw_row(self, row: ReportRow) -> None:
        o = self.options
        value_x = o.data_x + o.label_width
        value_width = (o.data_column_width - o.label_width) * mm
        lines = simpleSplit(row.value, FONT_REGULAR, o.row_font_size, value_width) or [""]

        for line_number, line in enumerate(lines):
            self._ensure_room(o.line_height)
            baseline = self.cursor.y + o.line_height * 0.75
            if line_number == 0:
                self._text(o.data_x, baseline, f"{row.label}:", FONT_BOLD, o.row_font_size)
            color = colors.blue if row.link else colors.black
            self._text(value_x, baseline, line, FONT_REGULAR, o.row_font_size, color)
            if row.link:
                left = value_x * mm
                right = left + stringWidth(line, FONT_REGULAR, o.row_font_size)
                self.canvas.linkURL(
                    row.link,
                    (
                        left,
                        self._pt_y(self.cursor.y + o.line_height),
                        right,
                        self._pt_y(self.cursor.y),
                    ),
                    relative=0,
                    thickness=0,
                )
            self.cursor.y += o.line_height

    def _draw_section(
        self, index: int, section: ReportSection, rows: list[ReportRow]
    ) -> None:
        o = self.options
        # Keep the header together with its first row
        self._ensure_room(o.section_header_height + o.line_height)
        self.sections.append((index, section))
        self._text(
            o.data_x, self.cursor.y + 5, section.heading, FONT_BOLD, o.section_font_size
        )
        self.cursor.y += o.section_header_height
        for row in rows:
            self._draw_row(row)
        self.cursor.y += o.section_spacing

    def place_entry(
        self,
        index: int,
        entry: ReportPhotoEntry,
        image: PreparedImage | None = None,
    ) -> None:
        """Lay out one entry: image on the left, metadata sections on the right."""
        o = self.options
        estimate = self.estimate_entry_height(entry)
        if self._needs_page_break(estimate):
            logger.debug(
                f"Entry {index} needs ~{estimate:.0f}mm at y={self.cursor.y:.0f}mm, "
                f"starting page {self.cursor.page + 1}"
            )
            self.new_page()

        self.entry_pages.append(self.cursor.page)

        self._draw_entry_header(index, entry)
        image_page = self.cursor.page
        image_bottom = self._draw_image(image, self.cursor.y)

        source = "GPS Coordinates (Geocoded)" if entry.is_geocoded else "Manual Entry"
        self._draw_row(ReportRow("Title", entry.title))
        self._draw_row(ReportRow("Source", source))
        self.cursor.y += o.section_spacing

        for section, rows in entry_sections(entry, self.filters):
            self._draw_section(index, section, rows)

        if self.cursor.page == image_page:
            self.cursor.y = max(self.cursor.y, image_bottom)
        self.cursor.y += o.entry_spacing

    def finish(self) -> bytes:
        """Close the document and return the PDF bytes."""
        self.canvas.save()
        return self._buffer.getvalue()


def _decode_data_url(url: str) -> FetchedImage:
    header, separator, payload = url[len("data:"):].partition(",")
    if not separator:
        raise ImageFetchError("Malformed data URL")
    content_type = header.split(";")[0] or None
    if header.endswith(";base64"):
        try:
            return FetchedImage(base64.b64decode(payload), content_type)
        except (binascii.Error, ValueError) as e:
            raise ImageFetchError(f"Invalid base64 data URL: {e}") from e
    return FetchedImage(unquote_to_bytes(payload), content_type)


class ImageFetcher:
    """Fetches image bytes from http(s) and data URLs."""

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout or settings.image_fetch_timeout
        self._http_client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(
                timeout=self.timeout, follow_redirects=True
            )
        return self._http_client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def fetch(self, url: str) -> FetchedImage:
        """Fetch an image.

        Raises:
            ImageFetchError: If the URL is malformed or the request fails.
        """
        if url.startswith("data:"):
            return _decode_data_url(url)

        try:
            client = await self._get_client()
            response = await client.get(url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ImageFetchError(f"Failed to fetch image {url}: {e}") from e

        content_type = response.headers.get("content-type")
        if content_type:
            content_type = content_type.split(";")[0].strip()
        return FetchedImage(response.content, content_type)


def image_extension(url: str, content_type: str | None) -> str:
    """Pick the archive file extension of an image."""
    if not url.startswith("data:"):
        suffix = PurePosixPath(urlparse(url).path).suffix.lstrip(".").lower()
        if suffix in IMAGE_EXTENSIONS:
            return suffix
    if content_type:
        guessed = mimetypes.guess_extension(content_type)
        if guessed:
            return guessed.lstrip(".")
    return DEFAULT_IMAGE_EXTENSION


class PhotoReportGenerator:
    """Generator for photo reports with PDF rendering and image packaging."""

    def __init__(
        self,
        fetcher: ImageFetcher | None = None,
        options: RenderOptions | None = None,
    ) -> None:
        """Initialize the photo report generator.

        Args:
            fetcher: Image fetcher, a new one is created when omitted.
            options: Page geometry and image handling.
        """
        self.fetcher = fetcher or ImageFetcher()
        self.options = options or RenderOptions()

    async def close(self) -> None:
        await self.fetcher.close()

    def get_filename(self, title: str | None, extension: str = "zip") -> str:
        """Get the download filename for a report title."""
        stem = sanitize_filename(title or DEFAULT_REPORT_TITLE) or DEFAULT_FILENAME
        return f"{stem}.{extension}"

    def get_preview(
        self,
        entries: list[ReportPhotoEntry],
        filters: DataFilter,
        title: str | None = None,
    ) -> PhotoReportPreview:
        """Return a summary without rendering anything."""
        sections = {
            section.value: 0 for section in ReportSection if filters.is_enabled(section)
        }
        for entry in entries:
            for section, _rows in entry_sections(entry, filters):
                sections[section.value] += 1

        return PhotoReportPreview(
            entry_count=len(entries),
            geocoded_count=sum(1 for e in entries if e.is_geocoded),
            with_gps_count=sum(1 for e in entries if e.exif_data.gps is not None),
            sections=sections,
            filename=self.get_filename(title),
        )

    async def _prepare_image(
        self, index: int, entry: ReportPhotoEntry
    ) -> PreparedImage | None:
        """Fetch and re-encode an entry's image, or None if that fails."""
        try:
            fetched = await self.fetcher.fetch(entry.image_url)
        except ImageFetchError as e:
            logger.warning(f"Skipping image of entry {index}: {e}")
            return None

        image_props = entry.exif_data.image
        try:
            return image_service.prepare_for_embedding(
                fetched.data,
                orientation=image_props.orientation if image_props else None,
                correct_orientation_enabled=self.options.correct_orientation,
                compress=self.options.compress_images,
                max_width_px=self.options.max_image_width_px,
                quality=self.options.jpeg_quality,
            )
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            logger.warning(f"Skipping undecodable image of entry {index}: {e}")
            return None

    async def render_pdf(
        self,
        entries: list[ReportPhotoEntry],
        filters: DataFilter,
        title: str | None = None,
        description: str | None = None,
    ) -> tuple[bytes, LayoutSummary]:
        """Render the report PDF.

        Images are fetched concurrently, then entries are laid out in order.
        Entries whose image cannot be loaded are drawn without it.

        Returns:
            Tuple of (pdf_bytes, layout_summary).
        """
        images = await asyncio.gather(
            *(self._prepare_image(index, entry) for index, entry in enumerate(entries))
        )

        layouter = PhotoReportLayouter(title or DEFAULT_REPORT_TITLE, filters, self.options)
        layouter.draw_header(description)
        for index, (entry, image) in enumerate(zip(entries, images, strict=True)):
            layouter.place_entry(index, entry, image)
        pdf = layouter.finish()

        summary = LayoutSummary(
            page_count=layouter.page_count,
            entry_pages=layouter.entry_pages,
            sections=layouter.sections,
            missing_images=[i for i, image in enumerate(images) if image is None],
        )
        logger.info(
            f"Rendered photo report with {len(entries)} entries on "
            f"{summary.page_count} pages ({len(summary.missing_images)} images missing)"
        )
        return pdf, summary

    async def _fetch_original(self, index: int, url: str) -> FetchedImage | None:
        try:
            return await self.fetcher.fetch(url)
        except ImageFetchError as e:
            logger.warning(f"Omitting image of entry {index} from archive: {e}")
            return None

    async def _create_archive(
        self, pdf: bytes, entries: list[ReportPhotoEntry], title: str | None
    ) -> tuple[bytes, list[int]]:
        """Bundle the PDF with freshly fetched original images."""
        originals = await asyncio.gather(
            *(self._fetch_original(index, e.image_url) for index, e in enumerate(entries))
        )

        missing = []
        zip_buffer = io.BytesIO()
        with zipfile.ZipFile(zip_buffer, "w", zipfile.ZIP_DEFLATED) as zip_file:
            zip_file.writestr(self.get_filename(title, "pdf"), pdf)

            for idx, (entry, original) in enumerate(zip(entries, originals, strict=True)):
                if original is None:
                    missing.append(idx)
                    continue
                ext = image_extension(entry.image_url, original.content_type)
                stem = sanitize_filename(entry.title) or "photo"
                zip_file.writestr(f"images/{idx + 1:02d}_{stem}.{ext}", original.data)

        return zip_buffer.getvalue(), missing

    async def generate(
        self,
        entries: list[ReportPhotoEntry],
        filters: DataFilter,
        title: str | None = None,
        description: str | None = None,
    ) -> ReportDocument:
        """Render the PDF and bundle it with the original images in a ZIP."""
        pdf, summary = await self.render_pdf(entries, filters, title, description)
        archive, missing = await self._create_archive(pdf, entries, title)
        return ReportDocument(
            pdf=pdf,
            archive=archive,
            filename=self.get_filename(title),
            page_count=summary.page_count,
            missing_images=missing,
        )
