# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Photo report API endpoints."""

from fastapi import APIRouter
from fastapi.responses import Response

from src.schemas.report import PhotoReportPreview, PhotoReportRequest
from src.services.report_generator import PhotoReportGenerator

router = APIRouter()


@router.post("/photo-report/preview", response_model=PhotoReportPreview)
def preview_photo_report(data: PhotoReportRequest) -> PhotoReportPreview:
    """Get a preview of the photo report without rendering it."""
    return PhotoReportGenerator().get_preview(data.entries, data.filters, data.title)


@router.post("/photo-report/pdf")
async def download_photo_report_pdf(data: PhotoReportRequest) -> Response:
    """Render the photo report and download it as PDF."""
    generator = PhotoReportGenerator()
    try:
        pdf_bytes, summary = await generator.render_pdf(
            data.entries, data.filters, data.title, data.description
        )
        filename = generator.get_filename(data.title, "pdf")
    finally:
        await generator.close()

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Report-Pages": str(summary.page_count),
        },
    )


@router.post("/photo-report/generate")
async def generate_photo_report(data: PhotoReportRequest) -> Response:
    """Generate and download the photo report with its original images as ZIP."""
    generator = PhotoReportGenerator()
    try:
        document = await generator.generate(
            data.entries, data.filters, data.title, data.description
        )
    finally:
        await generator.close()

    return Response(
        content=document.archive,
        media_type="application/zip",
        headers={
            "Content-Disposition": f'attachment; filename="{document.filename}"',
            "X-Report-Pages": str(document.page_count),
            "X-Missing-Images": str(len(document.missing_images)),
        },
    )
