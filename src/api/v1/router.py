# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Main API router for v1 endpoints."""

from fastapi import APIRouter

from src.api.v1 import locations, photos, reports, sun

api_router = APIRouter()

# Sun and golden hour routes
api_router.include_router(sun.router, prefix="/sun", tags=["sun"])

# Location routes
api_router.include_router(locations.router)

# Photo routes
api_router.include_router(photos.router, prefix="/photos", tags=["photos"])

# Report routes
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
