"""API v1 router aggregating all endpoint routers.

Mounted under ``api.v1_prefix`` (default ``/api/v1``).
"""

from __future__ import annotations

from fastapi import APIRouter

from recipe_manager.api.v1.endpoints import health, metadata, uploads


router = APIRouter()

router.include_router(health.router)
router.include_router(metadata.router)
router.include_router(uploads.router)
