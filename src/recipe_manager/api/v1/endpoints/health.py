"""Health check endpoints.

Liveness and readiness probes for orchestrators and load balancers.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from recipe_manager.core.config import Settings, get_settings
from recipe_manager.schemas.health import (
    HealthResponse,
    ReadinessResponse,
    StagingStatus,
)


router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """Report that the process is serving requests."""
    return HealthResponse(
        status="healthy",
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
)
async def readiness_check(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ReadinessResponse:
    """Report staging cache occupancy and whether link previews are available."""
    dependencies: dict[str, str] = {}
    staging: StagingStatus | None = None

    staging_cache = getattr(request.app.state, "staging_cache", None)
    if staging_cache is None:
        dependencies["staging_cache"] = "unavailable"
    else:
        stats = staging_cache.stats()
        staging = StagingStatus(
            items=stats.items,
            total_bytes=stats.total_bytes,
            max_total_bytes=stats.max_total_bytes,
        )
        dependencies["staging_cache"] = "healthy"

    metadata_fetcher = getattr(request.app.state, "metadata_fetcher", None)
    if metadata_fetcher is not None and metadata_fetcher.is_initialized:
        dependencies["metadata_fetcher"] = "healthy"
    else:
        dependencies["metadata_fetcher"] = "unavailable"

    all_healthy = all(status == "healthy" for status in dependencies.values())

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies=dependencies,
        staging=staging,
    )
