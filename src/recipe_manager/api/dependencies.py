"""FastAPI dependencies for service access.

Services are created during application startup and stored on
``app.state``; a missing service answers 503.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import HTTPException, Request, status


if TYPE_CHECKING:
    from recipe_manager.services.ingestion import IngestionCoordinator
    from recipe_manager.services.metadata import MetadataFetcher
    from recipe_manager.services.storage import StorageServiceProtocol
    from recipe_manager.staging import StagingCache


def _require_state(request: Request, name: str, label: str) -> Any:
    service = getattr(request.app.state, name, None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{label} not available",
        )
    return service


async def get_staging_cache(request: Request) -> StagingCache:
    """Get the staging cache from app state."""
    cache: StagingCache = _require_state(request, "staging_cache", "Upload staging")
    return cache


async def get_metadata_fetcher(request: Request) -> MetadataFetcher:
    """Get the link metadata fetcher from app state."""
    fetcher: MetadataFetcher = _require_state(
        request, "metadata_fetcher", "Link metadata service"
    )
    return fetcher


async def get_storage_service(request: Request) -> StorageServiceProtocol:
    """Get the upload URL issuing service from app state."""
    storage: StorageServiceProtocol = _require_state(
        request, "storage_service", "Storage service"
    )
    return storage


async def get_ingestion_coordinator(request: Request) -> IngestionCoordinator:
    """Get the ingestion coordinator, requiring a working metadata fetcher."""
    await get_metadata_fetcher(request)
    coordinator: IngestionCoordinator = _require_state(
        request, "ingestion_coordinator", "Ingestion service"
    )
    return coordinator
