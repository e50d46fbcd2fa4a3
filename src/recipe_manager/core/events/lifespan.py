"""Application lifespan event handlers.

Startup builds the ingestion services and stores them on ``app.state``;
shutdown releases them in reverse order.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_manager.core.config import Settings, get_settings
from recipe_manager.observability.logging import get_logger, setup_logging
from recipe_manager.services.ingestion import IngestionCoordinator
from recipe_manager.services.metadata import MetadataFetcher
from recipe_manager.services.storage import PlaceholderStorageService
from recipe_manager.staging import StagingCache


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
        log_file=settings.logging.file,
    )
    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    # Critical: uploads cannot be staged without it
    staging_cache = StagingCache.from_settings(settings.staging)
    app.state.staging_cache = staging_cache
    logger.info(
        "Staging cache ready",
        max_item_bytes=staging_cache.max_item_bytes,
        max_total_bytes=staging_cache.max_total_bytes,
        ttl_seconds=staging_cache.ttl_seconds,
    )

    app.state.storage_service = PlaceholderStorageService(
        settings.storage.public_base_url
    )

    metadata_fetcher = MetadataFetcher(settings.metadata)
    try:
        await metadata_fetcher.initialize()
    except Exception:
        logger.exception(
            "Failed to initialize MetadataFetcher - link previews unavailable"
        )
        app.state.metadata_fetcher = None
    else:
        app.state.metadata_fetcher = metadata_fetcher

    app.state.ingestion_coordinator = IngestionCoordinator(
        staging_cache, metadata_fetcher
    )

    logger.info("Application startup complete")


async def _shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")

    metadata_fetcher: MetadataFetcher | None = getattr(
        app.state, "metadata_fetcher", None
    )
    if metadata_fetcher is not None:
        await metadata_fetcher.shutdown()

    staging_cache: StagingCache | None = getattr(app.state, "staging_cache", None)
    if staging_cache is not None:
        staging_cache.clear()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Run startup before serving and shutdown after."""
    settings: Settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown(app)
