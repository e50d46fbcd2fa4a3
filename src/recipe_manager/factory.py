"""Application factory for creating FastAPI instances."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipe_manager.api.v1.endpoints.uploads import placeholder_router
from recipe_manager.api.v1.router import router as v1_router
from recipe_manager.cache.rate_limit import setup_rate_limiting
from recipe_manager.core.config import Settings, get_settings
from recipe_manager.core.events import lifespan
from recipe_manager.core.exceptions import setup_exception_handlers
from recipe_manager.core.middleware import LoggingMiddleware, RequestIDMiddleware
from recipe_manager.observability.metrics import setup_metrics


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    docs_enabled = settings.is_non_production
    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Recipe Manager API - upload staging and link previews",
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        debug=settings.app.debug,
    )

    app.state.settings = settings

    setup_rate_limiting(app)
    setup_exception_handlers(app)
    _setup_middleware(app, settings)
    _setup_routers(app, settings)

    # After routes are mounted
    setup_metrics(app)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    The last middleware added runs first on the request. Order on the way in:
    1. RequestIDMiddleware
    2. LoggingMiddleware
    3. CORSMiddleware
    """
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"],
        )

    prefix = settings.api.v1_prefix
    app.add_middleware(
        LoggingMiddleware,
        exclude_paths={
            f"{prefix}/health",
            f"{prefix}/ready",
            f"{prefix}/metrics",
            "/favicon.ico",
        },
    )
    app.add_middleware(RequestIDMiddleware)


def _setup_routers(app: FastAPI, settings: Settings) -> None:
    app.include_router(v1_router, prefix=settings.api.v1_prefix)

    if settings.is_non_production:
        app.include_router(placeholder_router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        """Basic service info."""
        return {
            "service": settings.app.name,
            "version": settings.app.version,
        }
