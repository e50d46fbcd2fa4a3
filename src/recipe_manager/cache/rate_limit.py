"""Rate limiting using SlowAPI.

Limits are counted per user when the request has been authenticated, per
client address otherwise. Storage is in-process by default and Redis in
production (``rate_limiting.storage_uri``), so counts are shared across
workers there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from recipe_manager.core.config import get_settings
from recipe_manager.core.exceptions import ErrorResponse
from recipe_manager.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI
    from starlette.requests import Request

logger = get_logger(__name__)


def _get_rate_limit_key(request: Request) -> str:
    """Authenticated user ID if resolved, otherwise the client address."""
    user = getattr(request.state, "user", None)
    if user is not None:
        return f"user:{user.id}"
    return str(get_remote_address(request))


def create_limiter() -> Limiter:
    """Create the rate limiter from the ``rate_limiting`` config section."""
    settings = get_settings()

    return Limiter(
        key_func=_get_rate_limit_key,
        default_limits=[settings.rate_limiting.default],
        storage_uri=settings.rate_limiting.storage_uri,
        strategy="fixed-window",
        headers_enabled=True,
    )


limiter = create_limiter()


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """Render a 429 in the standard error shape with a Retry-After header."""
    assert isinstance(exc, RateLimitExceeded)
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        method=request.method,
        key=_get_rate_limit_key(request),
        limit=str(exc.detail),
    )

    response = ORJSONResponse(
        status_code=429,
        content=ErrorResponse(
            error="RATE_LIMIT_EXCEEDED",
            message=f"Too many requests ({exc.detail}). Please try again later.",
            request_id=getattr(request.state, "request_id", None),
        ).model_dump(),
    )
    view_rate_limit = getattr(request.state, "view_rate_limit", None)
    if view_rate_limit is not None:
        response = request.app.state.limiter._inject_headers(  # noqa: SLF001
            response, view_rate_limit
        )
    return response


def setup_rate_limiting(app: FastAPI) -> None:
    """Attach the limiter and its 429 handler to the application."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    logger.info(
        "Rate limiting configured",
        storage=get_settings().rate_limiting.storage_uri.split("://")[0],
    )


def metadata_rate_limit() -> Any:
    """Limit for link metadata fetches (``rate_limiting.metadata``)."""
    return limiter.limit(lambda: get_settings().rate_limiting.metadata)


def presign_rate_limit() -> Any:
    """Limit for upload URL issuing (``rate_limiting.presign``)."""
    return limiter.limit(lambda: get_settings().rate_limiting.presign)
