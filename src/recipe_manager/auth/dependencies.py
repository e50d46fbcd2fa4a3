"""Current user resolution.

The service sits behind a gateway that authenticates callers and forwards
the user ID in a header (``auth.user_id_header``). The header value is
trusted as-is; never expose the service directly without that gateway.
With ``auth.mode = disabled`` every request acts as the development user.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from pydantic import BaseModel

from recipe_manager.core.config import AuthMode, Settings, get_settings
from recipe_manager.core.exceptions import UnauthorizedException
from recipe_manager.observability.logging import bind_context, get_logger


logger = get_logger(__name__)


class CurrentUser(BaseModel):
    """The user a request acts on behalf of."""

    id: str


def _request_settings(request: Request) -> Settings:
    settings: Settings | None = getattr(request.app.state, "settings", None)
    return settings or get_settings()


async def get_current_user(request: Request) -> CurrentUser:
    """Resolve the user for a request.

    Raises:
        UnauthorizedException: If no user ID header is present.
    """
    settings = _request_settings(request)

    if settings.auth_mode_enum == AuthMode.DISABLED:
        user_id = settings.auth.development_user_id
    else:
        user_id = request.headers.get(settings.auth.user_id_header, "").strip()
        if not user_id:
            logger.debug(
                "Missing user header",
                header=settings.auth.user_id_header,
            )
            raise UnauthorizedException

    user = CurrentUser(id=user_id)
    request.state.user = user
    bind_context(user_id=user_id)
    return user


RequiredUser = Annotated[CurrentUser, Depends(get_current_user)]
