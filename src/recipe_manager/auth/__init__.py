"""Request user resolution."""

from recipe_manager.auth.dependencies import (
    CurrentUser,
    RequiredUser,
    get_current_user,
)


__all__ = ["CurrentUser", "RequiredUser", "get_current_user"]
