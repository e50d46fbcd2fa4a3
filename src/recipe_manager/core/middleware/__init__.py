"""HTTP middleware."""

from recipe_manager.core.middleware.logging import LoggingMiddleware
from recipe_manager.core.middleware.request_id import RequestIDMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
]
