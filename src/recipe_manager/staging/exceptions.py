"""Staging cache exceptions.

These signal misuse by the calling code (bad input at ``add``), never a
runtime condition of the cache itself, so nothing retries them.
"""

from __future__ import annotations


class StagingError(Exception):
    """Base exception for staging cache errors."""


class InvalidStagingArgumentError(StagingError, ValueError):
    """Raised when ``add`` receives an empty key, content, or content type.

    Attributes:
        argument: Name of the offending argument.
    """

    def __init__(self, argument: str, message: str) -> None:
        self.argument = argument
        super().__init__(message)


class StagingSizeLimitExceededError(StagingError):
    """Raised when staged content is larger than the per-item maximum."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"Staged content is {size} bytes; the limit is {limit} bytes")
