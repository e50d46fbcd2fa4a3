"""Upload staging: bounded, expiring in-memory storage for uploaded bytes."""

from recipe_manager.staging.cache import StagingCache, StagingCacheStats
from recipe_manager.staging.exceptions import (
    InvalidStagingArgumentError,
    StagingError,
    StagingSizeLimitExceededError,
)
from recipe_manager.staging.models import StagedBlob


__all__ = [
    "InvalidStagingArgumentError",
    "StagedBlob",
    "StagingCache",
    "StagingCacheStats",
    "StagingError",
    "StagingSizeLimitExceededError",
]
