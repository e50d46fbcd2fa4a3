"""Request rate limiting."""

from recipe_manager.cache.rate_limit import (
    limiter,
    metadata_rate_limit,
    presign_rate_limit,
    setup_rate_limiting,
)


__all__ = [
    "limiter",
    "metadata_rate_limit",
    "presign_rate_limit",
    "setup_rate_limiting",
]
