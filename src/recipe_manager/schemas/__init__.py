"""API request and response schemas."""

from recipe_manager.schemas.base import APIRequest, APIResponse
from recipe_manager.schemas.health import (
    HealthResponse,
    ReadinessResponse,
    StagingStatus,
)
from recipe_manager.schemas.metadata import FetchMetadataRequest, MetadataResponse
from recipe_manager.schemas.uploads import (
    PlaceholderUploadResponse,
    PresignUploadRequest,
    PresignUploadResponse,
)


__all__ = [
    "APIRequest",
    "APIResponse",
    "FetchMetadataRequest",
    "HealthResponse",
    "MetadataResponse",
    "PlaceholderUploadResponse",
    "PresignUploadRequest",
    "PresignUploadResponse",
    "ReadinessResponse",
    "StagingStatus",
]
