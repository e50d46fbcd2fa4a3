"""Upload URL issuing."""

from recipe_manager.services.storage.protocol import StorageServiceProtocol
from recipe_manager.services.storage.service import (
    PLACEHOLDER_UPLOAD_PATH,
    PlaceholderStorageService,
)


__all__ = [
    "PLACEHOLDER_UPLOAD_PATH",
    "PlaceholderStorageService",
    "StorageServiceProtocol",
]
