"""Placeholder storage for environments without an object store.

Upload URLs point back at this service's ``/placeholder-upload/{key}`` route,
which stages the bytes in the StagingCache until the owning recipe or
collection is saved.
"""

from __future__ import annotations

from urllib.parse import quote

from recipe_manager.core.config import get_settings
from recipe_manager.observability.logging import get_logger


logger = get_logger(__name__)

PLACEHOLDER_UPLOAD_PATH = "/placeholder-upload"


class PlaceholderStorageService:
    """StorageServiceProtocol implementation backed by the staging route."""

    def __init__(self, public_base_url: str | None = None) -> None:
        base_url = public_base_url or get_settings().storage.public_base_url
        self._base_url = base_url.rstrip("/")

    @property
    def provider_name(self) -> str:
        return "placeholder"

    async def presigned_upload_url(self, key: str, content_type: str) -> str:
        url = f"{self._base_url}{PLACEHOLDER_UPLOAD_PATH}/{quote(key, safe='/')}"
        logger.debug(
            "Issued placeholder upload URL",
            key=key,
            content_type=content_type,
        )
        return url
