"""Glue between uploads, link previews and recipe persistence.

The coordinator transfers staged upload bytes into the record being saved
and removes them from the staging cache, so a staged file is persisted at
most once.
"""

from __future__ import annotations

import base64
import binascii
from typing import TYPE_CHECKING

from recipe_manager.observability.logging import get_logger
from recipe_manager.services.ingestion.models import RecipeDraft, RecipeType
from recipe_manager.services.metadata.models import FetchedMetadata


if TYPE_CHECKING:
    from recipe_manager.services.metadata.service import MetadataFetcher
    from recipe_manager.staging import StagedBlob, StagingCache


logger = get_logger(__name__)

DATA_URI_PREFIX = "data:"
BASE64_MARKER = ";base64"


class IngestionCoordinator:
    """Claims staged uploads and pre-fills link previews for recipes."""

    def __init__(
        self,
        staging_cache: StagingCache,
        metadata_fetcher: MetadataFetcher,
    ) -> None:
        self._staging_cache = staging_cache
        self._metadata_fetcher = metadata_fetcher

    def claim(self, key: str | None) -> StagedBlob | None:
        """Take ownership of the staged upload at ``key``.

        Returns the blob and removes it from the cache, or None when nothing
        live is staged under the key.
        """
        if not key or not key.strip():
            return None
        blob = self._staging_cache.try_get(key)
        if blob is None:
            return None
        self._staging_cache.remove(key)
        logger.info(
            "Claimed staged upload",
            key=key,
            size=blob.size,
            content_type=blob.content_type,
        )
        return blob

    def attach_uploads(self, draft: RecipeDraft) -> RecipeDraft:
        """Move staged document and preview image bytes onto ``draft``.

        Used for both create and update. Keys with nothing staged leave the
        corresponding fields untouched. The draft is modified in place and
        returned.
        """
        if draft.type == RecipeType.DOCUMENT:
            document = self.claim(draft.storage_key)
            if document is not None:
                draft.file_content = document.content
                draft.file_content_type = document.content_type

        image = self.claim(draft.preview_image_url)
        if image is not None:
            draft.preview_image_content = image.content
            draft.preview_image_content_type = image.content_type

        return draft

    async def prefill_link_preview(self, url: str) -> FetchedMetadata:
        """Fetch preview fields for ``url``; all fields are None on failure."""
        metadata = await self._metadata_fetcher.fetch_metadata(url)
        return metadata if metadata is not None else FetchedMetadata()


def decode_image_data_uri(value: str | None) -> tuple[bytes, str] | None:
    """Decode a ``data:image/<type>;base64,<payload>`` URI.

    Args:
        value: The data URI sent for a collection preview image.

    Returns:
        ``(content, content_type)``, or None when the value is empty, not a
        base64 data URI, not an image, or not valid base64.
    """
    if not value:
        return None

    if not value.startswith(DATA_URI_PREFIX) or f"{BASE64_MARKER}," not in value:
        logger.warning("Invalid data URI format for preview image")
        return None

    header, _, payload = value.partition(",")
    content_type = header.removeprefix(DATA_URI_PREFIX).replace(BASE64_MARKER, "")
    if not content_type.startswith("image/"):
        logger.warning(
            "Invalid content type for preview image",
            content_type=content_type,
        )
        return None

    try:
        content = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        logger.warning("Invalid base64 payload in preview image data")
        return None

    if not content:
        logger.warning("Empty preview image data")
        return None
    return content, content_type
