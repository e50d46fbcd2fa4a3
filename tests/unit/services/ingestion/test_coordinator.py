"""Unit tests for IngestionCoordinator.

Tests cover:
- Claiming staged uploads (ownership transfer)
- Attaching documents and preview images to recipe drafts
- Link preview pre-fill
- Data URI decoding for collection images
"""

from __future__ import annotations

import base64
from unittest.mock import AsyncMock, MagicMock

import pytest

from recipe_manager.services.ingestion import (
    IngestionCoordinator,
    RecipeDraft,
    RecipeType,
    decode_image_data_uri,
)
from recipe_manager.services.metadata import FetchedMetadata
from recipe_manager.staging import StagingCache


pytestmark = pytest.mark.unit

DOC_KEY = "users/42/6f1c/lasagna.pdf"
IMAGE_KEY = "users/42/9a2d/lasagna.jpg"
PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


@pytest.fixture
def staging_cache() -> StagingCache:
    return StagingCache(max_item_bytes=1024)


@pytest.fixture
def metadata_fetcher() -> MagicMock:
    fetcher = MagicMock()
    fetcher.fetch_metadata = AsyncMock()
    return fetcher


@pytest.fixture
def coordinator(
    staging_cache: StagingCache, metadata_fetcher: MagicMock
) -> IngestionCoordinator:
    return IngestionCoordinator(staging_cache, metadata_fetcher)


class TestClaim:
    """Tests for claim."""

    def test_returns_blob_and_removes_it(
        self, coordinator: IngestionCoordinator, staging_cache: StagingCache
    ):
        """Should hand over the staged bytes exactly once."""
        staging_cache.add(DOC_KEY, b"%PDF", "application/pdf")

        blob = coordinator.claim(DOC_KEY)

        assert blob is not None
        assert blob.content == b"%PDF"
        assert blob.content_type == "application/pdf"
        assert DOC_KEY not in staging_cache
        assert coordinator.claim(DOC_KEY) is None

    @pytest.mark.parametrize("key", [None, "", "  ", "never-staged"])
    def test_nothing_to_claim(self, coordinator: IngestionCoordinator, key):
        """Should return None for blank or unknown keys."""
        assert coordinator.claim(key) is None


class TestAttachUploads:
    """Tests for attach_uploads."""

    def test_attaches_document_and_preview_image(
        self, coordinator: IngestionCoordinator, staging_cache: StagingCache
    ):
        """Should move both staged files onto a document recipe."""
        staging_cache.add(DOC_KEY, b"%PDF", "application/pdf")
        staging_cache.add(IMAGE_KEY, PNG_BYTES, "image/png")
        draft = RecipeDraft(
            title="Lasagna",
            type=RecipeType.DOCUMENT,
            storage_key=DOC_KEY,
            preview_image_url=IMAGE_KEY,
        )

        result = coordinator.attach_uploads(draft)

        assert result is draft
        assert draft.file_content == b"%PDF"
        assert draft.file_content_type == "application/pdf"
        assert draft.preview_image_content == PNG_BYTES
        assert draft.preview_image_content_type == "image/png"
        assert staging_cache.stats().items == 0

    def test_ignores_storage_key_for_non_document_recipes(
        self, coordinator: IngestionCoordinator, staging_cache: StagingCache
    ):
        """Should leave a staged file alone when the recipe is a link."""
        staging_cache.add(DOC_KEY, b"%PDF", "application/pdf")
        draft = RecipeDraft(
            title="Lasagna",
            type=RecipeType.LINK,
            url="https://example.com/lasagna",
            storage_key=DOC_KEY,
        )

        coordinator.attach_uploads(draft)

        assert draft.file_content is None
        assert DOC_KEY in staging_cache

    def test_attaches_preview_image_for_link_recipes(
        self, coordinator: IngestionCoordinator, staging_cache: StagingCache
    ):
        """Should attach a staged preview image regardless of recipe type."""
        staging_cache.add(IMAGE_KEY, PNG_BYTES, "image/png")
        draft = RecipeDraft(
            title="Lasagna",
            type=RecipeType.LINK,
            preview_image_url=IMAGE_KEY,
        )

        coordinator.attach_uploads(draft)

        assert draft.preview_image_content == PNG_BYTES

    def test_external_preview_url_is_left_untouched(
        self, coordinator: IngestionCoordinator
    ):
        """Should keep an external image URL and attach no bytes."""
        draft = RecipeDraft(
            title="Lasagna",
            type=RecipeType.MANUAL,
            preview_image_url="https://cdn.example.com/lasagna.jpg",
        )

        coordinator.attach_uploads(draft)

        assert draft.preview_image_url == "https://cdn.example.com/lasagna.jpg"
        assert draft.preview_image_content is None

    def test_keeps_existing_content_when_nothing_is_staged(
        self, coordinator: IngestionCoordinator
    ):
        """Should not clear previously stored bytes on update."""
        draft = RecipeDraft(
            title="Lasagna",
            type=RecipeType.DOCUMENT,
            storage_key=DOC_KEY,
            file_content=b"old",
            file_content_type="application/pdf",
        )

        coordinator.attach_uploads(draft)

        assert draft.file_content == b"old"


class TestPrefillLinkPreview:
    """Tests for prefill_link_preview."""

    async def test_returns_fetched_metadata(
        self, coordinator: IngestionCoordinator, metadata_fetcher: MagicMock
    ):
        """Should pass through what the fetcher found."""
        metadata = FetchedMetadata(title="Lasagna", site_name="example.com")
        metadata_fetcher.fetch_metadata.return_value = metadata

        result = await coordinator.prefill_link_preview("https://example.com/l")

        assert result == metadata
        metadata_fetcher.fetch_metadata.assert_awaited_once_with(
            "https://example.com/l"
        )

    async def test_returns_empty_metadata_on_failure(
        self, coordinator: IngestionCoordinator, metadata_fetcher: MagicMock
    ):
        """Should return all-empty fields when the fetch fails."""
        metadata_fetcher.fetch_metadata.return_value = None

        result = await coordinator.prefill_link_preview("https://example.com/l")

        assert result == FetchedMetadata()


class TestDecodeImageDataUri:
    """Tests for decode_image_data_uri."""

    def test_decodes_png(self):
        """Should return bytes and content type of a valid image data URI."""
        payload = base64.b64encode(PNG_BYTES).decode()

        result = decode_image_data_uri(f"data:image/png;base64,{payload}")

        assert result == (PNG_BYTES, "image/png")

    @pytest.mark.parametrize(
        "value",
        [
            None,
            "",
            "image/png;base64,AAAA",
            "data:image/png,AAAA",
            "data:text/plain;base64,aGVsbG8=",
            "data:image/png;base64,not*base64!",
            "data:image/png;base64,",
        ],
    )
    def test_rejects_invalid_values(self, value):
        """Should return None for anything but a base64 image data URI."""
        assert decode_image_data_uri(value) is None
