"""Unit tests for upload file type validation."""

from __future__ import annotations

import pytest

from recipe_manager.utils.file_validation import (
    file_extension,
    is_valid_document_file,
    is_valid_image_file,
)


pytestmark = pytest.mark.unit


class TestFileExtension:
    """Tests for file_extension."""

    @pytest.mark.parametrize(
        ("file_name", "expected"),
        [
            ("menu.PDF", ".pdf"),
            ("archive.tar.gz", ".gz"),
            ("noext", ""),
            ("", ""),
            (None, ""),
        ],
    )
    def test_extension(self, file_name, expected):
        """Should return the lower-cased final suffix."""
        assert file_extension(file_name) == expected


class TestDocumentValidation:
    """Tests for recipe document uploads."""

    @pytest.mark.parametrize(
        "content_type",
        [
            "application/pdf",
            "application/msword",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            "text/plain",
            "image/jpeg",
            "IMAGE/PNG",
        ],
    )
    def test_accepts_allowed_content_types(self, content_type: str):
        """Should accept an allowed content type whatever the file name."""
        assert is_valid_document_file(content_type, "upload.bin")

    @pytest.mark.parametrize(
        "file_name",
        ["a.pdf", "a.doc", "a.docx", "a.txt", "a.jpg", "a.jpeg", "A.PNG"],
    )
    def test_accepts_allowed_extensions(self, file_name: str):
        """Should fall back to the extension when the content type is unknown."""
        assert is_valid_document_file("application/octet-stream", file_name)

    @pytest.mark.parametrize(
        ("content_type", "file_name"),
        [
            ("application/zip", "recipes.zip"),
            ("image/gif", "photo.gif"),
            ("", "script.exe"),
            (None, None),
        ],
    )
    def test_rejects_other_files(self, content_type, file_name):
        """Should reject when neither type nor extension is allowed."""
        assert not is_valid_document_file(content_type, file_name)


class TestImageValidation:
    """Tests for collection image uploads."""

    @pytest.mark.parametrize(
        "content_type",
        ["image/jpeg", "image/png", "image/gif", "image/WEBP"],
    )
    def test_accepts_image_types(self, content_type: str):
        """Should accept common web image types."""
        assert is_valid_image_file(content_type, "thumb")

    def test_accepts_by_extension(self):
        """Should accept an image extension with an unknown content type."""
        assert is_valid_image_file("application/octet-stream", "thumb.webp")

    @pytest.mark.parametrize(
        ("content_type", "file_name"),
        [
            ("application/pdf", "menu.pdf"),
            ("text/plain", "notes.txt"),
            ("image/svg+xml", "logo.svg"),
        ],
    )
    def test_rejects_non_images(self, content_type: str, file_name: str):
        """Should reject documents and unsupported image formats."""
        assert not is_valid_image_file(content_type, file_name)
