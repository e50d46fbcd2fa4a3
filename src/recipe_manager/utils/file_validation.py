"""Upload file type validation.

A file is accepted when either its declared content type or its file name
extension is on the allow-list for the upload kind. Matching ignores case.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Final


# =============================================================================
# Recipe Documents
# =============================================================================

ALLOWED_DOCUMENT_TYPES: Final[frozenset[str]] = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "text/plain",
        "image/jpeg",
        "image/png",
    }
)

ALLOWED_DOCUMENT_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {".pdf", ".doc", ".docx", ".txt", ".jpg", ".jpeg", ".png"}
)

ALLOWED_DOCUMENT_TYPES_DESCRIPTION: Final[str] = "PDF, DOC, DOCX, TXT, JPG, PNG"


# =============================================================================
# Images (collection thumbnails)
# =============================================================================

ALLOWED_IMAGE_TYPES: Final[frozenset[str]] = frozenset(
    {"image/jpeg", "image/png", "image/gif", "image/webp"}
)

ALLOWED_IMAGE_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {".jpg", ".jpeg", ".png", ".gif", ".webp"}
)

ALLOWED_IMAGE_TYPES_DESCRIPTION: Final[str] = "JPEG, PNG, GIF, WEBP"


def file_extension(file_name: str | None) -> str:
    """Lower-cased extension including the dot, or an empty string."""
    if not file_name or not file_name.strip():
        return ""
    return PurePosixPath(file_name.strip()).suffix.lower()


def _matches(value: str | None, allowed: frozenset[str]) -> bool:
    return value is not None and value.strip().lower() in allowed


def is_valid_document_file(content_type: str | None, file_name: str | None) -> bool:
    """Check a recipe document upload by content type, then by extension."""
    if _matches(content_type, ALLOWED_DOCUMENT_TYPES):
        return True
    return file_extension(file_name) in ALLOWED_DOCUMENT_EXTENSIONS


def is_valid_image_file(content_type: str | None, file_name: str | None) -> bool:
    """Check an image upload by content type, then by extension."""
    if _matches(content_type, ALLOWED_IMAGE_TYPES):
        return True
    return file_extension(file_name) in ALLOWED_IMAGE_EXTENSIONS
