"""Metadata fetching exceptions.

These never leave the metadata service: ``MetadataFetcher.fetch_metadata``
catches them, records the outcome, and returns None. Each carries the
outcome label used for logs and metrics.
"""

from __future__ import annotations


class MetadataFetchError(Exception):
    """Base exception for metadata fetching errors."""

    outcome = "error"


class InvalidMetadataURLError(MetadataFetchError):
    """Raised when the URL is not an absolute http(s) URL."""

    outcome = "invalid_url"


class UnsupportedContentTypeError(MetadataFetchError):
    """Raised when the response declares a non-HTML content type."""

    outcome = "unsupported_content_type"


class ContentTooLargeError(MetadataFetchError):
    """Raised when the response body exceeds the configured maximum.

    Either the declared Content-Length or the streamed byte count can
    trigger it.
    """

    outcome = "too_large"


class MetadataHTTPStatusError(MetadataFetchError):
    """Raised when the remote server answers with a non-success status."""

    outcome = "http_status"
