"""Link metadata fetching service.

Fetches a page over HTTP and extracts Open Graph / HTML preview fields.
Every failure is reported as None: callers use the result to pre-fill
optional form fields and must never fail because a remote site misbehaved.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

import httpx

from recipe_manager.core.config import get_settings
from recipe_manager.observability.logging import get_logger
from recipe_manager.observability.metrics import (
    metadata_fetch_duration,
    metadata_fetches,
)
from recipe_manager.services.metadata.constants import (
    ACCEPT_HEADER,
    ALLOWED_URL_SCHEMES,
    HTML_CONTENT_TYPES,
)
from recipe_manager.services.metadata.exceptions import (
    ContentTooLargeError,
    InvalidMetadataURLError,
    MetadataFetchError,
    MetadataHTTPStatusError,
    UnsupportedContentTypeError,
)
from recipe_manager.services.metadata.extraction import extract_metadata


if TYPE_CHECKING:
    from recipe_manager.core.config import MetadataSettings
    from recipe_manager.services.metadata.models import FetchedMetadata


logger = get_logger(__name__)


class MetadataFetcher:
    """Fetches link preview metadata for a URL.

    Example:
        ```python
        fetcher = MetadataFetcher()
        await fetcher.initialize()

        metadata = await fetcher.fetch_metadata("https://example.com/post")
        if metadata is not None:
            print(metadata.title, metadata.image_url)

        await fetcher.shutdown()
        ```
    """

    def __init__(
        self,
        settings: MetadataSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            settings: Fetch limits. Defaults to the ``metadata`` config section.
            http_client: Optional client to use instead of creating one in
                ``initialize``. The caller keeps ownership of it.
        """
        self._settings = settings or get_settings().metadata
        self._http_client = http_client
        self._owns_client = http_client is None

    @property
    def is_initialized(self) -> bool:
        """Whether an HTTP client is available."""
        return self._http_client is not None

    async def initialize(self) -> None:
        """Create the shared HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._settings.fetch_timeout),
                follow_redirects=True,
            )
            self._owns_client = True
        logger.info(
            "MetadataFetcher initialized",
            timeout=self._settings.fetch_timeout,
            max_content_bytes=self._settings.max_content_bytes,
        )

    async def shutdown(self) -> None:
        """Release resources."""
        if self._http_client and self._owns_client:
            await self._http_client.aclose()
        self._http_client = None
        logger.debug("MetadataFetcher shutdown")

    async def fetch_metadata(self, url: str) -> FetchedMetadata | None:
        """Fetch ``url`` and extract its preview metadata.

        Args:
            url: Absolute http or https URL.

        Returns:
            The extracted metadata, or None when the URL is invalid, the
            response is not usable HTML, or any network error or timeout
            occurs. Cancellation of the calling task is re-raised.
        """
        start = time.perf_counter()
        outcome = "success"
        result: FetchedMetadata | None = None

        try:
            async with asyncio.timeout(self._settings.fetch_timeout):
                result = await self._fetch(url)

        except MetadataFetchError as e:
            outcome = e.outcome
            logger.info(
                "Metadata fetch rejected",
                url=url,
                outcome=outcome,
                reason=str(e),
            )

        except (httpx.TimeoutException, TimeoutError):
            outcome = "timeout"
            logger.warning(
                "Metadata fetch timed out",
                url=url,
                timeout=self._settings.fetch_timeout,
            )

        except httpx.HTTPError as e:
            outcome = "network"
            logger.warning(
                "Network error fetching metadata",
                url=url,
                error_type=type(e).__name__,
                error=str(e),
            )

        except asyncio.CancelledError:
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            outcome = "timeout"
            logger.warning("Metadata fetch aborted", url=url)

        except Exception:
            outcome = "error"
            logger.exception("Unexpected error fetching metadata", url=url)

        finally:
            metadata_fetches.labels(outcome=outcome).inc()
            metadata_fetch_duration.observe(time.perf_counter() - start)

        if result is not None:
            logger.debug(
                "Fetched link metadata",
                url=url,
                has_title=result.title is not None,
                has_image=result.image_url is not None,
            )
        return result

    async def _fetch(self, url: str) -> FetchedMetadata:
        """Download and parse ``url``.

        Raises:
            MetadataFetchError: If the URL or response is not acceptable.
            httpx.HTTPError: On network failures and per-operation timeouts.
        """
        request_url = self._validate_url(url)

        if self._http_client is None:
            msg = "Service not initialized. Call initialize() first."
            raise RuntimeError(msg)

        async with self._http_client.stream(
            "GET",
            request_url,
            headers={
                "User-Agent": self._settings.user_agent,
                "Accept": ACCEPT_HEADER,
            },
            follow_redirects=True,
        ) as response:
            if not response.is_success:
                msg = f"HTTP {response.status_code} fetching {url}"
                raise MetadataHTTPStatusError(msg)

            media_type = response.headers.get("content-type", "").lower()
            if media_type and not any(
                html_type in media_type for html_type in HTML_CONTENT_TYPES
            ):
                msg = f"Unsupported content type: {media_type}"
                raise UnsupportedContentTypeError(msg)

            limit = self._settings.max_content_bytes
            declared = _content_length(response)
            if declared is not None and declared > limit:
                msg = f"Declared Content-Length {declared} exceeds {limit} bytes"
                raise ContentTooLargeError(msg)

            body = bytearray()
            async for chunk in response.aiter_bytes():
                body.extend(chunk)
                if len(body) > limit:
                    msg = f"Response body exceeds {limit} bytes"
                    raise ContentTooLargeError(msg)

            charset = response.charset_encoding

        return extract_metadata(bytes(body), url.strip(), encoding=charset)

    @staticmethod
    def _validate_url(url: str) -> httpx.URL:
        if not url or not url.strip():
            msg = "URL is empty"
            raise InvalidMetadataURLError(msg)
        try:
            parsed = httpx.URL(url.strip())
        except httpx.InvalidURL as e:
            msg = f"Malformed URL: {url}"
            raise InvalidMetadataURLError(msg) from e
        if parsed.scheme not in ALLOWED_URL_SCHEMES or not parsed.host:
            msg = f"Only absolute http(s) URLs are supported: {url}"
            raise InvalidMetadataURLError(msg)
        return parsed


def _content_length(response: httpx.Response) -> int | None:
    value = response.headers.get("content-length")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
