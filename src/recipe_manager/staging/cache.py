"""In-memory staging cache for uploaded files.

Holds file bytes between a placeholder upload and the moment the recipe (or
collection) that references them is saved. Entries are bounded three ways:
a per-item size ceiling checked at insertion, a time-to-live, and a total
byte budget. When the budget is exhausted, expired entries go first, then
the oldest insertions.

One instance is shared by the whole process; all operations take a single
lock for constant-time bookkeeping (plus an expiry sweep on ``add``) and
never perform I/O while holding it.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import TYPE_CHECKING

from recipe_manager.observability.logging import get_logger
from recipe_manager.observability.metrics import (
    staging_bytes,
    staging_evictions,
    staging_items,
)
from recipe_manager.staging.exceptions import (
    InvalidStagingArgumentError,
    StagingSizeLimitExceededError,
)
from recipe_manager.staging.models import StagedBlob


if TYPE_CHECKING:
    from collections.abc import Callable

    from recipe_manager.core.config import StagingSettings


logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class StagingCacheStats:
    """Point-in-time view of the cache contents."""

    items: int
    total_bytes: int
    max_total_bytes: int


class StagingCache:
    """Size- and time-bounded store of ``(content, content_type)`` by key.

    Example:
        ```python
        cache = StagingCache(max_item_bytes=10 * 1024 * 1024)
        cache.add("users/42/abc/menu.pdf", pdf_bytes, "application/pdf")

        blob = cache.try_get("users/42/abc/menu.pdf")
        if blob is not None:
            save(blob.content, blob.content_type)
            cache.remove(blob.key)
        ```
    """

    def __init__(
        self,
        *,
        max_item_bytes: int,
        max_total_bytes: int | None = None,
        ttl_seconds: float = 15 * 60,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            max_item_bytes: Largest content accepted by ``add``.
            max_total_bytes: Budget for all entries together. Defaults to
                ten times ``max_item_bytes``.
            ttl_seconds: Lifetime of an entry from its (last) insertion.
            clock: Monotonic time source in seconds.
        """
        if max_total_bytes is None:
            max_total_bytes = max_item_bytes * 10
        if max_item_bytes <= 0 or ttl_seconds <= 0:
            msg = "max_item_bytes and ttl_seconds must be positive"
            raise ValueError(msg)
        if max_item_bytes > max_total_bytes:
            msg = "max_item_bytes must not exceed max_total_bytes"
            raise ValueError(msg)

        self.max_item_bytes = max_item_bytes
        self.max_total_bytes = max_total_bytes
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: OrderedDict[str, StagedBlob] = OrderedDict()
        self._total_bytes = 0
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: StagingSettings) -> StagingCache:
        """Build a cache from the ``staging`` configuration section."""
        return cls(
            max_item_bytes=settings.max_item_bytes,
            max_total_bytes=settings.max_total_bytes,
            ttl_seconds=settings.ttl_seconds,
        )

    def add(self, key: str, content: bytes, content_type: str) -> None:
        """Stage ``content`` under ``key``, replacing any previous entry.

        The entry's TTL starts now. Other entries may be dropped to stay
        within the total byte budget.

        Raises:
            InvalidStagingArgumentError: If key, content or content type is empty.
            StagingSizeLimitExceededError: If content exceeds ``max_item_bytes``.
        """
        if not key:
            raise InvalidStagingArgumentError("key", "Cache key cannot be empty")
        if not content:
            raise InvalidStagingArgumentError("content", "Content cannot be empty")
        if not content_type or not content_type.strip():
            raise InvalidStagingArgumentError(
                "content_type", "Content type cannot be empty"
            )

        size = len(content)
        if size > self.max_item_bytes:
            logger.warning(
                "Rejected oversized upload",
                key=key,
                size=size,
                limit=self.max_item_bytes,
            )
            raise StagingSizeLimitExceededError(size, self.max_item_bytes)

        with self._lock:
            now = self._clock()
            self._pop(key)
            self._purge_expired(now)
            while self._entries and self._total_bytes + size > self.max_total_bytes:
                oldest_key = next(iter(self._entries))
                self._pop(oldest_key)
                staging_evictions.labels(reason="capacity").inc()
                logger.info("Evicted staged upload to free space", key=oldest_key)

            self._entries[key] = StagedBlob(
                key=key,
                content=bytes(content),
                content_type=content_type,
                expires_at=now + self.ttl_seconds,
            )
            self._total_bytes += size
            self._publish()

        logger.debug("Staged upload", key=key, size=size, content_type=content_type)

    def try_get(self, key: str) -> StagedBlob | None:
        """Return the live entry for ``key``, or None.

        Never raises and never changes the entry or its expiry.
        """
        if not key:
            return None
        with self._lock:
            blob = self._entries.get(key)
            if blob is None or blob.is_expired(self._clock()):
                return None
        logger.debug("Retrieved staged upload", key=key)
        return blob

    def remove(self, key: str) -> None:
        """Drop the entry for ``key`` if present."""
        if not key:
            return
        with self._lock:
            removed = self._pop(key)
            if removed is not None:
                self._publish()
        if removed is not None:
            logger.debug("Removed staged upload", key=key)

    def contains_key(self, key: str) -> bool:
        """True when ``try_get(key)`` would find a live entry."""
        return self.try_get(key) is not None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains_key(key)

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._total_bytes = 0
            self._publish()
        logger.info("Cleared staging cache", removed=count)

    def stats(self) -> StagingCacheStats:
        """Count live (unexpired) entries and their bytes."""
        with self._lock:
            now = self._clock()
            live = [blob for blob in self._entries.values() if not blob.is_expired(now)]
        return StagingCacheStats(
            items=len(live),
            total_bytes=sum(blob.size for blob in live),
            max_total_bytes=self.max_total_bytes,
        )

    # -------------------------------------------------------------------------
    # Bookkeeping (caller holds the lock)
    # -------------------------------------------------------------------------

    def _pop(self, key: str) -> StagedBlob | None:
        blob = self._entries.pop(key, None)
        if blob is not None:
            self._total_bytes -= blob.size
        return blob

    def _purge_expired(self, now: float) -> None:
        # Insertion order is expiry order since every entry shares one TTL
        count = 0
        while self._entries:
            oldest = next(iter(self._entries.values()))
            if not oldest.is_expired(now):
                break
            self._pop(oldest.key)
            count += 1
        if count:
            staging_evictions.labels(reason="expired").inc(count)
            logger.debug("Purged expired staged uploads", count=count)

    def _publish(self) -> None:
        staging_items.set(len(self._entries))
        staging_bytes.set(self._total_bytes)
