"""Staged upload record."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class StagedBlob:
    """Uploaded bytes waiting to be attached to a recipe.

    ``expires_at`` is on the cache's monotonic clock, not wall time.
    """

    key: str
    content: bytes = field(repr=False)
    content_type: str
    expires_at: float

    @property
    def size(self) -> int:
        return len(self.content)

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at
