"""Storage service protocol definition.

Upload URLs are issued by an object store in deployed environments. The
protocol keeps endpoints independent of which store (if any) is configured.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class StorageServiceProtocol(Protocol):
    """Issues URLs that clients upload file bytes to."""

    @property
    def provider_name(self) -> str:
        """Short name used in logs, e.g. ``placeholder``."""
        ...

    async def presigned_upload_url(self, key: str, content_type: str) -> str:
        """Return a URL accepting an HTTP PUT of the object stored at ``key``.

        Args:
            key: Storage key the object will be saved under.
            content_type: MIME type the client will upload with.
        """
        ...
