"""Link preview metadata model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from recipe_manager.services.metadata.constants import (
    MAX_DESCRIPTION_LENGTH,
    MAX_IMAGE_URL_LENGTH,
    MAX_SITE_NAME_LENGTH,
    MAX_TITLE_LENGTH,
)


def _truncate(value: str | None, max_length: int) -> str | None:
    if value is None or len(value) <= max_length:
        return value
    return value[:max_length]


class FetchedMetadata(BaseModel):
    """Preview fields scraped from a web page.

    Every field is optional; the caller decides whether to persist them.
    """

    title: str | None = Field(None, description="Page title")
    description: str | None = Field(None, description="Page summary")
    image_url: str | None = Field(None, description="Absolute preview image URL")
    site_name: str | None = Field(None, description="Publisher or host name")

    def truncated(self) -> FetchedMetadata:
        """Return a copy with every field cut to its maximum length."""
        return FetchedMetadata(
            title=_truncate(self.title, MAX_TITLE_LENGTH),
            description=_truncate(self.description, MAX_DESCRIPTION_LENGTH),
            image_url=_truncate(self.image_url, MAX_IMAGE_URL_LENGTH),
            site_name=_truncate(self.site_name, MAX_SITE_NAME_LENGTH),
        )
