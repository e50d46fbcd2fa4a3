"""Link metadata schemas."""

from __future__ import annotations

from pydantic import Field, field_validator

from recipe_manager.schemas.base import APIRequest, APIResponse
from recipe_manager.services.metadata.models import FetchedMetadata


class FetchMetadataRequest(APIRequest):
    """Request to fetch link preview metadata."""

    url: str = Field(
        ...,
        min_length=1,
        max_length=2000,
        description="Page URL to fetch",
        examples=["https://www.example.com/recipes/lasagna"],
    )

    @field_validator("url")
    @classmethod
    def _url_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "URL is required to fetch metadata"
            raise ValueError(msg)
        return value


class MetadataResponse(APIResponse):
    """Link preview fields; all null when nothing could be fetched."""

    title: str | None = Field(default=None, description="Page title")
    description: str | None = Field(default=None, description="Page summary")
    image_url: str | None = Field(default=None, description="Preview image URL")
    site_name: str | None = Field(default=None, description="Publisher or host")

    @classmethod
    def from_metadata(cls, metadata: FetchedMetadata | None) -> MetadataResponse:
        if metadata is None:
            return cls()
        return cls(
            title=metadata.title,
            description=metadata.description,
            image_url=metadata.image_url,
            site_name=metadata.site_name,
        )
