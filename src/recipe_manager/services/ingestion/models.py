"""Recipe draft model consumed by the ingestion coordinator."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class RecipeType(StrEnum):
    """How a recipe's content is provided."""

    LINK = "link"
    DOCUMENT = "document"
    MANUAL = "manual"


class RecipeDraft(BaseModel):
    """A recipe about to be persisted (on create or update).

    ``storage_key`` and ``preview_image_url`` may name staged uploads; the
    ``*_content`` fields receive their bytes once claimed.
    """

    title: str = Field(..., description="Recipe title")
    type: RecipeType = Field(..., description="Recipe content kind")
    url: str | None = Field(None, description="Source URL for link recipes")
    storage_key: str | None = Field(None, description="Staged document key")
    preview_image_url: str | None = Field(
        None, description="Preview image URL or staged image key"
    )
    description: str | None = None
    site_name: str | None = None

    file_content: bytes | None = Field(None, repr=False)
    file_content_type: str | None = None
    preview_image_content: bytes | None = Field(None, repr=False)
    preview_image_content_type: str | None = None
