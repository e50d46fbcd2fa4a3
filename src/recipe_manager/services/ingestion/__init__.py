"""Recipe ingestion: staged upload hand-off and link preview pre-fill."""

from recipe_manager.services.ingestion.coordinator import (
    IngestionCoordinator,
    decode_image_data_uri,
)
from recipe_manager.services.ingestion.models import RecipeDraft, RecipeType


__all__ = [
    "IngestionCoordinator",
    "RecipeDraft",
    "RecipeType",
    "decode_image_data_uri",
]
