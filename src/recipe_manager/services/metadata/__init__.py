"""Link preview metadata fetching."""

from recipe_manager.services.metadata.extraction import extract_metadata
from recipe_manager.services.metadata.models import FetchedMetadata
from recipe_manager.services.metadata.service import MetadataFetcher


__all__ = [
    "FetchedMetadata",
    "MetadataFetcher",
    "extract_metadata",
]
