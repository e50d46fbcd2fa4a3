"""Link metadata endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from recipe_manager.api.dependencies import get_ingestion_coordinator
from recipe_manager.auth import RequiredUser
from recipe_manager.cache.rate_limit import metadata_rate_limit
from recipe_manager.observability.logging import get_logger
from recipe_manager.schemas.metadata import FetchMetadataRequest, MetadataResponse
from recipe_manager.services.ingestion import IngestionCoordinator


logger = get_logger(__name__)

router = APIRouter(prefix="/recipes", tags=["Recipes"])


@router.post(
    "/fetch-metadata",
    response_model=MetadataResponse,
    summary="Fetch link preview metadata",
    description=(
        "Fetches the page at the given URL and returns its Open Graph or HTML "
        "preview fields. Every field is null when the page cannot be fetched."
    ),
)
@metadata_rate_limit()
async def fetch_metadata(
    request: Request,
    response: Response,
    body: FetchMetadataRequest,
    user: RequiredUser,
    coordinator: Annotated[IngestionCoordinator, Depends(get_ingestion_coordinator)],
) -> MetadataResponse:
    """Pre-fill title, description, image and site name for a link recipe."""
    metadata = await coordinator.prefill_link_preview(body.url)
    logger.info(
        "Link preview requested",
        url=body.url,
        found=metadata.title is not None,
    )
    return MetadataResponse.from_metadata(metadata)
