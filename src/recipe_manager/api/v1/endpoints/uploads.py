"""Upload endpoints.

- ``POST /uploads/presign`` and ``POST /uploads/presign-collection-image``
  issue an upload URL and storage key for a recipe document or a collection
  image.
- ``PUT /placeholder-upload/{key}`` receives the upload itself when no
  object store is configured, staging the bytes until the recipe or
  collection referencing the key is saved. Registered outside production
  only, and without the API prefix since the URL is handed out verbatim.
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from recipe_manager.api.dependencies import get_staging_cache, get_storage_service
from recipe_manager.auth import RequiredUser
from recipe_manager.cache.rate_limit import presign_rate_limit
from recipe_manager.core.exceptions import BadRequestException, PayloadTooLargeException
from recipe_manager.observability.logging import get_logger
from recipe_manager.schemas.uploads import (
    PlaceholderUploadResponse,
    PresignUploadRequest,
    PresignUploadResponse,
)
from recipe_manager.services.storage import (
    PLACEHOLDER_UPLOAD_PATH,
    StorageServiceProtocol,
)
from recipe_manager.staging import (
    InvalidStagingArgumentError,
    StagingCache,
    StagingSizeLimitExceededError,
)
from recipe_manager.utils.file_validation import (
    ALLOWED_DOCUMENT_TYPES_DESCRIPTION,
    ALLOWED_IMAGE_TYPES_DESCRIPTION,
    is_valid_document_file,
    is_valid_image_file,
)


logger = get_logger(__name__)

DEFAULT_UPLOAD_CONTENT_TYPE = "application/octet-stream"

router = APIRouter(prefix="/uploads", tags=["Uploads"])
placeholder_router = APIRouter(tags=["Development"])


@router.post(
    "/presign",
    response_model=PresignUploadResponse,
    summary="Get an upload URL for a recipe document",
    responses={400: {"description": "File type not allowed"}},
)
@presign_rate_limit()
async def presign_upload(
    request: Request,
    response: Response,
    body: PresignUploadRequest,
    user: RequiredUser,
    storage: Annotated[StorageServiceProtocol, Depends(get_storage_service)],
) -> PresignUploadResponse:
    """Issue an upload URL for a PDF, Word, text or image recipe document."""
    if not is_valid_document_file(body.content_type, body.file_name):
        msg = f"Invalid file type. Allowed types: {ALLOWED_DOCUMENT_TYPES_DESCRIPTION}"
        raise BadRequestException(msg)

    key = f"users/{user.id}/{uuid.uuid4()}/{body.file_name}"
    return await _issue(storage, key, body.content_type)


@router.post(
    "/presign-collection-image",
    response_model=PresignUploadResponse,
    summary="Get an upload URL for a collection image",
    responses={400: {"description": "File type not allowed"}},
)
@presign_rate_limit()
async def presign_collection_image(
    request: Request,
    response: Response,
    body: PresignUploadRequest,
    user: RequiredUser,
    storage: Annotated[StorageServiceProtocol, Depends(get_storage_service)],
) -> PresignUploadResponse:
    """Issue an upload URL for a JPEG, PNG, GIF or WebP collection thumbnail."""
    if not is_valid_image_file(body.content_type, body.file_name):
        msg = f"Invalid file type. Allowed types: {ALLOWED_IMAGE_TYPES_DESCRIPTION}"
        raise BadRequestException(msg)

    key = f"users/{user.id}/collections/{uuid.uuid4()}/{body.file_name}"
    return await _issue(storage, key, body.content_type)


async def _issue(
    storage: StorageServiceProtocol,
    key: str,
    content_type: str,
) -> PresignUploadResponse:
    upload_url = await storage.presigned_upload_url(key, content_type)
    logger.info(
        "Issued upload URL",
        key=key,
        content_type=content_type,
        provider=storage.provider_name,
    )
    return PresignUploadResponse(upload_url=upload_url, key=key)


@placeholder_router.put(
    f"{PLACEHOLDER_UPLOAD_PATH}/{{key:path}}",
    response_model=PlaceholderUploadResponse,
    summary="Receive an upload without an object store",
    responses={
        400: {"description": "Empty body"},
        413: {"description": "Body exceeds the staging item limit"},
    },
)
async def placeholder_upload(
    key: str,
    request: Request,
    staging_cache: Annotated[StagingCache, Depends(get_staging_cache)],
) -> PlaceholderUploadResponse:
    """Stage the request body under ``key`` until its recipe is saved."""
    limit = staging_cache.max_item_bytes
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeException(int(declared), limit)

    content = bytearray()
    async for chunk in request.stream():
        content.extend(chunk)
        if len(content) > limit:
            raise PayloadTooLargeException(None, limit)

    content_type = request.headers.get("content-type") or DEFAULT_UPLOAD_CONTENT_TYPE

    try:
        staging_cache.add(key, bytes(content), content_type)
    except StagingSizeLimitExceededError as e:
        raise PayloadTooLargeException(e.size, e.limit) from e
    except InvalidStagingArgumentError as e:
        raise BadRequestException(str(e)) from e

    return PlaceholderUploadResponse(
        message="File uploaded successfully (development mode)",
        size=len(content),
    )
