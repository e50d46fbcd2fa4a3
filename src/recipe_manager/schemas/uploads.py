"""Upload URL schemas."""

from __future__ import annotations

from pydantic import Field

from recipe_manager.schemas.base import APIRequest, APIResponse


class PresignUploadRequest(APIRequest):
    """Request for a URL to upload one file to."""

    file_name: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Original file name, kept as the last key segment",
        examples=["grandmas-lasagna.pdf"],
    )
    content_type: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="MIME type the file will be uploaded with",
        examples=["application/pdf"],
    )


class PresignUploadResponse(APIResponse):
    """Where to upload, and the key to reference the upload by."""

    upload_url: str = Field(..., description="URL accepting an HTTP PUT")
    key: str = Field(..., description="Storage key for the uploaded file")


class PlaceholderUploadResponse(APIResponse):
    """Acknowledgement of a staged placeholder upload."""

    message: str
    size: int = Field(..., description="Bytes staged")
