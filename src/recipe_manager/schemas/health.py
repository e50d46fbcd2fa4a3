"""Health check schemas."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import Field

from recipe_manager.schemas.base import APIResponse


class HealthResponse(APIResponse):
    """Liveness response."""

    status: str = Field(..., description="Health status", examples=["healthy"])
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Current server timestamp",
    )
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment environment")


class StagingStatus(APIResponse):
    """Staging cache occupancy."""

    items: int = Field(..., description="Live staged uploads")
    total_bytes: int = Field(..., description="Bytes held by live uploads")
    max_total_bytes: int = Field(..., description="Configured byte budget")


class ReadinessResponse(HealthResponse):
    """Readiness response with component status."""

    dependencies: dict[str, str] = Field(
        default_factory=dict,
        description="Status of each component",
    )
    staging: StagingStatus | None = Field(
        default=None,
        description="Staging cache occupancy",
    )
