"""Application configuration using Pydantic Settings with YAML support.

Configuration is layered, highest priority first:
1. Values passed to ``Settings()``
2. Environment variables (nested with ``__``, e.g. ``STAGING__TTL_SECONDS=600``)
3. ``.env`` file
4. ``config/environments/{APP_ENV}/*.yaml``
5. ``config/base/*.yaml``
6. Defaults declared below
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


MIB = 1024 * 1024


class AuthMode(StrEnum):
    """How the current user is resolved.

    - HEADER: Trust the user ID header set by an authenticating gateway
    - DISABLED: Every request acts as the configured development user
    """

    HEADER = "header"
    DISABLED = "disabled"


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Recipe Manager API"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    """API configuration settings."""

    v1_prefix: str = "/api/v1"
    cors_origins: list[str] = []


class AuthSettings(BaseModel):
    """User resolution settings."""

    mode: str = "header"
    user_id_header: str = "X-User-ID"
    development_user_id: str = "00000000-0000-0000-0000-000000000001"


class RateLimitingSettings(BaseModel):
    """Rate limiting configuration (slowapi limit strings)."""

    storage_uri: str = "memory://"
    default: str = "100/minute"
    metadata: str = "10/minute"
    presign: str = "50/minute"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"
    file: str | None = None


class MetricsSettings(BaseModel):
    """Metrics configuration settings."""

    enabled: bool = True


class ObservabilitySettings(BaseModel):
    """Observability configuration settings."""

    metrics: MetricsSettings = MetricsSettings()


class StagingSettings(BaseModel):
    """Upload staging cache limits.

    Staged uploads live only in process memory; a restart drops them.
    """

    max_item_bytes: int = Field(default=10 * MIB, gt=0)
    max_total_bytes: int = Field(default=100 * MIB, gt=0)
    ttl_seconds: float = Field(default=15 * 60, gt=0)

    @model_validator(mode="after")
    def _item_fits_budget(self) -> StagingSettings:
        if self.max_item_bytes > self.max_total_bytes:
            msg = (
                f"staging.max_item_bytes ({self.max_item_bytes}) must not exceed "
                f"staging.max_total_bytes ({self.max_total_bytes})"
            )
            raise ValueError(msg)
        return self


class MetadataSettings(BaseModel):
    """Link preview metadata fetching limits."""

    fetch_timeout: float = Field(default=10.0, gt=0)
    max_content_bytes: int = Field(default=5 * MIB, gt=0)
    user_agent: str = "Mozilla/5.0 (compatible; RecipeManagerBot/1.0)"


class StorageSettings(BaseModel):
    """Object storage URL issuing settings.

    Without a configured bucket, upload URLs point at this service's own
    placeholder upload route.
    """

    public_base_url: str = "http://localhost:8000"


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    auth: AuthSettings = AuthSettings()
    rate_limiting: RateLimitingSettings = RateLimitingSettings()
    logging: LoggingSettings = LoggingSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
    staging: StagingSettings = StagingSettings()
    metadata: MetadataSettings = MetadataSettings()
    storage: StorageSettings = StorageSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def auth_mode_enum(self) -> AuthMode:
        """Get auth mode as enum with validation."""
        try:
            return AuthMode(self.auth.mode.lower())
        except ValueError:
            msg = (
                f"Invalid auth mode: {self.auth.mode}. "
                f"Must be one of: {', '.join(m.value for m in AuthMode)}"
            )
            raise ValueError(msg) from None

    # =========================================================================
    # Environment Helpers
    # =========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_non_production(self) -> bool:
        """True for local, test and development environments.

        Placeholder uploads and API docs are only exposed here.
        """
        return self.APP_ENV in ("local", "test", "development")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
