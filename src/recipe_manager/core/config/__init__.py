"""Configuration module with YAML and environment variable support."""

from .settings import (
    AuthMode,
    MetadataSettings,
    Settings,
    StagingSettings,
    get_settings,
)


__all__ = [
    "AuthMode",
    "MetadataSettings",
    "Settings",
    "StagingSettings",
    "get_settings",
]
