"""Constants for link metadata fetching.

Contains:
- Per-field length caps applied to extracted metadata
- Request headers and accepted response content types
- Meta tag names consulted during extraction
"""

from __future__ import annotations

from typing import Final


# =============================================================================
# Field Length Caps (truncate, never reject)
# =============================================================================

MAX_TITLE_LENGTH: Final[int] = 500
MAX_DESCRIPTION_LENGTH: Final[int] = 500
MAX_IMAGE_URL_LENGTH: Final[int] = 2000
MAX_SITE_NAME_LENGTH: Final[int] = 256


# =============================================================================
# HTTP
# =============================================================================

ALLOWED_URL_SCHEMES: Final[frozenset[str]] = frozenset({"http", "https"})

ACCEPT_HEADER: Final[str] = "text/html,application/xhtml+xml,application/xml"

# Substring match against the declared media type
HTML_CONTENT_TYPES: Final[tuple[str, ...]] = ("text/html", "application/xhtml")


# =============================================================================
# Meta Tags
# =============================================================================

OG_TITLE: Final[str] = "og:title"
OG_DESCRIPTION: Final[str] = "og:description"
OG_IMAGE: Final[str] = "og:image"
OG_SITE_NAME: Final[str] = "og:site_name"
META_DESCRIPTION: Final[str] = "description"
