"""Link preview extraction from HTML.

Each field follows a strict preference order; the first source that yields a
non-blank value wins and sources are never merged:

- title: ``og:title``, then the document ``<title>``
- description: ``og:description``, then ``<meta name="description">``
- image: ``og:image`` only, resolved against the page URL when relative
- site name: ``og:site_name``, then the page URL's host

Meta tags match on either the ``property`` or ``name`` attribute,
case-insensitively, regardless of attribute order or quoting.
"""

from __future__ import annotations

import html as html_lib
from typing import TYPE_CHECKING
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from recipe_manager.services.metadata.constants import (
    META_DESCRIPTION,
    OG_DESCRIPTION,
    OG_IMAGE,
    OG_SITE_NAME,
    OG_TITLE,
)
from recipe_manager.services.metadata.models import FetchedMetadata


if TYPE_CHECKING:
    from collections.abc import Sequence


def extract_metadata(
    markup: str | bytes,
    page_url: str,
    *,
    encoding: str | None = None,
) -> FetchedMetadata:
    """Extract preview metadata from an HTML document.

    Args:
        markup: The HTML, either decoded or as raw bytes.
        page_url: URL the document was requested from; used to resolve a
            relative image and as the site name fallback.
        encoding: Declared charset for byte input. When omitted the parser
            detects it from the document.

    Returns:
        FetchedMetadata with every field truncated to its maximum length.
    """
    if isinstance(markup, bytes):
        soup = BeautifulSoup(markup, "html.parser", from_encoding=encoding)
    else:
        soup = BeautifulSoup(markup, "html.parser")

    meta_tags = [tag for tag in soup.find_all("meta") if isinstance(tag, Tag)]

    title = _meta_content(meta_tags, OG_TITLE) or _document_title(soup)
    description = _meta_content(meta_tags, OG_DESCRIPTION) or _meta_content(
        meta_tags, META_DESCRIPTION
    )
    image_url = _resolve_url(_meta_content(meta_tags, OG_IMAGE), page_url)
    site_name = _meta_content(meta_tags, OG_SITE_NAME) or urlparse(page_url).hostname

    return FetchedMetadata(
        title=title,
        description=description,
        image_url=image_url,
        site_name=site_name,
    ).truncated()


def clean_text(text: str | None) -> str | None:
    """Decode HTML entities and trim; blank input becomes None."""
    if text is None:
        return None
    cleaned = html_lib.unescape(text).strip()
    return cleaned or None


def _meta_content(meta_tags: Sequence[Tag], key: str) -> str | None:
    """First non-blank ``content`` of a meta tag whose property/name is ``key``."""
    for tag in meta_tags:
        if not any(
            _attr_equals(tag, attribute, key) for attribute in ("property", "name")
        ):
            continue
        content = tag.get("content")
        if isinstance(content, str):
            cleaned = clean_text(content)
            if cleaned:
                return cleaned
    return None


def _attr_equals(tag: Tag, attribute: str, expected: str) -> bool:
    value = tag.get(attribute)
    return isinstance(value, str) and value.strip().lower() == expected


def _document_title(soup: BeautifulSoup) -> str | None:
    if soup.title is None:
        return None
    return clean_text(soup.title.get_text())


def _resolve_url(url: str | None, base_url: str) -> str | None:
    """Make ``url`` absolute against ``base_url`` when it has no scheme."""
    if not url:
        return None
    if urlparse(url).scheme:
        return url
    return urljoin(base_url, url)
