"""
Retrieval of the menu page.

A single blocking GET with httpx's default timeout. There is no retry: any
transport failure aborts the query.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import httpx
import structlog

from src.koedo.errors import InvalidSourceFormat, InvalidURL

logger = structlog.get_logger(__name__)


def _parse_url(url: str) -> httpx.URL:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise InvalidURL(url) from e

    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise InvalidURL(url)
    return parsed


def _decode(content: bytes, source: str) -> str:
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.info("Menu source is not UTF-8", source=source, error=str(e))
        raise InvalidSourceFormat(f"Menu source is not valid UTF-8: {source}") from e


def fetch_menu_source(url: str, *, client: Optional[httpx.Client] = None) -> str:
    """
    Download the menu page and return it as text.

    Raises InvalidURL for an unusable URL and InvalidSourceFormat when the
    request fails or the body is not UTF-8.
    """
    parsed = _parse_url(url)
    logger.info("Fetching menu", url=url)

    try:
        if client is None:
            with httpx.Client(follow_redirects=True) as own_client:
                response = own_client.get(parsed)
        else:
            response = client.get(parsed)
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.info("Failed to fetch menu", url=url, error=str(e))
        raise InvalidSourceFormat(f"Unable to fetch {url}: {e}") from e

    logger.info(
        "Menu fetched",
        url=url,
        status_code=response.status_code,
        num_bytes=len(response.content),
    )
    return _decode(response.content, url)


def load_menu_source(path: Union[str, Path]) -> str:
    """Read a saved copy of the menu page."""
    path = Path(path)
    return _decode(path.read_bytes(), str(path))


def ensure_url(url: str) -> str:
    """Return `url` unchanged if it is an absolute http(s) URL."""
    _parse_url(url)
    return url
