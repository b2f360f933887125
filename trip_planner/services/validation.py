"""
Boundary validation applied to field sets before they reach the record store.
"""
from typing import Any, Iterable
from urllib.parse import urlsplit
import logging

logger = logging.getLogger(__name__)

URL_FIELDS = ("cover_image",)


def cap_length(value: str, limit: int) -> str:
    """Truncate a string to at most ``limit`` characters."""
    if len(value) <= limit:
        return value
    return value[:limit]


def shorten_url(url: str, limit: int, fallback: str) -> str:
    """
    Shorten an over-length URL instead of rejecting it.
    
    Tries, in order: the full URL, origin + path, origin only, and finally
    the fixed fallback URL.
    """
    if len(url) <= limit:
        return url
    
    parts = urlsplit(url)
    if parts.scheme and parts.netloc:
        origin = f"{parts.scheme}://{parts.netloc}"
        for candidate in (origin + parts.path, origin):
            if len(candidate) <= limit:
                return candidate
    
    return fallback


def sanitize_fields(
    values: dict[str, Any],
    limit: int,
    fallback_url: str,
    url_fields: Iterable[str] = URL_FIELDS
) -> dict[str, Any]:
    """Cap every string field at ``limit`` characters; shorten URL fields."""
    url_fields = set(url_fields)
    cleaned = {}
    for key, value in values.items():
        if isinstance(value, str) and len(value) > limit:
            if key in url_fields:
                value = shorten_url(value, limit, fallback_url)
                logger.warning(f"Shortened over-length URL in '{key}' to {len(value)} characters")
            else:
                value = cap_length(value, limit)
                logger.warning(f"Truncated '{key}' to {limit} characters")
        cleaned[key] = value
    return cleaned
