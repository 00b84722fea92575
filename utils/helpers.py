"""
Helper Utility Module

This module provides various helper functions used throughout the portfolio content pipeline.
"""

from pathlib import PurePath
from urllib.parse import urlparse


def is_valid_url(url: str) -> bool:
    """
    Check if a URL is a syntactically valid absolute URL.

    Args:
        url: The URL to validate

    Returns:
        bool: True if the URL has both a scheme and a host, False otherwise
    """
    if not isinstance(url, str):
        return False
    try:
        result = urlparse(url)
        return all([result.scheme, result.netloc])
    except Exception:
        return False


def truncate_text(text: str, max_length: int = 100, add_ellipsis: bool = True) -> str:
    """
    Truncate text to a maximum length.

    Args:
        text: The text to truncate
        max_length: Maximum length
        add_ellipsis: Whether to add an ellipsis if text is truncated

    Returns:
        str: Truncated text
    """
    if not text or len(text) <= max_length:
        return text

    truncated = text[:max_length].rstrip()
    if add_ellipsis:
        truncated += "..."

    return truncated


def slug_from_filename(path: str) -> str:
    """
    Derive the slug a content file's name implies.

    "blog/my-post.md" -> "my-post"; an index file takes its directory's name,
    so "blog/my-post/index.md" -> "my-post".
    """
    p = PurePath(path)
    if p.stem == "index" and p.parent.name:
        return p.parent.name
    return p.stem
