"""Utility functions for Palate Cleanser."""

import re


# Embeddable player URL patterns
EMBED_PATTERNS = [
    r'^https?://(www\.)?youtube\.com/embed/[\w-]+',
    r'^https?://(www\.)?youtube-nocookie\.com/embed/[\w-]+',
]


def is_embed_url(url: str) -> bool:
    """
    Check if URL is an embeddable YouTube player link.

    Args:
        url: URL to validate

    Returns:
        True if the URL has the /embed/<id> shape
    """
    if not url or not isinstance(url, str):
        return False

    url = url.strip()
    return any(re.match(pattern, url) for pattern in EMBED_PATTERNS)


def clean_text(value, max_length: int = 200) -> str:
    """
    Collapse whitespace in a form value and enforce a length limit.

    Args:
        value: Raw form value (may be None)
        max_length: Maximum length kept

    Returns:
        Cleaned string, empty when nothing usable was supplied
    """
    cleaned = re.sub(r'\s+', ' ', str(value or '').strip())
    return cleaned[:max_length]


def extract_video_id(url: str) -> str | None:
    """
    Extract video ID from a YouTube embed URL.

    Args:
        url: YouTube URL

    Returns:
        Video ID or None
    """
    if not url:
        return None

    match = re.search(r'/embed/([a-zA-Z0-9_-]{11})(?:[?&/]|$)', url)
    if match:
        return match.group(1)

    return None


def thumbnail_url(video_id: str | None) -> str | None:
    """Return the default YouTube thumbnail for a video id."""
    if not video_id:
        return None
    return f"https://i.ytimg.com/vi/{video_id}/hqdefault.jpg"
