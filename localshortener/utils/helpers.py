"""Helper utilities for presenting short URLs.

Functions:
    get_short_url(shortcode, base_url) -> str
        Get string representation of short URL for a given shortcode
    format_expiry(expiry_date) -> str
        Human-readable representation of an expiry timestamp

Example:
    >>> get_short_url('abc123', 'http://localhost:3000/')
    'http://localhost:3000/abc123'
    >>> format_expiry(datetime(2025, 10, 15, 12, 30, tzinfo=UTC))
    '2025-10-15 12:30:00 UTC'
"""

from datetime import datetime, UTC

from localshortener.constants import Defaults


def get_short_url(shortcode: str, base_url: str = Defaults.BASE_URL) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        base_url (str): public origin the redirect page is served from

    Returns:
        str: short url string representation
    """
    return f'{base_url.rstrip("/")}/{shortcode}'


def format_expiry(expiry_date: datetime) -> str:
    """Format an expiry timestamp for display, normalized to UTC."""
    if expiry_date.tzinfo is None:
        expiry_date = expiry_date.replace(tzinfo=UTC)
    return expiry_date.astimezone(UTC).strftime('%Y-%m-%d %H:%M:%S UTC')
