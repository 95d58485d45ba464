"""Pure validation helpers for user-supplied short URL input

None of these functions raise for bad *content*; the boolean helpers answer
False and `parse_validity_minutes` raises ValueError which the registry turns
into a validation error.

Functions:
    is_valid_url(candidate) -> bool
    is_valid_shortcode(candidate) -> bool
    parse_validity_minutes(value) -> float | None

Example:
    >>> is_valid_url('https://example.com/page')
    True
    >>> is_valid_url('ftp://example.com')
    False
    >>> is_valid_shortcode('')
    True
    >>> is_valid_shortcode('abc-123')
    False
"""

import math
import re
from datetime import timedelta
from typing import Any
from urllib.parse import urlsplit

from localshortener.constants import Defaults


SHORTCODE_PATTERN = re.compile(rf'[A-Za-z0-9]{{1,{Defaults.MAX_SHORTCODE_LENGTH}}}')
ALLOWED_SCHEMES = frozenset({'http', 'https'})
# Characters browsers refuse in a host name (':' is left out for IPv6 literals)
FORBIDDEN_HOST_CHARS = frozenset(' #%/<>?@[\\]^|')


def is_valid_url(candidate: Any) -> bool:
    """Check that `candidate` is an absolute http(s) URL with a host"""
    if not isinstance(candidate, str) or candidate != candidate.strip():
        return False
    try:
        components = urlsplit(candidate)
        # Accessing port validates it (raises ValueError when out of range)
        components.port
    except ValueError:
        return False
    hostname = components.hostname
    if components.scheme.lower() not in ALLOWED_SCHEMES or not hostname:
        return False
    return not any(char in FORBIDDEN_HOST_CHARS or not char.isprintable() for char in hostname)


def is_valid_shortcode(candidate: Any) -> bool:
    """Check custom shortcode syntax. Empty or missing means "auto-generate" and is valid."""
    if candidate is None or candidate == '':
        return True
    if not isinstance(candidate, str):
        return False
    return SHORTCODE_PATTERN.fullmatch(candidate) is not None


def parse_validity_minutes(value: Any) -> float | None:
    """Parse a requested validity period in minutes

    Args:
        value (Any):
            None or '' (use the default), an int/float, or a numeric string.

    Returns:
        float | None: The validity in minutes, None when not provided.

    Raises:
        ValueError:
            If the value is not a finite, strictly positive number, or is too
            small (under a microsecond) or too large for a timedelta.

    Example:
        >>> parse_validity_minutes('45')
        45.0
        >>> parse_validity_minutes(None) is None
        True
        >>> parse_validity_minutes(0)
        Traceback (most recent call last):
            ...
        ValueError: Validity must be a positive number (given value: 0).
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f'Validity must be a positive number (given value: {value!r}).')

    try:
        minutes = float(value)
        duration = timedelta(minutes=minutes) if math.isfinite(minutes) else None
    except (ValueError, OverflowError) as e:
        raise ValueError(f'Validity must be a positive number (given value: {value!r}).') from e

    # Anything shorter than a microsecond rounds to an empty duration
    if duration is None or duration <= timedelta(0):
        raise ValueError(f'Validity must be a positive number (given value: {value!r}).')
    return minutes
