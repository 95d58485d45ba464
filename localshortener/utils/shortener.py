"""Shortcode generation utility

Functions:
    generate_shortcode(length=6) -> str:
        Draw a random Base62 shortcode.

Example:
    >>> from localshortener.utils import generate_shortcode
    >>> generate_shortcode()
    'q7fEm0'
"""

import secrets
import string

from localshortener.constants import Defaults


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits


def generate_shortcode(length: int = Defaults.SHORTCODE_LENGTH) -> str:
    """Generate a random Base62 shortcode.

    Every character is an independent, uniform draw from the 62-character
    alphabet (A-Z, a-z, 0-9) using the `secrets` CSPRNG.

    Args:
        length (int, optional):
            Number of characters. Defaults to 6.

    Returns:
        str: A random alphanumeric shortcode.

    NOTE:
        - Output is NOT collision free (62^6 ~ 5.7e10 codes). Callers must
          check the store for an existing record and regenerate on collision.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    return ''.join(secrets.choice(ALPHABET) for _ in range(length))
