from localshortener.utils.config import app_env, app_name, app_prefix, load_config
from localshortener.utils.helpers import get_short_url, format_expiry
from localshortener.utils.shortener import generate_shortcode
from localshortener.utils.validation import is_valid_url, is_valid_shortcode, parse_validity_minutes
from localshortener.utils.logging import initialize_logging
from localshortener.utils.scheduling import RepeatingTimer


__all__ = [
    'generate_shortcode',
    'is_valid_url',
    'is_valid_shortcode',
    'parse_validity_minutes',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'get_short_url',
    'format_expiry',
    'RepeatingTimer',
    'initialize_logging',
]
