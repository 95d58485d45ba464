"""Wire a ShortcodeRegistry from application configuration

Example:
    >>> from localshortener.registry import build_registry
    >>> registry = build_registry()            # Redis at REDIS_HOST:REDIS_PORT
    >>> registry.base_url
    'http://localhost:3000'
"""

import logging

from localshortener.dao.redis import UrlRecordRedisDAO
from localshortener.registry.shortcode_registry import ShortcodeRegistry
from localshortener.types import AppConfig
from localshortener.utils.config import app_prefix, load_config


logger = logging.getLogger(__name__)


def build_registry(config: AppConfig | None = None) -> ShortcodeRegistry:
    """Build a Redis-backed registry

    Args:
        config (dict | None):
            Configuration as returned by load_config(). Loaded from the
            environment when None.

    Returns:
        ShortcodeRegistry: registry storing records under `<app prefix>:url_shortener_data`.

    Raises:
        BadConfigurationError:
            If the environment holds invalid values.
        DataStoreError:
            If Redis is unreachable at start-up (healthcheck).
    """
    if config is None:
        config = load_config()

    logger.debug('Assuming Redis as the backend store for URL records.')
    dao = UrlRecordRedisDAO.from_config(config['redis'], prefix=app_prefix())
    return ShortcodeRegistry(dao, **config['registry'])
