"""Utility functions for application configuration management.

Configuration is read from environment variables. Every variable has a
default suitable for a local Redis, so an empty environment yields a
working configuration:

    {
        "redis": {
            "host": "localhost",
            "port": 6379,
            "db": 0,
            "username": None,
            "password": None
        },
        "registry": {
            "base_url": "http://localhost:3000",
            "default_validity_minutes": 30
        }
    }

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the storage key prefix, or None if `APP_NAME` is not set.

    load_config() -> dict
        Load the configuration from the environment.

Example:
    >>> os.environ['REDIS_HOST'] = 'redis.internal'
    >>> load_config()['redis']['host']
    'redis.internal'
"""

import os
import math
import logging

from localshortener.constants import Defaults, ENV
from localshortener.exceptions import BadConfigurationError
from localshortener.types import AppConfig


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return storage key prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'localshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'localshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise BadConfigurationError(f"Environment variable '{name}' must be an integer (given value: {raw!r}).") from e


def _positive_float_from_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise BadConfigurationError(f"Environment variable '{name}' must be a number (given value: {raw!r}).") from e
    if not math.isfinite(value) or value <= 0:
        raise BadConfigurationError(f"Environment variable '{name}' must be a positive finite number (given value: {raw!r}).")
    return value


def load_config() -> AppConfig:
    """Load application configuration from environment variables

    Environment variables used (all optional):
        REDIS_HOST, REDIS_PORT, REDIS_DB, REDIS_USERNAME, REDIS_PASSWORD
        SHORTENER_BASE_URL                   – public origin of short URLs
        SHORTENER_DEFAULT_VALIDITY_MINUTES   – lifetime applied when none is requested

    Returns:
        dict: {'redis': {...}, 'registry': {...}}

    Raises:
        BadConfigurationError:
            If a numeric variable cannot be parsed or is out of range.
    """
    config = {
        'redis': {
            'host': os.environ.get(ENV.Redis.HOST, 'localhost'),
            'port': _int_from_env(ENV.Redis.PORT, 6379),
            'db': _int_from_env(ENV.Redis.DB, 0),
            'username': os.environ.get(ENV.Redis.USERNAME) or None,
            'password': os.environ.get(ENV.Redis.PASSWORD) or None,
        },
        'registry': {
            'base_url': os.environ.get(ENV.Shortener.BASE_URL, Defaults.BASE_URL),
            'default_validity_minutes': _positive_float_from_env(
                ENV.Shortener.DEFAULT_VALIDITY_MINUTES, Defaults.VALIDITY_MINUTES
            ),
        },
    }
    logger.debug(
        'Loaded configuration from environment.',
        extra={'appEnv': app_env(), 'redisHost': config['redis']['host'], 'baseUrl': config['registry']['base_url']},
    )
    return config
