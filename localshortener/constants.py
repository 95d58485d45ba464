from enum import StrEnum


# Storage key holding the serialized collection of URL records
STORAGE_KEY = 'url_shortener_data'


class Defaults:
    """Default registry settings."""

    VALIDITY_MINUTES = 30  # Lifetime of a short URL when none is requested
    SHORTCODE_LENGTH = 6  # Length of auto-generated shortcodes
    MAX_SHORTCODE_LENGTH = 10  # Longest custom shortcode accepted
    MAX_BATCH_SIZE = 5  # Most URLs shortened in one submission
    MAX_SHORTCODE_ATTEMPTS = 5  # Auto-generated shortcode regenerations on collision
    BASE_URL = 'http://localhost:3000'


class Redirect:
    """Redirect page constants."""

    COUNTDOWN_SECONDS = 3
    DIRECT_REFERRER = 'Direct'  # Referrer recorded when the browser sends none
    UNKNOWN_LOCATION = 'Unknown'  # No geolocation is performed


class Statistics:
    REFRESH_SECONDS = 5


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'

    class Shortener(StrEnum):
        BASE_URL = 'SHORTENER_BASE_URL'
        DEFAULT_VALIDITY_MINUTES = 'SHORTENER_DEFAULT_VALIDITY_MINUTES'

    class Redis(StrEnum):
        HOST = 'REDIS_HOST'
        PORT = 'REDIS_PORT'
        DB = 'REDIS_DB'
        USERNAME = 'REDIS_USERNAME'
        PASSWORD = 'REDIS_PASSWORD'  # noqa: S105


class ErrorCode(StrEnum):
    """Error codes reported to callers of the registry."""

    URL_REQUIRED = 'URL_REQUIRED'
    INVALID_URL = 'INVALID_URL'
    INVALID_VALIDITY = 'INVALID_VALIDITY'
    INVALID_SHORTCODE = 'INVALID_SHORTCODE'
    SHORTCODE_IN_USE = 'SHORTCODE_IN_USE'
    DUPLICATE_SHORTCODE = 'DUPLICATE_SHORTCODE'
    BATCH_REJECTED = 'BATCH_REJECTED'
    BATCH_TOO_LARGE = 'BATCH_TOO_LARGE'
    SHORTCODE_EXHAUSTED = 'SHORTCODE_EXHAUSTED'
    STORAGE_FAILURE = 'STORAGE_FAILURE'


class LogEvent(StrEnum):
    """Structured log event names (attached via `extra={'event': ...}`)."""

    SHORT_URL_CREATED = 'SHORT_URL_CREATED'
    SHORT_URL_REJECTED = 'SHORT_URL_REJECTED'
    SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
    SHORT_URL_EXPIRED = 'SHORT_URL_EXPIRED'
    SHORTCODE_COLLISION = 'SHORTCODE_COLLISION'
    CLICK_RECORDED = 'CLICK_RECORDED'
    REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
    STORAGE_READ_FAILED = 'STORAGE_READ_FAILED'
    STORAGE_WRITE_FAILED = 'STORAGE_WRITE_FAILED'
