"""Unit tests for configuration utilities in config.py

Test coverage includes:

1. Environment variable resolution
   - Ensures app_env(), app_name(), app_prefix() correctly read environment variables.

2. Configuration loading behavior
   - Ensures load_config() falls back to local defaults on an empty environment.
   - Ensures load_config() reads Redis and registry settings from the environment.
   - Ensures invalid numeric values raise BadConfigurationError.
"""

import pytest

from localshortener.exceptions import BadConfigurationError, ConfigurationError
from localshortener.utils import config


ENV_VARS = [
    'APP_ENV',
    'APP_NAME',
    'REDIS_HOST',
    'REDIS_PORT',
    'REDIS_DB',
    'REDIS_USERNAME',
    'REDIS_PASSWORD',
    'SHORTENER_BASE_URL',
    'SHORTENER_DEFAULT_VALIDITY_MINUTES',
]


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    """Start every test from an empty application environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


# -------------------------------
# 1. Environment variable resolution
# -------------------------------


def test_app_env_default():
    assert config.app_env() == 'local'


def test_app_env_is_lowercased(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'DEV')
    assert config.app_env() == 'dev'


def test_app_name(monkeypatch):
    assert config.app_name() is None
    monkeypatch.setenv('APP_NAME', 'localshortener')
    assert config.app_name() == 'localshortener'


@pytest.mark.parametrize(
    'app_name, app_env, expected',
    [
        (None, 'dev', None),
        ('localshortener', None, 'localshortener:local'),
        ('localshortener', 'prod', 'localshortener:prod'),
    ],
)
def test_app_prefix(monkeypatch, app_name, app_env, expected):
    if app_name is not None:
        monkeypatch.setenv('APP_NAME', app_name)
    if app_env is not None:
        monkeypatch.setenv('APP_ENV', app_env)

    assert config.app_prefix() == expected


# -------------------------------
# 2. Configuration loading behavior
# -------------------------------


def test_load_config_defaults():
    """Ensure an empty environment yields a local configuration."""
    assert config.load_config() == {
        'redis': {'host': 'localhost', 'port': 6379, 'db': 0, 'username': None, 'password': None},
        'registry': {'base_url': 'http://localhost:3000', 'default_validity_minutes': 30},
    }


def test_load_config_from_environment(monkeypatch):
    monkeypatch.setenv('REDIS_HOST', 'redis.internal')
    monkeypatch.setenv('REDIS_PORT', '6380')
    monkeypatch.setenv('REDIS_DB', '3')
    monkeypatch.setenv('REDIS_USERNAME', 'default')
    monkeypatch.setenv('REDIS_PASSWORD', 'secret')
    monkeypatch.setenv('SHORTENER_BASE_URL', 'https://sho.rt')
    monkeypatch.setenv('SHORTENER_DEFAULT_VALIDITY_MINUTES', '1440')

    assert config.load_config() == {
        'redis': {'host': 'redis.internal', 'port': 6380, 'db': 3, 'username': 'default', 'password': 'secret'},
        'registry': {'base_url': 'https://sho.rt', 'default_validity_minutes': 1440.0},
    }


def test_load_config_blank_credentials(monkeypatch):
    monkeypatch.setenv('REDIS_USERNAME', '')
    monkeypatch.setenv('REDIS_PASSWORD', '')

    redis_config = config.load_config()['redis']
    assert redis_config['username'] is None
    assert redis_config['password'] is None


@pytest.mark.parametrize(
    'name, value',
    [
        ('REDIS_PORT', 'six-three-seven-nine'),
        ('REDIS_DB', '1.5'),
        ('SHORTENER_DEFAULT_VALIDITY_MINUTES', 'forever'),
        ('SHORTENER_DEFAULT_VALIDITY_MINUTES', '0'),
        ('SHORTENER_DEFAULT_VALIDITY_MINUTES', '-30'),
        ('SHORTENER_DEFAULT_VALIDITY_MINUTES', 'nan'),
        ('SHORTENER_DEFAULT_VALIDITY_MINUTES', 'inf'),
    ],
)
def test_load_config_with_invalid_values(monkeypatch, name, value):
    """Ensure unparsable or out-of-range values raise BadConfigurationError."""
    monkeypatch.setenv(name, value)

    with pytest.raises(BadConfigurationError, match=name) as exc_info:
        config.load_config()

    assert isinstance(exc_info.value, ConfigurationError)
    assert exc_info.value.error_code == 'config:bad_configuration_error'
