import functools
from collections.abc import Callable

from localshortener.constants import STORAGE_KEY


__all__ = ['RedisKeySchema']


def namespaced(key_method: Callable[..., str]) -> Callable[..., str]:
    """Prepend the schema's prefix, if any, to the key returned by `key_method`"""

    @functools.wraps(key_method)
    def wrapper(self: 'RedisKeySchema', *args, **kwargs) -> str:
        key = key_method(self, *args, **kwargs)
        if self.prefix is None:
            return key
        return f'{self.prefix}:{key}'

    return wrapper


class RedisKeySchema:
    """Key names used by the Redis DAOs.

    The record collection lives under a single key. Several deployments can
    share one Redis database by giving each a prefix such as
    "localshortener:local" or "localshortener:dev".

    Example:
        >>> RedisKeySchema(prefix='localshortener:dev').records_key()
        'localshortener:dev:url_shortener_data'
    """

    def __init__(self, prefix: str | None = None):
        if not isinstance(prefix, str | None):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')
        self.prefix = prefix

    @namespaced
    def records_key(self) -> str:
        return STORAGE_KEY
