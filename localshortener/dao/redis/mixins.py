"""Shared Redis client wiring for Redis-backed DAOs.

Responsibilities:
    - Build a Redis client from connection parameters (or accept a ready one)
    - Bind the key schema for the configured namespace
    - Fail fast at construction time when Redis is unreachable

Classes:
    - RedisClientMixin: client setup, key schema and PING healthcheck.

Example:
    Combine with a DAO interface:

        >>> class UrlRecordRedisDAO(RedisClientMixin, UrlRecordBaseDAO):
        ...     pass
        ...
        >>> dao = UrlRecordRedisDAO.from_config(load_config()['redis'], prefix='localshortener:local')
        >>> dao._healthcheck()
        True
"""

import redis

from localshortener.dao.redis.redis_key_schema import RedisKeySchema
from localshortener.dao.exceptions import DataStoreError
from localshortener.dao.redis.helpers import describe_connection


class RedisClientMixin:
    """Give a DAO a `redis` client and a namespaced `keys` schema

    Attributes:
        redis (redis.Redis):
            Client shared by all operations of the DAO.
        keys (RedisKeySchema):
            Key names, prefixed with the application namespace when one is set.
    """

    def __init__(
        self,
        redis_host: str = 'localhost',
        redis_port: int | str = 6379,
        redis_db: int | str = 0,
        redis_decode_responses: bool = True,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        """Connect (or reuse `redis_client`) and verify Redis answers a PING

        Ports and database indices may be given as strings, as read from the
        environment; they are converted to integers.

        Raises:
            DataStoreError:
                If Redis does not answer the initial PING.
        """
        if redis_client is None:
            redis_client = self._connect(
                host=redis_host,
                port=redis_port,
                db=redis_db,
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
            )
        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)
        self._healthcheck()

    @staticmethod
    def _connect(host: str, port: int | str, db: int | str, **options) -> redis.Redis:
        return redis.Redis(host=host, port=int(port), db=int(db), **options)

    @classmethod
    def from_config(cls, redis_config: dict, prefix: str | None = None):
        """Build the DAO from the 'redis' section returned by load_config()

        Example:
            >>> dao = UrlRecordRedisDAO.from_config({'host': 'localhost', 'port': 6379, 'db': 0})
        """
        return cls(**{f'redis_{name}': value for name, value in redis_config.items()}, prefix=prefix)

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis

        Returns:
            bool: True when Redis answers. False when it does not and `raise_error` is False.

        Raises:
            DataStoreError:
                When Redis does not answer and `raise_error` is True.
        """
        try:
            self.redis.ping()
        except redis.exceptions.ConnectionError as e:
            if not raise_error:
                return False
            raise DataStoreError(
                f"Can't connect to Redis at {describe_connection(self.redis)}. Check the provided configuration parameters."
            ) from e
        return True
