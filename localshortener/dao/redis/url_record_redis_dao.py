"""Data Access Object (DAO) implementation for URL records in Redis

The whole record collection is stored as one JSON string under a single
(optionally namespaced) key, e.g. `localshortener:local:url_shortener_data`.

Responsibilities:
    - Load the record collection (fail open on read or deserialization errors);
    - Append records and record clicks via read-modify-write (fail closed on write errors);
    - Make each read-modify-write atomic across processes with WATCH/MULTI.

Classes:
    UrlRecordRedisDAO:
        DAO for storing and retrieving UrlRecordModel in a Redis datastore.

Example:
    >>> from localshortener.models import UrlRecordModel, ClickEventModel
    >>> from localshortener.dao.redis import UrlRecordRedisDAO

    >>> dao = UrlRecordRedisDAO(prefix="localshortener:dev")

    >>> record = UrlRecordModel.create('https://example.com/page', 'abc123', validity_minutes=30)
    >>> dao.append_record(record)
    True
    >>> dao.append_record(record)  # shortcode already stored
    False

    >>> dao.find_by_shortcode("abc123").original_url
    'https://example.com/page'

    >>> dao.record_click("abc123", ClickEventModel.capture())
    True
"""

import logging
from collections.abc import Callable
from typing import TypeAlias

import redis
from beartype import beartype

from localshortener.models import ClickEventModel, UrlRecordModel
from localshortener.dao.base import UrlRecordBaseDAO
from localshortener.dao.redis.mixins import RedisClientMixin
from localshortener.dao.redis.helpers import handle_redis_errors
from localshortener.dao.exceptions import CorruptedDataError, DataStoreError
from localshortener.dao.serialization import dumps_records, loads_records
from localshortener.constants import LogEvent


logger = logging.getLogger(__name__)

# Returns the updated collection, or None to abort the write
Mutation: TypeAlias = Callable[[list[UrlRecordModel]], list[UrlRecordModel] | None]


class UrlRecordRedisDAO(RedisClientMixin, UrlRecordBaseDAO):
    """Redis-based Data Access Object (DAO) for URL records

    This class implements the UrlRecordBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        load_all() -> list[UrlRecordModel]:
            Read and deserialize the record collection. [] on any failure.

        append_record(record: UrlRecordModel) -> bool:
            Append a record unless its shortcode is already stored.

        find_by_shortcode(shortcode: str) -> UrlRecordModel | None:
            Linear scan of load_all().

        record_click(shortcode: str, click_event: ClickEventModel) -> bool:
            Increment clicks and append the event for an existing record.
    """

    MAX_TRANSACTION_ATTEMPTS = 5

    @beartype
    def load_all(self) -> list[UrlRecordModel]:
        try:
            blob = self._get_blob()
        except DataStoreError:
            logger.exception(
                'Failed to read URL records from Redis. Falling back to an empty collection.',
                extra={'event': LogEvent.STORAGE_READ_FAILED},
            )
            return []
        return self._parse(blob)

    @beartype
    def append_record(self, record: UrlRecordModel) -> bool:
        def append(records: list[UrlRecordModel]) -> list[UrlRecordModel] | None:
            if any(stored.shortcode == record.shortcode for stored in records):
                logger.info(
                    'Shortcode already stored. Refusing to append record.',
                    extra={'shortcode': record.shortcode},
                )
                return None
            return [*records, record]

        return self._update(append, shortcode=record.shortcode)

    @beartype
    def find_by_shortcode(self, shortcode: str) -> UrlRecordModel | None:
        return super().find_by_shortcode(shortcode)

    @beartype
    def record_click(self, shortcode: str, click_event: ClickEventModel) -> bool:
        def click(records: list[UrlRecordModel]) -> list[UrlRecordModel] | None:
            for index, record in enumerate(records):
                if record.shortcode == shortcode:
                    records[index] = record.with_click(click_event)
                    return records
            return None

        return self._update(click, shortcode=shortcode)

    @handle_redis_errors
    def _get_blob(self) -> str | bytes | None:
        return self.redis.get(self.keys.records_key())

    def _parse(self, blob: str | bytes | None) -> list[UrlRecordModel]:
        if not blob:
            return []
        try:
            return loads_records(blob)
        except CorruptedDataError:
            logger.exception(
                'Failed to deserialize stored URL records. Falling back to an empty collection.',
                extra={'event': LogEvent.STORAGE_READ_FAILED},
            )
            return []

    def _update(self, mutation: Mutation, shortcode: str) -> bool:
        try:
            return self._transaction(mutation)
        except DataStoreError:
            logger.exception(
                'Failed to write URL records to Redis.',
                extra={'shortcode': shortcode, 'event': LogEvent.STORAGE_WRITE_FAILED},
            )
            return False

    @handle_redis_errors
    def _transaction(self, mutation: Mutation) -> bool:
        """Apply `mutation` to the stored collection as an optimistic transaction

        NOTE: WATCH makes EXEC fail if another client modifies the key between our
              GET and EXEC. Without it two writers could both read the same collection,
              both pass the shortcode uniqueness check and the second SET would silently
              drop the first writer's record:

              (writer 1): GET <prefix>:url_shortener_data   => [...]
              (writer 2): GET <prefix>:url_shortener_data   => [...]
              (writer 1): SET <prefix>:url_shortener_data   [..., abc123]
              (writer 2): SET <prefix>:url_shortener_data   [..., abc123]   <- duplicate, writer 1 lost

              On conflict the whole read-modify-write is retried from scratch.

        Returns:
            bool: True if written, False if the mutation aborted the write.

        Raises:
            DataStoreError:
                On Redis errors (via decorator) or when the key keeps changing
                for MAX_TRANSACTION_ATTEMPTS attempts.
        """
        key = self.keys.records_key()
        for attempt in range(1, self.MAX_TRANSACTION_ATTEMPTS + 1):
            with self.redis.pipeline(transaction=True) as pipe:
                try:
                    pipe.watch(key)
                    updated = mutation(self._parse(pipe.get(key)))
                    if updated is None:
                        return False
                    pipe.multi()
                    pipe.set(key, dumps_records(updated))
                    pipe.execute()
                except redis.exceptions.WatchError:
                    logger.debug('Concurrent write to %s detected (attempt %s). Retrying.', key, attempt)
                    continue
                else:
                    return True

        raise DataStoreError(f'Key {key} kept changing during {self.MAX_TRANSACTION_ATTEMPTS} transaction attempts.')
