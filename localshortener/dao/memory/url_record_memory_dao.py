"""In-process implementation of the URL record store

The serialized collection is kept in a single in-memory slot, exactly as it
would be laid out in a persistent key-value store, so (de)serialization and
the fail-open / fail-closed policies are exercised the same way as with Redis.

Classes:
    UrlRecordMemoryDAO:
        DAO storing the serialized URL record collection in process memory.

Example:
    >>> dao = UrlRecordMemoryDAO()
    >>> dao.load_all()
    []
    >>> dao = UrlRecordMemoryDAO(blob='{not json')
    >>> dao.load_all()  # corrupted storage fails open
    []
"""

import logging
import threading

from beartype import beartype

from localshortener.models import ClickEventModel, UrlRecordModel
from localshortener.dao.base import UrlRecordBaseDAO
from localshortener.dao.exceptions import CorruptedDataError, DataStoreError
from localshortener.dao.serialization import dumps_records, loads_records
from localshortener.constants import LogEvent


logger = logging.getLogger(__name__)


class UrlRecordMemoryDAO(UrlRecordBaseDAO):
    """Memory-backed Data Access Object (DAO) for URL records

    Attributes:
        blob (str | None):
            Serialized record collection. None while nothing has been stored.
        max_blob_size (int | None):
            Optional storage quota in characters. Writes producing a larger
            blob fail (the DAO returns False), mirroring a full browser storage.
    """

    def __init__(self, blob: str | None = None, max_blob_size: int | None = None):
        self.blob = blob
        self.max_blob_size = max_blob_size
        self._lock = threading.RLock()

    @beartype
    def load_all(self) -> list[UrlRecordModel]:
        with self._lock:
            if not self.blob:
                return []
            try:
                return loads_records(self.blob)
            except CorruptedDataError:
                logger.exception(
                    'Failed to deserialize stored URL records. Falling back to an empty collection.',
                    extra={'event': LogEvent.STORAGE_READ_FAILED},
                )
                return []

    @beartype
    def append_record(self, record: UrlRecordModel) -> bool:
        with self._lock:
            records = self.load_all()
            if any(stored.shortcode == record.shortcode for stored in records):
                logger.info(
                    'Shortcode already stored. Refusing to append record.',
                    extra={'shortcode': record.shortcode},
                )
                return False
            return self._write([*records, record], shortcode=record.shortcode)

    @beartype
    def find_by_shortcode(self, shortcode: str) -> UrlRecordModel | None:
        return super().find_by_shortcode(shortcode)

    @beartype
    def record_click(self, shortcode: str, click_event: ClickEventModel) -> bool:
        with self._lock:
            records = self.load_all()
            for index, record in enumerate(records):
                if record.shortcode == shortcode:
                    records[index] = record.with_click(click_event)
                    return self._write(records, shortcode=shortcode)
            return False

    def _write(self, records: list[UrlRecordModel], shortcode: str) -> bool:
        try:
            blob = dumps_records(records)
            if self.max_blob_size is not None and len(blob) > self.max_blob_size:
                raise DataStoreError(f'Storage quota exceeded ({len(blob)} > {self.max_blob_size} characters).')
        except DataStoreError:
            logger.exception(
                'Failed to write URL records to storage.',
                extra={'shortcode': shortcode, 'event': LogEvent.STORAGE_WRITE_FAILED},
            )
            return False
        else:
            self.blob = blob
            return True
