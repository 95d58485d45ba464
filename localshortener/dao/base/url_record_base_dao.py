"""Abstract base class for URL record data access objects (DAOs).

This class establishes a consistent contract for all URL record stores,
regardless of the underlying key-value slot (e.g., process memory, Redis).
The whole record collection is persisted as one serialized value under one
key, and every mutation is a full read-modify-write of that collection.

Responsibilities:
    - Load, append and look up UrlRecordModel objects.
    - Record click events against existing records.
    - Keep storage failures inside the DAO: reads fail open (empty result),
      writes fail closed (False).

Example:
    Typical usage with a datastore-specific implementation:

        >>> from localshortener.models import UrlRecordModel, ClickEventModel
        >>> from localshortener.dao import UrlRecordMemoryDAO

        >>> dao = UrlRecordMemoryDAO()

        >>> record = UrlRecordModel.create('https://example.com/blog/article-123', 'a1b2c3', validity_minutes=30)
        >>> dao.append_record(record)
        True

        >>> dao.find_by_shortcode('a1b2c3').original_url
        'https://example.com/blog/article-123'

        >>> dao.record_click('a1b2c3', ClickEventModel.capture())
        True
        >>> dao.find_by_shortcode('a1b2c3').clicks
        1
"""

from abc import ABC, abstractmethod

from localshortener.models import ClickEventModel, UrlRecordModel


class UrlRecordBaseDAO(ABC):
    """Interface for URL record data access objects (DAOs).

    Methods:
        load_all() -> list[UrlRecordModel]:
            Load every stored record. Returns [] if nothing is stored or the
            stored value is corrupted.

        append_record(record: UrlRecordModel) -> bool:
            Append a record. Returns False if the shortcode is already stored
            or the write fails.

        find_by_shortcode(shortcode: str) -> UrlRecordModel | None:
            Return the first record with the given shortcode, or None.

        record_click(shortcode: str, click_event: ClickEventModel) -> bool:
            Increment clicks and append the event. Returns False if the
            shortcode is unknown or the write fails.

    Subclassing:
        Datastore-specific implementations (e.g., UrlRecordRedisDAO) must
        extend this class and implement all abstract methods.

    NOTE:
        - Records are never deleted. Expired records stay in the store and
          keep their shortcode reserved.
    """

    @abstractmethod
    def load_all(self) -> list[UrlRecordModel]:
        """Load every stored record.

        Returns:
            list[UrlRecordModel]: Stored records in insertion order. Empty if the
            storage key is absent or its value cannot be deserialized.
        """
        pass

    @abstractmethod
    def append_record(self, record: UrlRecordModel) -> bool:
        """Append a record to the stored collection.

        Args:
            record (UrlRecordModel):
                The record to persist.

        Returns:
            bool: True if the record was written. False if a record with the
            same shortcode already exists or the write failed.
        """
        pass

    def find_by_shortcode(self, shortcode: str) -> UrlRecordModel | None:
        """Return the first stored record whose shortcode equals `shortcode`.

        Args:
            shortcode (str):
                The shortcode to look up.

        Returns:
            UrlRecordModel | None: The record if found, otherwise None.
        """
        return next((record for record in self.load_all() if record.shortcode == shortcode), None)

    @abstractmethod
    def record_click(self, shortcode: str, click_event: ClickEventModel) -> bool:
        """Record a visit against an existing record.

        Args:
            shortcode (str):
                The shortcode that was visited.

            click_event (ClickEventModel):
                Visit metadata to append to the record's click history.

        Returns:
            bool: True if the click was recorded. False if the shortcode does
            not exist (no write happens) or the write failed.
        """
        pass
