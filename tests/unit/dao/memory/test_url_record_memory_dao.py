"""Unit tests for the UrlRecordMemoryDAO

Test coverage includes:

1. Loading
   - Empty storage loads as an empty collection.
   - Corrupted storage fails open (empty collection, error logged).

2. Appending
   - Appended records are found by shortcode and kept in insertion order.
   - Appending an already stored shortcode is refused.
   - Exceeding the storage quota fails closed without touching stored data.
   - Invalid parameter types raise beartype errors.

3. Recording clicks
   - Clicks increment the counter and append to the history.
   - Unknown shortcodes are not recorded.

4. Concurrency
   - Concurrent appends of distinct shortcodes are all kept.
"""

import logging
import threading
from datetime import timedelta

import pytest
from beartype.roar import BeartypeCallHintParamViolation

from localshortener.constants import LogEvent
from localshortener.dao import UrlRecordMemoryDAO
from localshortener.dao.serialization import dumps_records
from localshortener.models import ClickEventModel


# -------------------------------
# 1. Loading
# -------------------------------


def test_load_empty_storage(memory_dao):
    assert memory_dao.load_all() == []
    assert memory_dao.find_by_shortcode('abc123') is None


@pytest.mark.parametrize(
    'blob',
    [
        '{not json',
        '{"shortcode": "abc123"}',
        '[{"id": 1}]',
        '[' * 200000,
        '[{"id": "1", "originalUrl": "https://example.com", "shortcode": "abc123", "createdAt": "2025-10-15T12:00:00Z", "expiryDate": "2025-10-15T12:30:00Z", "clickHistory": [{"timestamp": Infinity}]}]',
    ],
)
def test_load_corrupted_storage(blob, caplog):
    """Ensure corrupted storage falls back to an empty collection and is logged."""
    dao = UrlRecordMemoryDAO(blob=blob)

    with caplog.at_level(logging.ERROR):
        assert dao.load_all() == []

    assert any(getattr(r, 'event', None) == LogEvent.STORAGE_READ_FAILED for r in caplog.records)


def test_load_existing_storage(make_record):
    record = make_record()
    dao = UrlRecordMemoryDAO(blob=dumps_records([record]))

    assert dao.load_all() == [record]


# -------------------------------
# 2. Appending
# -------------------------------


def test_append_record(memory_dao, make_record):
    """Ensure appended records are found and kept in insertion order."""
    first, second = make_record('abc123'), make_record('xyz789', original_url='https://example.org')

    assert memory_dao.append_record(first)
    assert memory_dao.append_record(second)

    assert memory_dao.load_all() == [first, second]
    assert memory_dao.find_by_shortcode('xyz789') == second


def test_append_duplicate_shortcode(memory_dao, make_record):
    """Ensure a stored shortcode is never appended twice."""
    original = make_record('abc123')
    memory_dao.append_record(original)

    assert not memory_dao.append_record(make_record('abc123', original_url='https://evil.example'))
    assert memory_dao.load_all() == [original]


def test_append_over_quota(make_record, caplog):
    """Ensure a write exceeding the quota fails closed and keeps prior data."""
    first = make_record('abc123')
    dao = UrlRecordMemoryDAO(max_blob_size=len(dumps_records([first])))
    assert dao.append_record(first)

    with caplog.at_level(logging.ERROR):
        assert not dao.append_record(make_record('xyz789'))

    assert dao.load_all() == [first]
    assert any(getattr(r, 'event', None) == LogEvent.STORAGE_WRITE_FAILED for r in caplog.records)


def test_append_overwrites_corrupted_storage(make_record):
    dao = UrlRecordMemoryDAO(blob='{not json')
    record = make_record()

    assert dao.append_record(record)
    assert dao.load_all() == [record]


def test_append_record_with_invalid_type(memory_dao):
    with pytest.raises(BeartypeCallHintParamViolation):
        memory_dao.append_record({'shortcode': 'abc123'})


def test_find_by_shortcode_with_invalid_type(memory_dao):
    with pytest.raises(BeartypeCallHintParamViolation):
        memory_dao.find_by_shortcode(12345)


# -------------------------------
# 3. Recording clicks
# -------------------------------


def test_record_click(memory_dao, make_record):
    record = make_record()
    memory_dao.append_record(record)
    event = ClickEventModel(timestamp=record.created_at + timedelta(minutes=1), referrer='https://news.example')

    assert memory_dao.record_click('abc123', event)
    assert memory_dao.record_click('abc123', ClickEventModel.capture())

    stored = memory_dao.find_by_shortcode('abc123')
    assert stored.clicks == 2
    assert stored.click_history[0] == event
    assert len(stored.click_history) == 2


def test_record_click_only_touches_matching_record(memory_dao, make_record):
    memory_dao.append_record(make_record('abc123'))
    memory_dao.append_record(make_record('xyz789'))

    memory_dao.record_click('xyz789', ClickEventModel.capture())

    assert memory_dao.find_by_shortcode('abc123').clicks == 0
    assert memory_dao.find_by_shortcode('xyz789').clicks == 1


def test_record_click_unknown_shortcode(memory_dao):
    assert not memory_dao.record_click('nope', ClickEventModel.capture())
    assert memory_dao.blob is None


# -------------------------------
# 4. Concurrency
# -------------------------------


def test_concurrent_appends(memory_dao, make_record):
    """Ensure no append is lost when several threads write at once."""
    records = [make_record(f'code{i}') for i in range(20)]
    threads = [threading.Thread(target=memory_dao.append_record, args=(record,)) for record in records]

    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert {record.shortcode for record in memory_dao.load_all()} == {f'code{i}' for i in range(20)}
