"""Unit tests for the JSON (de)serialization of the stored URL record collection.

Test coverage includes:

1. Serialization
   - Records serialize to camelCase keys with ISO-8601 timestamps.
   - Click history is serialized in recorded order.

2. Deserialization
   - A serialized collection loads back into equal records.
   - Missing counters are treated as zero clicks and empty history.
   - The click counter always equals the length of the stored click history.
   - Timestamps without an offset, or with a 'Z' suffix, are read as UTC.
   - Byte blobs are accepted.

3. Corrupted data
   - Invalid JSON, non-array JSON and malformed records raise CorruptedDataError.
   - Deeply nested arrays and non-string click timestamps raise CorruptedDataError.
"""

import json
from datetime import datetime, timedelta, UTC

import pytest

from localshortener.dao.exceptions import CorruptedDataError
from localshortener.dao.serialization import dumps_records, loads_records, record_from_dict, record_to_dict
from localshortener.models import ClickEventModel, UrlRecordModel


NOW = datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def record() -> UrlRecordModel:
    return UrlRecordModel(
        id='9f1c2b',
        original_url='https://example.com/article/123',
        shortcode='abc123',
        created_at=NOW,
        expiry_date=NOW + timedelta(minutes=30),
        clicks=2,
        click_history=(
            ClickEventModel(timestamp=NOW + timedelta(minutes=1), referrer='https://news.example', user_agent='Mozilla/5.0'),
            ClickEventModel(timestamp=NOW + timedelta(minutes=2)),
        ),
    )


# -------------------------------
# 1. Serialization
# -------------------------------


def test_record_to_dict(record):
    """Ensure records serialize to the stored camelCase layout."""
    assert record_to_dict(record) == {
        'id': '9f1c2b',
        'originalUrl': 'https://example.com/article/123',
        'shortcode': 'abc123',
        'createdAt': '2025-10-15T12:00:00+00:00',
        'expiryDate': '2025-10-15T12:30:00+00:00',
        'clicks': 2,
        'clickHistory': [
            {
                'timestamp': '2025-10-15T12:01:00+00:00',
                'referrer': 'https://news.example',
                'userAgent': 'Mozilla/5.0',
                'location': 'Unknown',
            },
            {
                'timestamp': '2025-10-15T12:02:00+00:00',
                'referrer': 'Direct',
                'userAgent': '',
                'location': 'Unknown',
            },
        ],
    }


def test_dumps_records_is_json_array(record):
    data = json.loads(dumps_records([record]))
    assert isinstance(data, list)
    assert data[0]['shortcode'] == 'abc123'


def test_dumps_empty_collection():
    assert dumps_records([]) == '[]'


# -------------------------------
# 2. Deserialization
# -------------------------------


def test_loads_records(record):
    """Ensure a serialized collection loads back into equal records."""
    other = UrlRecordModel.create('https://example.org', 'xyz789', validity_minutes=5, now=NOW)

    assert loads_records(dumps_records([record, other])) == [record, other]


def test_loads_records_from_bytes(record):
    assert loads_records(dumps_records([record]).encode('utf-8')) == [record]


def test_record_without_counters():
    """Ensure entries missing clicks and history are read as never visited."""
    loaded = record_from_dict(
        {
            'id': '1',
            'originalUrl': 'https://example.com',
            'shortcode': 'abc123',
            'createdAt': '2025-10-15T12:00:00+00:00',
            'expiryDate': '2025-10-15T12:30:00+00:00',
        }
    )

    assert loaded.clicks == 0
    assert loaded.click_history == ()


@pytest.mark.parametrize('clicks', [7, 0, -3, 'Infinity', None])
def test_clicks_follow_click_history(clicks):
    """Ensure the click counter is derived from the stored click history."""
    blob = json.dumps(
        [
            {
                'id': '1',
                'originalUrl': 'https://example.com',
                'shortcode': 'abc123',
                'createdAt': '2025-10-15T12:00:00Z',
                'expiryDate': '2025-10-15T12:30:00Z',
                'clicks': clicks,
                'clickHistory': [{'timestamp': '2025-10-15T12:05:00Z'}],
            }
        ]
    )

    (loaded,) = loads_records(blob)

    assert loaded.clicks == 1
    assert len(loaded.click_history) == 1


def test_loads_stored_infinite_counter():
    blob = (
        '[{"id": "1", "originalUrl": "https://example.com", "shortcode": "abc123", "createdAt": "2025-10-15T12:00:00Z", '
        '"expiryDate": "2025-10-15T12:30:00Z", "clicks": Infinity, "clickHistory": []}]'
    )

    assert loads_records(blob)[0].clicks == 0


@pytest.mark.parametrize('created_at', ['2025-10-15T12:00:00', '2025-10-15T12:00:00Z', '2025-10-15T12:00:00.000Z'])
def test_timestamps_are_read_as_utc(created_at):
    loaded = record_from_dict(
        {
            'id': '1',
            'originalUrl': 'https://example.com',
            'shortcode': 'abc123',
            'createdAt': created_at,
            'expiryDate': '2025-10-15T12:30:00Z',
        }
    )

    assert loaded.created_at == NOW
    assert loaded.created_at.tzinfo is not None


# -------------------------------
# 3. Corrupted data
# -------------------------------


@pytest.mark.parametrize(
    'blob',
    [
        '{not json',
        '{"id": "1"}',
        '"abc123"',
        '[{"id": "1"}]',
        '[{"id": "1", "originalUrl": "https://example.com", "shortcode": "abc123", "createdAt": "yesterday", "expiryDate": "2025-10-15T12:30:00Z"}]',
        '[{"id": "1", "originalUrl": "https://example.com", "shortcode": "abc123", "createdAt": 1760529600, "expiryDate": "2025-10-15T12:30:00Z"}]',
        '[{"id": "1", "originalUrl": "https://example.com", "shortcode": "abc123", "createdAt": "2025-10-15T12:30:00Z", "expiryDate": "2025-10-15T12:00:00Z"}]',
        '[null]',
        '[{"id": "1", "originalUrl": "https://example.com", "shortcode": "abc123", "createdAt": "2025-10-15T12:00:00Z", "expiryDate": "2025-10-15T12:30:00Z", "clickHistory": [{"timestamp": Infinity}]}]',
        '[' * 200000,
    ],
)
def test_loads_corrupted_records(blob):
    """Ensure any malformed content raises CorruptedDataError."""
    with pytest.raises(CorruptedDataError):
        loads_records(blob)
