"""JSON (de)serialization of the stored URL record collection.

The whole collection lives under a single storage key as a JSON array:

    [
        {
            "id": "9f1c...",
            "originalUrl": "https://example.com",
            "shortcode": "abc123",
            "createdAt": "2025-10-15T12:00:00+00:00",
            "expiryDate": "2025-10-15T12:30:00+00:00",
            "clicks": 1,
            "clickHistory": [
                {
                    "timestamp": "2025-10-15T12:05:00+00:00",
                    "referrer": "Direct",
                    "userAgent": "Mozilla/5.0",
                    "location": "Unknown"
                }
            ]
        }
    ]

Timestamps are ISO-8601 strings. Values without a UTC offset are read as UTC.

Functions:
    dumps_records(records) -> str
    loads_records(blob) -> list[UrlRecordModel]
        Raises CorruptedDataError on any malformed content.
"""

import json
from datetime import datetime, UTC
from typing import Any

from localshortener.dao.exceptions import CorruptedDataError
from localshortener.models import ClickEventModel, UrlRecordModel
from localshortener.types import ClickEventDict, RecordDict
from localshortener.constants import Redirect


def _dump_datetime(value: datetime) -> str:
    return value.isoformat()


def _load_datetime(value: Any) -> datetime:
    if not isinstance(value, str):
        raise TypeError(f'Timestamp must be an ISO-8601 string (given type: {type(value)}).')
    parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=UTC)


def click_event_to_dict(event: ClickEventModel) -> ClickEventDict:
    return {
        'timestamp': _dump_datetime(event.timestamp),
        'referrer': event.referrer,
        'userAgent': event.user_agent,
        'location': event.location,
    }


def click_event_from_dict(data: ClickEventDict) -> ClickEventModel:
    return ClickEventModel(
        timestamp=_load_datetime(data['timestamp']),
        referrer=data.get('referrer') or Redirect.DIRECT_REFERRER,
        user_agent=data.get('userAgent') or '',
        location=data.get('location') or Redirect.UNKNOWN_LOCATION,
    )


def record_to_dict(record: UrlRecordModel) -> RecordDict:
    return {
        'id': record.id,
        'originalUrl': record.original_url,
        'shortcode': record.shortcode,
        'createdAt': _dump_datetime(record.created_at),
        'expiryDate': _dump_datetime(record.expiry_date),
        'clicks': record.clicks,
        'clickHistory': [click_event_to_dict(event) for event in record.click_history],
    }


def record_from_dict(data: RecordDict) -> UrlRecordModel:
    # clicks is always len(clickHistory); a stored counter that disagrees is ignored.
    # Older entries may lack the history entirely; treat them as never visited.
    history = tuple(click_event_from_dict(event) for event in data.get('clickHistory') or [])
    return UrlRecordModel(
        id=str(data['id']),
        original_url=str(data['originalUrl']),
        shortcode=str(data['shortcode']),
        created_at=_load_datetime(data['createdAt']),
        expiry_date=_load_datetime(data['expiryDate']),
        clicks=len(history),
        click_history=history,
    )


def dumps_records(records: list[UrlRecordModel]) -> str:
    return json.dumps([record_to_dict(record) for record in records])


def loads_records(blob: str | bytes) -> list[UrlRecordModel]:
    """Deserialize the stored collection

    Args:
        blob (str | bytes):
            JSON array of serialized URL records.

    Returns:
        list[UrlRecordModel]: records in stored order.

    Raises:
        CorruptedDataError:
            If the blob is not valid JSON, is not an array, or any record is malformed.
    """
    try:
        data = json.loads(blob)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError, RecursionError) as e:
        raise CorruptedDataError('Stored URL records are not valid JSON.') from e

    if not isinstance(data, list):
        raise CorruptedDataError(f'Stored URL records are not a JSON array (given type: {type(data).__name__}).')

    try:
        return [record_from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError, AttributeError, OverflowError, RecursionError) as e:
        raise CorruptedDataError(f'Stored URL record is malformed: {e!r}.') from e
