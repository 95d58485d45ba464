from datetime import datetime, timedelta, UTC

import pytest

from localshortener.dao import UrlRecordMemoryDAO
from localshortener.models import UrlRecordModel
from localshortener.registry import ShortcodeRegistry


@pytest.fixture
def memory_dao() -> UrlRecordMemoryDAO:
    return UrlRecordMemoryDAO()


@pytest.fixture
def registry(memory_dao) -> ShortcodeRegistry:
    return ShortcodeRegistry(memory_dao, base_url='https://sho.rt')


@pytest.fixture
def make_record():
    """Build a UrlRecordModel with sensible defaults, relative to now."""

    def _make_record(
        shortcode: str = 'abc123',
        original_url: str = 'https://example.com/article/123',
        created_minutes_ago: float = 0,
        validity_minutes: float = 30,
    ) -> UrlRecordModel:
        created_at = datetime.now(UTC) - timedelta(minutes=created_minutes_ago)
        return UrlRecordModel.create(original_url, shortcode, validity_minutes, now=created_at)

    return _make_record
