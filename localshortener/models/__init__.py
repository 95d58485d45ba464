from localshortener.models.click_event_model import ClickEventModel
from localshortener.models.url_record_model import UrlRecordModel
from localshortener.models.results import (
    BatchResult,
    Resolution,
    ResolutionStatus,
    ShortenedUrlInfo,
    ShortenRequest,
    ValidationError,
)


__all__ = [
    'ClickEventModel',
    'UrlRecordModel',
    'BatchResult',
    'Resolution',
    'ResolutionStatus',
    'ShortenedUrlInfo',
    'ShortenRequest',
    'ValidationError',
]
