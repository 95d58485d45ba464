"""Value objects exchanged between the registry and its callers.

Failures on normal paths are represented as values, not exceptions:
creation returns either a ShortenedUrlInfo or a ValidationError, and
resolution returns a Resolution tagged NOT_FOUND, EXPIRED or ACTIVE.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from localshortener.constants import ErrorCode
from localshortener.models.url_record_model import UrlRecordModel


# fmt: off
@dataclass(frozen=True)
class ShortenRequest:
    original_url: str                       # Long URL to shorten
    validity_minutes: float | str | None = None  # Lifetime in minutes, default applies when None
    shortcode: str | None = None            # Desired custom shortcode, auto-generated when empty


@dataclass(frozen=True)
class ShortenedUrlInfo:
    original_url: str                       # Long URL that was shortened
    short_url: str                          # Full short URL, e.g. http://localhost:3000/abc123
    shortcode: str                          # Shortcode assigned to the record
    expiry_date: datetime                   # Moment the short URL expires
    expiry_display: str                     # Human-readable expiry date
# fmt: on


@dataclass(frozen=True)
class ValidationError:
    """A rejected creation request.

    Attributes:
        code (ErrorCode):
            Machine-readable reason, e.g. ErrorCode.SHORTCODE_IN_USE.
        message (str):
            Human-readable explanation suitable for display next to the entry.
    """

    code: ErrorCode
    message: str


class ResolutionStatus(StrEnum):
    NOT_FOUND = 'NOT_FOUND'
    EXPIRED = 'EXPIRED'
    ACTIVE = 'ACTIVE'


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a shortcode. `record` is None only for NOT_FOUND."""

    status: ResolutionStatus
    record: UrlRecordModel | None = None

    @property
    def active(self) -> bool:
        return self.status is ResolutionStatus.ACTIVE


@dataclass(frozen=True)
class BatchResult:
    """Outcome of a batch submission.

    Attributes:
        results (tuple[ShortenedUrlInfo | ValidationError, ...]):
            One entry per submitted request, in submission order.
        error (ValidationError | None):
            Batch-level error (e.g. duplicate shortcodes across entries), if any.
    """

    results: tuple[ShortenedUrlInfo | ValidationError, ...]
    error: ValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and not any(isinstance(result, ValidationError) for result in self.results)

    @property
    def shortened(self) -> list[ShortenedUrlInfo]:
        return [result for result in self.results if isinstance(result, ShortenedUrlInfo)]

    @property
    def errors(self) -> list[ValidationError]:
        return [result for result in self.results if isinstance(result, ValidationError)]
