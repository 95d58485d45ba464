"""Shortcode registry: create, resolve and count visits to short URLs

The registry composes the pure validators with an injected URL record DAO.
It is the only component callers (views, controllers) talk to; they never
touch the storage key directly.

Every failure on a normal path is returned as a value:
    - creation returns ShortenedUrlInfo or ValidationError (per entry),
    - resolution returns a Resolution tagged NOT_FOUND / EXPIRED / ACTIVE,
    - recording a visit returns a boolean.

Example:
    >>> from localshortener.dao import UrlRecordMemoryDAO
    >>> registry = ShortcodeRegistry(UrlRecordMemoryDAO())

    >>> info = registry.create_short_url('https://example.com', validity_minutes=30, desired_shortcode='abc123')
    >>> info.short_url
    'http://localhost:3000/abc123'

    >>> registry.resolve_shortcode('abc123').status
    <ResolutionStatus.ACTIVE: 'ACTIVE'>

    >>> registry.record_visit('abc123', ClickEventModel.capture(referrer='https://news.example'))
    True
"""

import logging
from collections import Counter
from collections.abc import Iterable
from datetime import datetime, timedelta, UTC

from localshortener.constants import Defaults, ErrorCode, LogEvent
from localshortener.dao.base import UrlRecordBaseDAO
from localshortener.models import (
    BatchResult,
    ClickEventModel,
    Resolution,
    ResolutionStatus,
    ShortenedUrlInfo,
    ShortenRequest,
    UrlRecordModel,
    ValidationError,
)
from localshortener.utils.helpers import format_expiry, get_short_url
from localshortener.utils.shortener import generate_shortcode
from localshortener.utils.validation import is_valid_shortcode, is_valid_url, parse_validity_minutes


logger = logging.getLogger(__name__)


class ShortcodeRegistry:
    """Allocate shortcodes, persist URL records, resolve and count visits

    Attributes:
        dao (UrlRecordBaseDAO):
            Store holding the URL record collection.
        base_url (str):
            Public origin short URLs are built from.
        default_validity_minutes (float):
            Lifetime applied when a request does not specify one.
        max_batch_size (int):
            Most requests accepted in one batch submission.
        max_shortcode_attempts (int):
            How many auto-generated shortcodes are tried before giving up.
    """

    def __init__(
        self,
        dao: UrlRecordBaseDAO,
        base_url: str = Defaults.BASE_URL,
        default_validity_minutes: float = Defaults.VALIDITY_MINUTES,
        max_batch_size: int = Defaults.MAX_BATCH_SIZE,
        max_shortcode_attempts: int = Defaults.MAX_SHORTCODE_ATTEMPTS,
    ):
        try:
            parse_validity_minutes(default_validity_minutes)
            self._expiry_from_now(default_validity_minutes)
        except (ValueError, OverflowError) as e:
            raise ValueError(
                f'Default validity must be positive, finite and within the datetime range (given value: {default_validity_minutes}).'
            ) from e

        self.dao = dao
        self.base_url = base_url
        self.default_validity_minutes = default_validity_minutes
        self.max_batch_size = max_batch_size
        self.max_shortcode_attempts = max_shortcode_attempts

    # -------------------------------
    # Creation
    # -------------------------------

    def create_short_url(
        self,
        original_url: str,
        validity_minutes: float | str | None = None,
        desired_shortcode: str | None = None,
    ) -> ShortenedUrlInfo | ValidationError:
        """Validate a single request and persist a new short URL

        Procedure:
        - Step 1: Validate URL, validity period and desired shortcode syntax
        - Step 2: Reject a desired shortcode that is already stored
        - Step 3: Resolve the effective shortcode (desired or generated)
        - Step 4: Build and persist the record

        Args:
            original_url (str):
                Absolute http(s) URL to shorten.
            validity_minutes (float | str | None):
                Lifetime in minutes. Defaults to `default_validity_minutes`.
            desired_shortcode (str | None):
                Custom shortcode. A random one is generated when empty.

        Returns:
            ShortenedUrlInfo | ValidationError:
                The shortened URL on success, otherwise the first validation failure.
        """
        request = ShortenRequest(original_url=original_url, validity_minutes=validity_minutes, shortcode=desired_shortcode)
        error = self._validate(request)
        if error is not None:
            return error
        return self._create(request)

    def create_short_urls(self, requests: Iterable[ShortenRequest]) -> BatchResult:
        """Validate and persist a batch of requests submitted together

        Nothing is persisted unless every entry is valid and no two entries
        request the same custom shortcode.

        Args:
            requests (Iterable[ShortenRequest]):
                Requests in submission order.

        Returns:
            BatchResult:
                Per-entry results (in submission order) and an optional batch-level error.
        """
        requests = list(requests)
        if not requests or len(requests) > self.max_batch_size:
            error = ValidationError(
                ErrorCode.BATCH_TOO_LARGE,
                f'Submit between 1 and {self.max_batch_size} URLs at once (given: {len(requests)}).',
            )
            return BatchResult(results=tuple(error for _ in requests), error=error)

        # 1- Validate every entry on its own (includes store uniqueness for custom shortcodes)
        errors = [self._validate(request) for request in requests]
        if any(errors):
            rejected = ValidationError(ErrorCode.BATCH_REJECTED, 'Another entry in this submission is invalid.')
            logger.info(
                'Batch rejected: %s invalid entries.',
                sum(1 for error in errors if error),
                extra={'event': LogEvent.SHORT_URL_REJECTED},
            )
            return BatchResult(results=tuple(error or rejected for error in errors))

        # 2- Reject the whole batch when entries request the same custom shortcode
        duplicates = self._sibling_duplicates(requests)
        if duplicates:
            duplicate = ValidationError(ErrorCode.DUPLICATE_SHORTCODE, 'Duplicate shortcodes found in current entries.')
            rejected = ValidationError(ErrorCode.BATCH_REJECTED, 'Duplicate shortcodes found in current entries.')
            logger.info(
                'Batch rejected: duplicate shortcodes %s.',
                sorted(duplicates),
                extra={'event': LogEvent.SHORT_URL_REJECTED},
            )
            results = tuple(duplicate if (request.shortcode or '') in duplicates else rejected for request in requests)
            return BatchResult(results=results, error=duplicate)

        # 3- Persist each entry in submission order
        return BatchResult(results=tuple(self._create(request) for request in requests))

    def _validate(self, request: ShortenRequest) -> ValidationError | None:
        original_url = request.original_url.strip() if isinstance(request.original_url, str) else request.original_url
        if not original_url:
            return ValidationError(ErrorCode.URL_REQUIRED, 'URL is required.')
        if not is_valid_url(original_url):
            return ValidationError(ErrorCode.INVALID_URL, 'Please enter a valid http or https URL.')

        try:
            validity = parse_validity_minutes(request.validity_minutes)
            if validity is not None:
                self._expiry_from_now(validity)
        except (ValueError, OverflowError):
            return ValidationError(ErrorCode.INVALID_VALIDITY, 'Validity must be a positive number of minutes.')

        if not is_valid_shortcode(request.shortcode):
            return ValidationError(
                ErrorCode.INVALID_SHORTCODE,
                f'Shortcode must be alphanumeric and at most {Defaults.MAX_SHORTCODE_LENGTH} characters.',
            )
        if request.shortcode and self.dao.find_by_shortcode(request.shortcode) is not None:
            return ValidationError(ErrorCode.SHORTCODE_IN_USE, f"Shortcode '{request.shortcode}' is already in use.")

        return None

    @staticmethod
    def _expiry_from_now(validity_minutes: float) -> datetime:
        """Raises OverflowError when the expiry date falls outside the datetime range"""
        return datetime.now(UTC) + timedelta(minutes=validity_minutes)

    @staticmethod
    def _sibling_duplicates(requests: list[ShortenRequest]) -> set[str]:
        counts = Counter(request.shortcode for request in requests if request.shortcode)
        return {shortcode for shortcode, count in counts.items() if count > 1}

    def _create(self, request: ShortenRequest) -> ShortenedUrlInfo | ValidationError:
        """Persist an already validated request"""
        original_url = request.original_url.strip()
        validity = parse_validity_minutes(request.validity_minutes) or self.default_validity_minutes
        now = datetime.now(UTC)

        if request.shortcode:
            record = UrlRecordModel.create(original_url, request.shortcode, validity, now=now)
            if not self.dao.append_record(record):
                return self._append_failure(request.shortcode)
            return self._created(record)

        # NOTE: generated shortcodes are random, not collision free. Check the store
        #       before using one, and let append_record() reject a code that another
        #       writer claimed between our check and our write.
        for attempt in range(1, self.max_shortcode_attempts + 1):
            shortcode = generate_shortcode()
            if self.dao.find_by_shortcode(shortcode) is not None:
                logger.warning(
                    'Generated shortcode collides with an existing record (attempt %s).',
                    attempt,
                    extra={'shortcode': shortcode, 'event': LogEvent.SHORTCODE_COLLISION},
                )
                continue

            record = UrlRecordModel.create(original_url, shortcode, validity, now=now)
            if self.dao.append_record(record):
                return self._created(record)
            if self.dao.find_by_shortcode(shortcode) is None:
                # Not a collision: the store failed to write
                return self._append_failure(shortcode)

        logger.error(
            'Could not allocate a free shortcode after %s attempts.',
            self.max_shortcode_attempts,
            extra={'event': LogEvent.SHORTCODE_COLLISION},
        )
        return ValidationError(ErrorCode.SHORTCODE_EXHAUSTED, 'Could not allocate a unique shortcode. Please try again.')

    def _created(self, record: UrlRecordModel) -> ShortenedUrlInfo:
        short_url = get_short_url(record.shortcode, self.base_url)
        logger.info(
            'Created short URL %s.',
            short_url,
            extra={'shortcode': record.shortcode, 'event': LogEvent.SHORT_URL_CREATED},
        )
        return ShortenedUrlInfo(
            original_url=record.original_url,
            short_url=short_url,
            shortcode=record.shortcode,
            expiry_date=record.expiry_date,
            expiry_display=format_expiry(record.expiry_date),
        )

    def _append_failure(self, shortcode: str) -> ValidationError:
        if self.dao.find_by_shortcode(shortcode) is not None:
            return ValidationError(ErrorCode.SHORTCODE_IN_USE, f"Shortcode '{shortcode}' is already in use.")
        return ValidationError(ErrorCode.STORAGE_FAILURE, 'Could not save the short URL. Storage may be full.')

    # -------------------------------
    # Resolution & visits
    # -------------------------------

    def resolve_shortcode(self, shortcode: str) -> Resolution:
        """Look up a shortcode and classify it as NOT_FOUND, EXPIRED or ACTIVE (no mutation)"""
        record = self.dao.find_by_shortcode(shortcode)
        if record is None:
            logger.info('Short URL not found.', extra={'shortcode': shortcode, 'event': LogEvent.SHORT_URL_NOT_FOUND})
            return Resolution(ResolutionStatus.NOT_FOUND)
        if record.is_expired():
            logger.info('Short URL expired.', extra={'shortcode': shortcode, 'event': LogEvent.SHORT_URL_EXPIRED})
            return Resolution(ResolutionStatus.EXPIRED, record)
        return Resolution(ResolutionStatus.ACTIVE, record)

    def record_visit(self, shortcode: str, click_event: ClickEventModel) -> bool:
        """Record one visit. Callers invoke this once per redirect, only for ACTIVE shortcodes."""
        recorded = self.dao.record_click(shortcode, click_event)
        if recorded:
            logger.debug('Recorded click.', extra={'shortcode': shortcode, 'event': LogEvent.CLICK_RECORDED})
        return recorded

    def list_all(self) -> list[UrlRecordModel]:
        """Return every stored record in insertion order. Callers sort and filter."""
        return self.dao.load_all()
