import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, UTC

from localshortener.models.click_event_model import ClickEventModel


@dataclass(frozen=True)
class UrlRecordModel:
    """Represent a stored short URL and its visit history.

    Attributes:
        id (str):
            Unique record identifier, assigned at creation.
        original_url (str):
            The original long URL that the shortcode redirects to.
        shortcode (str):
            The unique short identifier representing the shortened URL.
        created_at (datetime):
            Creation time (timezone-aware, UTC).
        expiry_date (datetime):
            Time after which the short URL is expired. Always later than created_at.
        clicks (int):
            Number of recorded visits. Equals len(click_history).
        click_history (tuple[ClickEventModel, ...]):
            Recorded visits in chronological order.

    Example:
        >>> record = UrlRecordModel.create('https://example.com/article/123', 'abc123', validity_minutes=30)
        >>> record.clicks
        0
        >>> record.is_expired()
        False
        >>> record.with_click(ClickEventModel.capture()).clicks
        1
    """

    id: str
    original_url: str
    shortcode: str
    created_at: datetime
    expiry_date: datetime
    clicks: int = 0
    click_history: tuple[ClickEventModel, ...] = ()

    def __post_init__(self):
        if self.expiry_date <= self.created_at:
            raise ValueError(f'Expiry date must be later than creation date (shortcode: {self.shortcode}).')
        if self.clicks < 0:
            raise ValueError(f'Clicks must be a non-negative integer (given value: {self.clicks}).')
        if self.clicks != len(self.click_history):
            raise ValueError(f'Clicks must match the click history length ({self.clicks} != {len(self.click_history)}).')

    @classmethod
    def create(
        cls,
        original_url: str,
        shortcode: str,
        validity_minutes: float,
        now: datetime | None = None,
    ) -> 'UrlRecordModel':
        """Build a fresh record with no clicks, expiring `validity_minutes` after `now`."""
        created_at = now or datetime.now(UTC)
        return cls(
            id=uuid.uuid4().hex,
            original_url=original_url,
            shortcode=shortcode,
            created_at=created_at,
            expiry_date=created_at + timedelta(minutes=validity_minutes),
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(UTC)) > self.expiry_date

    def with_click(self, click_event: ClickEventModel) -> 'UrlRecordModel':
        """Return a copy with `click_event` appended and the click counter incremented."""
        return replace(
            self,
            clicks=self.clicks + 1,
            click_history=(*self.click_history, click_event),
        )
