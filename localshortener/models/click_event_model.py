from dataclasses import dataclass
from datetime import datetime, UTC

from localshortener.constants import Redirect


@dataclass(frozen=True)
class ClickEventModel:
    """Represent a single visit to a short URL.

    Attributes:
        timestamp (datetime):
            Moment the visit was recorded (timezone-aware, UTC).
        referrer (str):
            Referring page, or 'Direct' when the visitor arrived without one.
        user_agent (str):
            User agent string of the visiting client.
        location (str):
            Coarse location placeholder. Always 'Unknown' (no geolocation).

    Example:
        >>> event = ClickEventModel.capture(referrer=None, user_agent='Mozilla/5.0')
        >>> event.referrer
        'Direct'
        >>> event.location
        'Unknown'
    """

    timestamp: datetime
    referrer: str = Redirect.DIRECT_REFERRER
    user_agent: str = ''
    location: str = Redirect.UNKNOWN_LOCATION

    @classmethod
    def capture(cls, referrer: str | None = None, user_agent: str | None = None) -> 'ClickEventModel':
        """Build a click event stamped with the current time."""
        return cls(
            timestamp=datetime.now(UTC),
            referrer=referrer or Redirect.DIRECT_REFERRER,
            user_agent=user_agent or '',
            location=Redirect.UNKNOWN_LOCATION,
        )
