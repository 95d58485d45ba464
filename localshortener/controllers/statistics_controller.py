"""Statistics summary and its periodic refresh

Classes:
    StatisticsSnapshot:
        Records sorted newest first plus aggregate counters.
    StatisticsController:
        Refreshes the snapshot on start and every `refresh_seconds` until stopped.

Functions:
    summarize(records, now=None) -> StatisticsSnapshot
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, UTC

from localshortener.constants import Statistics
from localshortener.models import UrlRecordModel
from localshortener.registry import ShortcodeRegistry
from localshortener.utils.scheduling import RepeatingTimer


logger = logging.getLogger(__name__)


# fmt: off
@dataclass(frozen=True)
class StatisticsSnapshot:
    records: tuple[UrlRecordModel, ...]     # All records, newest first
    total: int                              # Number of records
    active: int                             # Records not yet expired
    expired: int                            # Records past their expiry date
    total_clicks: int                       # Sum of clicks over all records
    generated_at: datetime                  # Moment the snapshot was computed
# fmt: on


def summarize(records: Iterable[UrlRecordModel], now: datetime | None = None) -> StatisticsSnapshot:
    """Sort records newest first and compute aggregate counters

    Example:
        >>> snapshot = summarize(registry.list_all())
        >>> snapshot.total == snapshot.active + snapshot.expired
        True
    """
    now = now or datetime.now(UTC)
    ordered = tuple(sorted(records, key=lambda record: record.created_at, reverse=True))
    active = sum(1 for record in ordered if not record.is_expired(now))
    return StatisticsSnapshot(
        records=ordered,
        total=len(ordered),
        active=active,
        expired=len(ordered) - active,
        total_clicks=sum(record.clicks for record in ordered),
        generated_at=now,
    )


class StatisticsController:
    """Keep a statistics view up to date while it is mounted"""

    def __init__(
        self,
        registry: ShortcodeRegistry,
        on_update: Callable[[StatisticsSnapshot], None],
        refresh_seconds: float = Statistics.REFRESH_SECONDS,
    ):
        self.registry = registry
        self.on_update = on_update
        self.refresh_seconds = refresh_seconds
        self.snapshot: StatisticsSnapshot | None = None
        self._timer: RepeatingTimer | None = None

    def start(self) -> StatisticsSnapshot:
        """Publish a snapshot immediately and schedule periodic refreshes."""
        if self._timer is not None:
            raise RuntimeError('Statistics refresh is already running.')
        snapshot = self.refresh()
        self._timer = RepeatingTimer(self.refresh_seconds, self.refresh).start()
        return snapshot

    def refresh(self) -> StatisticsSnapshot:
        self.snapshot = summarize(self.registry.list_all())
        logger.debug(
            'Refreshed statistics.',
            extra={'total': self.snapshot.total, 'active': self.snapshot.active, 'totalClicks': self.snapshot.total_clicks},
        )
        self.on_update(self.snapshot)
        return self.snapshot

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
