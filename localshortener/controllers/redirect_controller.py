"""Render-free state holder for the redirect page

Resolves the visited shortcode, records exactly one visit for an active
short URL and counts down before handing the target URL to `navigate`.
The view calls `start()` when mounted and `stop()` when torn down.

Example:
    >>> controller = RedirectController(registry, 'abc123', navigate=webbrowser.open, referrer=None)
    >>> controller.start()
    <RedirectState.REDIRECTING: 'REDIRECTING'>
    >>> controller.countdown
    3
"""

import logging
import threading
from enum import StrEnum

from localshortener.constants import LogEvent, Redirect
from localshortener.models import ClickEventModel, ResolutionStatus, UrlRecordModel
from localshortener.registry import ShortcodeRegistry
from localshortener.types import NavigateCallback
from localshortener.utils.scheduling import RepeatingTimer


logger = logging.getLogger(__name__)


class RedirectState(StrEnum):
    LOADING = 'LOADING'
    REDIRECTING = 'REDIRECTING'
    REDIRECTED = 'REDIRECTED'
    NOT_FOUND = 'NOT_FOUND'
    EXPIRED = 'EXPIRED'


class RedirectController:
    """Drive a single redirect attempt

    Attributes:
        state (RedirectState):
            Current page state.
        message (str):
            Error message for NOT_FOUND / EXPIRED, empty otherwise.
        countdown (int):
            Seconds left before navigation.
        record (UrlRecordModel | None):
            The resolved record (also set for EXPIRED).
    """

    def __init__(
        self,
        registry: ShortcodeRegistry,
        shortcode: str,
        navigate: NavigateCallback,
        referrer: str | None = None,
        user_agent: str | None = None,
        countdown_seconds: int = Redirect.COUNTDOWN_SECONDS,
    ):
        self.registry = registry
        self.shortcode = shortcode
        self.navigate = navigate
        self.referrer = referrer
        self.user_agent = user_agent
        self.countdown_seconds = countdown_seconds

        self.state = RedirectState.LOADING
        self.message = ''
        self.countdown = countdown_seconds
        self.record: UrlRecordModel | None = None

        self._timer: RepeatingTimer | None = None
        self._torn_down = False
        self._lock = threading.Lock()

    @property
    def progress(self) -> float:
        """Fraction of the countdown elapsed, from 0.0 to 1.0."""
        if self.countdown_seconds <= 0:
            return 1.0
        return (self.countdown_seconds - self.countdown) / self.countdown_seconds

    def start(self) -> RedirectState:
        """Resolve the shortcode, record the visit and start the countdown. Runs once."""
        with self._lock:
            if self.state is not RedirectState.LOADING or self._torn_down:
                return self.state

            resolution = self.registry.resolve_shortcode(self.shortcode)
            self.record = resolution.record

            if resolution.status is ResolutionStatus.NOT_FOUND:
                self.state = RedirectState.NOT_FOUND
                self.message = 'Short URL not found'
                return self.state

            if resolution.status is ResolutionStatus.EXPIRED:
                self.state = RedirectState.EXPIRED
                self.message = 'This short URL has expired'
                return self.state

            click_event = ClickEventModel.capture(referrer=self.referrer, user_agent=self.user_agent)
            if not self.registry.record_visit(self.shortcode, click_event):
                logger.warning('Failed to record visit. Redirecting anyway.', extra={'shortcode': self.shortcode})

            self.state = RedirectState.REDIRECTING
            logger.info(
                'Redirecting client to target URL.',
                extra={'shortcode': self.shortcode, 'event': LogEvent.REDIRECT_SUCCESS},
            )
            if self.countdown > 0:
                self._timer = RepeatingTimer(1, self.tick).start()

        if self.countdown <= 0:
            self.redirect_now()
        return self.state

    def tick(self) -> None:
        """Advance the countdown by one second, navigating when it reaches zero."""
        with self._lock:
            if self.state is not RedirectState.REDIRECTING or self._torn_down:
                return
            self.countdown = max(self.countdown - 1, 0)
            if self.countdown > 0:
                return
        self.redirect_now()

    def redirect_now(self) -> None:
        """Navigate immediately (the "Go to Destination" action)."""
        with self._lock:
            if self.state is not RedirectState.REDIRECTING or self._torn_down:
                return
            self.state = RedirectState.REDIRECTED
            self.countdown = 0
        self._cancel_timer()
        self.navigate(self.record.original_url)

    def stop(self) -> None:
        """Tear down: cancel the countdown so navigation never fires afterwards."""
        with self._lock:
            self._torn_down = True
        self._cancel_timer()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
