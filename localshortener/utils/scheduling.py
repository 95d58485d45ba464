"""Cancellable timers for view-driven callbacks

Views own their timers: they start them when mounted and cancel them when
torn down, so no callback fires against a view that is gone.

Classes:
    RepeatingTimer:
        Run a callback every `interval` seconds until cancelled.

Example:
    >>> timer = RepeatingTimer(5, refresh).start()
    >>> ...
    >>> timer.cancel()  # on teardown
"""

import logging
import threading
from collections.abc import Callable


logger = logging.getLogger(__name__)


class RepeatingTimer:
    """Periodic timer with an explicit start/cancel lifecycle

    The first call happens `interval` seconds after start(). Exceptions raised
    by the callback are logged and do not stop the timer.
    """

    def __init__(self, interval: float, callback: Callable[[], None]):
        self.interval = interval
        self.callback = callback
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> 'RepeatingTimer':
        if self._thread is not None:
            raise RuntimeError('Timer has already been started.')
        self._thread = threading.Thread(target=self._run, name=f'RepeatingTimer({self.interval}s)', daemon=True)
        self._thread.start()
        return self

    def cancel(self) -> None:
        """Stop the timer. Safe to call more than once, and from inside the callback."""
        self._stopped.set()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stopped.is_set()

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            try:
                self.callback()
            except Exception:
                logger.exception('Scheduled callback failed.', extra={'callback': repr(self.callback)})
