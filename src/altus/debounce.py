"""Single-slot debounce timer."""

from __future__ import annotations

import threading
from typing import Callable

from altus.codes import DEBOUNCE_SECONDS


class Debouncer:
    """Runs only the last of a burst of calls, after a quiet period.

    Each call() cancels the pending timer, if any, and starts a new one, so
    the wrapped function fires once delay_seconds after the last call. The
    function runs on the timer thread.
    """

    def __init__(self, delay_seconds: float = DEBOUNCE_SECONDS) -> None:
        self.delay_seconds = delay_seconds
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def call(self, fn: Callable, *args, **kwargs) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.delay_seconds, fn, args=args, kwargs=kwargs)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    @property
    def pending(self) -> bool:
        timer = self._timer
        return timer is not None and timer.is_alive()
