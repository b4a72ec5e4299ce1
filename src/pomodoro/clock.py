"""Clock abstraction supplying monotonic time and cancelable countdowns."""

from __future__ import annotations

import threading
import time
from typing import Protocol


class TimerHandle(Protocol):
    """Single-shot countdown owned by one deadline watcher."""

    def wait(self) -> bool:
        """Block until the countdown fires or is cancelled.

        Returns:
            True when the countdown fired, False when it was cancelled.
        """
        ...

    def cancel(self) -> bool:
        """Cancel the countdown.

        Returns:
            True if the call prevented the countdown from firing.
        """
        ...


class Clock(Protocol):
    """Time source used by the phase engine."""

    def now(self) -> float: ...

    def new_timer(self, seconds: float) -> TimerHandle: ...


class MonotonicTimer:
    """Countdown against `time.monotonic`, woken early only by `cancel()`."""

    def __init__(self, seconds: float):
        self._deadline = time.monotonic() + max(0.0, float(seconds))
        self._stopped = threading.Event()
        self._lock = threading.Lock()
        self._fired = False

    def wait(self) -> bool:
        while not self._stopped.is_set():
            remaining = self._deadline - time.monotonic()
            if remaining <= 0:
                with self._lock:
                    if self._stopped.is_set():
                        return False
                    self._fired = True
                    return True
            # Event.wait may return early; the loop re-checks the deadline.
            self._stopped.wait(min(remaining, threading.TIMEOUT_MAX))
        return False

    def cancel(self) -> bool:
        with self._lock:
            self._stopped.set()
            return not self._fired


class MonotonicClock:
    """Real clock backed by `time.monotonic`."""

    def now(self) -> float:
        return time.monotonic()

    def new_timer(self, seconds: float) -> MonotonicTimer:
        return MonotonicTimer(seconds)
