"""Timer scheduling abstraction and thread-based implementation."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Clock plus one-shot timers used by the controllers."""

    def now(self) -> float:
        """Return monotonic time in seconds."""

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay_seconds``."""


class ThreadingScheduler:
    """Fires timers on daemon ``threading.Timer`` threads."""

    def __init__(self, *, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or time.monotonic

    def now(self) -> float:
        return self._clock()

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(max(0.0, delay_seconds), callback)
        timer.daemon = True
        timer.start()
        return timer


__all__ = [
    "TimerHandle",
    "Scheduler",
    "ThreadingScheduler",
]
