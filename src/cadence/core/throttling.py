"""Rate-window throttling of a wrapped callback."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..config import ThrottleConfig
from .controller_shared import ControllerBase, validate_controller_config
from .models import Invocation
from .scheduling import Scheduler


class Throttler(ControllerBase):
    """Runs ``fn`` at most once per ``interval_ms`` window.

    With ``leading`` the first call of a burst runs synchronously. With
    ``trailing`` the latest call seen inside an open window runs when the
    window closes, after which a fresh window is opened. A call arriving at
    least one interval after the previous call starts a new burst, so a
    trailing run may be followed closely by the next burst's leading run.
    """

    _kind = "throttle"

    def __init__(
        self,
        fn: Callable[..., Any],
        interval_ms: float,
        *,
        leading: bool = True,
        trailing: bool = True,
        scheduler: Scheduler | None = None,
    ) -> None:
        config = ThrottleConfig(interval_ms=interval_ms, leading=leading, trailing=trailing)
        validate_controller_config(config)
        super().__init__(fn, scheduler=scheduler)
        self._config = config
        self._interval = config.interval_seconds
        self._last_run_at: float | None = None
        self._last_invoke_at: float | None = None

    @classmethod
    def from_config(
        cls,
        fn: Callable[..., Any],
        config: ThrottleConfig,
        *,
        scheduler: Scheduler | None = None,
    ) -> "Throttler":
        return cls(
            fn,
            config.interval_ms,
            leading=config.leading,
            trailing=config.trailing,
            scheduler=scheduler,
        )

    @property
    def config(self) -> ThrottleConfig:
        return self._config

    @property
    def last_run_at(self) -> float | None:
        return self._last_run_at

    @property
    def window_open(self) -> bool:
        with self._lock:
            return self._timer is not None

    def invoke(self, *args: Any, **kwargs: Any) -> None:
        leading_run: Invocation | None = None
        with self._lock:
            self._ensure_open()
            now = self._scheduler.now()
            invocation = Invocation.capture(args, kwargs, at=now)
            starts_burst = (
                self._last_invoke_at is None or now - self._last_invoke_at >= self._interval
            )
            self._last_invoke_at = now

            if self._config.leading and (
                starts_burst or (self._timer is None and self._window_elapsed(now))
            ):
                self._pending = None
                self._last_run_at = now
                self._arm_locked(self._interval)
                leading_run = invocation
            elif self._config.trailing:
                self._pending = invocation
                if self._timer is None:
                    self._arm_locked(self._remaining(now))
        if leading_run is not None:
            self._run(leading_run, edge="leading")

    def flush(self) -> bool:
        """Run the pending trailing call now and close the window."""

        with self._lock:
            invocation = self._pending
            if invocation is None:
                return False
            self._pending = None
            self._disarm_locked()
            self._last_run_at = self._scheduler.now()
        self._run(invocation, edge="flush")
        return True

    def _expire_locked(self, now: float) -> Invocation | None:
        if not self._config.trailing or self._pending is None:
            return None
        invocation = self._pending
        self._pending = None
        self._last_run_at = now
        self._arm_locked(self._interval)
        return invocation

    def _window_elapsed(self, now: float) -> bool:
        return self._last_run_at is None or now - self._last_run_at >= self._interval

    def _remaining(self, now: float) -> float:
        if self._window_elapsed(now):
            return self._interval
        return self._last_run_at + self._interval - now


__all__ = [
    "Throttler",
]
