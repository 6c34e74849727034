"""Quiescence debouncing of a wrapped callback."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..config import DebounceConfig
from .controller_shared import ControllerBase, validate_controller_config
from .models import Invocation
from .scheduling import Scheduler


class Debouncer(ControllerBase):
    """Runs ``fn`` once calls have stopped arriving for ``delay_ms``."""

    _kind = "debounce"

    def __init__(
        self,
        fn: Callable[..., Any],
        delay_ms: float,
        *,
        immediate: bool = False,
        scheduler: Scheduler | None = None,
    ) -> None:
        config = DebounceConfig(delay_ms=delay_ms, immediate=immediate)
        validate_controller_config(config)
        super().__init__(fn, scheduler=scheduler)
        self._config = config
        self._delay = config.delay_seconds

    @classmethod
    def from_config(
        cls,
        fn: Callable[..., Any],
        config: DebounceConfig,
        *,
        scheduler: Scheduler | None = None,
    ) -> "Debouncer":
        return cls(fn, config.delay_ms, immediate=config.immediate, scheduler=scheduler)

    @property
    def config(self) -> DebounceConfig:
        return self._config

    def invoke(self, *args: Any, **kwargs: Any) -> None:
        leading_run: Invocation | None = None
        with self._lock:
            self._ensure_open()
            invocation = Invocation.capture(args, kwargs, at=self._scheduler.now())
            burst_active = self._timer is not None
            self._disarm_locked()
            if self._config.immediate and not burst_active:
                self._pending = None
                leading_run = invocation
            else:
                self._pending = invocation
            self._arm_locked(self._delay)
        if leading_run is not None:
            self._run(leading_run, edge="leading")

    def flush(self) -> bool:
        """Run the pending call now, if any, and end the burst."""

        with self._lock:
            invocation = self._pending
            self._pending = None
            self._disarm_locked()
        if invocation is None:
            return False
        self._run(invocation, edge="flush")
        return True

    def _expire_locked(self, now: float) -> Invocation | None:
        invocation = self._pending
        self._pending = None
        return invocation


__all__ = [
    "Debouncer",
]
