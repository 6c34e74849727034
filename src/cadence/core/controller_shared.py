"""Shared helpers for throttle/debounce controllers."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable
from functools import partial
from types import TracebackType
from typing import Any, Protocol

from .async_scheduling import AsyncioScheduler
from .errors import ConfigurationError, ControllerClosedError
from .models import Invocation
from .scheduling import Scheduler, ThreadingScheduler, TimerHandle

logger = logging.getLogger("cadence")


class _ValidatingConfig(Protocol):
    def validate(self) -> None: ...


def validate_controller_config(config: _ValidatingConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        message = str(exc)
        raise ConfigurationError(message, option=message.split(" ", 1)[0]) from exc


def resolve_scheduler(scheduler: Scheduler | None) -> Scheduler:
    """Pick the scheduler a controller arms its timers on.

    An explicit scheduler wins. Inside a running event loop the loop itself is
    used, otherwise timers run on background threads.
    """

    if scheduler is not None:
        return scheduler
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        return ThreadingScheduler()
    return AsyncioScheduler(loop)


def describe_callable(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)


class ControllerBase:
    """Timer ownership, locking and lifecycle common to both controllers.

    The lock guards state transitions only. ``fn`` always runs after the lock
    is released, so it may call back into the controller.
    """

    _kind = "controller"

    def __init__(self, fn: Callable[..., Any], *, scheduler: Scheduler | None = None) -> None:
        if not callable(fn):
            raise ConfigurationError(f"{self._kind} target must be callable")
        self._fn = fn
        self._name = describe_callable(fn)
        self._scheduler = resolve_scheduler(scheduler)
        self._lock = threading.RLock()
        self._timer: TimerHandle | None = None
        self._timer_seq = 0
        self._pending: Invocation | None = None
        self._closed = False
        self._bind: Callable[[Callable[..., Any]], "ControllerBase"] | None = None
        self._attr_name: str | None = None

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def pending(self) -> Invocation | None:
        with self._lock:
            return self._pending

    @property
    def closed(self) -> bool:
        return self._closed

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self.invoke(*args, **kwargs)

    def invoke(self, *args: Any, **kwargs: Any) -> None:
        raise NotImplementedError

    def cancel(self) -> None:
        with self._lock:
            if self._timer is None and self._pending is None:
                return
            self._disarm_locked()
            self._pending = None
        logger.debug("%s cancelled fn=%s", self._kind, self._name)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._disarm_locked()
            self._pending = None
        logger.debug("%s closed fn=%s", self._kind, self._name)

    def bind_per_instance(self, build: Callable[[Callable[..., Any]], "ControllerBase"]) -> None:
        """Give each instance of an owning class its own controller.

        ``build`` receives the bound method and returns a fresh controller.
        """

        self._bind = build

    def __set_name__(self, owner: type, name: str) -> None:
        self._attr_name = name

    def __get__(self, instance: object, owner: type | None = None):
        binder = getattr(self._fn, "__get__", None)
        if instance is None or self._bind is None or binder is None:
            return self
        controller = self._bind(binder(instance, owner))
        try:
            instance.__dict__[self._attr_name or self._fn.__name__] = controller
        except AttributeError as exc:
            raise TypeError(f"{self._kind} methods need an instance __dict__") from exc
        return controller

    def __enter__(self):
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise ControllerClosedError(f"{self._kind} is already closed")

    def _arm_locked(self, delay_seconds: float) -> None:
        self._disarm_locked()
        self._timer_seq += 1
        self._timer = self._scheduler.call_later(
            delay_seconds,
            partial(self._on_timer, self._timer_seq),
        )

    def _disarm_locked(self) -> None:
        timer = self._timer
        self._timer = None
        if timer is not None:
            timer.cancel()

    def _on_timer(self, seq: int) -> None:
        with self._lock:
            # Handles cancelled after they already started firing land here.
            if self._timer is None or seq != self._timer_seq:
                return
            self._timer = None
            invocation = self._expire_locked(self._scheduler.now())
        if invocation is not None:
            self._run(invocation, edge="trailing")

    def _expire_locked(self, now: float) -> Invocation | None:
        raise NotImplementedError

    def _run(self, invocation: Invocation, *, edge: str) -> None:
        logger.debug("%s run fn=%s edge=%s", self._kind, self._name, edge)
        invocation.apply(self._fn)


__all__ = [
    "ControllerBase",
    "validate_controller_config",
    "resolve_scheduler",
    "describe_callable",
]
