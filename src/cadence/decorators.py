"""Function-wrapping entry points."""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Awaitable, Callable
from typing import Any

from .core.async_sequencer import AsyncOperationSequencer
from .core.debouncing import Debouncer
from .core.models import StalePolicy
from .core.scheduling import Scheduler
from .core.throttling import Throttler


def throttle(
    interval_ms: float,
    *,
    leading: bool = True,
    trailing: bool = True,
    scheduler: Scheduler | None = None,
) -> Callable[[Callable[..., Any]], Throttler]:
    """Wrap a function in a :class:`Throttler`.

    On a method, every instance gets its own throttler.

    Example::

        @throttle(100)
        def on_scroll(offset):
            ...
    """

    def decorate(fn: Callable[..., Any]) -> Throttler:
        def build(target: Callable[..., Any]) -> Throttler:
            throttler = Throttler(
                target,
                interval_ms,
                leading=leading,
                trailing=trailing,
                scheduler=scheduler,
            )
            functools.update_wrapper(throttler, fn)
            return throttler

        throttler = build(fn)
        throttler.bind_per_instance(build)
        return throttler

    return decorate


def debounce(
    delay_ms: float,
    *,
    immediate: bool = False,
    scheduler: Scheduler | None = None,
) -> Callable[[Callable[..., Any]], Debouncer]:
    """Wrap a function in a :class:`Debouncer`."""

    def decorate(fn: Callable[..., Any]) -> Debouncer:
        def build(target: Callable[..., Any]) -> Debouncer:
            debouncer = Debouncer(target, delay_ms, immediate=immediate, scheduler=scheduler)
            functools.update_wrapper(debouncer, fn)
            return debouncer

        debouncer = build(fn)
        debouncer.bind_per_instance(build)
        return debouncer

    return decorate


def latest_only(
    fn: Callable[..., Awaitable[Any]] | None = None,
    *,
    stale_policy: StalePolicy = StalePolicy.CANCEL,
):
    """Route every call of a coroutine function through one sequencer.

    Each call returns the sequencer's future; only the latest call's future
    receives a result. The sequencer is exposed as ``wrapped.sequencer``.
    """

    def decorate(func: Callable[..., Awaitable[Any]]) -> Callable[..., "asyncio.Future[Any]"]:
        sequencer = AsyncOperationSequencer(stale_policy=stale_policy)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> "asyncio.Future[Any]":
            return sequencer.start(functools.partial(func, *args, **kwargs))

        wrapper.sequencer = sequencer  # type: ignore[attr-defined]
        return wrapper

    if fn is not None:
        return decorate(fn)
    return decorate


__all__ = [
    "throttle",
    "debounce",
    "latest_only",
]
