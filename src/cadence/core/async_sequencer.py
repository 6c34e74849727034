"""Latest-wins sequencing of awaitable operations (async)."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from functools import partial
from typing import Any

from ..config import SequencerConfig
from .models import StalePolicy
from .sequencer_shared import (
    ErrorCallback,
    SuccessCallback,
    build_sequencer_config,
    notify_callbacks,
    plan_delivery,
)

logger = logging.getLogger("cadence")


class AsyncOperationSequencer:
    """Delivers only the result of the most recently started awaitable.

    All calls must happen on the event loop thread. Superseded operations are
    not cancelled; their outcome is dropped when they settle.
    """

    def __init__(self, *, stale_policy: StalePolicy = StalePolicy.CANCEL) -> None:
        self._config = build_sequencer_config(stale_policy)
        self._generation = 0

    @classmethod
    def from_config(cls, config: SequencerConfig) -> "AsyncOperationSequencer":
        return cls(stale_policy=config.stale_policy)

    @property
    def config(self) -> SequencerConfig:
        return self._config

    @property
    def generation(self) -> int:
        return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def start(
        self,
        factory: Callable[[], Awaitable[Any]],
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> "asyncio.Future[Any]":
        loop = asyncio.get_running_loop()
        self._generation += 1
        generation = self._generation
        logger.debug("sequencer start generation=%s", generation)

        result: asyncio.Future[Any] = loop.create_future()
        operation = _start_operation(loop, factory)
        operation.add_done_callback(
            partial(self._settle, generation, result, on_success, on_error)
        )
        return result

    def cancel_all(self) -> None:
        self._generation += 1
        logger.debug("sequencer cancel_all generation=%s", self._generation)

    cancel = cancel_all

    def _settle(
        self,
        generation: int,
        result: "asyncio.Future[Any]",
        on_success: SuccessCallback | None,
        on_error: ErrorCallback | None,
        operation: "asyncio.Future[Any]",
    ) -> None:
        cancelled = operation.cancelled()
        if cancelled:
            value, error = None, asyncio.CancelledError()
        else:
            error = operation.exception()
            value = None if error is not None else operation.result()
        stale = generation != self._generation

        delivery = plan_delivery(
            self._config.stale_policy,
            stale=stale,
            value=value,
            error=error,
            cancelled=cancelled,
        )
        if not result.done():
            if delivery.cancel:
                result.cancel()
            elif delivery.error is not None:
                result.set_exception(delivery.error)
                if on_error is not None:
                    # on_error already received it; mark it retrieved.
                    result.exception()
            else:
                result.set_result(delivery.value)
        if stale:
            return
        notify_callbacks(value=value, error=error, on_success=on_success, on_error=on_error)


def _start_operation(
    loop: asyncio.AbstractEventLoop,
    factory: Callable[[], Awaitable[Any]],
) -> "asyncio.Future[Any]":
    try:
        return asyncio.ensure_future(factory(), loop=loop)
    except Exception as exc:
        failed: asyncio.Future[Any] = loop.create_future()
        failed.set_exception(exc)
        return failed


__all__ = [
    "AsyncOperationSequencer",
]
