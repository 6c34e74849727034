"""Latest-wins sequencing of operations backed by ``concurrent.futures``."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import CancelledError, Future
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


class OperationSequencer:
    """Delivers only the result of the most recently started operation.

    ``factory`` must return a ``concurrent.futures.Future``, typically from an
    executor owned by the caller. The sequencer never cancels that future;
    superseded operations run to completion and their outcome is dropped.
    """

    def __init__(self, *, stale_policy: StalePolicy = StalePolicy.CANCEL) -> None:
        self._config = build_sequencer_config(stale_policy)
        self._lock = threading.Lock()
        self._generation = 0

    @classmethod
    def from_config(cls, config: SequencerConfig) -> "OperationSequencer":
        return cls(stale_policy=config.stale_policy)

    @property
    def config(self) -> SequencerConfig:
        return self._config

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def start(
        self,
        factory: Callable[[], "Future[Any]"],
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> "Future[Any]":
        with self._lock:
            self._generation += 1
            generation = self._generation
        logger.debug("sequencer start generation=%s", generation)

        result: Future[Any] = Future()
        operation = _start_operation(factory)
        operation.add_done_callback(
            partial(self._settle, generation, result, on_success, on_error)
        )
        return result

    def cancel_all(self) -> None:
        with self._lock:
            self._generation += 1
            generation = self._generation
        logger.debug("sequencer cancel_all generation=%s", generation)

    cancel = cancel_all

    def _settle(
        self,
        generation: int,
        result: "Future[Any]",
        on_success: SuccessCallback | None,
        on_error: ErrorCallback | None,
        operation: "Future[Any]",
    ) -> None:
        cancelled = operation.cancelled()
        if cancelled:
            value, error = None, CancelledError()
        else:
            error = operation.exception()
            value = None if error is not None else operation.result()
        with self._lock:
            stale = generation != self._generation

        delivery = plan_delivery(
            self._config.stale_policy,
            stale=stale,
            value=value,
            error=error,
            cancelled=cancelled,
        )
        if delivery.cancel:
            result.cancel()
        elif result.set_running_or_notify_cancel():
            if delivery.error is not None:
                result.set_exception(delivery.error)
            else:
                result.set_result(delivery.value)
        if stale:
            return
        notify_callbacks(value=value, error=error, on_success=on_success, on_error=on_error)


def _start_operation(factory: Callable[[], "Future[Any]"]) -> "Future[Any]":
    try:
        operation = factory()
    except Exception as exc:
        failed: Future[Any] = Future()
        failed.set_exception(exc)
        return failed
    if not isinstance(operation, Future):
        failed = Future()
        failed.set_exception(
            TypeError("operation factory must return a concurrent.futures.Future")
        )
        return failed
    return operation


__all__ = [
    "OperationSequencer",
]
