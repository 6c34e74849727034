"""Shared helpers for sync/async operation sequencers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..config import SequencerConfig
from .controller_shared import validate_controller_config
from .models import OperationResult, StalePolicy

SuccessCallback = Callable[[Any], object]
ErrorCallback = Callable[[BaseException], object]


@dataclass(slots=True, frozen=True)
class Delivery:
    """How a settled operation is handed to the caller's future."""

    cancel: bool = False
    value: Any = None
    error: BaseException | None = None


def build_sequencer_config(stale_policy: StalePolicy) -> SequencerConfig:
    config = SequencerConfig(stale_policy=stale_policy)
    validate_controller_config(config)
    return config


def plan_delivery(
    policy: StalePolicy,
    *,
    stale: bool,
    value: Any = None,
    error: BaseException | None = None,
    cancelled: bool = False,
) -> Delivery:
    if stale:
        if policy is StalePolicy.ENVELOPE:
            return Delivery(value=OperationResult.stale())
        return Delivery(cancel=True)
    if policy is StalePolicy.ENVELOPE:
        return Delivery(value=OperationResult(value=value, error=error))
    if cancelled:
        return Delivery(cancel=True)
    return Delivery(value=value, error=error)


def notify_callbacks(
    *,
    value: Any,
    error: BaseException | None,
    on_success: SuccessCallback | None,
    on_error: ErrorCallback | None,
) -> None:
    if error is not None:
        if on_error is not None:
            on_error(error)
        return
    if on_success is not None:
        on_success(value)


__all__ = [
    "Delivery",
    "SuccessCallback",
    "ErrorCallback",
    "build_sequencer_config",
    "plan_delivery",
    "notify_callbacks",
]
