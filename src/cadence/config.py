"""Controller configuration."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .core.models import StalePolicy


def _is_positive_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


@dataclass(slots=True, frozen=True)
class ThrottleConfig:
    """Throttle window settings."""

    interval_ms: float
    leading: bool = True
    trailing: bool = True

    @property
    def interval_seconds(self) -> float:
        return float(self.interval_ms) / 1000.0

    def validate(self) -> None:
        if not _is_positive_number(self.interval_ms):
            raise ValueError("throttle.interval_ms must be > 0")
        for field_name in ("leading", "trailing"):
            if not isinstance(getattr(self, field_name), bool):
                raise ValueError(f"throttle.{field_name} must be bool")
        if not self.leading and not self.trailing:
            raise ValueError("throttle.leading and throttle.trailing cannot both be disabled")


@dataclass(slots=True, frozen=True)
class DebounceConfig:
    """Debounce quiescence settings."""

    delay_ms: float
    immediate: bool = False

    @property
    def delay_seconds(self) -> float:
        return float(self.delay_ms) / 1000.0

    def validate(self) -> None:
        if not _is_positive_number(self.delay_ms):
            raise ValueError("debounce.delay_ms must be > 0")
        if not isinstance(self.immediate, bool):
            raise ValueError("debounce.immediate must be bool")


@dataclass(slots=True, frozen=True)
class SequencerConfig:
    """Operation sequencer settings."""

    stale_policy: StalePolicy = StalePolicy.CANCEL

    def validate(self) -> None:
        if not isinstance(self.stale_policy, StalePolicy):
            raise ValueError("sequencer.stale_policy must be StalePolicy")


__all__ = [
    "ThrottleConfig",
    "DebounceConfig",
    "SequencerConfig",
]
