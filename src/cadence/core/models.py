"""Core value models."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


@dataclass(slots=True, frozen=True)
class Invocation:
    """One call attempt routed through a controller."""

    args: tuple[Any, ...]
    kwargs: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    at: float = 0.0

    @classmethod
    def capture(cls, args: tuple[Any, ...], kwargs: Mapping[str, Any], *, at: float) -> "Invocation":
        return cls(args=tuple(args), kwargs=MappingProxyType(dict(kwargs)), at=at)

    def apply(self, fn: Callable[..., Any]) -> Any:
        return fn(*self.args, **self.kwargs)


class StalePolicy(str, Enum):
    """What a sequencer does with the future of a superseded operation."""

    CANCEL = "cancel"
    ENVELOPE = "envelope"


@dataclass(slots=True, frozen=True)
class OperationResult:
    """Settlement of one sequenced operation."""

    value: Any = None
    error: BaseException | None = None
    is_stale: bool = False

    @classmethod
    def stale(cls) -> "OperationResult":
        return cls(is_stale=True)

    @property
    def ok(self) -> bool:
        return not self.is_stale and self.error is None


__all__ = [
    "Invocation",
    "StalePolicy",
    "OperationResult",
]
