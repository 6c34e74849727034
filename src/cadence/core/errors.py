"""Error types."""

from __future__ import annotations


class CadenceError(Exception):
    """Base exception for this package."""

    def __init__(self, message: str, *, option: str | None = None) -> None:
        super().__init__(message)
        self.option = option


class ConfigurationError(CadenceError):
    """Contradictory or out-of-range controller options."""


class ControllerClosedError(CadenceError):
    """Raised when a controller is used after close."""


__all__ = [
    "CadenceError",
    "ConfigurationError",
    "ControllerClosedError",
]
