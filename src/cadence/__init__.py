"""Public package exports for cadence."""

from .config import DebounceConfig, SequencerConfig, ThrottleConfig
from .core.async_scheduling import AsyncioScheduler
from .core.async_sequencer import AsyncOperationSequencer
from .core.debouncing import Debouncer
from .core.errors import CadenceError, ConfigurationError, ControllerClosedError
from .core.models import Invocation, OperationResult, StalePolicy
from .core.scheduling import Scheduler, ThreadingScheduler, TimerHandle
from .core.sequencer import OperationSequencer
from .core.throttling import Throttler
from .decorators import debounce, latest_only, throttle

__all__ = [
    "Throttler",
    "Debouncer",
    "OperationSequencer",
    "AsyncOperationSequencer",
    "ThrottleConfig",
    "DebounceConfig",
    "SequencerConfig",
    "Invocation",
    "OperationResult",
    "StalePolicy",
    "Scheduler",
    "TimerHandle",
    "ThreadingScheduler",
    "AsyncioScheduler",
    "CadenceError",
    "ConfigurationError",
    "ControllerClosedError",
    "throttle",
    "debounce",
    "latest_only",
]
