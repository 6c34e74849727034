from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from tests.shared.scheduler import ManualScheduler  # noqa: E402


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def calls() -> list[tuple]:
    return []


@pytest.fixture
def recorder(calls: list[tuple], scheduler: ManualScheduler):
    """Callback that records ``(virtual_ms, args)`` for every run."""

    def _record(*args):
        calls.append((scheduler.now_ms, args))

    return _record
