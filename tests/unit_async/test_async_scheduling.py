from __future__ import annotations

import asyncio

import pytest

from cadence.core.async_scheduling import AsyncioScheduler
from cadence.core.controller_shared import resolve_scheduler
from cadence.core.debouncing import Debouncer
from cadence.core.throttling import Throttler


@pytest.mark.asyncio
async def test_resolve_scheduler_uses_running_loop():
    scheduler = resolve_scheduler(None)
    assert isinstance(scheduler, AsyncioScheduler)
    assert scheduler.loop is asyncio.get_running_loop()


@pytest.mark.asyncio
async def test_asyncio_scheduler_fires_callback_after_delay():
    scheduler = AsyncioScheduler()
    fired = asyncio.Event()
    started = scheduler.now()

    scheduler.call_later(0.01, fired.set)
    await asyncio.wait_for(fired.wait(), timeout=2)

    assert scheduler.now() > started


@pytest.mark.asyncio
async def test_asyncio_scheduler_cancelled_timer_never_fires():
    scheduler = AsyncioScheduler()
    fired: list[bool] = []

    handle = scheduler.call_later(0.01, lambda: fired.append(True))
    handle.cancel()
    await asyncio.sleep(0.03)

    assert fired == []


@pytest.mark.asyncio
async def test_debouncer_on_event_loop_collapses_burst():
    done = asyncio.Event()
    seen: list[str] = []

    def on_idle(text: str) -> None:
        seen.append(text)
        done.set()

    debouncer = Debouncer(on_idle, 20)
    for text in ("h", "he", "hel", "hell", "hello"):
        debouncer(text)

    await asyncio.wait_for(done.wait(), timeout=2)
    await asyncio.sleep(0.05)
    assert seen == ["hello"]


@pytest.mark.asyncio
async def test_throttler_on_event_loop_runs_leading_then_trailing():
    seen: list[int] = []
    throttler = Throttler(seen.append, 30)

    for value in range(5):
        throttler(value)
    assert seen == [0]

    await asyncio.sleep(0.1)
    assert seen == [0, 4]
    throttler.close()
