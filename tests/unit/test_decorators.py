from __future__ import annotations

from cadence.core.debouncing import Debouncer
from cadence.core.throttling import Throttler
from cadence.decorators import debounce, throttle


def test_throttle_decorator_returns_named_throttler(scheduler, calls):
    @throttle(100, trailing=False, scheduler=scheduler)
    def on_scroll(offset):
        """Handle scroll."""
        calls.append(offset)

    assert isinstance(on_scroll, Throttler)
    assert on_scroll.__name__ == "on_scroll"
    assert on_scroll.__doc__ == "Handle scroll."

    on_scroll(1)
    on_scroll(2)
    scheduler.advance(500)
    assert calls == [1]


def test_debounce_decorator_wraps_function(scheduler, calls):
    @debounce(50, scheduler=scheduler)
    def save(draft):
        calls.append(draft)

    assert isinstance(save, Debouncer)
    save("v1")
    save("v2")
    scheduler.advance(50)
    assert calls == ["v2"]
    assert save.__wrapped__ is not None


def test_throttle_decorated_method_gets_one_throttler_per_instance(scheduler, calls):
    class Widget:
        def __init__(self, name):
            self.name = name

        @throttle(100, trailing=False, scheduler=scheduler)
        def on_scroll(self, offset):
            calls.append((self.name, offset))

    first, second = Widget("first"), Widget("second")
    first.on_scroll(1)
    second.on_scroll(2)
    first.on_scroll(3)
    scheduler.advance(500)

    assert calls == [("first", 1), ("second", 2)]
    assert first.on_scroll is first.on_scroll
    assert first.on_scroll is not second.on_scroll
    assert isinstance(first.on_scroll, Throttler)
    assert isinstance(Widget.on_scroll, Throttler)
    assert first.on_scroll.__name__ == "on_scroll"


def test_debounce_decorated_method_binds_self(scheduler, calls):
    class Editor:
        def __init__(self, name):
            self.name = name

        @debounce(50, scheduler=scheduler)
        def save(self, draft):
            calls.append((self.name, draft))

    left, right = Editor("left"), Editor("right")
    left.save("a")
    left.save("b")
    right.save("c")
    scheduler.advance(50)

    assert sorted(calls) == [("left", "b"), ("right", "c")]
    left.save.cancel()
    assert right.save.pending is None
