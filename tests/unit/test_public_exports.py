from __future__ import annotations

import cadence


def test_package_exports_controllers_and_config():
    expected = {
        "Throttler",
        "Debouncer",
        "OperationSequencer",
        "AsyncOperationSequencer",
        "ThrottleConfig",
        "DebounceConfig",
        "SequencerConfig",
        "ConfigurationError",
        "throttle",
        "debounce",
        "latest_only",
    }
    assert expected.issubset(set(cadence.__all__))
    for name in cadence.__all__:
        assert hasattr(cadence, name)
    assert "ControllerBase" not in cadence.__all__
