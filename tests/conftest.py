import os
import tempfile

import pytest
from hypothesis import HealthCheck, settings

# Loggers attach their file handlers at import time.
os.environ.setdefault("SNAPLIST_LOG_DIR", tempfile.mkdtemp(prefix="snaplist-logs-"))

settings.register_profile(
    "default",
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("default")

SNAPLIST_ENV_VARS = (
    "SNAPLIST_FETCH_PAGE_SIZE",
    "SNAPLIST_MAX_WINDOW_SIZE",
    "SNAPLIST_EXHAUSTION_SIGNAL",
    "SNAPLIST_ITEM_EXTENT",
    "SNAPLIST_ITEM_SPACING",
    "SNAPLIST_LOG_RULES",
    "SNAPLIST_LOG_DEFAULT_INTERVAL",
)


@pytest.fixture(autouse=True)
def clean_snaplist_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop inherited SNAPLIST_* settings so defaults are predictable in every test."""

    for name in SNAPLIST_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture(autouse=True)
def default_snap_debounce(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the debounce window explicit; tests drive timers through ManualScheduler."""

    monkeypatch.setenv("SNAPLIST_SNAP_DEBOUNCE_MS", "200")
    yield
