"""Shared pytest configuration and fixtures for tests."""

import os
import sys
import time
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from todaytodo.core.models import Task  # noqa: E402
from todaytodo.core.ports import FixedDateProvider  # noqa: E402

UTC = timezone.utc

# Wednesday noon, UTC
NOW = datetime(2025, 2, 19, 12, 0, tzinfo=UTC)


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def clock() -> FixedDateProvider:
    return FixedDateProvider(NOW)


@pytest.fixture()
def make_task():
    """
    Build tasks relative to NOW.

    created: offset from NOW for created_at (default: one hour earlier)
    expires: offset from NOW for expires_at (None = no individual expiry)
    """

    def _make(title="Task", created=timedelta(hours=-1), expires=None, done=False) -> Task:
        task = Task.create(
            title=title,
            created_at=NOW + created,
            expires_at=NOW + expires if expires is not None else None,
        )
        if done:
            task = replace(task, is_completed=True)
        return task

    return _make


@pytest.fixture()
def data_dir(monkeypatch, tmp_path) -> Path:
    """Point all todaytodo data files at a temporary directory."""
    monkeypatch.setenv("TODAYTODO_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TODAYTODO_HAPTICS", "0")
    monkeypatch.delenv("TODAYTODO_TZ", raising=False)
    monkeypatch.delenv("TODAYTODO_LOG_LEVEL", raising=False)
    monkeypatch.delenv("TODAYTODO_TASKS_PATH", raising=False)
    monkeypatch.delenv("TODAYTODO_REMINDERS_PATH", raising=False)
    monkeypatch.delenv("TODAYTODO_WIDGET_PATH", raising=False)
    return tmp_path


@pytest.fixture()
def eastern_local_zone():
    """
    Run with US Eastern as the system zone (tz=None paths).

    Uses a POSIX TZ rule so no zoneinfo database is needed. DST in 2025
    starts on 9 March at 02:00 local time.
    """
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset() is not available on this platform")
    saved = os.environ.get("TZ")
    os.environ["TZ"] = "EST5EDT,M3.2.0,M11.1.0"
    time.tzset()
    yield
    if saved is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = saved
    time.tzset()
