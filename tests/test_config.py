"""Tests for environment-driven settings and app wiring."""

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from todaytodo.bootstrap import create_app_context, expiry_for_time_of_day
from todaytodo.config import Settings, get_settings
from todaytodo.core.exceptions import ConfigError, InvalidInputError
from todaytodo.core.ports import FixedDateProvider, NoOpHapticFeedback
from todaytodo.logging_setup import setup_logging

from conftest import NOW, UTC


def test_defaults_under_data_dir(data_dir):
    settings = get_settings()

    assert settings.data_dir == data_dir
    assert settings.tasks_path == data_dir / "tasks.json"
    assert settings.reminders_path == data_dir / "reminders.json"
    assert settings.widget_path == data_dir / "widget.json"
    assert settings.log_path == data_dir / "todaytodo.log"
    assert settings.log_level == "WARNING"
    assert settings.tz_name is None
    assert settings.timezone() is None
    assert settings.widget_refresh_minutes == 15
    assert settings.widget_preview_limit == 3
    assert settings.haptics is False


def test_overrides(data_dir, monkeypatch, tmp_path):
    monkeypatch.setenv("TODAYTODO_TASKS_PATH", str(tmp_path / "elsewhere" / "t.json"))
    monkeypatch.setenv("TODAYTODO_LOG_LEVEL", "debug")
    monkeypatch.setenv("TODAYTODO_WIDGET_PREVIEW_LIMIT", "5")
    monkeypatch.setenv("TODAYTODO_HAPTICS", "yes")

    settings = Settings.from_env()

    assert settings.tasks_path == tmp_path / "elsewhere" / "t.json"
    assert settings.log_level == "DEBUG"
    assert settings.widget_preview_limit == 5
    assert settings.haptics is True


def test_bad_integer_raises(data_dir, monkeypatch):
    monkeypatch.setenv("TODAYTODO_WIDGET_REFRESH_MINUTES", "soon")
    with pytest.raises(ConfigError, match="TODAYTODO_WIDGET_REFRESH_MINUTES"):
        Settings.from_env()


def test_unknown_timezone_raises(data_dir, monkeypatch):
    monkeypatch.setenv("TODAYTODO_TZ", "Mars/Olympus_Mons")
    with pytest.raises(ConfigError, match="Unknown time zone"):
        get_settings().timezone()


def test_create_app_context(data_dir, make_task):
    ctx = create_app_context(get_settings(), FixedDateProvider(NOW))

    assert isinstance(ctx.service.haptic_feedback, NoOpHapticFeedback)
    assert ctx.service.tasks == ()
    assert (data_dir / "tasks.json").exists()
    assert (data_dir / "widget.json").exists()


def test_context_persists_across_runs(data_dir):
    clock = FixedDateProvider(datetime.now().astimezone())
    first = create_app_context(get_settings(), clock)
    task = first.service.add_task("Survives")

    second = create_app_context(get_settings(), clock)

    assert [t.id for t in second.service.tasks] == [task.id]


def test_expiry_for_time_of_day():
    expires = expiry_for_time_of_day("16:30", NOW, UTC)
    assert expires == datetime(2025, 2, 19, 16, 30, tzinfo=UTC)


def test_expiry_for_time_of_day_uses_zone_date():
    plus_two = timezone(timedelta(hours=2))
    late = datetime(2025, 2, 19, 23, 0, tzinfo=UTC)  # 01:00 on the 20th at +02:00

    expires = expiry_for_time_of_day("09:00", late, plus_two)

    assert expires == datetime(2025, 2, 20, 9, 0, tzinfo=plus_two)


@pytest.mark.parametrize("text", ["", "16", "24:00", "12:60", "ab:cd", "1:2:3"])
def test_expiry_for_time_of_day_invalid(text):
    with pytest.raises(InvalidInputError, match="expected HH:MM"):
        expiry_for_time_of_day(text, NOW, UTC)


def test_setup_logging_writes_file(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    log_path = tmp_path / "logs" / "todaytodo.log"
    try:
        setup_logging(log_path=log_path)
        logging.getLogger("todaytodo.test").debug("hello from the test")
        for handler in root.handlers:
            handler.flush()
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            if handler not in saved_handlers:
                handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
        logging.captureWarnings(False)

    assert "hello from the test" in Path(log_path).read_text(encoding="utf-8")


def test_expiry_for_time_of_day_across_dst(eastern_local_zone):
    early = datetime(2025, 3, 9, 6, 0, tzinfo=UTC)  # 01:00 EST, before the change

    expires = expiry_for_time_of_day("14:30", early)

    assert expires == datetime(2025, 3, 9, 18, 30, tzinfo=UTC)
    assert expires.utcoffset() == timedelta(hours=-4)
