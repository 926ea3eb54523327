"""
FILE: todaytodo/config.py
PURPOSE: Settings loaded from TODAYTODO_* environment variables
EXPORTS:
  - Settings (frozen dataclass)
  - get_settings() -> Settings
DEPENDENCIES:
  - os, pathlib (stdlib)
  - zoneinfo (stdlib, for TODAYTODO_TZ)
  - todaytodo.core.constants (file names, widget defaults)
  - todaytodo.core.exceptions (ConfigError)
NOTES:
  - Data files default to ~/.todaytodo
  - get_settings() reads the environment on every call
  - An unset TODAYTODO_TZ means the system's local zone
"""

import os
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .core.constants import (
    DEFAULT_DATA_DIR_NAME,
    DEFAULT_WIDGET_PREVIEW_LIMIT,
    DEFAULT_WIDGET_REFRESH_MINUTES,
    LOG_FILE_NAME,
    REMINDERS_FILE_NAME,
    TASKS_FILE_NAME,
    WIDGET_FILE_NAME,
)
from .core.exceptions import ConfigError

ENV_PREFIX = "TODAYTODO"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True)
class Settings:
    # ---- Local data paths ----
    data_dir: Path
    tasks_path: Path
    reminders_path: Path
    widget_path: Path
    log_path: Path

    # ---- Logging ----
    log_level: str

    # ---- Calendar ----
    tz_name: Optional[str]

    # ---- Widget ----
    widget_refresh_minutes: int
    widget_preview_limit: int

    # ---- Feedback ----
    haptics: bool

    @staticmethod
    def from_env() -> "Settings":
        data_dir = _env_path(_k("DATA_DIR"), Path.home() / DEFAULT_DATA_DIR_NAME)
        tz_name = _env(_k("TZ")).strip() or None

        return Settings(
            data_dir=data_dir,
            tasks_path=_env_path(_k("TASKS_PATH"), data_dir / TASKS_FILE_NAME),
            reminders_path=_env_path(_k("REMINDERS_PATH"), data_dir / REMINDERS_FILE_NAME),
            widget_path=_env_path(_k("WIDGET_PATH"), data_dir / WIDGET_FILE_NAME),
            log_path=data_dir / LOG_FILE_NAME,
            log_level=_env(_k("LOG_LEVEL"), "WARNING").upper(),
            tz_name=tz_name,
            widget_refresh_minutes=_env_int(_k("WIDGET_REFRESH_MINUTES"), DEFAULT_WIDGET_REFRESH_MINUTES),
            widget_preview_limit=_env_int(_k("WIDGET_PREVIEW_LIMIT"), DEFAULT_WIDGET_PREVIEW_LIMIT),
            haptics=_env_bool(_k("HAPTICS"), True),
        )

    def timezone(self) -> Optional[tzinfo]:
        """
        Zone whose calendar defines "today".

        Raises:
            ConfigError: If TODAYTODO_TZ names an unknown zone
        """
        if self.tz_name is None:
            return None
        try:
            return ZoneInfo(self.tz_name)
        except (ZoneInfoNotFoundError, ValueError):
            raise ConfigError(f"Unknown time zone {self.tz_name!r} in {_k('TZ')}")


def get_settings() -> Settings:
    return Settings.from_env()
