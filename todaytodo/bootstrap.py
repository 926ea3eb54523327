"""
FILE: todaytodo/bootstrap.py
PURPOSE: Wire the task service to its production collaborators
EXPORTS:
  - AppContext (dataclass)
  - create_app_context(settings, date_provider) -> AppContext
  - expiry_for_time_of_day(text, now, tz) -> datetime
DEPENDENCIES:
  - todaytodo.config (Settings)
  - todaytodo.core (service, store, scheduler, ports, logic)
  - todaytodo.widget (SnapshotWidgetReloader)
NOTES:
  - Shared by the CLI and the REPL
  - Haptics map to the terminal bell unless TODAYTODO_HAPTICS is off
"""

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional

from .config import Settings
from .core.logic import merge_time_with_today, wall_clock
from .core.ports import DateProvider, NoOpHapticFeedback, SystemDateProvider, TerminalBell
from .core.scheduler import JsonReminderScheduler
from .core.service import TaskListService
from .core.store import JsonFileTaskStore
from .formatting import parse_time_of_day
from .widget import SnapshotWidgetReloader

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    tz: Optional[tzinfo]
    date_provider: DateProvider
    store: JsonFileTaskStore
    reminders: JsonReminderScheduler
    widget: SnapshotWidgetReloader
    service: TaskListService


def create_app_context(
    settings: Settings,
    date_provider: Optional[DateProvider] = None,
) -> AppContext:
    """
    Build the store, collaborators and service described by `settings`.

    Raises:
        ConfigError: If the configured time zone is unknown
    """
    tz = settings.timezone()
    date_provider = date_provider or SystemDateProvider()

    store = JsonFileTaskStore(settings.tasks_path)
    reminders = JsonReminderScheduler(settings.reminders_path, tz)
    widget = SnapshotWidgetReloader(
        store,
        date_provider,
        settings.widget_path,
        tz,
        refresh_minutes=settings.widget_refresh_minutes,
        preview_limit=settings.widget_preview_limit,
    )
    haptics = TerminalBell() if settings.haptics else NoOpHapticFeedback()

    logger.debug("Using data directory %s (tz=%s)", settings.data_dir, settings.tz_name or "local")
    service = TaskListService(
        store=store,
        date_provider=date_provider,
        notification_scheduler=reminders,
        widget_reloader=widget,
        haptic_feedback=haptics,
        tz=tz,
    )
    return AppContext(
        settings=settings,
        tz=tz,
        date_provider=date_provider,
        store=store,
        reminders=reminders,
        widget=widget,
        service=service,
    )


def expiry_for_time_of_day(text: str, now: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    Turn a typed "HH:MM" into an expiry instant on today's date.

    Raises:
        InvalidInputError: If the text is not HH:MM
    """
    picked_time = parse_time_of_day(text)
    picked = wall_clock(datetime.combine(now.astimezone(tz).date(), picked_time), tz)
    return merge_time_with_today(picked, tz, today=now)
