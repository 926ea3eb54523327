"""
FILE: todaytodo/core/ports.py
PURPOSE: Collaborator interfaces used by the task service, plus the small
         implementations that need no storage of their own
EXPORTS:
  - TaskStore, DateProvider, NotificationScheduler, WidgetReloader,
    HapticFeedback (Protocols)
  - SystemDateProvider, FixedDateProvider
  - NoOpNotificationScheduler, NoOpWidgetReloader, NoOpHapticFeedback
  - TerminalBell
DEPENDENCIES:
  - rich (terminal bell)
  - typing (Protocol)
NOTES:
  - The service depends on these Protocols only; the pure core depends on
    none of them
  - File-backed implementations live in core.store (tasks), core.scheduler
    (reminders) and widget (timeline snapshot)
"""

from datetime import datetime
from typing import List, Optional, Protocol

from rich.console import Console

from .models import Task


class TaskStore(Protocol):
    """Loads and saves the whole task collection."""

    def load(self) -> List[Task]: ...
    def save(self, tasks: List[Task]) -> None: ...


class DateProvider(Protocol):
    """Single source of "now" for the service."""

    def now(self) -> datetime: ...


class NotificationScheduler(Protocol):
    def schedule(self, task: Task) -> None: ...
    def cancel(self, task: Task) -> None: ...


class WidgetReloader(Protocol):
    def reload_all_timelines(self) -> None: ...


class HapticFeedback(Protocol):
    def impact_occurred(self) -> None: ...


class SystemDateProvider:
    """Wall clock, as a timezone-aware local instant."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


class FixedDateProvider:
    """Always returns the same instant. Move it with `advance_to()`."""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def advance_to(self, instant: datetime) -> None:
        self.instant = instant


class NoOpNotificationScheduler:
    def schedule(self, task: Task) -> None:
        pass

    def cancel(self, task: Task) -> None:
        pass


class NoOpWidgetReloader:
    def reload_all_timelines(self) -> None:
        pass


class NoOpHapticFeedback:
    def impact_occurred(self) -> None:
        pass


class TerminalBell:
    """Haptic stand-in for terminals: rings the bell on stderr."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)

    def impact_occurred(self) -> None:
        self.console.bell()
