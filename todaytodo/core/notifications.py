"""
FILE: todaytodo/core/notifications.py
PURPOSE: Derive reminder payloads from tasks (no scheduler access)
EXPORTS:
  - DateComponents (frozen dataclass)
  - ReminderPayload (frozen dataclass)
  - derive_reminder(task, tz) -> Optional[ReminderPayload]
DEPENDENCIES:
  - dataclasses (stdlib)
  - datetime (stdlib)
  - todaytodo.core.models (Task)
  - todaytodo.core.constants (REMINDER_TITLE)
  - todaytodo.core.logic (wall_clock)
NOTES:
  - A task without expires_at has no reminder
  - The firing time is calendar-decomposed (year..minute) in the given zone,
    so the scheduler can match wall-clock minutes
  - to_dict()/from_dict() are used by the JSON reminder scheduler
"""

from dataclasses import dataclass, astuple
from datetime import datetime, tzinfo
from typing import Any, Dict, Optional

from .constants import REMINDER_TITLE
from .logic import wall_clock
from .models import Task


@dataclass(frozen=True, order=True)
class DateComponents:
    """Calendar fields of a firing time, down to the minute."""

    year: int
    month: int
    day: int
    hour: int
    minute: int

    @classmethod
    def from_datetime(cls, instant: datetime, tz: Optional[tzinfo] = None) -> "DateComponents":
        local = instant.astimezone(tz)
        return cls(local.year, local.month, local.day, local.hour, local.minute)

    def to_datetime(self, tz: Optional[tzinfo] = None) -> datetime:
        """Rebuild the instant these components describe in `tz`."""
        return wall_clock(datetime(self.year, self.month, self.day, self.hour, self.minute), tz)

    def is_reached(self, now: datetime, tz: Optional[tzinfo] = None) -> bool:
        """True once the wall clock in `tz` has reached this minute."""
        return DateComponents.from_datetime(now, tz) >= self

    def __str__(self) -> str:
        return "{:04d}-{:02d}-{:02d} {:02d}:{:02d}".format(*astuple(self))


@dataclass(frozen=True)
class ReminderPayload:
    """Scheduler-agnostic description of a task reminder."""

    title: str
    body: str
    identifier: str
    fire_at: DateComponents

    @classmethod
    def from_task(cls, task: Task, tz: Optional[tzinfo] = None) -> Optional["ReminderPayload"]:
        """
        Build the reminder for a task.

        Args:
            task: Task to remind about
            tz: Zone used to decompose the firing time (None = system local zone)

        Returns:
            ReminderPayload, or None if the task has no expiry
        """
        if task.expires_at is None:
            return None
        return cls(
            title=REMINDER_TITLE,
            body=task.title,
            identifier=str(task.id),
            fire_at=DateComponents.from_datetime(task.expires_at, tz),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReminderPayload":
        fire_at = data["fire_at"]
        return cls(
            title=data["title"],
            body=data["body"],
            identifier=data["identifier"],
            fire_at=DateComponents(
                year=fire_at["year"],
                month=fire_at["month"],
                day=fire_at["day"],
                hour=fire_at["hour"],
                minute=fire_at["minute"],
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "body": self.body,
            "identifier": self.identifier,
            "fire_at": {
                "year": self.fire_at.year,
                "month": self.fire_at.month,
                "day": self.fire_at.day,
                "hour": self.fire_at.hour,
                "minute": self.fire_at.minute,
            },
        }


def derive_reminder(task: Task, tz: Optional[tzinfo] = None) -> Optional[ReminderPayload]:
    """Shortcut for ReminderPayload.from_task()."""
    return ReminderPayload.from_task(task, tz)
