"""
FILE: todaytodo/core/scheduler.py
PURPOSE: File-backed reminder scheduler
EXPORTS:
  - JsonReminderScheduler (NotificationScheduler)
DEPENDENCIES:
  - logging (stdlib)
  - pathlib (stdlib)
  - todaytodo.core.notifications (ReminderPayload)
  - todaytodo.core.store (read_json, write_json_atomic)
NOTES:
  - Pending reminders are a JSON object keyed by payload identifier
    (the task id string); scheduling the same task again replaces it
  - Tasks without an expiry derive no payload and are ignored
  - pending()/due() are read by the `reminders` command
"""

import logging
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Dict, List, Optional

from .models import Task
from .notifications import ReminderPayload
from .store import read_json, write_json_atomic

logger = logging.getLogger(__name__)


class JsonReminderScheduler:
    """Keeps scheduled task reminders in a JSON file."""

    def __init__(self, path: Path, tz: Optional[tzinfo] = None):
        self.path = Path(path)
        self.tz = tz

    def schedule(self, task: Task) -> None:
        payload = ReminderPayload.from_task(task, self.tz)
        if payload is None:
            return

        reminders = self._load()
        reminders[payload.identifier] = payload
        self._save(reminders)
        logger.info("Scheduled reminder %s for %s", payload.identifier, payload.fire_at)

    def cancel(self, task: Task) -> None:
        identifier = str(task.id)
        reminders = self._load()
        if reminders.pop(identifier, None) is None:
            return
        self._save(reminders)
        logger.info("Cancelled reminder %s", identifier)

    def pending(self) -> List[ReminderPayload]:
        """All scheduled reminders, earliest first."""
        return sorted(self._load().values(), key=lambda p: p.fire_at)

    def due(self, now: datetime) -> List[ReminderPayload]:
        """Scheduled reminders whose firing minute has been reached at `now`."""
        return [p for p in self.pending() if p.fire_at.is_reached(now, self.tz)]

    def _load(self) -> Dict[str, ReminderPayload]:
        if not self.path.exists():
            return {}
        try:
            raw = read_json(self.path)
            return {key: ReminderPayload.from_dict(value) for key, value in raw.items()}
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Reminder file %s is unreadable (%s); treating as empty", self.path, e)
            return {}

    def _save(self, reminders: Dict[str, ReminderPayload]) -> None:
        write_json_atomic(
            self.path,
            {key: payload.to_dict() for key, payload in reminders.items()},
        )
