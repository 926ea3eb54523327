"""
FILE: todaytodo/core/service.py
PURPOSE: Task list orchestration - applies the pure rules and drives the
         store, reminder, widget and haptic collaborators
EXPORTS:
  - TaskListService
    - tasks -> Tuple[Task, ...]
    - add_task(title, expires_at) -> Task
    - toggle(task) -> Optional[Task]
    - remove_expired_day_tasks() -> None
    - remove_individually_expired_tasks() -> None
    - refresh() -> None
    - resolve(ref) -> Task
    - pending_today() -> List[Task]
DEPENDENCIES:
  - todaytodo.core.logic (filters, toggle, append, submission gate)
  - todaytodo.core.models (Task)
  - todaytodo.core.ports (collaborator Protocols)
  - todaytodo.core.exceptions (TaskNotFoundError, InvalidInputError)
  - logging (stdlib)
NOTES:
  - Construction loads the store and drops day-expired, then individually
    expired tasks
  - Every change is persisted and followed by a widget reload
  - Tasks dropped by either expiry rule have their reminders cancelled
  - "now" always comes from the injected DateProvider
  - The current collection is replaced, never mutated in place
"""

import logging
from datetime import datetime, tzinfo
from typing import List, Optional, Tuple

from . import logic
from .constants import MIN_ID_PREFIX_LENGTH
from .exceptions import InvalidInputError, TaskNotFoundError
from .models import Task
from .ports import (
    DateProvider,
    HapticFeedback,
    NotificationScheduler,
    TaskStore,
    WidgetReloader,
)

logger = logging.getLogger(__name__)


class TaskListService:
    """
    Today's task list and the actions a user can take on it.

    Args:
        store: Where the collection is loaded from and saved to
        date_provider: Source of "now"
        notification_scheduler: Schedules/cancels task reminders
        widget_reloader: Told to refresh after every save
        haptic_feedback: Triggered on toggle
        tz: Zone whose calendar defines "today" (None = system local zone)
    """

    def __init__(
        self,
        store: TaskStore,
        date_provider: DateProvider,
        notification_scheduler: NotificationScheduler,
        widget_reloader: WidgetReloader,
        haptic_feedback: HapticFeedback,
        tz: Optional[tzinfo] = None,
    ):
        self.store = store
        self.date_provider = date_provider
        self.notification_scheduler = notification_scheduler
        self.widget_reloader = widget_reloader
        self.haptic_feedback = haptic_feedback
        self.tz = tz

        self._tasks: List[Task] = []
        self._load()
        self.remove_expired_day_tasks()
        self.remove_individually_expired_tasks()

    @property
    def tasks(self) -> Tuple[Task, ...]:
        return tuple(self._tasks)

    def add_task(self, title: str, expires_at: Optional[datetime] = None) -> Task:
        """
        Create a task at the current instant and append it.

        Args:
            title: Task title, stored verbatim
            expires_at: Optional individual expiry

        Returns:
            The new Task

        Raises:
            InvalidInputError: If title is empty or whitespace-only

        Notes:
            - Schedules a reminder when expires_at is set
        """
        if not logic.can_submit(title):
            raise InvalidInputError("Task title cannot be empty")

        task = Task.create(title=title, created_at=self.date_provider.now(), expires_at=expires_at)
        self._tasks = logic.append_task(self._tasks, task)
        logger.info("Added task %s", task.short_id)

        self.notification_scheduler.schedule(task)
        self._persist()
        return task

    def toggle(self, task: Task) -> Optional[Task]:
        """
        Flip completion of `task` (matched by id).

        Returns:
            The updated Task, or None if it is no longer in the list (no-op)

        Notes:
            - Completing cancels the task's reminder
            - Reopening reschedules it if the expiry is still ahead
        """
        new_tasks = logic.toggle_task(task, self._tasks)
        if new_tasks is None:
            logger.debug("Toggle ignored: task %s not in list", task.short_id)
            return None

        self._tasks = new_tasks
        updated = next(t for t in self._tasks if t.id == task.id)
        self.haptic_feedback.impact_occurred()

        if updated.is_completed:
            self.notification_scheduler.cancel(updated)
        elif updated.expires_at is not None and updated.expires_at > self.date_provider.now():
            self.notification_scheduler.schedule(updated)

        logger.info(
            "Task %s marked %s", updated.short_id,
            "done" if updated.is_completed else "not done",
        )
        self._persist()
        return updated

    def remove_expired_day_tasks(self) -> None:
        kept = logic.filter_expired_day_tasks(self._tasks, self.date_provider.now(), self.tz)
        self._drop(kept, "from previous days")
        self._persist()

    def remove_individually_expired_tasks(self) -> None:
        kept = logic.filter_individually_expired(self._tasks, self.date_provider.now())
        self._drop(kept, "past their expiry")
        self._persist()

    def refresh(self) -> None:
        """Re-apply both expiry rules at the current instant."""
        self.remove_expired_day_tasks()
        self.remove_individually_expired_tasks()

    def pending_today(self) -> List[Task]:
        return [task for task in self._tasks if not task.is_completed]

    def resolve(self, ref: str) -> Task:
        """
        Find a task from a user-typed reference.

        Args:
            ref: 1-based position in the current list ("2"), or a prefix of
                 the task id (at least MIN_ID_PREFIX_LENGTH hex characters).
                 A number past the end of the list is tried as an id prefix.

        Returns:
            Matching Task

        Raises:
            TaskNotFoundError: If nothing matches
            InvalidInputError: If an id prefix is too short or ambiguous
        """
        ref = ref.strip().lower()
        if ref.isdigit():
            position = int(ref)
            if 1 <= position <= len(self._tasks):
                return self._tasks[position - 1]
            if len(ref) < MIN_ID_PREFIX_LENGTH:
                raise TaskNotFoundError(ref)

        prefix = ref.replace("-", "")
        if len(prefix) < MIN_ID_PREFIX_LENGTH:
            raise InvalidInputError(
                f"Task id prefix '{ref}' is too short (need {MIN_ID_PREFIX_LENGTH}+ characters)"
            )

        matches = [task for task in self._tasks if task.id.hex.startswith(prefix)]
        if not matches:
            raise TaskNotFoundError(ref)
        if len(matches) > 1:
            raise InvalidInputError(f"Task id prefix '{ref}' matches {len(matches)} tasks")
        return matches[0]

    def _load(self) -> None:
        self._tasks = self.store.load()

    def _persist(self) -> None:
        self.store.save(self._tasks)
        self.widget_reloader.reload_all_timelines()

    def _drop(self, kept: List[Task], reason: str) -> None:
        kept_ids = {task.id for task in kept}
        removed = [task for task in self._tasks if task.id not in kept_ids]
        self._tasks = kept
        if not removed:
            return
        logger.info("Removed %d task(s) %s", len(removed), reason)
        for task in removed:
            self.notification_scheduler.cancel(task)
