"""
FILE: todaytodo/core/logic.py
PURPOSE: Pure task lifecycle and filtering rules
EXPORTS:
  - wall_clock(naive, tz) -> datetime
  - start_of_day(now, tz) -> datetime
  - filter_expired_day_tasks(tasks, now, tz) -> List[Task]
  - filter_individually_expired(tasks, now) -> List[Task]
  - toggle_task(task, tasks) -> Optional[List[Task]]
  - append_task(tasks, task) -> List[Task]
  - can_submit(title) -> bool
  - merge_time_with_today(time, tz, today) -> datetime
DEPENDENCIES:
  - dataclasses (stdlib)
  - datetime (stdlib)
  - logging (stdlib)
  - todaytodo.core.models (Task)
NOTES:
  - Every function is deterministic in its arguments: "now" is always passed
    in, never read from the clock
  - Every transform returns a new list; inputs are never mutated
  - Input order is preserved by filters, toggle and append
  - tz=None means the system's local zone
"""

import logging
from dataclasses import replace
from datetime import datetime, tzinfo
from typing import List, Optional, Sequence

from .models import Task

logger = logging.getLogger(__name__)


def wall_clock(naive: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    Attach `tz` to a naive wall-clock time.

    With tz=None the system zone supplies the offset in effect on that date,
    not the offset of whatever instant the wall-clock fields came from.
    """
    if tz is None:
        return naive.astimezone()
    return naive.replace(tzinfo=tz)


def start_of_day(now: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    Return midnight of the calendar day containing `now`.

    Args:
        now: Reference instant
        tz: Zone whose calendar defines the day (None = system local zone)

    Returns:
        Timezone-aware instant at 00:00:00 of that day
    """
    local = now.astimezone(tz)
    return wall_clock(datetime.combine(local.date(), datetime.min.time()), tz)


def filter_expired_day_tasks(
    tasks: Sequence[Task],
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> List[Task]:
    """
    Keep only tasks created on or after the start of `now`'s day.

    A task created exactly at midnight belongs to that day. Completion state
    and individual expiry play no part here.
    """
    day_start = start_of_day(now, tz)
    return [task for task in tasks if task.created_at >= day_start]


def filter_individually_expired(tasks: Sequence[Task], now: datetime) -> List[Task]:
    """
    Keep tasks with no expiry or whose expiry is still in the future.

    A task expires at the exact instant `expires_at` is reached, so
    `expires_at == now` drops it.
    """
    return [
        task for task in tasks
        if task.expires_at is None or task.expires_at > now
    ]


def toggle_task(task: Task, tasks: Sequence[Task]) -> Optional[List[Task]]:
    """
    Flip completion of the task with the same id as `task`.

    Args:
        task: Target task; only its id is used for matching
        tasks: Current collection

    Returns:
        New list with the first matching task's is_completed inverted,
        or None if no task in `tasks` has that id
    """
    for index, candidate in enumerate(tasks):
        if candidate.id == task.id:
            result = list(tasks)
            result[index] = replace(candidate, is_completed=not candidate.is_completed)
            return result
    return None


def append_task(tasks: Sequence[Task], task: Task) -> List[Task]:
    """Return a new list with `task` added at the end."""
    return [*tasks, task]


def can_submit(title: str) -> bool:
    """Whether a task with this title may be created (non-blank after trimming)."""
    return bool(title.strip())


def merge_time_with_today(
    time: datetime,
    tz: Optional[tzinfo] = None,
    *,
    today: datetime,
) -> datetime:
    """
    Place the hour and minute of `time` on the calendar day of `today`.

    Args:
        time: Instant whose hour/minute (in `tz`) are used
        tz: Zone for reading both instants (None = system local zone)
        today: Instant whose calendar date (in `tz`) is used

    Returns:
        The merged instant with seconds and microseconds zeroed, or `today`
        unchanged if the components cannot be read or combined
    """
    try:
        picked = time.astimezone(tz)
        day = today.astimezone(tz)
        merged = day.replace(tzinfo=None, hour=picked.hour, minute=picked.minute, second=0, microsecond=0)
        return wall_clock(merged, tz)
    except (ValueError, OverflowError, OSError) as e:
        logger.debug("Could not merge %r onto %r: %s", time, today, e)
        return today
