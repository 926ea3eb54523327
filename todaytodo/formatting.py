"""
FILE: todaytodo/formatting.py
PURPOSE: Shared formatting utilities for CLI and REPL output
EXPORTS:
  - TaskFormatter: Class for formatting tasks
  - format_reminders_table(reminders) -> Table
  - parse_time_of_day(text) -> time
DEPENDENCIES:
  - rich (for table formatting)
  - json (for JSON serialization)
  - todaytodo.core.models (Task)
  - todaytodo.core.notifications (ReminderPayload)
NOTES:
  - Centralized formatting logic for consistency
  - Used by both CLI and REPL
  - Position column ("#") is what `done <n>` refers to
"""

import json
from datetime import time, tzinfo
from typing import List, Optional, Sequence

from rich.markup import escape
from rich.table import Table

from .core.exceptions import InvalidInputError
from .core.models import Task
from .core.notifications import ReminderPayload


class TaskFormatter:
    """Centralized task display formatting."""

    @staticmethod
    def format_expiry(task: Task, tz: Optional[tzinfo] = None) -> str:
        """Expiry as local HH:MM, or "-" when the task only ends with the day."""
        if task.expires_at is None:
            return "-"
        return task.expires_at.astimezone(tz).strftime("%H:%M")

    @staticmethod
    def create_table(
        tasks: Sequence[Task],
        title: str = "Today",
        tz: Optional[tzinfo] = None,
        show_ids: bool = True,
    ) -> Table:
        """
        Create Rich table for tasks.

        Args:
            tasks: Tasks to display, in list order
            title: Table title
            tz: Zone used to show expiry times
            show_ids: Whether to show the short id column

        Returns:
            Rich Table object ready for display
        """
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("#", style="cyan", width=3, no_wrap=True)
        if show_ids:
            table.add_column("ID", style="dim", width=8, no_wrap=True)
        table.add_column("Status", width=6)
        table.add_column("Title", style="white")
        table.add_column("Expires", style="magenta", width=7)

        for position, task in enumerate(tasks, 1):
            status = "[green]✓[/green]" if task.is_completed else "[yellow]○[/yellow]"
            title_cell = escape(task.title)
            if task.is_completed:
                title_cell = f"[strike dim]{title_cell}[/strike dim]"

            row = [str(position)]
            if show_ids:
                row.append(task.short_id)
            row.extend([status, title_cell, TaskFormatter.format_expiry(task, tz)])
            table.add_row(*row)

        return table

    @staticmethod
    def to_json_array(tasks: Sequence[Task]) -> str:
        """Convert task list to JSON array string (persisted record shape)."""
        return json.dumps([t.to_dict() for t in tasks], indent=2, ensure_ascii=False)

    @staticmethod
    def to_raw_lines(tasks: Sequence[Task], tz: Optional[tzinfo] = None) -> List[str]:
        """
        Convert task list to plain text lines.

        Returns:
            One "<n>: [x] title (HH:MM)" line per task
        """
        lines = []
        for position, task in enumerate(tasks, 1):
            status_marker = "x" if task.is_completed else " "
            line = f"{position}: [{status_marker}] {task.title}"
            if task.expires_at is not None:
                line += f" ({TaskFormatter.format_expiry(task, tz)})"
            lines.append(line)
        return lines


def format_reminders_table(reminders: Sequence[ReminderPayload], title: str = "Reminders") -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Fires at", style="magenta", no_wrap=True)
    table.add_column("Task", style="white")
    table.add_column("ID", style="dim", no_wrap=True)
    for reminder in reminders:
        table.add_row(str(reminder.fire_at), escape(reminder.body), reminder.identifier[:8])
    return table


def parse_time_of_day(text: str) -> time:
    """
    Parse "HH:MM" (24-hour) into a time.

    Raises:
        InvalidInputError: If the text is not a valid time of day
    """
    parts = text.strip().split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise InvalidInputError(f"Invalid time '{text}' (expected HH:MM)")
    hour, minute = int(parts[0]), int(parts[1])
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise InvalidInputError(f"Invalid time '{text}' (expected HH:MM)")
    return time(hour, minute)
