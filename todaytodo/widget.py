"""
FILE: todaytodo/widget.py
PURPOSE: "Today" widget - summary of pending tasks, its timeline snapshot
         and its terminal rendering
EXPORTS:
  - WidgetEntry (dataclass)
  - build_widget_entry(tasks, now, tz, refresh_minutes, preview_limit) -> WidgetEntry
  - render_widget(entry) -> Panel
  - SnapshotWidgetReloader (WidgetReloader writing widget.json)
DEPENDENCIES:
  - rich (Panel, Text, Table)
  - todaytodo.core.logic (filter_expired_day_tasks)
  - todaytodo.core.store (write_json_atomic)
NOTES:
  - The widget reads the persisted collection on its own and applies the
    day-boundary filter itself; the service never pushes state to it
  - Pending = created today and not completed
  - next_refresh is the timeline policy: rebuild after N minutes
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, tzinfo
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from rich.console import Group
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from .core.constants import DEFAULT_WIDGET_PREVIEW_LIMIT, DEFAULT_WIDGET_REFRESH_MINUTES
from .core.logic import filter_expired_day_tasks
from .core.models import Task
from .core.ports import DateProvider, TaskStore
from .core.store import write_json_atomic

logger = logging.getLogger(__name__)

ALL_DONE_MESSAGE = "All done 🎉"


@dataclass
class WidgetEntry:
    """One timeline entry of the widget."""

    date: datetime
    pending_count: int
    titles: List[str] = field(default_factory=list)
    next_refresh: Optional[datetime] = None

    @property
    def all_done(self) -> bool:
        return self.pending_count == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "pending_count": self.pending_count,
            "titles": list(self.titles),
            "next_refresh": self.next_refresh.isoformat() if self.next_refresh else None,
        }


def build_widget_entry(
    tasks: Sequence[Task],
    now: datetime,
    tz: Optional[tzinfo] = None,
    refresh_minutes: int = DEFAULT_WIDGET_REFRESH_MINUTES,
    preview_limit: int = DEFAULT_WIDGET_PREVIEW_LIMIT,
) -> WidgetEntry:
    """
    Summarize today's pending tasks.

    Args:
        tasks: Collection as persisted (may still hold yesterday's tasks)
        now: Reference instant
        tz: Zone whose calendar defines "today"
        refresh_minutes: Minutes until the next timeline rebuild
        preview_limit: Number of titles to keep for display

    Returns:
        WidgetEntry with the pending count and the first titles, in list order
    """
    pending = [t for t in filter_expired_day_tasks(tasks, now, tz) if not t.is_completed]
    return WidgetEntry(
        date=now,
        pending_count=len(pending),
        titles=[t.title for t in pending[:preview_limit]],
        next_refresh=now + timedelta(minutes=refresh_minutes),
    )


def render_widget(entry: WidgetEntry) -> Panel:
    """Render a widget entry as a small Rich panel."""
    header = Table.grid(expand=True)
    header.add_column(justify="left")
    header.add_column(justify="right")
    header.add_row(Text("Today", style="bold"), Text(str(entry.pending_count), style="dim"))

    if entry.all_done:
        body = Text(f"✓ {ALL_DONE_MESSAGE}", style="green", justify="center")
    else:
        body = Text()
        for index, title in enumerate(entry.titles):
            if index:
                body.append("\n")
            body.append("● ", style="cyan")
            body.append(title)

    return Panel(Group(header, Rule(style="dim"), body), width=36, padding=(0, 1))


class SnapshotWidgetReloader:
    """
    WidgetReloader that rebuilds the widget entry from the store and writes
    it to a JSON snapshot file.
    """

    def __init__(
        self,
        store: TaskStore,
        date_provider: DateProvider,
        path: Path,
        tz: Optional[tzinfo] = None,
        refresh_minutes: int = DEFAULT_WIDGET_REFRESH_MINUTES,
        preview_limit: int = DEFAULT_WIDGET_PREVIEW_LIMIT,
    ):
        self.store = store
        self.date_provider = date_provider
        self.path = Path(path)
        self.tz = tz
        self.refresh_minutes = refresh_minutes
        self.preview_limit = preview_limit

    def current_entry(self) -> WidgetEntry:
        return build_widget_entry(
            self.store.load(),
            self.date_provider.now(),
            self.tz,
            refresh_minutes=self.refresh_minutes,
            preview_limit=self.preview_limit,
        )

    def reload_all_timelines(self) -> None:
        entry = self.current_entry()
        write_json_atomic(self.path, entry.to_dict())
        logger.debug("Widget snapshot written: %d pending", entry.pending_count)
