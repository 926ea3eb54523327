"""
FILE: todaytodo/cli/commands/__init__.py
PURPOSE: CLI command modules
"""

# Export all command handlers for easy importing
from .tasks import (
    add,
    ls,
    done,
)
from .today import (
    widget,
    reminders,
)
from .system import (
    version,
    help,
    repl,
)

__all__ = [
    "add",
    "ls",
    "done",
    "widget",
    "reminders",
    "version",
    "help",
    "repl",
]
