"""
FILE: todaytodo/repl/completer.py
PURPOSE: Autocomplete for REPL commands, flags and task numbers
EXPORTS:
  - TodayCompleter (Completer for command/arg completion)
  - create_completer(task_source) -> TodayCompleter
DEPENDENCIES:
  - prompt_toolkit.completion (Completer, Completion)
NOTES:
  - Suggests command names at the start of the line
  - Suggests flags after a command
  - Suggests task numbers (with their titles as meta) after "done"
  - Case-insensitive matching
"""

from typing import Callable, Iterable, Optional, Sequence

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from ..core.models import Task


class TodayCompleter(Completer):
    """
    Context-aware completer for the todaytodo REPL.

    Args:
        task_source: Returns the current task list (for "done" numbers)
    """

    COMMANDS = {
        "add": "Create a task for today",
        "ls": "List today's tasks",
        "done": "Toggle a task done / not done",
        "widget": "Show the Today widget",
        "reminders": "List scheduled reminders",
        "help": "Show available commands",
        "clear": "Clear the screen",
        "exit": "Exit the REPL",
        "quit": "Exit the REPL",
    }

    COMMAND_FLAGS = {
        "add": {"--at": "Expire today at HH:MM"},
        "ls": {"--pending": "Only tasks not done yet"},
        "reminders": {"--due": "Only reminders whose time has come"},
    }

    def __init__(self, task_source: Optional[Callable[[], Sequence[Task]]] = None):
        self.task_source = task_source

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        text_before_cursor = document.text_before_cursor
        words = text_before_cursor.split()
        at_word_boundary = text_before_cursor.endswith(" ")

        # Typing the command itself
        if not words or (len(words) == 1 and not at_word_boundary):
            yield from self._complete_commands(words[0] if words else "")
            return

        command = words[0].lower()
        current = "" if at_word_boundary else words[-1]

        if current.startswith("-"):
            yield from self._complete_flags(command, current)
            return

        if command == "done" and (len(words) == 1 or (len(words) == 2 and not at_word_boundary)):
            yield from self._complete_task_numbers(current)

    def _complete_commands(self, word: str) -> Iterable[Completion]:
        word_lower = word.lower()
        for name, description in self.COMMANDS.items():
            if name.startswith(word_lower):
                yield Completion(name, start_position=-len(word), display_meta=description)

    def _complete_flags(self, command: str, word: str) -> Iterable[Completion]:
        for flag, description in self.COMMAND_FLAGS.get(command, {}).items():
            if flag.startswith(word.lower()):
                yield Completion(flag, start_position=-len(word), display_meta=description)

    def _complete_task_numbers(self, word: str) -> Iterable[Completion]:
        if self.task_source is None:
            return
        for position, task in enumerate(self.task_source(), 1):
            number = str(position)
            if number.startswith(word):
                title = task.title if len(task.title) <= 40 else task.title[:37] + "..."
                marker = "✓ " if task.is_completed else ""
                yield Completion(number, start_position=-len(word), display_meta=marker + title)


def create_completer(task_source: Optional[Callable[[], Sequence[Task]]] = None) -> TodayCompleter:
    """Create the REPL completer."""
    return TodayCompleter(task_source)
