"""
FILE: todaytodo/repl/main.py
PURPOSE: Interactive REPL with prompt-toolkit
EXPORTS:
  - main() - Entry point for REPL mode
  - run_repl(ctx) - Main REPL loop
  - execute_command(result, ctx) -> bool
DEPENDENCIES:
  - prompt_toolkit (history, completion, toolbar)
  - rich (formatted output)
  - todaytodo.bootstrap (service wiring)
  - todaytodo.repl.parser, todaytodo.repl.completer, todaytodo.repl.commands
NOTES:
  - Expiry rules are re-applied before every command, so a REPL left open
    past midnight or past a task's --at time shows the right list
  - Bottom toolbar shows pending/done counts
  - Without a TTY, falls back to plain input()
  - Ctrl+D or "exit"/"quit" to exit
"""

import logging
import sys
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory
from rich.console import Console

from ..bootstrap import AppContext, create_app_context
from ..config import get_settings
from ..core.exceptions import TodayTodoError
from .commands import HANDLERS
from .completer import create_completer
from .parser import ParseResult, parse_command

logger = logging.getLogger(__name__)

# Rich console for formatted output
console = Console()

PROMPT = "today> "


def get_bottom_toolbar(ctx: AppContext) -> HTML:
    tasks = ctx.service.tasks
    done_count = sum(1 for t in tasks if t.is_completed)
    pending_count = len(tasks) - done_count
    return HTML(
        f"<style bg='#444444' fg='#ffffff'> ○ {pending_count} pending | ✓ {done_count} done"
        " | 'help' for commands, Ctrl+D to quit </style>"
    )


def execute_command(result: ParseResult, ctx: AppContext) -> bool:
    """
    Execute a parsed command.

    Returns:
        True to continue the loop, False to exit
    """
    command = result.command

    if command in ("exit", "quit"):
        console.print("[dim]Goodbye![/dim]")
        return False

    if not command:
        return True

    handler = HANDLERS.get(command)
    if handler is None:
        console.print(f"[red]Unknown command:[/red] {command}")
        console.print("[dim]Type 'help' for available commands[/dim]")
        return True

    ctx.service.refresh()
    handler(result, ctx, console)
    console.print()
    return True


def run_repl(ctx: AppContext) -> None:
    """
    Main REPL loop.

    Exits on Ctrl+D (EOFError) or the "exit"/"quit" commands. Ctrl+C only
    clears the current line.
    """
    session: Optional[PromptSession] = None
    if sys.stdin.isatty() and sys.stdout.isatty():
        session = PromptSession(
            history=InMemoryHistory(),
            completer=create_completer(lambda: ctx.service.tasks),
            complete_while_typing=True,
            bottom_toolbar=lambda: get_bottom_toolbar(ctx),
        )

    console.print("[bold cyan]todaytodo[/bold cyan] - Type 'help' for commands, 'exit' to quit")
    if session is None:
        console.print("[dim](Running in simple mode - no autocomplete)[/dim]")
    console.print()

    while True:
        try:
            if session is None:
                user_input = input(PROMPT)
            else:
                user_input = session.prompt(HTML(f"<b>{PROMPT}</b>"))

            if not execute_command(parse_command(user_input), ctx):
                break

        except KeyboardInterrupt:
            console.print("[dim]^C (Press Ctrl+D or type 'exit' to quit)[/dim]")
            continue
        except EOFError:
            console.print()
            console.print("[dim]Goodbye![/dim]")
            break
        except TodayTodoError as e:
            logger.debug("Command failed", exc_info=True)
            console.print(f"[red]Error:[/red] {e}")


def main() -> None:
    """
    Entry point for REPL mode.

    Called when user runs: todaytodo repl (or just todaytodo)

    Raises:
        TodayTodoError: If settings or the data directory are unusable
    """
    ctx = create_app_context(get_settings())
    run_repl(ctx)
