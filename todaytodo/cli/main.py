"""
FILE: todaytodo/cli/main.py
PURPOSE: Typer-based CLI for one-shot task commands
EXPORTS:
  - app (Typer application)
  - main() (entry point)
  - load_context() -> AppContext
  - print_plain(text) - Print without Rich markup/highlighting
  - version() - Show version
  - help() - Show command list and usage
  - repl() - Launch interactive REPL
  - add() - Create task
  - ls() - List today's tasks
  - done() - Toggle task completion
  - widget() - Show the Today widget
  - reminders() - List scheduled reminders
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output)
  - todaytodo.bootstrap (service wiring)
  - todaytodo.config (settings)
  - todaytodo.logging_setup (logging)
  - todaytodo.core.exceptions (error handling)
NOTES:
  - Commands supporting it take --json and --raw flags
  - Error messages go to stderr
  - Exit codes: 0=success, 1=error
  - Every command that touches tasks builds the service first, which drops
    expired tasks before anything is shown
"""

import logging
from typing import Optional

import typer
from rich.console import Console

from .. import __version__
from ..bootstrap import AppContext, create_app_context
from ..config import get_settings
from ..core.exceptions import TodayTodoError
from ..core.ports import DateProvider
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)

# Typer app setup
app = typer.Typer(
    name="todaytodo",
    help="Daily task tracker: tasks that expire at the end of the day",
    add_completion=False,
)

# Rich console for formatted output
console = Console()
error_console = Console(stderr=True)

# Clock used by load_context(); None means the system clock
date_provider: Optional[DateProvider] = None


def print_plain(text: str) -> None:
    """Print machine-readable output untouched by Rich markup or wrapping."""
    console.print(text, markup=False, emoji=False, highlight=False, soft_wrap=True)


def fail(message: str) -> None:
    """Print an error to stderr and exit with status 1."""
    error_console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


def load_context() -> AppContext:
    """Build settings, collaborators and service, or exit with an error."""
    try:
        return create_app_context(get_settings(), date_provider)
    except TodayTodoError as e:
        fail(str(e))


@app.callback(invoke_without_command=True)
def default_command(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs on stderr"),
):
    """
    Set up logging, then launch the REPL when no command is given.
    """
    try:
        settings = get_settings()
    except TodayTodoError as e:
        fail(str(e))

    console_level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.WARNING)
    setup_logging(log_path=settings.log_path, console_level=console_level)
    logger.debug("todaytodo %s starting (command=%s)", __version__, ctx.invoked_subcommand)

    if ctx.invoked_subcommand is None:
        from ..repl import main as repl_main
        try:
            repl_main()
        except TodayTodoError as e:
            fail(str(e))


# Import command modules to register commands with app
# Commands are decorated with @app.command() in their modules
from .commands import (  # noqa: E402
    # System commands
    version,
    help,
    repl,
    # Task commands
    add,
    ls,
    done,
    # Today commands
    widget,
    reminders,
)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
