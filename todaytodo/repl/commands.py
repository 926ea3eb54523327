"""
FILE: todaytodo/repl/commands.py
PURPOSE: REPL command handlers
EXPORTS:
  - handle_add_command(result, ctx, console)
  - handle_ls_command(result, ctx, console)
  - handle_done_command(result, ctx, console)
  - handle_widget_command(result, ctx, console)
  - handle_reminders_command(result, ctx, console)
  - handle_help_command(result, ctx, console)
  - handle_clear_command(result, ctx, console)
  - HANDLERS: command name -> handler
DEPENDENCIES:
  - rich (output)
  - todaytodo.bootstrap (AppContext, expiry_for_time_of_day)
  - todaytodo.formatting, todaytodo.widget (display)
NOTES:
  - Handlers print errors and return; the loop keeps running
  - The caller refreshes the service before each command
"""

from typing import Callable, Dict

from rich.console import Console
from rich.markup import escape

from ..bootstrap import AppContext, expiry_for_time_of_day
from ..core.exceptions import TodayTodoError
from ..formatting import TaskFormatter, format_reminders_table
from ..widget import render_widget
from .parser import ParseResult


def handle_add_command(result: ParseResult, ctx: AppContext, console: Console) -> None:
    """
    Usage:
        add Buy milk
        add "Call the bank" --at 16:30
    """
    at = result.flags.get("at")
    if at is True:
        console.print("[red]Error:[/red] --at needs a time, e.g. --at 16:30")
        return

    try:
        expires_at = expiry_for_time_of_day(at, ctx.date_provider.now(), ctx.tz) if at else None
        task = ctx.service.add_task(result.text, expires_at=expires_at)
    except TodayTodoError as e:
        console.print(f"[red]Error:[/red] {e}")
        return

    console.print(f"[green]✓ Added:[/green] {escape(task.title)}")
    if expires_at is not None:
        console.print(f"[dim]Expires and reminds at {TaskFormatter.format_expiry(task, ctx.tz)}[/dim]")


def handle_ls_command(result: ParseResult, ctx: AppContext, console: Console) -> None:
    tasks = ctx.service.pending_today() if result.flags.get("pending") else list(ctx.service.tasks)
    if not tasks:
        console.print("[dim]No tasks for today[/dim]")
        return
    console.print(TaskFormatter.create_table(tasks, tz=ctx.tz, show_ids=False))


def handle_done_command(result: ParseResult, ctx: AppContext, console: Console) -> None:
    """
    Usage:
        done 2
        done 2,4
    """
    if not result.args:
        console.print("[red]Error:[/red] Which task? e.g. done 2")
        return

    # Resolve every reference first so positions don't shift mid-way
    refs = [ref.strip() for ref in result.args[0].split(",") if ref.strip()]
    try:
        targets = [ctx.service.resolve(ref) for ref in refs]
    except TodayTodoError as e:
        console.print(f"[red]Error:[/red] {e}")
        return

    for target in targets:
        updated = ctx.service.toggle(target)
        if updated is None:
            continue
        if updated.is_completed:
            console.print(f"[green]✓ Done:[/green] {escape(updated.title)}")
        else:
            console.print(f"[yellow]○ Reopened:[/yellow] {escape(updated.title)}")


def handle_widget_command(result: ParseResult, ctx: AppContext, console: Console) -> None:
    console.print(render_widget(ctx.widget.current_entry()))


def handle_reminders_command(result: ParseResult, ctx: AppContext, console: Console) -> None:
    due = bool(result.flags.get("due"))
    payloads = ctx.reminders.due(ctx.date_provider.now()) if due else ctx.reminders.pending()
    if not payloads:
        console.print("[dim]No reminders[/dim]")
        return
    console.print(format_reminders_table(payloads))


def handle_help_command(result: ParseResult, ctx: AppContext, console: Console) -> None:
    console.print("\n[bold]Commands:[/bold]")
    rows = [
        ("add <title> [--at HH:MM]", "Create a task for today"),
        ("ls [--pending]", "List today's tasks"),
        ("done <n>[,<n>...]", "Toggle tasks done / not done"),
        ("widget", "Show the Today widget"),
        ("reminders [--due]", "List scheduled reminders"),
        ("clear", "Clear the screen"),
        ("exit", "Leave (or Ctrl+D)"),
    ]
    for usage, description in rows:
        console.print(f"  [green]{usage:28}[/green] {description}")


def handle_clear_command(result: ParseResult, ctx: AppContext, console: Console) -> None:
    console.clear()


HANDLERS: Dict[str, Callable[[ParseResult, AppContext, Console], None]] = {
    "add": handle_add_command,
    "ls": handle_ls_command,
    "done": handle_done_command,
    "widget": handle_widget_command,
    "reminders": handle_reminders_command,
    "help": handle_help_command,
    "clear": handle_clear_command,
}
