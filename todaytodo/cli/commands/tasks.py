"""
FILE: todaytodo/cli/commands/tasks.py
PURPOSE: Task commands (add, ls, done)
"""

from typing import Optional

import typer
from rich.markup import escape

from ..main import app, console, error_console, fail, load_context, print_plain
from ...bootstrap import expiry_for_time_of_day
from ...core.exceptions import (
    TodayTodoError,
    TaskNotFoundError,
    InvalidInputError,
)
from ...formatting import TaskFormatter


@app.command()
def add(
    title: str = typer.Argument(..., help="Task title"),
    at: Optional[str] = typer.Option(None, "--at", "-a", help="Expire today at HH:MM (24h)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Create a task for today.

    Example:
        todaytodo add "Water the plants"
        todaytodo add "Call the bank" --at 16:30
    """
    ctx = load_context()
    try:
        expires_at = None
        if at is not None:
            expires_at = expiry_for_time_of_day(at, ctx.date_provider.now(), ctx.tz)

        task = ctx.service.add_task(title, expires_at=expires_at)

        if json_output:
            print_plain(task.to_json())
        elif raw:
            print_plain(f"{task.short_id}: {task.title}")
        else:
            console.print(f"[green]✓ Added[/green] [dim]{task.short_id}[/dim] {escape(task.title)}")
            if expires_at is not None:
                expiry = TaskFormatter.format_expiry(task, ctx.tz)
                if expires_at <= ctx.date_provider.now():
                    error_console.print(
                        f"[yellow]Warning:[/yellow] {expiry} has already passed; "
                        "the task will be gone on the next refresh"
                    )
                else:
                    console.print(f"[dim]Expires and reminds at {expiry}[/dim]")

    except InvalidInputError as e:
        fail(str(e))
    except TodayTodoError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def ls(
    pending: bool = typer.Option(False, "--pending", help="Only tasks not done yet"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    List today's tasks (expired ones are removed first).

    Example:
        todaytodo ls
        todaytodo ls --pending
        todaytodo ls --json
    """
    ctx = load_context()
    tasks = ctx.service.pending_today() if pending else list(ctx.service.tasks)

    if json_output:
        print_plain(TaskFormatter.to_json_array(tasks))
        return

    if raw:
        for line in TaskFormatter.to_raw_lines(tasks, ctx.tz):
            print_plain(line)
        return

    if not tasks:
        console.print("[dim]No tasks for today[/dim]")
        console.print("[dim]Use 'todaytodo add \"Title\"' to add one[/dim]")
        return

    today = ctx.date_provider.now().astimezone(ctx.tz)
    console.print(TaskFormatter.create_table(tasks, title=f"Today ({today:%a %d %b})", tz=ctx.tz))
    done_count = sum(1 for t in ctx.service.tasks if t.is_completed)
    console.print(f"\n[dim]{done_count}/{len(ctx.service.tasks)} done[/dim]")


@app.command()
def done(
    ref: str = typer.Argument(..., help="Task number from 'ls', or id prefix"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Toggle a task between done and not done.

    Example:
        todaytodo done 2
        todaytodo done 3f9a
    """
    ctx = load_context()
    try:
        task = ctx.service.resolve(ref)
        updated = ctx.service.toggle(task)
    except (TaskNotFoundError, InvalidInputError) as e:
        fail(str(e))
    except TodayTodoError as e:
        error_console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)

    if updated is None:
        console.print(f"[dim]Task {ref} is no longer in today's list[/dim]")
        return

    if json_output:
        print_plain(updated.to_json())
    elif updated.is_completed:
        console.print(f"[green]✓ Done:[/green] {escape(updated.title)}")
    else:
        console.print(f"[yellow]○ Reopened:[/yellow] {escape(updated.title)}")
