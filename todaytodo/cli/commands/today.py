"""
FILE: todaytodo/cli/commands/today.py
PURPOSE: Today overview commands (widget, reminders)
"""

import json

import typer

from ..main import app, console, load_context, print_plain
from ...formatting import format_reminders_table
from ...widget import render_widget


@app.command()
def widget(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show the Today widget: pending count and the first few tasks.

    Example:
        todaytodo widget
    """
    ctx = load_context()
    entry = ctx.widget.current_entry()

    if json_output:
        print_plain(json.dumps(entry.to_dict(), indent=2, ensure_ascii=False))
        return

    console.print(render_widget(entry))


@app.command()
def reminders(
    due: bool = typer.Option(False, "--due", help="Only reminders whose time has come"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    List scheduled task reminders.

    Example:
        todaytodo reminders
        todaytodo reminders --due
    """
    ctx = load_context()
    if due:
        payloads = ctx.reminders.due(ctx.date_provider.now())
    else:
        payloads = ctx.reminders.pending()

    if json_output:
        print_plain(json.dumps([p.to_dict() for p in payloads], indent=2, ensure_ascii=False))
        return

    if not payloads:
        console.print("[dim]No reminders due[/dim]" if due else "[dim]No reminders scheduled[/dim]")
        return

    console.print(format_reminders_table(payloads, title="Due reminders" if due else "Reminders"))
