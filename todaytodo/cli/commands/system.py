"""
FILE: todaytodo/cli/commands/system.py
PURPOSE: System commands (version, help, repl)
"""

import typer

# Import shared objects from main module
# These will be available after main.py imports this module
from ..main import app, console, error_console
from ... import __version__
from ...core.exceptions import TodayTodoError


@app.command()
def version():
    """Show todaytodo version."""
    console.print(f"todaytodo v{__version__}")


@app.command()
def help():
    """Show available commands and usage."""
    console.print("\n[bold cyan]todaytodo[/bold cyan] - Tasks for today, gone tomorrow\n")
    console.print(f"[dim]Version {__version__}[/dim]\n")

    console.print("[bold]Usage:[/bold]")
    console.print("  todaytodo [command] [options]")
    console.print("  todaytodo                    [dim]# Launch interactive REPL (default)[/dim]\n")

    console.print("[bold]Commands:[/bold]")

    commands = [
        ("add", "Create a task for today", 'todaytodo add "Task title" [--at HH:MM]'),
        ("ls", "List today's tasks", "todaytodo ls [--pending]"),
        ("done", "Toggle a task done / not done", "todaytodo done <number | id prefix>"),
        ("widget", "Show the Today widget", "todaytodo widget"),
        ("reminders", "List scheduled reminders", "todaytodo reminders [--due]"),
        ("repl", "Launch interactive REPL", "todaytodo repl"),
        ("version", "Show version", "todaytodo version"),
        ("help", "Show this help message", "todaytodo help"),
    ]

    for cmd, desc, example in commands:
        console.print(f"  [green]{cmd:10}[/green] {desc}")
        console.print(f"             [dim]{example}[/dim]\n")

    console.print("[bold]Global Options:[/bold]")
    console.print("  [yellow]--verbose[/yellow] Show debug logs on stderr")
    console.print("  [yellow]--json[/yellow]    Output as JSON (for scripting)")
    console.print("  [yellow]--raw[/yellow]     Plain text output (no colors)")
    console.print("  [yellow]--help[/yellow]    Show detailed help for a command\n")

    console.print("[bold]Notes:[/bold]")
    console.print("  Tasks disappear at midnight, or earlier at their --at time.")
    console.print("  Data lives in ~/.todaytodo (override with TODAYTODO_DATA_DIR).\n")


@app.command()
def repl():
    """
    Launch interactive REPL mode.

    The REPL provides:
    - Command history (up/down arrows)
    - Autocomplete (Tab key)
    - Exit with Ctrl+D or type 'exit'

    Example:
        todaytodo repl
    """
    # Import here to avoid loading REPL dependencies for one-shot commands
    from ...repl import main as repl_main

    try:
        repl_main()
    except TodayTodoError as e:
        error_console.print(f"[red]Error starting REPL:[/red] {e}")
        raise typer.Exit(1)
