"""
FILE: todaytodo/repl/parser.py
PURPOSE: Parse REPL input into command, arguments and flags
EXPORTS:
  - ParseResult (dataclass for parsed commands)
  - parse_command(input_str) -> ParseResult
DEPENDENCIES:
  - shlex (for shell-like parsing with quotes)
NOTES:
  - Quoted strings stay one argument: add "call the bank"
  - "--at 16:30" style flags take the next token as value;
    "--pending" style flags with no value are True
  - Command names are case-insensitive
"""

import shlex
from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class ParseResult:
    """
    Result of parsing a REPL line.

    Attributes:
        command: Command name ("add", "ls", "done", ...)
        args: Positional arguments
        flags: Flags by name, e.g. {"at": "16:30", "pending": True}
        raw_input: Input line, stripped
    """
    command: str
    args: List[str] = field(default_factory=list)
    flags: Dict[str, str | bool] = field(default_factory=dict)
    raw_input: str = ""

    @property
    def text(self) -> str:
        """Positional arguments joined back into one string (task titles)."""
        return " ".join(self.args)


def parse_command(input_str: str) -> ParseResult:
    """
    Parse a REPL line.

    Examples:
        >>> parse_command("add Buy milk --at 18:00")
        ParseResult(command='add', args=['Buy', 'milk'], flags={'at': '18:00'}, raw_input='add Buy milk --at 18:00')

        >>> parse_command("ls --pending")
        ParseResult(command='ls', args=[], flags={'pending': True}, raw_input='ls --pending')

    Notes:
        - Unbalanced quotes fall back to plain whitespace splitting
        - Empty input returns command=""
    """
    input_str = input_str.strip()
    if not input_str:
        return ParseResult(command="", raw_input=input_str)

    try:
        tokens = shlex.split(input_str)
    except ValueError:
        tokens = input_str.split()

    if not tokens:
        return ParseResult(command="", raw_input=input_str)

    command = tokens[0].lower()
    args: List[str] = []
    flags: Dict[str, str | bool] = {}

    i = 1
    while i < len(tokens):
        token = tokens[i]
        if token.startswith("--") and len(token) > 2:
            name = token[2:]
            if i + 1 < len(tokens) and not tokens[i + 1].startswith("--"):
                flags[name] = tokens[i + 1]
                i += 2
            else:
                flags[name] = True
                i += 1
        else:
            args.append(token)
            i += 1

    return ParseResult(command=command, args=args, flags=flags, raw_input=input_str)
