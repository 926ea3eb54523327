"""
FILE: todaytodo/logging_setup.py
PURPOSE: Logging configuration for the CLI and REPL
EXPORTS:
  - setup_logging(log_path, console_level, file_level) -> None
DEPENDENCIES:
  - logging (stdlib)
NOTES:
  - Console handler writes to stderr so --json output on stdout stays clean
  - File handler keeps everything at DEBUG for later inspection
"""

import logging
import sys
from pathlib import Path

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the interactive console readable:
    - allow todaytodo logs at the configured level
    - third-party and captured Python warnings only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "todaytodo" or record.name.startswith("todaytodo."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_path: str | Path,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Configure logging with:
    - Console handler: filtered, stderr
    - File handler: full logs for debugging

    Call this once, before the first log call.
    """
    log_path = Path(log_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_path), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
