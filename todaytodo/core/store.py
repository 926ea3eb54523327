"""
FILE: todaytodo/core/store.py
PURPOSE: Persistence of the task collection as a JSON file
EXPORTS:
  - JsonFileTaskStore (file-backed TaskStore)
  - InMemoryTaskStore (TaskStore for tests and previews)
  - read_json(path) -> Any
  - write_json_atomic(path, data) -> None
DEPENDENCIES:
  - json (stdlib)
  - logging (stdlib)
  - os, tempfile (atomic replace)
  - pathlib (stdlib)
  - todaytodo.core.models (Task)
  - todaytodo.core.exceptions (TaskStoreError)
NOTES:
  - File holds a JSON array of task records, in collection order
  - Missing file loads as an empty collection
  - Unreadable or malformed file is moved aside to "<name>.corrupt" and
    loads as an empty collection (logged at WARNING)
  - Writes go to a temp file in the same directory, then os.replace()
  - Parent directory is created on first save
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, List, Optional

from .exceptions import TaskStoreError
from .models import Task

logger = logging.getLogger(__name__)


def read_json(path: Path) -> Any:
    """Read and decode a JSON file. Raises OSError / ValueError on failure."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json_atomic(path: Path, data: Any) -> None:
    """
    Write `data` as JSON to `path` atomically.

    Raises:
        TaskStoreError: If the directory or file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        raise TaskStoreError(path, str(e)) from e


class JsonFileTaskStore:
    """TaskStore backed by a single JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> List[Task]:
        if not self.path.exists():
            logger.debug("No task file at %s, starting empty", self.path)
            return []

        try:
            records = read_json(self.path)
            if not isinstance(records, list):
                raise ValueError("expected a JSON array of tasks")
            tasks = [Task.from_dict(record) for record in records]
        except (OSError, ValueError, KeyError, TypeError) as e:
            self._quarantine(e)
            return []

        logger.debug("Loaded %d task(s) from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: List[Task]) -> None:
        write_json_atomic(self.path, [task.to_dict() for task in tasks])
        logger.debug("Saved %d task(s) to %s", len(tasks), self.path)

    def _quarantine(self, error: Exception) -> None:
        backup = self.path.with_name(self.path.name + ".corrupt")
        logger.warning(
            "Task file %s is unreadable (%s); moving it to %s and starting empty",
            self.path, error, backup,
        )
        try:
            os.replace(self.path, backup)
        except OSError as e:
            logger.warning("Could not move %s aside: %s", self.path, e)


class InMemoryTaskStore:
    """TaskStore that keeps the collection in memory."""

    def __init__(self, tasks: Optional[List[Task]] = None):
        self.tasks: List[Task] = list(tasks or [])
        self.save_count = 0

    def load(self) -> List[Task]:
        return list(self.tasks)

    def save(self, tasks: List[Task]) -> None:
        self.tasks = list(tasks)
        self.save_count += 1
