"""
FILE: todaytodo/core/exceptions.py
PURPOSE: Custom exception classes for error handling
EXPORTS:
  - TodayTodoError (base exception)
  - TaskNotFoundError
  - InvalidInputError
  - TaskStoreError
  - ConfigError
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - All exceptions inherit from TodayTodoError for easy catching
  - The pure core never raises these; a missing toggle target is signalled
    by returning None (see core.logic.toggle_task)
  - Service layer raises these, UI layers catch and display
"""


class TodayTodoError(Exception):
    """Base exception for all todaytodo errors."""
    pass


class TaskNotFoundError(TodayTodoError):
    """No visible task matches the given reference."""

    def __init__(self, ref: str):
        self.ref = ref
        super().__init__(f"Task {ref} not found")


class InvalidInputError(TodayTodoError):
    """Input validation failed."""
    pass


class TaskStoreError(TodayTodoError):
    """Persisted state could not be written."""

    def __init__(self, path, reason: str):
        self.path = path
        super().__init__(f"Could not write {path}: {reason}")


class ConfigError(TodayTodoError):
    """Settings could not be resolved."""
    pass
