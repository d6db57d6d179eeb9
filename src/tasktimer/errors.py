"""Exception hierarchy for tasktimer.

Everything the command line reports to the user derives from
TaskTimerError. Store failures carry the path they happened on.
"""

from pathlib import Path


class TaskTimerError(Exception):
    """Base class for all tasktimer errors."""

    pass


class StoreError(TaskTimerError):
    """Raised when the task store file cannot be loaded or saved."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class StoreIOError(StoreError):
    """File system failure other than a missing file on load."""

    pass


class CorruptStoreError(StoreError):
    """The store file exists but does not hold a valid task mapping."""

    pass


class TaskNotFoundError(TaskTimerError):
    """Raised by the command layer when a task ID is not in the store."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task with ID {task_id} does not exist")
        self.task_id = task_id


class DateParseError(TaskTimerError, ValueError):
    """A date string did not match any accepted format."""

    pass


class UsageError(TaskTimerError):
    """Invalid command line: unknown command, missing or bad argument."""

    pass
