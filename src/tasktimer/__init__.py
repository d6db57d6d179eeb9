"""tasktimer - a personal time-tracking CLI.

Start, list, complete and delete named tasks. Each task records a start
time, an optional end time and optional tags. Tasks are kept in a JSON
file between invocations.

Example:
    >>> from tasktimer import Task, TaskStore
    >>> store = TaskStore.from_file("store.json")
    >>> task_id, task = store.add(Task.create_now("write report", ["work"]))
    >>> store.save()
"""

from tasktimer.config import (
    SettingsContext,
    TaskTimerSettings,
    get_settings,
    reload_settings,
    set_settings,
)
from tasktimer.errors import (
    CorruptStoreError,
    DateParseError,
    StoreError,
    StoreIOError,
    TaskNotFoundError,
    TaskTimerError,
    UsageError,
)
from tasktimer.tasks import ListKind, Task, TaskStore
from tasktimer.timeutil import local_now, parse_local_datetime

__all__ = [
    # Tasks
    "ListKind",
    "Task",
    "TaskStore",
    # Time
    "local_now",
    "parse_local_datetime",
    # Errors
    "CorruptStoreError",
    "DateParseError",
    "StoreError",
    "StoreIOError",
    "TaskNotFoundError",
    "TaskTimerError",
    "UsageError",
    # Settings
    "SettingsContext",
    "TaskTimerSettings",
    "get_settings",
    "reload_settings",
    "set_settings",
]

__version__ = "0.2.0"
