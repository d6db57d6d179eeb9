"""Time-tracked tasks and their file-backed store.

Example:
    >>> store = TaskStore.from_file(Path("store.json"))
    >>> task_id, _ = store.add(Task.create_now("Write report", ["work"]))
    >>> store.running_tasks()
"""

from tasktimer.tasks.models import ListKind, Task
from tasktimer.tasks.store import TaskStore

__all__ = ["ListKind", "Task", "TaskStore"]
