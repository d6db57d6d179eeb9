"""File-based task store.

A single JSON file holds every task keyed by a small integer ID:

    {"tasks": {"1": {"name": ..., "tags": [...], "start_time": ..., "end_time": ...}}}

The store is bound to its file when loaded and writes the whole mapping
back atomically on save(). IDs are allocated by the store, reusing the
smallest free slot.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from tasktimer.errors import CorruptStoreError, StoreIOError
from tasktimer.logging import Loggers
from tasktimer.persistence import atomic_write_json
from tasktimer.tasks.models import ListKind, Task

logger = Loggers.persistence()

MAX_TASK_ID = 2**32 - 1

TaskEntry = tuple[int, Task]


class TaskStore:
    """Persistent task store bound to one JSON file.

    Example:
        >>> store = TaskStore.from_file(Path("store.json"))
        >>> task_id, task = store.add(Task.create_now("write docs", ["docs"]))
        >>> store.get(task_id).complete_now()
        >>> store.save()
    """

    def __init__(self, path: Path, tasks: dict[int, Task] | None = None) -> None:
        self._path = Path(path)
        self._tasks: dict[int, Task] = dict(tasks or {})

    @property
    def path(self) -> Path:
        """File this store loads from and saves to."""
        return self._path

    @classmethod
    def from_file(cls, path: Path | str) -> "TaskStore":
        """Load a store from ``path``.

        A missing file gives an empty store bound to ``path``.

        Raises:
            CorruptStoreError: If the file exists but cannot be parsed
            StoreIOError: On any other file system failure
        """
        path = Path(path)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            logger.debug("task_store_missing", path=str(path))
            return cls(path)
        except OSError as e:
            raise StoreIOError(f"Failed to read task store {path}: {e}", path) from e

        try:
            tasks = cls._decode(json.loads(raw))
        except (
            json.JSONDecodeError,
            UnicodeDecodeError,
            RecursionError,
            KeyError,
            ValueError,
            TypeError,
        ) as e:
            raise CorruptStoreError(f"Task store {path} is corrupt: {e}", path) from e

        logger.debug("task_store_loaded", path=str(path), count=len(tasks))
        return cls(path, tasks)

    @staticmethod
    def _decode(data: Any) -> dict[int, Task]:
        if not isinstance(data, dict):
            raise ValueError("top-level value must be an object")
        entries = data["tasks"]
        if not isinstance(entries, dict):
            raise ValueError("'tasks' must be an object")

        tasks: dict[int, Task] = {}
        for key, item in entries.items():
            if not (key.isascii() and key.isdigit()):
                raise ValueError(f"invalid task ID {key!r}")
            task_id = int(key)
            if not 1 <= task_id <= MAX_TASK_ID:
                raise ValueError(f"task ID {task_id} out of range")
            if task_id in tasks:
                raise ValueError(f"duplicate task ID {task_id}")
            if not isinstance(item, dict):
                raise ValueError(f"task {task_id} must be an object")
            tasks[task_id] = Task.from_dict(item)
        return tasks

    def to_dict(self) -> dict[str, Any]:
        return {
            "tasks": {str(task_id): task.to_dict() for task_id, task in self.all()}
        }

    def save(self) -> None:
        """Write all tasks to the bound path.

        Raises:
            StoreIOError: If the file cannot be written
        """
        try:
            atomic_write_json(self._path, self.to_dict())
        except OSError as e:
            raise StoreIOError(
                f"Failed to write changes to {self._path}: {e}", self._path
            ) from e
        logger.debug("task_store_saved", path=str(self._path), count=len(self._tasks))

    def _next_id(self) -> int:
        # Smallest positive ID not in use: {1, 2, 4} -> 3
        next_id = 1
        for task_id in sorted(self._tasks):
            if task_id == next_id:
                next_id += 1
        return next_id

    def add(self, task: Task) -> TaskEntry:
        """Store a task under a newly allocated ID.

        Returns:
            The new ID and the stored task
        """
        task_id = self._next_id()
        self._tasks[task_id] = task
        logger.debug("task_added", task_id=task_id, name=task.name)
        return task_id, task

    def remove(self, task_id: int) -> Task | None:
        """Remove a task.

        Returns:
            The removed task, or None if no task has that ID
        """
        task = self._tasks.pop(task_id, None)
        if task is not None:
            logger.debug("task_removed", task_id=task_id)
        return task

    def get(self, task_id: int) -> Task | None:
        """Get the stored task for in-place changes, or None if absent."""
        return self._tasks.get(task_id)

    def filter(self, predicate: Callable[[int, Task], bool]) -> list[TaskEntry]:
        """All (id, task) pairs matching ``predicate``, in ascending ID order."""
        return [
            (task_id, task)
            for task_id, task in sorted(self._tasks.items())
            if predicate(task_id, task)
        ]

    def all(self) -> list[TaskEntry]:
        return sorted(self._tasks.items())

    def running_tasks(self) -> list[TaskEntry]:
        return self.filter(lambda _, task: not task.is_completed())

    def completed_tasks(self) -> list[TaskEntry]:
        return self.filter(lambda _, task: task.is_completed())

    def list_tasks(
        self,
        kind: ListKind = ListKind.ALL,
        tag: str | None = None,
    ) -> list[TaskEntry]:
        """List tasks of one kind, optionally restricted to a tag.

        Args:
            kind: Which tasks to include (all, running, completed)
            tag: Only include tasks carrying this tag

        Returns:
            Matching (id, task) pairs in ascending ID order
        """
        return self.filter(
            lambda _, task: kind.matches(task) and (tag is None or tag in task.tags)
        )

    def is_empty(self) -> bool:
        return not self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks
