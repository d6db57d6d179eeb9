"""Task entity and listing kinds."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from tasktimer import timeutil


@dataclass
class Task:
    """One tracked activity.

    Name, tags and start time are fixed at creation. ``end_time`` is None
    while the task is running and set once it is completed.
    """

    name: str
    tags: tuple[str, ...] = field(default_factory=tuple)
    start_time: datetime = field(default_factory=lambda: timeutil.local_now())
    end_time: datetime | None = None

    def __post_init__(self) -> None:
        self.tags = tuple(self.tags)

    @classmethod
    def create_now(cls, name: str, tags: Iterable[str] = ()) -> "Task":
        """Create a running task that starts now."""
        return cls(name=name, tags=tuple(tags), start_time=timeutil.local_now())

    def is_completed(self) -> bool:
        return self.end_time is not None

    def elapsed(self) -> timedelta:
        """Time until end if completed, or until now if still running.

        May be negative when the task was completed before it started.
        """
        if self.end_time is not None:
            return self.end_time - self.start_time
        return timeutil.local_now() - self.start_time

    def complete_at(self, when: datetime) -> None:
        """Set the end time, overwriting any earlier completion."""
        self.end_time = when

    def complete_now(self) -> None:
        self.complete_at(timeutil.local_now())

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "tags": list(self.tags),
            "start_time": timeutil.encode_timestamp(self.start_time),
            "end_time": (
                timeutil.encode_timestamp(self.end_time)
                if self.end_time is not None
                else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Build a task from its stored form.

        ``tags`` may be missing in files written by older versions, and
        ``end_time`` may be missing or null for a running task.

        Raises:
            KeyError: If ``name`` or ``start_time`` is missing
            ValueError: If a field has the wrong type or a bad timestamp
        """
        name = data["name"]
        if not isinstance(name, str):
            raise ValueError("Task name must be a string")

        tags = data.get("tags")
        if tags is None:
            tags = []
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise ValueError("Task tags must be a list of strings")

        end_raw = data.get("end_time")
        return cls(
            name=name,
            tags=tuple(tags),
            start_time=timeutil.decode_timestamp(data["start_time"]),
            end_time=timeutil.decode_timestamp(end_raw) if end_raw is not None else None,
        )


class ListKind(Enum):
    """Which tasks a listing shows."""

    ALL = "all"
    RUNNING = "running"
    COMPLETED = "completed"

    def matches(self, task: Task) -> bool:
        if self is ListKind.RUNNING:
            return not task.is_completed()
        if self is ListKind.COMPLETED:
            return task.is_completed()
        return True

    @classmethod
    def choices(cls) -> list[str]:
        return [kind.value for kind in cls]
