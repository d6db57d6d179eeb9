"""Display formatting for durations and timestamps."""

from datetime import datetime, timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tasktimer.tasks.models import Task

DEFAULT_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
RUNNING_PLACEHOLDER = "..."


def format_duration(duration: timedelta) -> str:
    """Format a duration as ``HHh MMmin SSs``, with a day part when needed.

    Sub-second precision is dropped. Negative durations keep their sign.
    """
    total = int(duration.total_seconds())
    sign = "-" if total < 0 else ""
    total = abs(total)

    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)

    if days:
        return f"{sign}{days}d {hours:02}h {minutes:02}min {seconds:02}s"
    return f"{sign}{hours:02}h {minutes:02}min {seconds:02}s"


def format_timestamp(value: datetime, fmt: str = DEFAULT_DATETIME_FORMAT) -> str:
    """Format a timestamp for display."""
    return value.strftime(fmt)


def format_interval(task: "Task", fmt: str = DEFAULT_DATETIME_FORMAT) -> str:
    """Format a task's start/end pair, using ``...`` for a running task."""
    end = (
        format_timestamp(task.end_time, fmt)
        if task.end_time is not None
        else RUNNING_PLACEHOLDER
    )
    return f"{format_timestamp(task.start_time, fmt)} - {end}"
