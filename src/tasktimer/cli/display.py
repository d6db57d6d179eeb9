"""Task table rendering."""

from collections.abc import Sequence

from rich.table import Table
from rich.text import Text

from tasktimer.formatting import (
    DEFAULT_DATETIME_FORMAT,
    format_duration,
    format_interval,
)
from tasktimer.tasks.models import Task


def build_task_table(
    entries: Sequence[tuple[int, Task]],
    datetime_format: str = DEFAULT_DATETIME_FORMAT,
) -> Table:
    """Build a table with one row per (id, task) entry."""
    table = Table(box=None, padding=(0, 2, 0, 0), header_style="bold")
    table.add_column("ID", justify="right", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Interval", no_wrap=True)
    table.add_column("Elapsed", justify="right", no_wrap=True)
    table.add_column("Tags", style="dim")

    for task_id, task in entries:
        table.add_row(
            str(task_id),
            Text(task.name),
            format_interval(task, datetime_format),
            format_duration(task.elapsed()),
            Text(" ".join(task.tags)),
        )

    return table
