"""Built-in tasktimer subcommands."""

from typing import TYPE_CHECKING

from rich.table import Table

from tasktimer.cli.commands import Command, CommandCategory, ParsedArgs
from tasktimer.errors import TaskNotFoundError, UsageError
from tasktimer.logging import Loggers
from tasktimer.tasks.models import ListKind, Task
from tasktimer.timeutil import parse_local_datetime

if TYPE_CHECKING:
    from tasktimer.cli.app import TaskTimerApp

logger = Loggers.cli()


def parse_task_id(text: str) -> int:
    """Parse a task ID typed on the command line.

    Raises:
        UsageError: If the text is not a positive integer
    """
    if not (text.isascii() and text.isdigit()) or int(text) == 0:
        raise UsageError(f"Invalid task ID {text!r}: expected a positive integer")
    return int(text)


class StatusCommand(Command):
    """Show running tasks. This is the default when no command is given."""

    def __init__(self) -> None:
        super().__init__(
            name="status",
            description="Show the tasks currently running",
            usage="tasktimer [status]",
        )

    def execute(self, args: ParsedArgs, app: "TaskTimerApp") -> None:
        running = app.load_store().running_tasks()
        if not running:
            app.print_message("No running tasks")
            return
        app.print_message("Working on:")
        app.print_tasks(running)


class ListCommand(Command):
    """List stored tasks of one kind."""

    value_options = frozenset({"tag"})

    def __init__(self) -> None:
        super().__init__(
            name="list",
            description="List tasks (all, running or completed)",
            aliases=["ls"],
            usage="tasktimer list [all|running|completed] [--tag TAG]",
            examples=[
                "tasktimer list",
                "tasktimer list completed",
                "tasktimer list running --tag work",
            ],
        )

    def execute(self, args: ParsedArgs, app: "TaskTimerApp") -> None:
        raw_kind = args.positional[0] if args.positional else ListKind.ALL.value
        try:
            kind = ListKind(raw_kind)
        except ValueError:
            raise UsageError(
                f"Unknown list kind {raw_kind!r}; "
                f"choose one of: {', '.join(ListKind.choices())}"
            ) from None

        tag = args.get_option("tag")
        app.print_tasks(app.load_store().list_tasks(kind, tag=tag))


class StartCommand(Command):
    """Start tracking a new task."""

    value_options = frozenset({"at"})

    def __init__(self) -> None:
        super().__init__(
            name="start",
            description="Start a new task, optionally backdated with --at",
            usage="tasktimer start NAME [TAG ...] [--at TIME]",
            examples=[
                'tasktimer start "write report" work docs',
                "tasktimer start standup --at 09:30",
                'tasktimer start review --at "2024-05-04 08:32:15"',
            ],
        )

    def execute(self, args: ParsedArgs, app: "TaskTimerApp") -> None:
        name = args.require(0, "name").strip()
        if not name:
            raise UsageError("Task name must not be empty")
        tags = args.positional[1:]

        start_time = args.get_option("at")
        if start_time is not None:
            task = Task(name=name, tags=tags, start_time=parse_local_datetime(start_time))
        else:
            task = Task.create_now(name, tags)

        store = app.load_store()
        task_id, task = store.add(task)
        store.save()
        logger.info("task_started", task_id=task_id, name=task.name)
        app.print_message(f"New task: {task.name}")


class CompleteCommand(Command):
    """Mark a task as completed."""

    value_options = frozenset({"at"})

    def __init__(self) -> None:
        super().__init__(
            name="complete",
            description="Complete a task now, or at the time given with --at",
            aliases=["done"],
            usage="tasktimer complete ID [--at TIME]",
            examples=["tasktimer complete 3", "tasktimer complete 3 --at 17:45"],
        )

    def execute(self, args: ParsedArgs, app: "TaskTimerApp") -> None:
        task_id = parse_task_id(args.require(0, "id"))
        end_time = args.get_option("at")

        store = app.load_store()
        task = store.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)

        if end_time is not None:
            task.complete_at(parse_local_datetime(end_time))
        else:
            task.complete_now()
        store.save()
        logger.info("task_completed", task_id=task_id)
        app.print_message(f'Completed task "{task.name}"')


class DeleteCommand(Command):
    """Delete a task."""

    def __init__(self) -> None:
        super().__init__(
            name="delete",
            description="Delete a task",
            aliases=["rm"],
            usage="tasktimer delete ID",
            examples=["tasktimer delete 2"],
        )

    def execute(self, args: ParsedArgs, app: "TaskTimerApp") -> None:
        task_id = parse_task_id(args.require(0, "id"))

        store = app.load_store()
        task = store.remove(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        store.save()
        logger.info("task_deleted", task_id=task_id)
        app.print_message(f'Task "{task.name}" has been deleted')


class HelpCommand(Command):
    """Display help information about available commands."""

    def __init__(self) -> None:
        super().__init__(
            name="help",
            aliases=["-h", "--help"],
            description="Show available commands and usage information",
            usage="tasktimer help [COMMAND]",
            examples=["tasktimer help", "tasktimer help start"],
            category=CommandCategory.GENERAL,
        )

    def execute(self, args: ParsedArgs, app: "TaskTimerApp") -> None:
        if args.positional:
            cmd = app.command_registry.get(args.positional[0])
            if cmd is None:
                raise UsageError(f"Unknown command {args.positional[0]!r}")
            app.print_message(cmd.get_help())
            return

        table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
        table.add_column("Command", style="bold cyan", no_wrap=True)
        table.add_column("Aliases", style="dim", no_wrap=True)
        table.add_column("Description")

        for category in CommandCategory:
            for cmd in app.command_registry.by_category(category):
                table.add_row(cmd.name, ", ".join(cmd.aliases), cmd.description)

        app.console.print(table)


BUILTIN_COMMANDS: tuple[type[Command], ...] = (
    StatusCommand,
    ListCommand,
    StartCommand,
    CompleteCommand,
    DeleteCommand,
    HelpCommand,
)
