"""tasktimer application entry point.

Each invocation loads the task store from the configured path, runs one
command and, for commands that change tasks, saves the store before
exiting. Tables are printed to stdout; messages and errors to stderr.
"""

import sys
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape

from tasktimer.cli.builtin_commands import BUILTIN_COMMANDS
from tasktimer.cli.commands import CommandRegistry
from tasktimer.cli.display import build_task_table
from tasktimer.config import TaskTimerSettings, get_settings
from tasktimer.errors import TaskTimerError, UsageError
from tasktimer.logging import Loggers, bind_context, clear_context, configure_logging
from tasktimer.tasks.models import Task
from tasktimer.tasks.store import TaskStore

logger = Loggers.cli()

DEFAULT_COMMAND = "status"


class TaskTimerApp:
    """Command-line application object.

    Example:
        >>> app = TaskTimerApp()
        >>> exit_code = app.run(["start", "write report", "work"])
    """

    def __init__(
        self,
        settings: TaskTimerSettings | None = None,
        console: Console | None = None,
        err_console: Console | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)
        self.command_registry = CommandRegistry()
        for command_cls in BUILTIN_COMMANDS:
            self.command_registry.register(command_cls())

    def load_store(self) -> TaskStore:
        return TaskStore.from_file(self.settings.store_path)

    def print_tasks(self, entries: Sequence[tuple[int, Task]]) -> None:
        self.console.print(build_task_table(entries, self.settings.datetime_format))

    def print_message(self, message: str) -> None:
        self.err_console.print(message, markup=False, highlight=False)

    def print_error(self, message: str) -> None:
        self.err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def run(self, argv: Sequence[str]) -> int:
        """Run one command.

        Args:
            argv: Command line arguments without the program name

        Returns:
            Process exit status
        """
        name = argv[0] if argv else DEFAULT_COMMAND
        bind_context(command=name)
        try:
            command = self.command_registry.get(name)
            if command is None:
                raise UsageError(
                    f"Unknown command {name!r}. Run 'tasktimer help' for a list of commands."
                )
            command.execute(command.parse_args(argv[1:]), self)
        except TaskTimerError as e:
            logger.debug("command_failed", error=str(e), error_type=type(e).__name__)
            self.print_error(str(e))
            return 1
        finally:
            clear_context()
        return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Console script entry point."""
    settings = get_settings()
    configure_logging(settings)
    app = TaskTimerApp(settings)
    return app.run(sys.argv[1:] if argv is None else argv)
