"""Command registry and base command class.

Every subcommand of the ``tasktimer`` CLI is a Command subclass registered
in a CommandRegistry. Example of adding a command:

    from tasktimer.cli.commands import Command, ParsedArgs

    class CountCommand(Command):
        '''Print the number of stored tasks.'''

        def __init__(self):
            super().__init__(
                name="count",
                description="Show how many tasks are stored",
                usage="tasktimer count",
            )

        def execute(self, args: ParsedArgs, app: Any) -> None:
            app.print_message(f"{len(app.load_store())} tasks")
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from tasktimer.errors import UsageError

if TYPE_CHECKING:
    from tasktimer.cli.app import TaskTimerApp

T = TypeVar("T")


class CommandCategory(Enum):
    """Categories for organizing commands in help output."""

    TRACKING = "tracking"
    GENERAL = "general"


@dataclass
class ParsedArgs:
    """Parsed command arguments.

    Provides easy access to positional arguments and options.
    """

    positional: list[str] = field(default_factory=list)
    """Positional arguments (everything not an option)."""

    options: dict[str, str] = field(default_factory=dict)
    """Named options (--key=value or --key value)."""

    def get_option(
        self,
        name: str,
        default: T = None,
        type_converter: Callable[[str], T] = str,
    ) -> T:
        """Get an option value with type conversion.

        Raises:
            UsageError: If the value cannot be converted
        """
        value = self.options.get(name)
        if value is None:
            return default
        try:
            return type_converter(value)
        except (ValueError, TypeError) as e:
            raise UsageError(f"Invalid value for --{name}: {value!r}") from e

    def require(self, index: int, label: str) -> str:
        """Get a required positional argument.

        Raises:
            UsageError: If the argument is missing
        """
        if index >= len(self.positional):
            raise UsageError(f"Missing required argument <{label}>")
        return self.positional[index]


class Command(ABC):
    """Base class for CLI subcommands.

    Subclass this and override execute() to implement command behavior.
    """

    # Options that consume the following token as their value
    value_options: frozenset[str] = frozenset()

    def __init__(
        self,
        name: str,
        description: str,
        aliases: list[str] | None = None,
        usage: str | None = None,
        examples: list[str] | None = None,
        category: CommandCategory = CommandCategory.TRACKING,
    ) -> None:
        """Initialize the command.

        Args:
            name: Subcommand name
            description: Short description of what the command does
            aliases: Alternative names for the command
            usage: Usage string showing syntax
            examples: List of example usages
            category: Category for organizing in help
        """
        self.name = name
        self.description = description
        self.aliases = aliases or []
        self.usage = usage or f"tasktimer {name}"
        self.examples = examples or []
        self.category = category

    @abstractmethod
    def execute(self, args: ParsedArgs, app: "TaskTimerApp") -> None:
        """Execute the command.

        Args:
            args: Parsed command line arguments
            app: The CLI application instance
        """
        pass

    def parse_args(self, argv: Sequence[str]) -> ParsedArgs:
        """Parse command arguments into structured form.

        Parses options in the forms:
        - --key=value
        - --key value (only for options listed in value_options)
        - --flag (boolean flag)

        A bare ``--`` ends option parsing. Everything else is positional.

        Raises:
            UsageError: If a value option has no value
        """
        options: dict[str, str] = {}
        positional: list[str] = []

        i = 0
        only_positional = False
        while i < len(argv):
            part = argv[i]

            if only_positional or not part.startswith("--"):
                positional.append(part)
            elif part == "--":
                only_positional = True
            else:
                key = part[2:]
                if "=" in key:
                    key, value = key.split("=", 1)
                    options[key] = value
                elif key in self.value_options:
                    if i + 1 >= len(argv):
                        raise UsageError(f"Option --{key} requires a value")
                    options[key] = argv[i + 1]
                    i += 1
                else:
                    options[key] = "true"

            i += 1

        return ParsedArgs(positional=positional, options=options)

    def get_help(self) -> str:
        """Get detailed help text for this command."""
        lines = [
            f"{self.name}: {self.description}",
            "",
            f"Usage: {self.usage}",
        ]

        if self.aliases:
            lines.append(f"Aliases: {', '.join(self.aliases)}")

        if self.examples:
            lines.append("")
            lines.append("Examples:")
            for example in self.examples:
                lines.append(f"  {example}")

        return "\n".join(lines)


class CommandRegistry:
    """Registry for CLI subcommands.

    Handles command registration and lookup by name or alias.
    """

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._categories: dict[CommandCategory, list[Command]] = {
            cat: [] for cat in CommandCategory
        }

    def register(self, command: Command) -> None:
        """Register a command and its aliases."""
        self._commands[command.name] = command
        for alias in command.aliases:
            self._commands[alias] = command

        if command not in self._categories[command.category]:
            self._categories[command.category].append(command)

    def get(self, name: str) -> Command | None:
        """Get a command by name or alias."""
        return self._commands.get(name)

    def by_category(self, category: CommandCategory) -> list[Command]:
        return self._categories.get(category, [])
