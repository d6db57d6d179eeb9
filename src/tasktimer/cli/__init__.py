"""Command-line interface for tasktimer."""

from tasktimer.cli.app import TaskTimerApp, main
from tasktimer.cli.commands import (
    Command,
    CommandCategory,
    CommandRegistry,
    ParsedArgs,
)

__all__ = [
    "Command",
    "CommandCategory",
    "CommandRegistry",
    "ParsedArgs",
    "TaskTimerApp",
    "main",
]
