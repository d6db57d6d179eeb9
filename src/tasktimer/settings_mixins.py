"""Settings mixins for storage layout and CLI/UI configuration.

AppSettingsMixin: Application identity and the task store location.
CLISettingsMixin: Logging and display settings.

These live outside cli/ so that config.py can compose TaskTimerSettings
without importing the cli package.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator


class AppSettingsMixin:
    """Settings for application identity and disk layout.

    Should be composed with pydantic-settings BaseSettings via multiple
    inheritance.
    """

    app_name: str = Field(
        default="tasktimer",
        title="App Name",
        description="Application name, also used for config directories",
    )

    store_path: Path = Field(
        default=Path("store.json"),
        title="Store Path",
        description="JSON file holding all tasks (relative to the working directory)",
    )

    @field_validator("store_path", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Expand ~ in paths."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v.expanduser()


class CLISettingsMixin:
    """Settings for CLI/UI configuration.

    Note: This is a mixin, not a BaseSettings subclass, to avoid
    MRO issues when composed with other settings classes.
    """

    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        title="Log Level",
        description="Logging verbosity level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        title="Log Format",
        description="Log output format (console for dev, json for production)",
    )

    datetime_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        title="Datetime Format",
        description="strftime format for start and end times in task tables",
    )
