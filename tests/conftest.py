"""Shared test fixtures and utilities for tasktimer tests.

Provides:
- MockContext for isolating tests from global state
- A controllable clock
- Settings and store fixtures bound to temporary paths
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from io import StringIO
from pathlib import Path
from typing import Generator

import pytest
from rich.console import Console

from tasktimer import timeutil
from tasktimer.cli.app import TaskTimerApp
from tasktimer.config import (
    TaskTimerSettings,
    reload_settings,
    set_context_settings,
    set_settings,
)
from tasktimer.tasks.store import TaskStore

# Fixed offset so stored timestamps do not depend on the machine's zone
TZ = timezone(timedelta(hours=2))
T0 = datetime(2024, 5, 4, 8, 30, 0, tzinfo=TZ)


class MockContext:
    """Context manager for isolating tests from global state.

    Handles:
    - Clearing TASKTIMER_* environment variables
    - Binding settings to a store file in a temporary directory
    - Resetting the global settings singleton afterwards

    Usage:
        with MockContext() as ctx:
            store = TaskStore.from_file(ctx.settings.store_path)
    """

    def __init__(self, **settings_kwargs) -> None:
        self._settings_kwargs = settings_kwargs
        self._temp_dir: tempfile.TemporaryDirectory | None = None
        self._settings: TaskTimerSettings | None = None
        self._original_env: dict[str, str] = {}

    def __enter__(self) -> "MockContext":
        self._temp_dir = tempfile.TemporaryDirectory()
        base = Path(self._temp_dir.name)

        for var in [k for k in os.environ if k.startswith("TASKTIMER_")]:
            self._original_env[var] = os.environ.pop(var)

        self._settings = TaskTimerSettings(
            store_path=base / "store.json",
            **self._settings_kwargs,
        )
        set_settings(self._settings)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        set_context_settings(None)
        os.environ.update(self._original_env)
        reload_settings()
        if self._temp_dir:
            self._temp_dir.cleanup()

    @property
    def settings(self) -> TaskTimerSettings:
        if self._settings is None:
            raise RuntimeError("MockContext not entered")
        return self._settings

    @property
    def base_dir(self) -> Path:
        if self._temp_dir is None:
            raise RuntimeError("MockContext not entered")
        return Path(self._temp_dir.name)


class FakeClock:
    """Replacement for timeutil.local_now that only moves when told to."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


class CapturedApp:
    """TaskTimerApp with stdout/stderr consoles captured in memory."""

    def __init__(self, settings: TaskTimerSettings) -> None:
        self._out = StringIO()
        self._err = StringIO()
        self.app = TaskTimerApp(
            settings,
            console=Console(file=self._out, width=200, color_system=None),
            err_console=Console(file=self._err, width=200, color_system=None),
        )

    def run(self, *argv: str) -> int:
        self._out.seek(0)
        self._out.truncate()
        self._err.seek(0)
        self._err.truncate()
        return self.app.run(list(argv))

    @property
    def out(self) -> str:
        return self._out.getvalue()

    @property
    def err(self) -> str:
        return self._err.getvalue()


@pytest.fixture
def mock_context() -> Generator[MockContext, None, None]:
    """Fixture providing an isolated test context."""
    with MockContext() as ctx:
        yield ctx


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    """Fixture freezing timeutil.local_now at T0."""
    fake = FakeClock()
    monkeypatch.setattr(timeutil, "local_now", fake)
    return fake


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    """Fixture providing a store path that does not exist yet."""
    return tmp_path / "store.json"


@pytest.fixture
def store(store_path: Path) -> TaskStore:
    """Fixture providing an empty store bound to a temporary path."""
    return TaskStore.from_file(store_path)


@pytest.fixture
def cli(mock_context: MockContext) -> CapturedApp:
    """Fixture providing an application with captured output."""
    return CapturedApp(mock_context.settings)
