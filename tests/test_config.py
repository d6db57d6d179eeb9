"""Tests for configuration and logging setup."""

import json
import os
from pathlib import Path

import pytest
import structlog
from pydantic import ValidationError

from tasktimer.config import (
    SettingsContext,
    TaskTimerSettings,
    get_settings,
    reload_settings,
    set_settings,
)
from tasktimer.logging import configure_logging, get_logger
from tasktimer.tasks.store import TaskStore


@pytest.fixture
def clean_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty directory with no TASKTIMER_* variables and a fake home."""
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setenv("HOME", str(home))
    for var in [k for k in os.environ if k.startswith("TASKTIMER_")]:
        monkeypatch.delenv(var)
    return work


class TestTaskTimerSettings:
    """Tests for TaskTimerSettings."""

    def test_default_values(self, clean_cwd):
        settings = TaskTimerSettings()

        assert settings.app_name == "tasktimer"
        assert settings.store_path == Path("store.json")
        assert settings.log_level == "warning"
        assert settings.log_format == "console"
        assert settings.datetime_format == "%Y-%m-%d %H:%M:%S"

    def test_store_path_expansion(self, clean_cwd):
        settings = TaskTimerSettings(store_path="~/timers/store.json")

        assert not str(settings.store_path).startswith("~")
        assert settings.store_path == Path.home() / "timers" / "store.json"

    def test_environment_override(self, clean_cwd, monkeypatch):
        monkeypatch.setenv("TASKTIMER_STORE_PATH", "/tmp/elsewhere.json")
        monkeypatch.setenv("TASKTIMER_LOG_LEVEL", "debug")

        settings = TaskTimerSettings()

        assert settings.store_path == Path("/tmp/elsewhere.json")
        assert settings.log_level == "debug"

    def test_invalid_log_level(self, clean_cwd):
        with pytest.raises(ValidationError):
            TaskTimerSettings(log_level="loud")

    def test_project_json_config(self, clean_cwd):
        config_dir = clean_cwd / ".tasktimer"
        config_dir.mkdir()
        (config_dir / "settings.json").write_text(
            json.dumps({"store_path": "project.json", "log_format": "json"})
        )

        settings = TaskTimerSettings()

        assert settings.store_path == Path("project.json")
        assert settings.log_format == "json"

    def test_user_json_config(self, clean_cwd):
        config_dir = Path.home() / ".tasktimer"
        config_dir.mkdir()
        (config_dir / "settings.json").write_text(json.dumps({"store_path": "user.json"}))

        assert TaskTimerSettings().store_path == Path("user.json")

    def test_project_config_beats_user_config(self, clean_cwd):
        for base, name in ((Path.home(), "user.json"), (clean_cwd, "project.json")):
            (base / ".tasktimer").mkdir()
            (base / ".tasktimer" / "settings.json").write_text(
                json.dumps({"store_path": name})
            )

        assert TaskTimerSettings().store_path == Path("project.json")

    def test_environment_beats_json_config(self, clean_cwd, monkeypatch):
        (clean_cwd / ".tasktimer").mkdir()
        (clean_cwd / ".tasktimer" / "settings.json").write_text(
            json.dumps({"store_path": "project.json"})
        )
        monkeypatch.setenv("TASKTIMER_STORE_PATH", "env.json")

        assert TaskTimerSettings().store_path == Path("env.json")


class TestSettingsAccess:
    """Tests for the global and context settings helpers."""

    def test_set_and_get(self, clean_cwd):
        custom = TaskTimerSettings(store_path="custom.json")
        set_settings(custom)
        try:
            assert get_settings() is custom
        finally:
            reload_settings()

    def test_context_overrides_global(self, clean_cwd):
        outer = TaskTimerSettings(store_path="outer.json")
        inner = TaskTimerSettings(store_path="inner.json")
        set_settings(outer)
        try:
            with SettingsContext(inner) as active:
                assert active is inner
                assert get_settings() is inner
            assert get_settings() is outer
        finally:
            reload_settings()

    def test_reload_creates_fresh_instance(self, clean_cwd):
        custom = TaskTimerSettings(store_path="custom.json")
        set_settings(custom)

        fresh = reload_settings()

        assert fresh is not custom
        assert fresh.store_path == Path("store.json")


class TestLogging:
    """Tests for structlog configuration."""

    @pytest.fixture(autouse=True)
    def reset_structlog(self):
        yield
        structlog.reset_defaults()

    def test_json_output_to_stderr(self, clean_cwd, capsys):
        settings = TaskTimerSettings(log_level="debug", log_format="json")
        configure_logging(settings)

        get_logger("tasktimer.test").debug("task_saved", task_id=3)

        captured = capsys.readouterr()
        assert captured.out == ""
        line = captured.err.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "task_saved"
        assert record["task_id"] == 3
        assert record["level"] == "debug"

    def test_module_logger_follows_reconfiguration(self, clean_cwd, capsys, tmp_path):
        missing = tmp_path / "missing.json"
        configure_logging(TaskTimerSettings())
        TaskStore.from_file(missing)

        configure_logging(TaskTimerSettings(log_level="debug", log_format="json"))
        TaskStore.from_file(missing)

        lines = capsys.readouterr().err.strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["event"] == "task_store_missing"

    def test_default_level_hides_debug(self, clean_cwd, capsys):
        configure_logging(TaskTimerSettings())

        get_logger("tasktimer.test").debug("hidden")

        assert "hidden" not in capsys.readouterr().err
