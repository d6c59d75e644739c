"""Tests for the 'config' commands."""

from __future__ import annotations

import json
import sqlite3
from unittest.mock import patch

from typer.testing import CliRunner

from pomodoro_cli.main import app
from pomodoro_cli.models.focus.history import HistoryLogger
from pomodoro_cli.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
)

runner = CliRunner()


class TestShow:
    def test_defaults_json(self, cli_env):
        result = runner.invoke(app, ["config", "show", "-o", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["work_minutes"] == 25
        assert data["break_minutes"] == 5
        assert data["notifications"]["title"] == "Pomodoro++"

    def test_text(self, cli_env):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0, result.output
        assert "work = 25 min" in result.output
        assert "notifications.sound = True" in result.output


class TestSetDuration:
    def test_work_minutes_are_stored_as_seconds(self, cli_store):
        result = runner.invoke(app, ["config", "set", "work", "50"])
        assert result.exit_code == 0, result.output
        assert "work = 50 min" in result.output
        assert cli_store.get_config("work_duration", "") == "3000"

    def test_break_is_clamped(self, cli_store):
        result = runner.invoke(app, ["config", "set", "break", "90"])
        assert result.exit_code == 0, result.output
        assert "break = 60 min" in result.output
        assert cli_store.get_config("break_duration", "") == "3600"

    def test_non_numeric(self, cli_env):
        result = runner.invoke(app, ["config", "set", "work", "soon"])
        assert result.exit_code == ERROR_INVALID_ARGS

    def test_save_failure_is_reported(self, cli_store):
        with patch.object(
            HistoryLogger,
            "set_config",
            side_effect=sqlite3.OperationalError("database is locked"),
        ):
            result = runner.invoke(app, ["config", "set", "work", "50"])
        assert result.exit_code == ERROR_GENERAL
        assert "Could not save work duration" in result.output
        assert "✓" not in result.output
        assert cli_store.get_config("work_duration", "unset") == "unset"


class TestSetSetting:
    def test_setting(self, cli_env):
        result = runner.invoke(app, ["config", "set", "notifications.title", "Focus"])
        assert result.exit_code == 0, result.output
        assert cli_env.get("notifications.title") == "Focus"

    def test_unknown_key(self, cli_env):
        result = runner.invoke(app, ["config", "set", "notifications.volume", "11"])
        assert result.exit_code == ERROR_NOT_FOUND

    def test_invalid_value(self, cli_env):
        result = runner.invoke(app, ["config", "set", "notifications.sound", "maybe"])
        assert result.exit_code == ERROR_INVALID_ARGS


class TestReset:
    def test_reset(self, cli_env, cli_store):
        runner.invoke(app, ["config", "set", "work", "50"])
        runner.invoke(app, ["config", "set", "notifications.desktop", "false"])
        result = runner.invoke(app, ["config", "reset"])
        assert result.exit_code == 0, result.output
        assert cli_store.get_config("work_duration", "") == "1500"
        assert cli_store.get_config("break_duration", "") == "300"
        assert cli_env.get("notifications.desktop") is True

    def test_reset_save_failure_is_reported(self, cli_env):
        with patch.object(HistoryLogger, "set_config", side_effect=OSError("read-only")):
            result = runner.invoke(app, ["config", "reset"])
        assert result.exit_code == ERROR_GENERAL
        assert "Configuration reset" not in result.output
