"""Tests for the 'focus' command.

TimerDisplay.run is patched so the full-screen loop never starts; the
display handed to it is inspected instead.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from pomodoro_cli.main import app
from pomodoro_cli.models.focus.ui import TimerDisplay
from pomodoro_cli.utils.exit_codes import ERROR_NOT_FOUND

runner = CliRunner()


@pytest.fixture()
def mock_run():
    with patch.object(TimerDisplay, "run", autospec=True) as mock:
        yield mock


def started_display(mock_run) -> TimerDisplay:
    mock_run.assert_called_once()
    return mock_run.call_args.args[0]


class TestFocus:
    def test_bare_focus_starts_timer(self, cli_env, mock_run):
        result = runner.invoke(app, ["focus"])
        assert result.exit_code == 0, result.output
        display = started_display(mock_run)
        assert display.screen == "home"
        assert display.selection.selected() == "Study"
        assert display.engine.remaining_seconds == 1500

    def test_start_with_tag(self, cli_env, mock_run):
        result = runner.invoke(app, ["focus", "start", "--tag", "Work"])
        assert result.exit_code == 0, result.output
        display = started_display(mock_run)
        assert display.selection.selected() == "Work"
        assert display.engine.store.current_tag_name() == "Work"

    def test_unknown_tag(self, cli_env, mock_run):
        result = runner.invoke(app, ["focus", "start", "-t", "Nope"])
        assert result.exit_code == ERROR_NOT_FOUND
        assert "Unknown tag" in result.output
        mock_run.assert_not_called()

    def test_durations_are_applied_and_saved(self, cli_store, mock_run):
        result = runner.invoke(app, ["focus", "start", "-w", "50", "-b", "10"])
        assert result.exit_code == 0, result.output
        display = started_display(mock_run)
        assert display.engine.work_duration == 3000
        assert display.engine.break_duration == 600
        assert display.engine.remaining_seconds == 3000
        assert cli_store.get_config("work_duration", "") == "3000"

    def test_notifier_follows_config(self, cli_env, mock_run):
        cli_env.set("notifications.sound", "false")
        runner.invoke(app, ["focus"])
        notifier = started_display(mock_run).engine.notifier
        assert notifier.sound is False
        assert notifier.desktop is True
