"""Helpers shared by the command modules."""

from pathlib import Path

from pomodoro_cli.config import get_config_manager
from pomodoro_cli.models.focus.history import HistoryLogger


def get_store() -> HistoryLogger:
    """Open the session database named in the config (or the default location)."""
    db_path = get_config_manager().config.storage.db_path
    return HistoryLogger(Path(db_path).expanduser() if db_path else None)
