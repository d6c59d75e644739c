"""Shared test fixtures and configuration.

Keeps tests away from the real log, config and data directories and provides
a controllable clock plus an in-memory store.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from unittest.mock import patch

import pytest

from pomodoro_cli.models.focus.history import HistoryLogger, SessionRecord
from pomodoro_cli.repositories.repository import FocusRepository

# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send application logs to tmp_path and reset the logger singleton."""
    import pomodoro_cli.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("pomodoro_cli").handlers.clear()
    log_dir = tmp_path / "logs"
    with patch("pomodoro_cli.utils.logger.user_log_dir", return_value=str(log_dir)):
        yield log_dir
    logger_mod._logger = None
    logging.getLogger("pomodoro_cli").handlers.clear()


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime = datetime(2026, 3, 10, 9, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int = 1) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


class MemoryStore(FocusRepository):
    """In-memory FocusRepository with switchable write failures."""

    def __init__(self, tags: list[str] | None = None):
        self.config: dict[str, str] = {}
        self.sessions: list[SessionRecord] = []
        self.tags: list[str] = list(tags if tags is not None else ["Study", "Work"])
        self.selected: str | None = None
        self.fail_writes = False
        self.append_calls = 0

    def get_config(self, key: str, default: str) -> str:
        return self.config.get(key, default)

    def set_config(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise OSError("disk full")
        self.config[key] = value

    def append_session(self, record: SessionRecord) -> None:
        self.append_calls += 1
        if self.fail_writes:
            raise OSError("disk full")
        self.sessions.append(record)

    def query_work_sessions(
        self, tag: str | None = None, since: date | None = None
    ) -> list[SessionRecord]:
        return sorted(
            (
                r
                for r in self.sessions
                if r.session_type == "work"
                and (tag is None or r.tag == tag)
                and (since is None or r.day >= since)
            ),
            key=lambda r: r.start_time,
        )

    def current_tag_name(self) -> str | None:
        return self.selected

    def get_tags(self) -> list[str]:
        return sorted(self.tags)

    def add_tag(self, name: str) -> None:
        if name not in self.tags:
            self.tags.append(name)

    def delete_tag(self, name: str) -> None:
        if name in self.tags:
            self.tags.remove(name)


@pytest.fixture()
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def history(tmp_path) -> HistoryLogger:
    """HistoryLogger backed by a tmp SQLite file (schema created automatically)."""
    return HistoryLogger(db_path=tmp_path / "pomodoro.db")


def make_record(
    start: datetime,
    duration: int = 1500,
    tag: str = "Work",
    session_type: str = "work",
) -> SessionRecord:
    """SessionRecord whose end time is start + duration."""
    return SessionRecord(
        start_time=start,
        end_time=start + timedelta(seconds=duration),
        duration=duration,
        tag=tag,
        session_type=session_type,
    )


@pytest.fixture()
def record_factory():
    """Expose make_record to tests."""
    return make_record


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


@pytest.fixture()
def cli_env(tmp_path, monkeypatch):
    """Point the global ConfigManager (and so the session database) at tmp_path."""
    import pomodoro_cli.config as config_mod
    from pomodoro_cli.config import Config, ConfigManager, StorageConfig

    manager = ConfigManager(config_dir=tmp_path / "config")
    manager._config = Config(storage=StorageConfig(db_path=str(tmp_path / "cli.db")))
    monkeypatch.setattr(config_mod, "_config_manager", manager)
    return manager


@pytest.fixture()
def cli_store(cli_env) -> HistoryLogger:
    """The database the CLI commands read and write."""
    return HistoryLogger(db_path=cli_env.config.storage.db_path)
