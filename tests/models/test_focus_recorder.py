"""Unit tests for SessionRecorder."""

from __future__ import annotations

from datetime import datetime, timedelta
from unittest.mock import MagicMock

from pomodoro_cli.models.focus.recorder import SessionRecorder

START = datetime(2026, 3, 10, 9, 0, 0)
END = START + timedelta(minutes=25)


class TestRecord:
    def test_appends_record(self, memory_store):
        record = SessionRecorder(memory_store).record(START, END, 1500, "Study", "work")
        assert record is not None
        assert record.tag == "Study"
        assert memory_store.sessions == [record]

    def test_invalid_record_is_dropped(self, memory_store):
        recorder = SessionRecorder(memory_store)
        assert recorder.record(END, START, 1500, "Work", "work") is None
        assert memory_store.append_calls == 0

    def test_store_failure_is_dropped(self, memory_store):
        memory_store.fail_writes = True
        assert SessionRecorder(memory_store).record(START, END, 1500, "Work", "work") is None
        assert memory_store.append_calls == 1

    def test_unexpected_store_error_is_dropped(self):
        store = MagicMock()
        store.append_session.side_effect = RuntimeError("locked")
        assert SessionRecorder(store).record(START, END, 300, "Work", "break") is None

    def test_success_is_logged(self, memory_store, isolated_logger):
        SessionRecorder(memory_store).record(START, END, 1500, "Work", "work")
        log_text = (isolated_logger / "pomodoro.log").read_text(encoding="utf-8")
        assert "Recorded work session" in log_text

    def test_failure_is_logged(self, memory_store, isolated_logger):
        memory_store.fail_writes = True
        SessionRecorder(memory_store).record(START, END, 1500, "Work", "work")
        log_text = (isolated_logger / "pomodoro.log").read_text(encoding="utf-8")
        assert "Could not save work session" in log_text
