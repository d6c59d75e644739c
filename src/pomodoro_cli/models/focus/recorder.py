"""Writes finished sessions to the history log."""

from datetime import datetime

from pomodoro_cli.repositories.repository import FocusRepository
from pomodoro_cli.utils.logger import get_logger

from .history import SessionRecord, SessionType


class SessionRecorder:
    """Best-effort persistence of completed sessions.

    A failed write is logged and dropped; losing one history entry must never
    stop the timer.
    """

    def __init__(self, store: FocusRepository):
        self.store = store

    def record(
        self,
        start: datetime,
        end: datetime,
        duration: int,
        tag: str,
        session_type: SessionType,
    ) -> SessionRecord | None:
        """
        Build a SessionRecord and append it to the store.

        Returns:
            The stored record, or None when it could not be built or written
        """
        log = get_logger("recorder")
        try:
            record = SessionRecord(
                start_time=start,
                end_time=end,
                duration=duration,
                tag=tag,
                session_type=session_type,
            )
        except ValueError:
            log.warning("Discarding invalid %s session", session_type, exc_info=True)
            return None

        try:
            self.store.append_session(record)
        except Exception:
            log.warning("Could not save %s session", session_type, exc_info=True)
            return None

        log.info(
            "Recorded %s session: %ss tagged %r", session_type, duration, tag
        )
        return record
