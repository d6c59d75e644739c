"""Session history, tags and settings stored in SQLite."""

import sqlite3
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from pomodoro_cli.repositories.repository import FocusRepository
from pomodoro_cli.utils.logger import get_logger

if TYPE_CHECKING:
    from .tags import TagSelection

SessionType = Literal["work", "break"]

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_TAGS = ("Work", "Study")


@dataclass(frozen=True)
class SessionRecord:
    """A finished work or break interval."""

    start_time: datetime
    end_time: datetime
    duration: int  # configured seconds, not wall-clock elapsed
    tag: str
    session_type: SessionType

    def __post_init__(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        if self.duration <= 0:
            raise ValueError("duration must be positive")
        if not self.tag:
            raise ValueError("tag must not be empty")
        if self.session_type not in ("work", "break"):
            raise ValueError(f"Unknown session type: {self.session_type}")

    @property
    def day(self) -> date:
        return self.start_time.date()

    def to_row(self) -> tuple[str, str, int, str, str]:
        return (
            self.start_time.strftime(TIMESTAMP_FORMAT),
            self.end_time.strftime(TIMESTAMP_FORMAT),
            self.duration,
            self.tag,
            self.session_type,
        )

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "SessionRecord":
        return cls(
            start_time=datetime.strptime(row["start_time"], TIMESTAMP_FORMAT),
            end_time=datetime.strptime(row["end_time"], TIMESTAMP_FORMAT),
            duration=int(row["duration"]),
            tag=row["tag"],
            session_type=row["type"],
        )


class HistoryLogger(FocusRepository):
    """SQLite-backed store for sessions, tags and key/value settings."""

    def __init__(self, db_path: Path | None = None):
        """Initialize the store, creating the schema if needed."""
        if db_path is None:
            from platformdirs import user_data_dir

            db_path = Path(user_data_dir("pomodoro_cli")) / "pomodoro.db"

        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._selection: "TagSelection | None" = None
        self._init_database()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_database(self) -> None:
        """Initialize database schema and seed default tags."""
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS sessions (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    start_time TEXT NOT NULL,
                    end_time TEXT NOT NULL,
                    duration INTEGER NOT NULL,
                    tag TEXT NOT NULL,
                    type TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_sessions_start
                ON sessions(start_time)
                """
            )
            conn.execute("CREATE TABLE IF NOT EXISTS tags (name TEXT PRIMARY KEY)")
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS config (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )

            count = conn.execute("SELECT COUNT(*) FROM tags").fetchone()[0]
            if count == 0:
                conn.executemany(
                    "INSERT INTO tags (name) VALUES (?)",
                    [(name,) for name in DEFAULT_TAGS],
                )
            conn.commit()

    # Config

    def get_config(self, key: str, default: str) -> str:
        """Return the stored value for ``key``, or ``default`` if missing or unreadable."""
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT value FROM config WHERE key = ?", (key,)
                ).fetchone()
        except sqlite3.Error:
            get_logger("history").warning(
                "Could not read config key %s", key, exc_info=True
            )
            return default
        return row["value"] if row else default

    def set_config(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO config (key, value) VALUES (?, ?)",
                (key, value),
            )
            conn.commit()

    # Tags

    def get_tags(self) -> list[str]:
        with self._connect() as conn:
            rows = conn.execute("SELECT name FROM tags ORDER BY name").fetchall()
        return [row["name"] for row in rows]

    def add_tag(self, name: str) -> None:
        with self._connect() as conn:
            conn.execute("INSERT OR IGNORE INTO tags (name) VALUES (?)", (name,))
            conn.commit()

    def delete_tag(self, name: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM tags WHERE name = ?", (name,))
            conn.commit()

    def bind_selection(self, selection: "TagSelection") -> None:
        """Use ``selection`` to answer current_tag_name()."""
        self._selection = selection

    def current_tag_name(self) -> str | None:
        """Name of the tag the next session will be recorded under."""
        if self._selection is not None:
            return self._selection.selected()
        tags = self.get_tags()
        return tags[0] if tags else None

    # Sessions

    def append_session(self, record: SessionRecord) -> None:
        """Append one finished session to the log."""
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO sessions (start_time, end_time, duration, tag, type)
                VALUES (?, ?, ?, ?, ?)
                """,
                record.to_row(),
            )
            conn.commit()

    def query_work_sessions(
        self, tag: str | None = None, since: date | None = None
    ) -> list[SessionRecord]:
        """
        Work sessions ordered by start time.

        Args:
            tag: Only sessions recorded under this tag (None for all tags)
            since: Only sessions starting on or after this day

        Returns:
            List of SessionRecord
        """
        sql = "SELECT * FROM sessions WHERE type = 'work'"
        params: list[str] = []
        if tag is not None:
            sql += " AND tag = ?"
            params.append(tag)
        if since is not None:
            sql += " AND start_time >= ?"
            params.append(since.isoformat())
        sql += " ORDER BY start_time"

        with self._connect() as conn:
            rows = conn.execute(sql, params).fetchall()
        return self._to_records(rows)

    def get_recent_sessions(self, limit: int = 20) -> list[SessionRecord]:
        """Most recent sessions of either type, newest first."""
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT * FROM sessions
                ORDER BY start_time DESC
                LIMIT ?
                """,
                (limit,),
            ).fetchall()
        return self._to_records(rows)

    @staticmethod
    def _to_records(rows: list[sqlite3.Row]) -> list[SessionRecord]:
        records = []
        for row in rows:
            try:
                records.append(SessionRecord.from_row(row))
            except (ValueError, TypeError):
                get_logger("history").warning(
                    "Skipping malformed session row %s", row["id"]
                )
        return records
