"""Persistence contract consumed by the timer engine and statistics layer.

Concrete stores implement settings, tag lookup and the append-only session
log. Bucketing of sessions into days and months is done by the callers, so a
store only has to filter and order records.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pomodoro_cli.models.focus.history import SessionRecord


class FocusRepository(ABC):
    """Abstract base class for focus-session persistence."""

    @abstractmethod
    def get_config(self, key: str, default: str) -> str:
        """Get a stored setting.

        Args:
            key: Setting name
            default: Value returned when the key is missing

        Returns:
            The stored string value, or ``default``
        """
        raise NotImplementedError(
            "FocusRepository.get_config() must be implemented by adapter"
        )

    @abstractmethod
    def set_config(self, key: str, value: str) -> None:
        """Store a setting, replacing any previous value.

        Raises:
            Exception: Storage-specific error when the write fails
        """
        raise NotImplementedError(
            "FocusRepository.set_config() must be implemented by adapter"
        )

    @abstractmethod
    def append_session(self, record: SessionRecord) -> None:
        """Append one finished session to the log.

        Raises:
            Exception: Storage-specific error when the write fails
        """
        raise NotImplementedError(
            "FocusRepository.append_session() must be implemented by adapter"
        )

    @abstractmethod
    def query_work_sessions(
        self, tag: str | None = None, since: date | None = None
    ) -> list[SessionRecord]:
        """List work sessions in ascending start order.

        Args:
            tag: Restrict to one tag; None means every tag
            since: Restrict to sessions starting on or after this day

        Returns:
            List of SessionRecord objects with session_type "work"
        """
        raise NotImplementedError(
            "FocusRepository.query_work_sessions() must be implemented by adapter"
        )

    @abstractmethod
    def current_tag_name(self) -> str | None:
        """Name of the currently selected tag, if any."""
        raise NotImplementedError(
            "FocusRepository.current_tag_name() must be implemented by adapter"
        )

    @abstractmethod
    def get_tags(self) -> list[str]:
        """All tag names, sorted."""
        raise NotImplementedError(
            "FocusRepository.get_tags() must be implemented by adapter"
        )

    @abstractmethod
    def add_tag(self, name: str) -> None:
        """Add a tag; adding an existing name is a no-op."""
        raise NotImplementedError(
            "FocusRepository.add_tag() must be implemented by adapter"
        )

    @abstractmethod
    def delete_tag(self, name: str) -> None:
        """Remove a tag. Sessions already recorded under it are kept."""
        raise NotImplementedError(
            "FocusRepository.delete_tag() must be implemented by adapter"
        )
