"""Repository interfaces for the Pomodoro CLI.

The timer engine and the statistics layer depend only on these contracts.
The SQLite implementation lives in pomodoro_cli.models.focus.history.
"""

from .repository import FocusRepository

__all__ = ["FocusRepository"]
