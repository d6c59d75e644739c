"""Timer state for the work/break cycle."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

TimerMode = Literal["work", "break"]

DEFAULT_WORK_SECONDS = 1500
DEFAULT_BREAK_SECONDS = 300

WORK_BOUNDS = (60, 7200)
BREAK_BOUNDS = (60, 3600)


def opposite(mode: TimerMode) -> TimerMode:
    """Return the mode that follows ``mode``."""
    return "break" if mode == "work" else "work"


def clamp_duration(mode: TimerMode, seconds: int) -> int:
    """Clamp a duration to the allowed range for ``mode``."""
    low, high = WORK_BOUNDS if mode == "work" else BREAK_BOUNDS
    return max(low, min(high, int(seconds)))


def parse_duration(raw: str | None, mode: TimerMode) -> int:
    """
    Parse a stored duration value.

    Malformed values fall back to the mode's default; parsed values are
    clamped to the mode's bounds.
    """
    default = DEFAULT_WORK_SECONDS if mode == "work" else DEFAULT_BREAK_SECONDS
    try:
        seconds = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    return clamp_duration(mode, seconds)


@dataclass
class TimerState:
    """Snapshot of the countdown. Mutated only by TimerEngine."""

    mode: TimerMode = "work"
    running: bool = False
    remaining_seconds: int = DEFAULT_WORK_SECONDS
    session_start: datetime | None = None
    work_duration: int = DEFAULT_WORK_SECONDS
    break_duration: int = DEFAULT_BREAK_SECONDS

    def duration_for(self, mode: TimerMode | None = None) -> int:
        """Configured duration in seconds for ``mode`` (defaults to the current one)."""
        mode = mode or self.mode
        return self.work_duration if mode == "work" else self.break_duration

    @property
    def session_open(self) -> bool:
        return self.session_start is not None

    def format_time(self) -> str:
        """Remaining time as MM:SS."""
        minutes, seconds = divmod(self.remaining_seconds, 60)
        return f"{minutes:02d}:{seconds:02d}"

    def progress(self) -> float:
        """Fraction of the current interval already elapsed (0.0 - 1.0)."""
        total = self.duration_for()
        if total <= 0:
            return 0.0
        return min(1.0, max(0.0, (total - self.remaining_seconds) / total))
