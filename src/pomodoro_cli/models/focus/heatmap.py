"""Daily activity heatmap over the trailing six months."""

from collections import defaultdict
from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta
from typing import Literal, NamedTuple

from pomodoro_cli.repositories.repository import FocusRepository

from .history import SessionRecord

IntensityTier = Literal["none", "low", "medium", "high", "max"]

HEATMAP_DAYS = 180


class HeatmapCell(NamedTuple):
    """One day of the grid."""

    date: date
    total_seconds: int
    intensity_tier: IntensityTier

    @property
    def minutes(self) -> int:
        return self.total_seconds // 60


def classify_intensity(minutes: int, max_minutes: int) -> IntensityTier:
    """Tier of a day's minutes relative to the busiest day in the window."""
    if minutes <= 0:
        return "none"
    ratio = minutes / max(1, max_minutes)
    if ratio < 0.25:
        return "low"
    if ratio < 0.5:
        return "medium"
    if ratio < 0.75:
        return "high"
    return "max"


def window_start(today: date, days: int = HEATMAP_DAYS) -> date:
    """First day whose sessions are counted."""
    return today - timedelta(days=days)


def grid_start(today: date, days: int = HEATMAP_DAYS) -> date:
    """Monday on or before the first day of the window."""
    first = window_start(today, days)
    return first - timedelta(days=first.weekday())


def daily_totals(records: Iterable[SessionRecord], since: date) -> dict[date, int]:
    totals: dict[date, int] = defaultdict(int)
    for record in records:
        if record.session_type == "work" and record.day >= since:
            totals[record.day] += record.duration
    return totals


def build_cells(
    records: Iterable[SessionRecord], today: date, days: int = HEATMAP_DAYS
) -> list[HeatmapCell]:
    """
    One cell per day from grid_start() through ``today``.

    Alignment days before the window are always empty and do not count
    towards the busiest day.
    """
    start = grid_start(today, days)
    totals = daily_totals(records, window_start(today, days))

    span = (today - start).days + 1
    dates = [start + timedelta(days=i) for i in range(span)]
    max_minutes = max(1, max((totals.get(d, 0) // 60 for d in dates), default=0))

    return [
        HeatmapCell(
            d, totals.get(d, 0), classify_intensity(totals.get(d, 0) // 60, max_minutes)
        )
        for d in dates
    ]


def build_heatmap(
    records: Iterable[SessionRecord], today: date, days: int = HEATMAP_DAYS
) -> list[list[HeatmapCell | None]]:
    """
    Cells grouped into Monday-first weeks.

    The final week is padded with None for days after ``today``.
    """
    cells = build_cells(records, today, days)
    weeks: list[list[HeatmapCell | None]] = []
    for i in range(0, len(cells), 7):
        week: list[HeatmapCell | None] = list(cells[i : i + 7])
        week.extend([None] * (7 - len(week)))
        weeks.append(week)
    return weeks


class HeatmapBucketizer:
    """Reads recent work sessions and classifies each day."""

    def __init__(
        self,
        store: FocusRepository,
        clock: Callable[[], datetime] | None = None,
        days: int = HEATMAP_DAYS,
    ):
        self.store = store
        self.clock = clock or datetime.now
        self.days = days

    def _records(self, today: date) -> list[SessionRecord]:
        return self.store.query_work_sessions(since=window_start(today, self.days))

    def cells(self) -> list[HeatmapCell]:
        today = self.clock().date()
        return build_cells(self._records(today), today, self.days)

    def weeks(self) -> list[list[HeatmapCell | None]]:
        today = self.clock().date()
        return build_heatmap(self._records(today), today, self.days)
