"""Weekly and monthly totals of work sessions."""

from collections import defaultdict
from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta
from typing import NamedTuple

from pomodoro_cli.repositories.repository import FocusRepository

from .history import SessionRecord

WEEKLY_WINDOW_DAYS = 7
MONTHLY_LIMIT = 12


class AggregateBucket(NamedTuple):
    """Total work seconds for one day (YYYY-MM-DD) or month (YYYY-MM)."""

    label: str
    total_seconds: int

    @property
    def minutes(self) -> int:
        return self.total_seconds // 60


def _work_only(
    records: Iterable[SessionRecord], tag: str | None
) -> Iterable[SessionRecord]:
    for record in records:
        if record.session_type != "work":
            continue
        if tag is not None and record.tag != tag:
            continue
        yield record


def weekly_cutoff(today: date) -> date:
    """First day included in the weekly view."""
    return today - timedelta(days=WEEKLY_WINDOW_DAYS)


def bucket_weekly(
    records: Iterable[SessionRecord], today: date, tag: str | None = None
) -> list[AggregateBucket]:
    """
    Sum work sessions per calendar day over the trailing week.

    Days without sessions are left out. Buckets are ordered oldest first.
    """
    cutoff = weekly_cutoff(today)
    totals: dict[str, int] = defaultdict(int)
    for record in _work_only(records, tag):
        if record.day < cutoff:
            continue
        totals[record.day.isoformat()] += record.duration

    return [AggregateBucket(label, totals[label]) for label in sorted(totals)]


def bucket_monthly(
    records: Iterable[SessionRecord],
    tag: str | None = None,
    limit: int = MONTHLY_LIMIT,
) -> list[AggregateBucket]:
    """Sum work sessions per calendar month, newest month first, at most ``limit``."""
    totals: dict[str, int] = defaultdict(int)
    for record in _work_only(records, tag):
        totals[record.start_time.strftime("%Y-%m")] += record.duration

    labels = sorted(totals, reverse=True)[:limit]
    return [AggregateBucket(label, totals[label]) for label in labels]


def total_for_day(records: Iterable[SessionRecord], day: date) -> int:
    """Work seconds recorded on ``day`` across all tags."""
    return sum(r.duration for r in _work_only(records, None) if r.day == day)


class StatsAggregator:
    """Compute statistics from the session log on demand."""

    def __init__(
        self,
        store: FocusRepository,
        clock: Callable[[], datetime] | None = None,
    ):
        self.store = store
        self.clock = clock or datetime.now

    def today(self) -> date:
        return self.clock().date()

    def weekly(self, tag: str | None = None) -> list[AggregateBucket]:
        """Daily totals for the trailing week, oldest first."""
        today = self.today()
        records = self.store.query_work_sessions(tag=tag, since=weekly_cutoff(today))
        return bucket_weekly(records, today, tag)

    def monthly(self, tag: str | None = None) -> list[AggregateBucket]:
        """Monthly totals, newest first, capped at twelve months."""
        return bucket_monthly(self.store.query_work_sessions(tag=tag), tag)

    def today_total(self) -> int:
        today = self.today()
        return total_for_day(self.store.query_work_sessions(since=today), today)

    def summary(self, tag: str | None = None) -> dict:
        """Weekly and monthly views in one JSON-friendly dict."""
        weekly = self.weekly(tag)
        monthly = self.monthly(tag)
        return {
            "tag": tag,
            "today_seconds": self.today_total(),
            "weekly": [b._asdict() for b in weekly],
            "weekly_total_seconds": sum(b.total_seconds for b in weekly),
            "monthly": [b._asdict() for b in monthly],
        }
