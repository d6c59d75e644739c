"""Unit tests for weekly/monthly aggregation."""

from __future__ import annotations

from datetime import date, datetime, timedelta

from pomodoro_cli.models.focus.analytics import (
    AggregateBucket,
    StatsAggregator,
    bucket_monthly,
    bucket_weekly,
    total_for_day,
    weekly_cutoff,
)

TODAY = date(2026, 3, 10)


def at(day: date, hour: int = 9) -> datetime:
    return datetime(day.year, day.month, day.day, hour)


# ---------------------------------------------------------------------------
# Pure bucketing
# ---------------------------------------------------------------------------


class TestWeekly:
    def test_cutoff(self):
        assert weekly_cutoff(TODAY) == date(2026, 3, 3)

    def test_breaks_are_ignored(self, record_factory):
        records = [
            record_factory(at(TODAY, 9), 1500),
            record_factory(at(TODAY, 10), 300, session_type="break"),
        ]
        assert bucket_weekly(records, TODAY) == [AggregateBucket("2026-03-10", 1500)]

    def test_same_day_sessions_are_summed(self, record_factory):
        records = [record_factory(at(TODAY, h), 1500) for h in (9, 10, 11)]
        assert bucket_weekly(records, TODAY)[0].total_seconds == 4500

    def test_window_edges(self, record_factory):
        records = [
            record_factory(at(date(2026, 3, 2))),
            record_factory(at(date(2026, 3, 3))),
        ]
        assert [b.label for b in bucket_weekly(records, TODAY)] == ["2026-03-03"]

    def test_sparse_and_ascending(self, record_factory):
        records = [
            record_factory(at(date(2026, 3, 9))),
            record_factory(at(date(2026, 3, 5))),
        ]
        labels = [b.label for b in bucket_weekly(records, TODAY)]
        assert labels == ["2026-03-05", "2026-03-09"]

    def test_tag_filter(self, record_factory):
        records = [
            record_factory(at(TODAY, 9), tag="Work"),
            record_factory(at(TODAY, 10), 600, tag="Study"),
        ]
        assert bucket_weekly(records, TODAY, tag="Study") == [
            AggregateBucket("2026-03-10", 600)
        ]

    def test_empty(self):
        assert bucket_weekly([], TODAY) == []


class TestMonthly:
    def test_newest_first_capped_at_twelve(self, record_factory):
        records = []
        day = date(2025, 1, 15)
        for _ in range(14):
            records.append(record_factory(at(day)))
            day = (day.replace(day=1) + timedelta(days=32)).replace(day=15)
        buckets = bucket_monthly(records)
        assert len(buckets) == 12
        assert buckets[0].label == "2026-02"
        assert buckets[-1].label == "2025-03"
        labels = [b.label for b in buckets]
        assert labels == sorted(labels, reverse=True)

    def test_sums_within_month(self, record_factory):
        records = [
            record_factory(at(date(2026, 3, 1)), 1500),
            record_factory(at(date(2026, 3, 31)), 600),
            record_factory(at(date(2026, 3, 15)), 300, session_type="break"),
        ]
        assert bucket_monthly(records) == [AggregateBucket("2026-03", 2100)]

    def test_minutes_property(self):
        assert AggregateBucket("2026-03", 1530).minutes == 25


class TestTotalForDay:
    def test_counts_work_only(self, record_factory):
        records = [
            record_factory(at(TODAY, 9), 1500),
            record_factory(at(TODAY, 10), 300, session_type="break"),
            record_factory(at(date(2026, 3, 9)), 1500),
        ]
        assert total_for_day(records, TODAY) == 1500


# ---------------------------------------------------------------------------
# StatsAggregator against a store
# ---------------------------------------------------------------------------


class TestStatsAggregator:
    def test_weekly_reads_store(self, history, clock, record_factory):
        history.append_session(record_factory(at(TODAY, 8), 1500))
        history.append_session(record_factory(at(TODAY, 9), 300, session_type="break"))
        history.append_session(record_factory(at(date(2026, 2, 1)), 1500))
        stats = StatsAggregator(history, clock=clock)
        assert stats.weekly() == [AggregateBucket("2026-03-10", 1500)]

    def test_monthly_with_tag(self, memory_store, clock, record_factory):
        memory_store.sessions = [
            record_factory(at(date(2026, 1, 5)), tag="Study"),
            record_factory(at(date(2026, 2, 5)), tag="Work"),
        ]
        stats = StatsAggregator(memory_store, clock=clock)
        assert [b.label for b in stats.monthly("Study")] == ["2026-01"]
        assert [b.label for b in stats.monthly()] == ["2026-02", "2026-01"]

    def test_today_total(self, memory_store, clock, record_factory):
        memory_store.sessions = [
            record_factory(at(TODAY, 7), 1500),
            record_factory(at(TODAY, 8), 900),
        ]
        assert StatsAggregator(memory_store, clock=clock).today_total() == 2400

    def test_summary(self, memory_store, clock, record_factory):
        memory_store.sessions = [record_factory(at(TODAY, 7), 1500)]
        summary = StatsAggregator(memory_store, clock=clock).summary()
        assert summary["tag"] is None
        assert summary["today_seconds"] == 1500
        assert summary["weekly_total_seconds"] == 1500
        assert summary["monthly"] == [{"label": "2026-03", "total_seconds": 1500}]
