"""Focus mode - Pomodoro timer engine, history and statistics."""

from .analytics import AggregateBucket, StatsAggregator
from .engine import TimerEngine
from .heatmap import HeatmapBucketizer, HeatmapCell, classify_intensity
from .history import HistoryLogger, SessionRecord
from .recorder import SessionRecorder
from .state import TimerMode, TimerState
from .tags import StatsTagFilter, TagSelection

__all__ = [
    "AggregateBucket",
    "HeatmapBucketizer",
    "HeatmapCell",
    "HistoryLogger",
    "SessionRecord",
    "SessionRecorder",
    "StatsAggregator",
    "StatsTagFilter",
    "TagSelection",
    "TimerEngine",
    "TimerMode",
    "TimerState",
    "classify_intensity",
]
