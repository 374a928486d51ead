"""Immutable value objects for the timeline board."""

from .date_bucket import DateBucket
from .enums import (
    Granularity,
    GridGrain,
    PartitionState,
    ProgressStatus,
    SelectionResult,
    TimeSpanKind,
    TransitionResult,
)
from .scale import DayScale, HourScale, MonthScale, TimelineScale, classify_zoom
from .time_window import TimeWindow, seconds_between

__all__ = [
    "DateBucket",
    "Granularity",
    "GridGrain",
    "PartitionState",
    "ProgressStatus",
    "SelectionResult",
    "TimeSpanKind",
    "TransitionResult",
    "DayScale",
    "HourScale",
    "MonthScale",
    "TimelineScale",
    "classify_zoom",
    "TimeWindow",
    "seconds_between",
]
