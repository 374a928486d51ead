"""
Time Window Value Object

Represents a closed period between two instants. Used for the planned,
updated and actual spans of an order and for the visible timeline range.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import model_validator

from ...shared.base import ValueObject


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant
    return instant.astimezone(timezone.utc)


def elapsed_between(later: datetime, earlier: datetime) -> timedelta:
    """
    Absolute time from ``earlier`` to ``later``.

    Subtracting two datetimes that share a tzinfo yields wall-clock time,
    which is off by the offset change across a DST transition. Aware values
    are compared in UTC instead.
    """
    return _as_utc(later) - _as_utc(earlier)


def shift_elapsed(instant: datetime, delta: timedelta) -> datetime:
    """Move ``instant`` by ``delta`` of absolute time, keeping its zone."""
    if instant.tzinfo is None:
        return instant + delta
    return (_as_utc(instant) + delta).astimezone(instant.tzinfo)


def seconds_between(later: datetime, earlier: datetime) -> int:
    """Whole seconds from ``earlier`` to ``later``, truncated toward zero."""
    return math.trunc(elapsed_between(later, earlier).total_seconds())


class TimeWindow(ValueObject):
    """A time window between two absolute instants (end may equal start)."""

    start: datetime
    end: datetime

    @model_validator(mode="after")
    def _end_not_before_start(self) -> "TimeWindow":
        if self.end < self.start:
            raise ValueError("End time must not be before start time")
        return self

    @property
    def duration(self) -> timedelta:
        """Get the duration of this time window."""
        return self.end - self.start

    def contains(self, point: datetime) -> bool:
        """Check if a datetime point is within this time window."""
        return self.start <= point <= self.end

    def overlaps_with(self, other: "TimeWindow") -> bool:
        """Check if this window shares at least one instant with another."""
        return self.start <= other.end and other.start <= self.end

    def clamp_to(self, bounds: "TimeWindow") -> Optional["TimeWindow"]:
        """
        Get the part of this window that lies inside ``bounds``.

        Returns:
            Clamped time window or None if the windows do not overlap
        """
        if not self.overlaps_with(bounds):
            return None
        return TimeWindow(
            start=max(self.start, bounds.start), end=min(self.end, bounds.end)
        )

    def __str__(self) -> str:
        """String representation."""
        return f"{self.start.isoformat()} to {self.end.isoformat()}"
