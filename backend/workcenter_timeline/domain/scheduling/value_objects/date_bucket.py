"""DateBucket value object: one timeline column."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from .enums import Granularity
from .time_window import elapsed_between


@dataclass(frozen=True)
class DateBucket:
    """
    Contiguous interval shown as one timeline column.

    ``end`` is inclusive: it is the start of the last hour (hour granularity)
    or the last day (day/month granularity) covered by the bucket.
    """

    start: datetime
    end: datetime
    granularity: Granularity

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError("Bucket end must not be before bucket start")

    @property
    def stop(self) -> datetime:
        """Exclusive end of the bucket, equal to the next bucket's start."""
        return self.granularity.advance(self.end, 1)

    @property
    def span(self) -> timedelta:
        return elapsed_between(self.stop, self.start)

    def contains(self, point: datetime) -> bool:
        return self.start <= point < self.stop

    def is_followed_by(self, other: DateBucket) -> bool:
        """True when ``other`` starts exactly where this bucket stops."""
        return self.stop == other.start
