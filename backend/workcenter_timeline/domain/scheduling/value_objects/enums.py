"""Domain enums for the timeline board."""

from datetime import datetime, timedelta
from enum import Enum

from .time_window import shift_elapsed


class Granularity(str, Enum):
    """Unit size a timeline bucket represents."""

    HOUR = "hour"
    DAY = "day"
    MONTH = "month"

    @property
    def unit(self) -> timedelta:
        """Distance between the inclusive end of a bucket and the next start."""
        if self is Granularity.HOUR:
            return timedelta(hours=1)
        return timedelta(days=1)

    def advance(self, instant: datetime, units: int) -> datetime:
        """
        Step ``units`` bucket units from ``instant``.

        Hours are absolute, so a DST gap is skipped and a repeated hour is
        visited twice. Days are calendar days: local midnight stays local
        midnight whatever the offset change.
        """
        if self is Granularity.HOUR:
            return shift_elapsed(instant, self.unit * units)
        return instant + self.unit * units


class GridGrain(str, Enum):
    """Spacing of background grid lines."""

    HOUR = "hour"
    HALF_DAY = "half_day"
    DAY = "day"

    @property
    def step(self) -> timedelta:
        return {
            GridGrain.HOUR: timedelta(hours=1),
            GridGrain.HALF_DAY: timedelta(hours=12),
            GridGrain.DAY: timedelta(hours=24),
        }[self]

    def advance(self, instant: datetime) -> datetime:
        """Next grid line; sub-day grains step in absolute time."""
        if self is GridGrain.DAY:
            return instant + self.step
        return shift_elapsed(instant, self.step)


class PartitionState(str, Enum):
    """Partition an order currently belongs to."""

    UNSCHEDULED = "unscheduled"
    SCHEDULED = "scheduled"

    @property
    def opposite(self) -> "PartitionState":
        if self is PartitionState.UNSCHEDULED:
            return PartitionState.SCHEDULED
        return PartitionState.UNSCHEDULED


class TransitionResult(str, Enum):
    """Outcome of a partition move."""

    APPLIED = "applied"
    NO_OP = "no_op"
    NOT_FOUND = "not_found"

    @property
    def changed(self) -> bool:
        return self is TransitionResult.APPLIED


class SelectionResult(str, Enum):
    """Outcome of a selection request."""

    SELECTED = "selected"
    CLEARED = "cleared"
    UNCHANGED = "unchanged"
    NOT_FOUND = "not_found"


class ProgressStatus(str, Enum):
    """Production progress derived from confirmed vs. target quantity."""

    RELEASED = "Released"
    IN_PRODUCTION = "In Production"
    COMPLETED = "Completed"

    @classmethod
    def from_quantities(cls, confirmed: int, target: int) -> "ProgressStatus":
        """
        Derive progress status.

        Quantities above target count as completed; nothing confirmed yet
        (including negative input) counts as released.
        """
        if confirmed >= target:
            return cls.COMPLETED
        if confirmed > 0:
            return cls.IN_PRODUCTION
        return cls.RELEASED


class TimeSpanKind(str, Enum):
    """Which time pair of an order to project onto the timeline."""

    PLANNED = "planned"
    UPDATED = "updated"
    ACTUAL = "actual"
