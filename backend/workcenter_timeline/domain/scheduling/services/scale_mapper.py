"""
Scale Mapper

Turns a zoom value into the visible date buckets of the timeline and the
pixels-per-second conversion factor used by the geometry projector.

``compute_buckets`` is pure: the same (zoom, reference instant, grid width)
always yields the same result. ``ScaleMapper`` wraps it and notifies
subscribers when the per-bucket pixel width changes between computations.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from ...shared.base import DomainService
from ..events import ColumnWidthChanged
from ..value_objects.date_bucket import DateBucket
from ..value_objects.enums import Granularity, GridGrain
from ..value_objects.scale import TimelineScale, classify_zoom
from ..value_objects.time_window import seconds_between

ColumnWidthListener = Callable[[ColumnWidthChanged], None]


def start_of_day(instant: datetime) -> datetime:
    return instant.replace(hour=0, minute=0, second=0, microsecond=0, fold=0)


def end_of_day(instant: datetime) -> datetime:
    return instant.replace(hour=23, minute=59, second=59, microsecond=999999)


@dataclass(frozen=True)
class ScaleResult:
    """Visible buckets and pixel conversion for one zoom computation."""

    scale: TimelineScale
    buckets: tuple[DateBucket, ...]
    conversion_factor: float
    grid_width: float
    reference_instant: datetime

    @property
    def granularity(self) -> Granularity:
        return self.scale.granularity

    @property
    def column_count(self) -> int:
        return len(self.buckets)

    @property
    def column_width(self) -> float:
        if not self.buckets:
            return 0.0
        return self.grid_width / len(self.buckets)

    @property
    def timeline_start(self) -> datetime | None:
        return self.buckets[0].start if self.buckets else None

    @property
    def timeline_end(self) -> datetime | None:
        return self.buckets[-1].end if self.buckets else None

    @property
    def is_degenerate(self) -> bool:
        """Nothing can be projected (no buckets or zero span)."""
        return self.conversion_factor == 0


def buckets_for_scale(
    scale: TimelineScale, reference_instant: datetime
) -> tuple[DateBucket, ...]:
    """
    Generate the contiguous bucket sequence centred on the reference day.

    The window opens ``visible_units // 2`` units before local midnight of the
    reference day. Hour buckets advance in absolute hours and day buckets in
    calendar days, so a window crossing a DST change has no missing or
    duplicated columns.
    """
    granularity = scale.granularity
    today = start_of_day(reference_instant)
    window_start = granularity.advance(today, -(scale.visible_units // 2))

    buckets = []
    for i in range(0, scale.visible_units, scale.units_per_bucket):
        start = granularity.advance(window_start, i)
        end = granularity.advance(start, scale.units_per_bucket - 1)
        buckets.append(DateBucket(start=start, end=end, granularity=granularity))
    return tuple(buckets)


def conversion_factor(buckets: tuple[DateBucket, ...], grid_width: float) -> float:
    """Pixels per second; 0 when there is nothing to span."""
    if not buckets:
        return 0.0
    span_seconds = seconds_between(buckets[-1].end, buckets[0].start)
    if span_seconds <= 0:
        return 0.0
    return grid_width / span_seconds


def compute_buckets(
    zoom: float, reference_instant: datetime, grid_width: float
) -> ScaleResult:
    """
    Compute the visible buckets for a zoom value.

    Args:
        zoom: Validated zoom in [0, 100]
        reference_instant: Instant whose day the window is centred on
        grid_width: Total timeline width in pixels

    Returns:
        ScaleResult with buckets and the pixels-per-second factor
    """
    scale = classify_zoom(zoom)
    buckets = buckets_for_scale(scale, reference_instant)
    return ScaleResult(
        scale=scale,
        buckets=buckets,
        conversion_factor=conversion_factor(buckets, grid_width),
        grid_width=grid_width,
        reference_instant=reference_instant,
    )


def grid_time_slots(
    buckets: tuple[DateBucket, ...], grain: GridGrain
) -> list[datetime]:
    """Grid line instants from the first bucket's day to the last bucket's day."""
    if not buckets:
        return []
    slots = []
    current = start_of_day(buckets[0].start)
    last = end_of_day(buckets[-1].end)
    while current <= last:
        slots.append(current)
        current = grain.advance(current)
    return slots


class ScaleMapper(DomainService):
    """Stateful front of ``compute_buckets`` that tracks column width changes."""

    def __init__(self, grid_width: float) -> None:
        self._grid_width = grid_width
        self._column_width: float | None = None
        self._listeners: list[ColumnWidthListener] = []
        self._last: ScaleResult | None = None

    @property
    def grid_width(self) -> float:
        return self._grid_width

    @grid_width.setter
    def grid_width(self, value: float) -> None:
        if value < 0:
            raise ValueError("Grid width cannot be negative")
        self._grid_width = value

    @property
    def last_result(self) -> ScaleResult | None:
        return self._last

    def subscribe(self, listener: ColumnWidthListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ColumnWidthListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def compute(self, zoom: float, reference_instant: datetime) -> ScaleResult:
        result = compute_buckets(zoom, reference_instant, self._grid_width)
        self._last = result

        if result.column_width != self._column_width:
            self._column_width = result.column_width
            event = ColumnWidthChanged(
                column_width=result.column_width, column_count=result.column_count
            )
            for listener in list(self._listeners):
                listener(event)

        return result
