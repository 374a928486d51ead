"""
Geometry Projector

Projects time intervals onto horizontal pixel space using a scale result and
produces the header labels for the visible buckets.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime

from ...shared.exceptions import InvalidGeometryError
from ..entities.order import WorkCenterOrder
from ..value_objects.date_bucket import DateBucket
from ..value_objects.enums import Granularity, TimeSpanKind
from ..value_objects.time_window import TimeWindow, seconds_between
from .scale_mapper import ScaleResult

MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)
WEEKDAY_LETTERS = ("M", "T", "W", "T", "F", "S", "S")


@dataclass(frozen=True)
class BucketLabel:
    primary: str
    secondary: str | None = None


@dataclass(frozen=True)
class OrderPlacement:
    """Where one scheduled order card goes on the timeline."""

    order_number: str
    left: float
    width: float
    slot: int
    top: float


def offset_of(
    instant: datetime, timeline_start: datetime, conversion_factor: float
) -> float:
    """Horizontal offset of an instant; negative before the timeline start."""
    return seconds_between(instant, timeline_start) * conversion_factor


def width_of(start: datetime, end: datetime, conversion_factor: float) -> float:
    """
    Pixel width of an interval.

    Raises:
        InvalidGeometryError: If end lies before start
    """
    if end < start:
        raise InvalidGeometryError(
            f"Cannot project interval ending {end.isoformat()} "
            f"before it starts {start.isoformat()}"
        )
    return seconds_between(end, start) * conversion_factor


def clamp_interval(
    start: datetime,
    end: datetime,
    timeline_start: datetime,
    timeline_end: datetime,
) -> TimeWindow | None:
    """Visible part of an interval, or None when it lies outside the timeline."""
    return TimeWindow(start=start, end=end).clamp_to(
        TimeWindow(start=timeline_start, end=timeline_end)
    )


def _day_label(instant: datetime) -> str:
    return f"{MONTH_ABBREVIATIONS[instant.month - 1]} {instant.day}"


def header_labels(
    buckets: Sequence[DateBucket], granularity: Granularity
) -> list[BucketLabel]:
    """
    Labels for the header row.

    Hour columns show the hour; the date is repeated only on the first column
    and wherever the calendar day changes. Day and month columns show the day
    of month with a one-letter weekday.
    """
    labels = []
    for index, bucket in enumerate(buckets):
        start = bucket.start
        if granularity is Granularity.HOUR:
            is_new_day = index == 0 or start.date() != buckets[index - 1].start.date()
            labels.append(
                BucketLabel(
                    primary=str(start.hour),
                    secondary=_day_label(start) if is_new_day else None,
                )
            )
        else:
            labels.append(
                BucketLabel(
                    primary=str(start.day),
                    secondary=WEEKDAY_LETTERS[start.weekday()],
                )
            )
    return labels


def slot_top(slot: int, card_height: float, card_gap: float) -> float:
    return slot * (card_height + card_gap)


def project_orders(
    orders: Iterable[WorkCenterOrder],
    scale: ScaleResult,
    card_height: float,
    card_gap: float,
    span: TimeSpanKind = TimeSpanKind.PLANNED,
) -> list[OrderPlacement]:
    """
    Place scheduled orders, one stacked slot per order in the given order.

    Orders without the requested span (no actual times yet) keep their slot
    but produce no placement. Nothing is placed on a degenerate scale.
    """
    timeline_start = scale.timeline_start
    if timeline_start is None or scale.is_degenerate:
        return []

    placements = []
    for slot, order in enumerate(orders):
        window = order.window(span)
        if window is None:
            continue
        placements.append(
            OrderPlacement(
                order_number=order.order_number,
                left=offset_of(window.start, timeline_start, scale.conversion_factor),
                width=width_of(window.start, window.end, scale.conversion_factor),
                slot=slot,
                top=slot_top(slot, card_height, card_gap),
            )
        )
    return placements
