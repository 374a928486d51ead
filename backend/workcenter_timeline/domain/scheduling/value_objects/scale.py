"""
Timeline scale variants.

A zoom value in [0, 100] is classified into exactly one of three scales. The
range tests are half-open at the low end so the variants partition the
domain without overlap:

    [0, 33)   -> HourScale
    [33, 66)  -> DayScale
    [66, 100] -> MonthScale

Floating point operations keep a fixed order so that a zoom value maps to
the same bucket counts on every client.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from .enums import Granularity

HOUR_ZOOM_LIMIT = 33
DAY_ZOOM_LIMIT = 66

MAX_HOUR_COLUMNS = 24
MIN_DAYS = 3
MAX_DAYS = 14
MAX_MONTH_DAYS = 30
MONTH_GROUPS = 10


@dataclass(frozen=True)
class HourScale:
    total_hours: int
    hours_per_bucket: int

    granularity = Granularity.HOUR

    @property
    def visible_units(self) -> int:
        return self.total_hours

    @property
    def units_per_bucket(self) -> int:
        return self.hours_per_bucket


@dataclass(frozen=True)
class DayScale:
    day_count: int

    granularity = Granularity.DAY

    @property
    def visible_units(self) -> int:
        return self.day_count

    @property
    def units_per_bucket(self) -> int:
        return 1


@dataclass(frozen=True)
class MonthScale:
    day_span: int
    days_per_bucket: int

    granularity = Granularity.MONTH

    @property
    def visible_units(self) -> int:
        return self.day_span

    @property
    def units_per_bucket(self) -> int:
        return self.days_per_bucket


TimelineScale = Union[HourScale, DayScale, MonthScale]


def hour_scale(zoom: float) -> HourScale:
    total_hours = math.floor(24 * (1 + zoom / HOUR_ZOOM_LIMIT))
    columns = min(total_hours, MAX_HOUR_COLUMNS)
    hours_per_bucket = max(1, math.ceil(total_hours / columns))
    return HourScale(total_hours=total_hours, hours_per_bucket=hours_per_bucket)


def day_scale(zoom: float) -> DayScale:
    normalized = (zoom - HOUR_ZOOM_LIMIT) / HOUR_ZOOM_LIMIT
    day_count = math.floor(MIN_DAYS + (MAX_DAYS - MIN_DAYS) * normalized)
    return DayScale(day_count=day_count)


def month_scale(zoom: float) -> MonthScale:
    day_span = math.floor(MAX_MONTH_DAYS * (zoom / 100))
    days_per_bucket = max(1, math.floor(day_span / MONTH_GROUPS))
    return MonthScale(day_span=day_span, days_per_bucket=days_per_bucket)


def classify_zoom(zoom: float) -> TimelineScale:
    """Map a validated zoom value onto its scale variant."""
    if zoom < HOUR_ZOOM_LIMIT:
        return hour_scale(zoom)
    if zoom < DAY_ZOOM_LIMIT:
        return day_scale(zoom)
    return month_scale(zoom)


def clamp_zoom(value: float) -> float:
    """Clamp raw slider input into [0, 100]."""
    if math.isnan(value):
        raise ValueError("Zoom must be a number")
    return min(100.0, max(0.0, float(value)))
