"""
Unit Tests for the Scale Mapper

Bucket generation per granularity, the conversion factor and column width
change notifications.
"""

from datetime import datetime, timedelta, timezone

import pytest

from workcenter_timeline.domain.scheduling.events import ColumnWidthChanged
from workcenter_timeline.domain.scheduling.services.scale_mapper import (
    ScaleMapper,
    compute_buckets,
    conversion_factor,
    grid_time_slots,
    start_of_day,
)
from workcenter_timeline.domain.scheduling.value_objects.date_bucket import DateBucket
from workcenter_timeline.domain.scheduling.value_objects.enums import (
    Granularity,
    GridGrain,
)

REFERENCE = datetime(2024, 7, 10, 13, 30, tzinfo=timezone.utc)
DAY = datetime(2024, 7, 10, tzinfo=timezone.utc)


def _assert_contiguous(buckets):
    for previous, current in zip(buckets, buckets[1:]):
        assert previous.is_followed_by(current)
        assert previous.start < current.start


class TestHourGranularity:
    def test_zoom_zero_yields_24_single_hours(self):
        result = compute_buckets(0, REFERENCE, 1299)

        assert result.granularity is Granularity.HOUR
        assert result.column_count == 24
        assert result.buckets[0].start == DAY - timedelta(hours=12)
        assert result.buckets[-1].start == DAY + timedelta(hours=11)
        assert all(b.start == b.end for b in result.buckets)
        _assert_contiguous(result.buckets)

    def test_factor_spans_first_start_to_last_end(self):
        result = compute_buckets(0, REFERENCE, 1299)
        assert result.conversion_factor == pytest.approx(1299 / (23 * 3600))

    def test_grouped_hours_never_exceed_24_columns(self):
        result = compute_buckets(32, REFERENCE, 1299)

        assert result.column_count == 24
        first = result.buckets[0]
        assert first.start == DAY - timedelta(hours=23)
        assert first.end == first.start + timedelta(hours=1)
        _assert_contiguous(result.buckets)


class TestDayGranularity:
    def test_zoom_50_yields_eight_days(self):
        result = compute_buckets(50, REFERENCE, 1299)

        assert result.granularity is Granularity.DAY
        assert [b.start.day for b in result.buckets] == [6, 7, 8, 9, 10, 11, 12, 13]
        assert all(b.start == b.end for b in result.buckets)
        assert result.conversion_factor == pytest.approx(1299 / (7 * 86400))
        assert result.column_width == pytest.approx(1299 / 8)

    def test_zoom_33_yields_three_days_around_reference(self):
        result = compute_buckets(33, REFERENCE, 1299)
        assert [b.start for b in result.buckets] == [
            DAY - timedelta(days=1),
            DAY,
            DAY + timedelta(days=1),
        ]


class TestMonthGranularity:
    def test_zoom_100_yields_ten_three_day_buckets(self):
        result = compute_buckets(100, REFERENCE, 1299)

        assert result.granularity is Granularity.MONTH
        assert result.column_count == 10
        assert result.buckets[0].start == DAY - timedelta(days=15)
        assert result.buckets[0].end == DAY - timedelta(days=13)
        assert result.buckets[-1].end == DAY + timedelta(days=14)
        _assert_contiguous(result.buckets)

    def test_zoom_66_yields_single_day_buckets(self):
        result = compute_buckets(66, REFERENCE, 1299)
        assert result.granularity is Granularity.MONTH
        assert result.column_count == 19
        assert result.buckets[0].start == DAY - timedelta(days=9)


class TestConversionFactor:
    def test_no_buckets_is_zero(self):
        assert conversion_factor((), 1299) == 0

    def test_single_instant_bucket_is_zero(self):
        bucket = DateBucket(start=DAY, end=DAY, granularity=Granularity.DAY)
        assert conversion_factor((bucket,), 1299) == 0

    def test_zero_width_is_degenerate(self):
        result = compute_buckets(50, REFERENCE, 0)
        assert result.conversion_factor == 0
        assert result.is_degenerate
        assert result.column_width == 0

    def test_identical_inputs_identical_output(self):
        assert compute_buckets(42, REFERENCE, 800) == compute_buckets(42, REFERENCE, 800)


class TestGridTimeSlots:
    def test_hourly_slots_cover_whole_days(self):
        result = compute_buckets(50, REFERENCE, 1299)
        slots = grid_time_slots(result.buckets, GridGrain.HOUR)

        assert slots[0] == start_of_day(result.buckets[0].start)
        assert len(slots) == 8 * 24
        assert slots[-1] == result.buckets[-1].end + timedelta(hours=23)

    @pytest.mark.parametrize("grain, per_day", [(GridGrain.HALF_DAY, 2), (GridGrain.DAY, 1)])
    def test_coarser_grains(self, grain, per_day):
        result = compute_buckets(50, REFERENCE, 1299)
        assert len(grid_time_slots(result.buckets, grain)) == 8 * per_day

    def test_no_buckets_no_slots(self):
        assert grid_time_slots((), GridGrain.HOUR) == []


class TestScaleMapperNotifications:
    def test_first_computation_notifies(self):
        mapper = ScaleMapper(1299)
        events: list[ColumnWidthChanged] = []
        mapper.subscribe(events.append)

        mapper.compute(50, REFERENCE)

        assert len(events) == 1
        assert events[0].column_width == pytest.approx(1299 / 8)
        assert events[0].column_count == 8

    def test_unchanged_width_does_not_notify(self):
        mapper = ScaleMapper(1299)
        events: list[ColumnWidthChanged] = []
        mapper.subscribe(events.append)

        mapper.compute(50, REFERENCE)
        mapper.compute(50, REFERENCE)
        mapper.compute(50.5, REFERENCE)

        assert len(events) == 1

    def test_bucket_count_change_notifies(self):
        mapper = ScaleMapper(1299)
        events: list[ColumnWidthChanged] = []
        mapper.subscribe(events.append)

        mapper.compute(50, REFERENCE)
        mapper.compute(0, REFERENCE)

        assert [e.column_count for e in events] == [8, 24]

    def test_grid_width_change_notifies(self):
        mapper = ScaleMapper(1299)
        events: list[ColumnWidthChanged] = []
        mapper.subscribe(events.append)

        mapper.compute(50, REFERENCE)
        mapper.grid_width = 800
        mapper.compute(50, REFERENCE)

        assert events[-1].column_width == pytest.approx(100)

    def test_unsubscribed_listener_not_called(self):
        mapper = ScaleMapper(1299)
        events: list[ColumnWidthChanged] = []
        mapper.subscribe(events.append)
        mapper.unsubscribe(events.append)

        mapper.compute(50, REFERENCE)

        assert events == []
        assert mapper.last_result is not None

    def test_negative_width_rejected(self):
        mapper = ScaleMapper(1299)
        with pytest.raises(ValueError):
            mapper.grid_width = -1
