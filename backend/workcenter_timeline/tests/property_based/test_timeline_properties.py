"""
Property-Based Testing for the Timeline Domain

Using Hypothesis to explore the whole zoom range, arbitrary intervals and
arbitrary partition move sequences.
"""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from hypothesis import given, settings, strategies as st

from workcenter_timeline.domain.scheduling.services.geometry_projector import (
    offset_of,
    width_of,
)
from workcenter_timeline.domain.scheduling.services.partition_manager import (
    PartitionManager,
)
from workcenter_timeline.domain.scheduling.services.scale_mapper import (
    compute_buckets,
)
from workcenter_timeline.domain.scheduling.value_objects.enums import (
    Granularity,
    ProgressStatus,
)
from workcenter_timeline.domain.scheduling.value_objects.scale import (
    DAY_ZOOM_LIMIT,
    HOUR_ZOOM_LIMIT,
    MAX_HOUR_COLUMNS,
)
from workcenter_timeline.domain.scheduling.value_objects.time_window import (
    elapsed_between,
)

zooms = st.floats(min_value=0, max_value=100, allow_nan=False)
grid_widths = st.floats(min_value=1, max_value=10_000, allow_nan=False)
instants = st.datetimes(
    min_value=datetime(2000, 1, 1),
    max_value=datetime(2100, 1, 1),
    timezones=st.just(timezone.utc),
)
zones = st.sampled_from(
    [timezone.utc, ZoneInfo("Europe/Berlin"), ZoneInfo("America/New_York")]
)


@st.composite
def partition_operations(draw):
    """Generate a sequence of partition moves over a small set of orders."""
    order_numbers = draw(
        st.lists(st.sampled_from("ABCDEFGH"), min_size=1, max_size=8, unique=True)
    )
    operations = draw(
        st.lists(
            st.tuples(
                st.sampled_from(
                    ["schedule", "unschedule", "schedule_all", "unschedule_all"]
                ),
                st.sampled_from("ABCDEFGHZ"),
            ),
            max_size=30,
        )
    )
    return order_numbers, operations


class TestScaleProperties:
    @given(zoom=zooms, reference=instants, zone=zones, width=grid_widths)
    @settings(max_examples=200)
    def test_buckets_are_contiguous_and_ascending(self, zoom, reference, zone, width):
        result = compute_buckets(zoom, reference.astimezone(zone), width)

        assert result.buckets
        for previous, current in zip(result.buckets, result.buckets[1:]):
            assert previous.end >= previous.start
            assert previous.is_followed_by(current)
            assert elapsed_between(current.start, previous.start) > timedelta(0)

    @given(zoom=zooms, reference=instants)
    def test_granularity_follows_zoom_range(self, zoom, reference):
        result = compute_buckets(zoom, reference, 1299)

        if zoom < HOUR_ZOOM_LIMIT:
            assert result.granularity is Granularity.HOUR
            assert result.column_count <= MAX_HOUR_COLUMNS
        elif zoom < DAY_ZOOM_LIMIT:
            assert result.granularity is Granularity.DAY
            assert 3 <= result.column_count <= 14
        else:
            assert result.granularity is Granularity.MONTH

    @given(zoom=zooms, reference=instants, zone=zones, width=grid_widths)
    def test_factor_maps_span_onto_grid_width(self, zoom, reference, zone, width):
        result = compute_buckets(zoom, reference.astimezone(zone), width)

        assert result.conversion_factor > 0
        right_edge = offset_of(
            result.timeline_end, result.timeline_start, result.conversion_factor
        )
        assert abs(right_edge - width) < 1e-6 * width

    @given(zoom=zooms, reference=instants)
    def test_window_contains_reference_day(self, zoom, reference):
        result = compute_buckets(zoom, reference, 1299)
        day = reference.replace(hour=0, minute=0, second=0, microsecond=0)
        assert result.timeline_start <= day <= result.buckets[-1].stop


class TestGeometryProperties:
    @given(
        start=instants,
        first=st.integers(min_value=0, max_value=10**7),
        extra=st.integers(min_value=0, max_value=10**7),
        factor=st.floats(min_value=0, max_value=10, allow_nan=False),
    )
    def test_width_is_monotonic_in_end(self, start, first, extra, factor):
        shorter = width_of(start, start + timedelta(seconds=first), factor)
        longer = width_of(start, start + timedelta(seconds=first + extra), factor)

        assert 0 <= shorter <= longer

    @given(start=instants, factor=st.floats(min_value=0, max_value=10))
    def test_timeline_start_maps_to_zero(self, start, factor):
        assert offset_of(start, start, factor) == 0


class TestPartitionProperties:
    @given(scenario=partition_operations())
    def test_every_order_in_exactly_one_partition(self, scenario):
        order_numbers, operations = scenario
        manager = PartitionManager(order_numbers)

        for operation, order_number in operations:
            if operation == "schedule":
                manager.schedule_order(order_number)
            elif operation == "unschedule":
                manager.unschedule_order(order_number)
            elif operation == "schedule_all":
                manager.move_all_to_scheduled()
            else:
                manager.move_all_to_unscheduled()

            combined = manager.scheduled + manager.unscheduled
            assert sorted(combined) == sorted(order_numbers)

    @given(
        order_numbers=st.lists(
            st.sampled_from("ABCDEFGH"), min_size=1, max_size=8, unique=True
        )
    )
    def test_round_trip_restores_unscheduled_list(self, order_numbers):
        manager = PartitionManager(order_numbers)

        manager.move_all_to_scheduled()
        manager.move_all_to_unscheduled()

        assert manager.unscheduled == tuple(order_numbers)
        assert manager.scheduled == ()


class TestStatusProperties:
    @given(
        target=st.integers(min_value=1, max_value=10**6),
        confirmed=st.integers(min_value=0, max_value=2 * 10**6),
    )
    def test_status_is_total_and_ordered(self, target, confirmed):
        status = ProgressStatus.from_quantities(confirmed, target)

        if confirmed == 0:
            assert status is ProgressStatus.RELEASED
        elif confirmed < target:
            assert status is ProgressStatus.IN_PRODUCTION
        else:
            assert status is ProgressStatus.COMPLETED
