"""
Unit Tests for the Partition Manager
"""

from datetime import timedelta

from workcenter_timeline.domain.scheduling.services.partition_manager import (
    PartitionManager,
    PartitionSnapshot,
    sort_by_planned_start,
)
from workcenter_timeline.domain.scheduling.value_objects.enums import (
    PartitionState,
    TransitionResult,
)
from workcenter_timeline.infrastructure.repositories.order_repository import (
    InMemoryOrderRepository,
)


class TestInitialState:
    def test_all_orders_start_unscheduled(self):
        manager = PartitionManager(["A", "B", "C"])
        assert manager.snapshot() == PartitionSnapshot(
            scheduled=(), unscheduled=("A", "B", "C")
        )
        assert manager.state_of("B") is PartitionState.UNSCHEDULED

    def test_register_is_idempotent(self):
        manager = PartitionManager(["A"])
        manager.schedule_order("A")

        assert manager.register("A") is False
        assert manager.state_of("A") is PartitionState.SCHEDULED
        assert len(manager) == 1


class TestMoves:
    def test_schedule_and_unschedule_append(self):
        manager = PartitionManager(["A", "B", "C"])

        assert manager.schedule_order("B") is TransitionResult.APPLIED
        assert manager.scheduled == ("B",)
        assert manager.unscheduled == ("A", "C")

        manager.schedule_order("A")
        assert manager.scheduled == ("B", "A")

        assert manager.unschedule_order("B") is TransitionResult.APPLIED
        assert manager.scheduled == ("A",)
        assert manager.unscheduled == ("C", "B")

    def test_repeated_schedule_is_no_op(self):
        manager = PartitionManager(["A"])
        manager.schedule_order("A")

        assert manager.schedule_order("A") is TransitionResult.NO_OP
        assert manager.scheduled == ("A",)

    def test_unschedule_of_unscheduled_is_no_op(self):
        manager = PartitionManager(["A"])
        assert manager.unschedule_order("A") is TransitionResult.NO_OP
        assert manager.unscheduled == ("A",)

    def test_unknown_order_changes_nothing(self):
        manager = PartitionManager(["A"])
        before = manager.snapshot()

        assert manager.schedule_order("Z") is TransitionResult.NOT_FOUND
        assert manager.unschedule_order("Z") is TransitionResult.NOT_FOUND
        assert manager.snapshot() == before

    def test_move_all_round_trip_preserves_order(self):
        manager = PartitionManager(["A", "B", "C"])
        manager.schedule_order("B")

        assert manager.move_all_to_scheduled() == ["A", "C"]
        assert manager.scheduled == ("B", "A", "C")
        assert manager.unscheduled == ()

        assert manager.move_all_to_unscheduled() == ["B", "A", "C"]
        assert manager.unscheduled == ("B", "A", "C")

    def test_move_all_on_empty_list_moves_nothing(self):
        manager = PartitionManager(["A"])
        assert manager.move_all_to_unscheduled() == []
        assert manager.unscheduled == ("A",)

    def test_discard_returns_previous_partition(self):
        manager = PartitionManager(["A", "B"])
        manager.schedule_order("A")

        assert manager.discard("A") is PartitionState.SCHEDULED
        assert "A" not in manager
        assert manager.discard("A") is None
        assert manager.unscheduled == ("B",)

    def test_reset(self):
        manager = PartitionManager(["A", "B"])
        manager.schedule_order("A")

        manager.reset(["X", "Y"])

        assert manager.snapshot() == PartitionSnapshot(
            scheduled=(), unscheduled=("X", "Y")
        )


class TestChronologicalOrder:
    def test_sort_by_planned_start(self, make_order, reference_instant):
        repository = InMemoryOrderRepository()
        for number, offset in (("A", 2), ("B", 0), ("C", 1)):
            repository.add(
                make_order(
                    number,
                    planned_start_time=reference_instant + timedelta(days=offset),
                    planned_end_time=reference_instant + timedelta(days=offset, hours=1),
                )
            )

        assert sort_by_planned_start(["A", "B", "C", "Z"], repository) == ["B", "C", "A"]
