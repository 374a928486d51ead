"""
Partition Manager

Keeps every known order in exactly one of two ordered lists, scheduled or
unscheduled. Moves append to the destination list, so relative insertion
order survives round trips.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from workcenter_timeline.core.observability import (
    get_logger,
    record_partition_transition,
)

from ...shared.base import DomainService
from ..repositories.order_repository import OrderRepository
from ..value_objects.enums import PartitionState, TransitionResult

logger = get_logger(__name__)


@dataclass(frozen=True)
class PartitionSnapshot:
    scheduled: tuple[str, ...]
    unscheduled: tuple[str, ...]


class PartitionManager(DomainService):
    """State machine over UNSCHEDULED and SCHEDULED for each order."""

    def __init__(self, order_numbers: Iterable[str] = ()) -> None:
        self._lists: dict[PartitionState, list[str]] = {
            PartitionState.UNSCHEDULED: [],
            PartitionState.SCHEDULED: [],
        }
        self._state: dict[str, PartitionState] = {}
        for order_number in order_numbers:
            self.register(order_number)

    @property
    def scheduled(self) -> tuple[str, ...]:
        return tuple(self._lists[PartitionState.SCHEDULED])

    @property
    def unscheduled(self) -> tuple[str, ...]:
        return tuple(self._lists[PartitionState.UNSCHEDULED])

    def snapshot(self) -> PartitionSnapshot:
        return PartitionSnapshot(scheduled=self.scheduled, unscheduled=self.unscheduled)

    def state_of(self, order_number: str) -> PartitionState | None:
        return self._state.get(order_number)

    def __contains__(self, order_number: object) -> bool:
        return order_number in self._state

    def __len__(self) -> int:
        return len(self._state)

    def register(self, order_number: str) -> bool:
        """Track a new order as unscheduled. Known orders are left alone."""
        if order_number in self._state:
            return False
        self._state[order_number] = PartitionState.UNSCHEDULED
        self._lists[PartitionState.UNSCHEDULED].append(order_number)
        return True

    def discard(self, order_number: str) -> PartitionState | None:
        """Stop tracking an order; returns the partition it was in."""
        state = self._state.pop(order_number, None)
        if state is not None:
            self._lists[state].remove(order_number)
        return state

    def reset(self, order_numbers: Iterable[str]) -> None:
        """Forget everything and start over with all orders unscheduled."""
        for partition in self._lists.values():
            partition.clear()
        self._state.clear()
        for order_number in order_numbers:
            self.register(order_number)

    def schedule_order(self, order_number: str) -> TransitionResult:
        return self._move(order_number, PartitionState.UNSCHEDULED, "schedule_order")

    def unschedule_order(self, order_number: str) -> TransitionResult:
        return self._move(order_number, PartitionState.SCHEDULED, "unschedule_order")

    def move_all_to_scheduled(self) -> list[str]:
        """Schedule every unscheduled order; returns the moved identifiers."""
        return self._move_all(PartitionState.UNSCHEDULED)

    def move_all_to_unscheduled(self) -> list[str]:
        """Unschedule every scheduled order; returns the moved identifiers."""
        return self._move_all(PartitionState.SCHEDULED)

    def _move(
        self, order_number: str, source: PartitionState, operation: str
    ) -> TransitionResult:
        state = self._state.get(order_number)
        if state is None:
            logger.warning(
                "Partition move for unknown order",
                operation=operation,
                order_number=order_number,
            )
            result = TransitionResult.NOT_FOUND
        elif state is not source:
            result = TransitionResult.NO_OP
        else:
            target = source.opposite
            self._lists[source].remove(order_number)
            self._lists[target].append(order_number)
            self._state[order_number] = target
            result = TransitionResult.APPLIED

        record_partition_transition(operation, result.value)
        return result

    def _move_all(self, source: PartitionState) -> list[str]:
        target = source.opposite
        moved = list(self._lists[source])
        self._lists[target].extend(moved)
        self._lists[source].clear()
        for order_number in moved:
            self._state[order_number] = target
        logger.info(
            "Moved all orders",
            source=source.value,
            target=target.value,
            count=len(moved),
        )
        return moved


def sort_by_planned_start(
    order_numbers: Iterable[str], repository: OrderRepository
) -> list[str]:
    """Chronological display order; unknown identifiers are dropped."""
    orders = [repository.get(n) for n in order_numbers]
    return [
        o.order_number
        for o in sorted(
            (o for o in orders if o is not None), key=lambda o: o.planned_start_time
        )
    ]
