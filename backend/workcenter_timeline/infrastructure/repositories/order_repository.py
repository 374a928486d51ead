"""In-memory order repository."""

from collections.abc import Mapping
from typing import Any

from workcenter_timeline.core.observability import get_logger
from workcenter_timeline.domain.scheduling.entities.order import WorkCenterOrder
from workcenter_timeline.domain.scheduling.repositories.order_repository import (
    OrderRepository,
    apply_changes,
)
from workcenter_timeline.domain.shared.base import utc_now
from workcenter_timeline.domain.shared.exceptions import (
    DuplicateOrderError,
    OrderNotFoundError,
)

logger = get_logger(__name__)


class InMemoryOrderRepository(OrderRepository):
    """Dict-backed repository; state lives only as long as the process."""

    def __init__(self) -> None:
        self._orders: dict[str, WorkCenterOrder] = {}

    def add(self, order: WorkCenterOrder) -> WorkCenterOrder:
        if order.order_number in self._orders:
            raise DuplicateOrderError(order.order_number)
        self._orders[order.order_number] = order
        logger.debug("Stored order", order_number=order.order_number)
        return order

    def get(self, order_number: str) -> WorkCenterOrder | None:
        return self._orders.get(order_number)

    def list_orders(self) -> list[WorkCenterOrder]:
        return list(self._orders.values())

    def update(
        self, order_number: str, changes: Mapping[str, Any]
    ) -> WorkCenterOrder:
        current = self._orders.get(order_number)
        if current is None:
            raise OrderNotFoundError(order_number)

        changes = {"updated_at": utc_now(), **changes}
        updated = apply_changes(current, changes)
        self._orders[order_number] = updated
        logger.debug(
            "Updated order", order_number=order_number, fields=sorted(changes)
        )
        return updated

    def remove(self, order_number: str) -> WorkCenterOrder | None:
        return self._orders.pop(order_number, None)

    def clear(self) -> None:
        self._orders.clear()

    def __contains__(self, order_number: object) -> bool:
        return order_number in self._orders

    def __len__(self) -> int:
        return len(self._orders)
