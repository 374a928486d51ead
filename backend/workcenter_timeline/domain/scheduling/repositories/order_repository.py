"""
Order Repository Interface

Defines the contract for order storage and the admission rule every order
passes before it is stored.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ...shared.exceptions import OrderNotFoundError, OrderValidationError
from ..entities.order import WorkCenterOrder

UPDATED_DEFAULTS = (
    ("updated_start_time", "planned_start_time"),
    ("updated_end_time", "planned_end_time"),
)


def _describe(error: PydanticValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in e['loc']) or 'order'}: {e['msg']}"
        for e in error.errors()
    )


def admit_order(record: WorkCenterOrder | Mapping[str, Any]) -> WorkCenterOrder:
    """
    Build a validated order from a raw record.

    Raises:
        OrderValidationError: If the record is malformed (missing fields,
            end before start in any time pair, non-positive target quantity)
    """
    if isinstance(record, WorkCenterOrder):
        return record
    try:
        return WorkCenterOrder.model_validate(dict(record))
    except PydanticValidationError as e:
        raise OrderValidationError(record.get("order_number"), _describe(e)) from e


def apply_changes(
    order: WorkCenterOrder, changes: Mapping[str, Any]
) -> WorkCenterOrder:
    """
    Produce a re-validated copy of ``order`` with ``changes`` applied.

    Updated times that still mirror the planned times follow a planned-time
    change; updated times that were rescheduled separately are kept.

    Raises:
        OrderValidationError: If the result would be malformed or the change
            tries to alter the order number
    """
    unknown = set(changes) - set(WorkCenterOrder.model_fields)
    if unknown:
        raise OrderValidationError(
            order.order_number, f"Unknown order fields: {', '.join(sorted(unknown))}"
        )
    if "order_number" in changes and changes["order_number"] != order.order_number:
        raise OrderValidationError(order.order_number, "Order number cannot change")

    data = order.model_dump()
    for updated, planned in UPDATED_DEFAULTS:
        if (
            planned in changes
            and updated not in changes
            and getattr(order, updated) == getattr(order, planned)
        ):
            data[updated] = None
    data.update(changes)
    try:
        return WorkCenterOrder.model_validate(data)
    except PydanticValidationError as e:
        raise OrderValidationError(order.order_number, _describe(e)) from e


class OrderRepository(ABC):
    """
    Abstract repository for work-center orders keyed by order number.

    Orders keep their insertion order. All operations are synchronous.
    """

    @abstractmethod
    def add(self, order: WorkCenterOrder) -> WorkCenterOrder:
        """
        Store a new order.

        Raises:
            DuplicateOrderError: If the order number is already stored
        """
        pass

    @abstractmethod
    def get(self, order_number: str) -> WorkCenterOrder | None:
        """Retrieve an order or None if not found."""
        pass

    @abstractmethod
    def list_orders(self) -> list[WorkCenterOrder]:
        """All orders in insertion order."""
        pass

    @abstractmethod
    def update(
        self, order_number: str, changes: Mapping[str, Any]
    ) -> WorkCenterOrder:
        """
        Apply a partial update.

        Raises:
            OrderNotFoundError: If the order does not exist
            OrderValidationError: If the update would make the order malformed
        """
        pass

    @abstractmethod
    def remove(self, order_number: str) -> WorkCenterOrder | None:
        """Remove an order; returns it or None if it did not exist."""
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    def get_or_raise(self, order_number: str) -> WorkCenterOrder:
        order = self.get(order_number)
        if order is None:
            raise OrderNotFoundError(order_number)
        return order

    def __contains__(self, order_number: object) -> bool:
        return isinstance(order_number, str) and self.get(order_number) is not None

    def __iter__(self) -> Iterator[WorkCenterOrder]:
        return iter(self.list_orders())

    def __len__(self) -> int:
        return len(self.list_orders())
