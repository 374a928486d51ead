"""Selection Controller: at most one active order, referenced by number."""

from collections.abc import Container

from workcenter_timeline.core.observability import get_logger

from ...shared.base import DomainService
from ..value_objects.enums import SelectionResult

logger = get_logger(__name__)


class SelectionController(DomainService):
    """
    Tracks the selected order.

    Selection has no partition side effects; panels that want "select means
    schedule" compose that above this class.
    """

    def __init__(self, orders: Container[str]) -> None:
        self._orders = orders
        self._selected: str | None = None

    @property
    def selected(self) -> str | None:
        return self._selected

    def is_selected(self, order_number: str) -> bool:
        return self._selected is not None and self._selected == order_number

    def select(self, order_number: str) -> SelectionResult:
        if order_number not in self._orders:
            logger.info("Selection of unknown order ignored", order_number=order_number)
            return SelectionResult.NOT_FOUND
        if self._selected == order_number:
            return SelectionResult.UNCHANGED
        self._selected = order_number
        return SelectionResult.SELECTED

    def clear(self) -> SelectionResult:
        if self._selected is None:
            return SelectionResult.UNCHANGED
        self._selected = None
        return SelectionResult.CLEARED

    def toggle(self, order_number: str) -> SelectionResult:
        if self.is_selected(order_number):
            return self.clear()
        return self.select(order_number)

    def forget(self, order_number: str) -> bool:
        """Drop the selection if it refers to a removed order."""
        if self.is_selected(order_number):
            self._selected = None
            return True
        return False

    def prune(self) -> bool:
        """Drop the selection if its order is no longer known."""
        if self._selected is not None and self._selected not in self._orders:
            self._selected = None
            return True
        return False
