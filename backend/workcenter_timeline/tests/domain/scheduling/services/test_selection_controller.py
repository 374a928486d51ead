"""
Unit Tests for the Selection Controller
"""

import pytest

from workcenter_timeline.domain.scheduling.services.selection_controller import (
    SelectionController,
)
from workcenter_timeline.domain.scheduling.value_objects.enums import SelectionResult


@pytest.fixture
def orders() -> set[str]:
    return {"A", "B"}


@pytest.fixture
def controller(orders) -> SelectionController:
    return SelectionController(orders)


class TestSelection:
    def test_nothing_selected_initially(self, controller):
        assert controller.selected is None

    def test_select_known_order(self, controller):
        assert controller.select("A") is SelectionResult.SELECTED
        assert controller.selected == "A"
        assert controller.is_selected("A")

    def test_select_again_is_unchanged(self, controller):
        controller.select("A")
        assert controller.select("A") is SelectionResult.UNCHANGED

    def test_select_replaces_previous(self, controller):
        controller.select("A")
        controller.select("B")
        assert controller.selected == "B"

    def test_unknown_order_leaves_selection(self, controller):
        controller.select("A")
        assert controller.select("Z") is SelectionResult.NOT_FOUND
        assert controller.selected == "A"

    def test_clear(self, controller):
        controller.select("A")
        assert controller.clear() is SelectionResult.CLEARED
        assert controller.selected is None
        assert controller.clear() is SelectionResult.UNCHANGED


class TestToggle:
    def test_toggle_selects_then_clears(self, controller):
        assert controller.toggle("A") is SelectionResult.SELECTED
        assert controller.toggle("A") is SelectionResult.CLEARED
        assert controller.selected is None

    def test_toggle_other_order_switches(self, controller):
        controller.select("A")
        assert controller.toggle("B") is SelectionResult.SELECTED
        assert controller.selected == "B"


class TestRemovedOrders:
    def test_forget_selected(self, controller):
        controller.select("A")
        assert controller.forget("A") is True
        assert controller.selected is None

    def test_forget_other_keeps_selection(self, controller):
        controller.select("A")
        assert controller.forget("B") is False
        assert controller.selected == "A"

    def test_prune_drops_vanished_order(self, controller, orders):
        controller.select("A")
        orders.discard("A")

        assert controller.prune() is True
        assert controller.selected is None
        assert controller.prune() is False
