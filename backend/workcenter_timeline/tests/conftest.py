from collections.abc import Callable, Generator
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient

from workcenter_timeline.application.services.timeline_service import TimelineBoard
from workcenter_timeline.domain.scheduling.entities.order import WorkCenterOrder
from workcenter_timeline.infrastructure.order_sources import InMemoryOrderSource
from workcenter_timeline.main import create_app

# Wednesday afternoon; the visible window is centred on its day.
REFERENCE_INSTANT = datetime(2024, 7, 10, 13, 30, tzinfo=timezone.utc)


def order_record(order_number: str = "4711-0010", **overrides: Any) -> dict[str, Any]:
    """Raw order record as an order source would deliver it."""
    record: dict[str, Any] = {
        "order_number": order_number,
        "material_number": "MAT-100",
        "work_center_number": "WC-01",
        "operation_number": "0010",
        "operation_counter": 1,
        "parent_operation_counter": 3,
        "operation_description": "Milling",
        "operation_status": "REL",
        "order_status": "REL",
        "target_quantity": 100,
        "confirmed_quantity": 0,
        "component_check": True,
        "demand_check": True,
        "production_resource_tool_check": False,
        "planned_start_time": REFERENCE_INSTANT.replace(hour=6, minute=0),
        "planned_end_time": REFERENCE_INSTANT.replace(hour=14, minute=0),
    }
    record.update(overrides)
    return record


@pytest.fixture
def reference_instant() -> datetime:
    return REFERENCE_INSTANT


@pytest.fixture
def make_record() -> Callable[..., dict[str, Any]]:
    return order_record


@pytest.fixture
def make_order() -> Callable[..., WorkCenterOrder]:
    def _make(order_number: str = "4711-0010", **overrides: Any) -> WorkCenterOrder:
        return WorkCenterOrder.model_validate(order_record(order_number, **overrides))

    return _make


@pytest.fixture
def three_records() -> list[dict[str, Any]]:
    """Orders A, B, C planned on consecutive mornings."""
    return [
        order_record(
            number,
            planned_start_time=REFERENCE_INSTANT.replace(hour=6, minute=0)
            + timedelta(days=offset),
            planned_end_time=REFERENCE_INSTANT.replace(hour=10, minute=0)
            + timedelta(days=offset),
        )
        for number, offset in (("A", 1), ("B", 0), ("C", 2))
    ]


@pytest.fixture
def board(three_records: list[dict[str, Any]]) -> TimelineBoard:
    board = TimelineBoard(clock=lambda: REFERENCE_INSTANT)
    board.set_orders(three_records)
    return board


@pytest.fixture
def client(
    three_records: list[dict[str, Any]],
) -> Generator[TestClient, None, None]:
    app = create_app(
        board=TimelineBoard(clock=lambda: REFERENCE_INSTANT),
        order_source=InMemoryOrderSource(three_records),
    )
    with TestClient(app) as c:
        yield c
