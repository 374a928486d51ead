"""
Orders API Routes.

CRUD over the board's order repository and reloads from the order source.
"""

from fastapi import APIRouter, HTTPException, status

from workcenter_timeline.api.deps import BoardDep, OrderSourceDep
from workcenter_timeline.application.dtos.timeline_dtos import (
    CreateOrderRequest,
    LoadResponse,
    OrderResponse,
    UpdateOrderRequest,
)
from workcenter_timeline.application.services.timeline_service import TimelineBoard
from workcenter_timeline.domain.scheduling.entities.order import WorkCenterOrder
from workcenter_timeline.domain.shared.exceptions import (
    DuplicateOrderError,
    OrderNotFoundError,
    OrderValidationError,
)

router = APIRouter(prefix="/orders", tags=["orders"])


def _convert_order_to_response(
    order: WorkCenterOrder, board: TimelineBoard
) -> OrderResponse:
    return OrderResponse(
        **order.model_dump(exclude={"created_at"}),
        operation_counter_label=order.operation_counter_label,
        progress_percentage=order.progress_percentage,
        progress_status=order.progress_status,
        has_updated_schedule=order.has_updated_schedule,
        partition=board.partition.state_of(order.order_number),
        is_selected=board.selection.is_selected(order.order_number),
    )


@router.get("", response_model=list[OrderResponse], summary="List orders")
async def list_orders(board: BoardDep) -> list[OrderResponse]:
    return [_convert_order_to_response(o, board) for o in board.list_orders()]


@router.get(
    "/{order_number}",
    response_model=OrderResponse,
    summary="Get order",
    responses={404: {"description": "Order not found"}},
)
async def get_order(order_number: str, board: BoardDep) -> OrderResponse:
    order = board.get_order(order_number)
    if order is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order not found: {order_number}",
        )
    return _convert_order_to_response(order, board)


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add order",
    description="Add an order; it starts in the unscheduled partition.",
    responses={
        409: {"description": "Order number already exists"},
        422: {"description": "Malformed order"},
    },
)
async def create_order(request: CreateOrderRequest, board: BoardDep) -> OrderResponse:
    try:
        order = board.add_order(request.model_dump())
    except OrderValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.to_dict()
        ) from e
    except DuplicateOrderError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=e.to_dict()
        ) from e
    return _convert_order_to_response(order, board)


@router.patch(
    "/{order_number}",
    response_model=OrderResponse,
    summary="Update order",
    description="Apply a partial update; the order is left unchanged if it fails.",
    responses={
        404: {"description": "Order not found"},
        422: {"description": "Update would make the order malformed"},
    },
)
async def update_order(
    order_number: str, request: UpdateOrderRequest, board: BoardDep
) -> OrderResponse:
    try:
        order = board.update_order(order_number, request.model_dump(exclude_unset=True))
    except OrderNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=e.to_dict()
        ) from e
    except OrderValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.to_dict()
        ) from e
    return _convert_order_to_response(order, board)


@router.delete(
    "/{order_number}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove order",
    responses={404: {"description": "Order not found"}},
)
async def delete_order(order_number: str, board: BoardDep) -> None:
    if board.remove_order(order_number) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order not found: {order_number}",
        )


@router.post(
    "/load",
    response_model=LoadResponse,
    summary="Reload orders",
    description="Replace all orders with the configured source's records.",
    responses={409: {"description": "No order source configured"}},
)
async def load_orders(board: BoardDep, source: OrderSourceDep) -> LoadResponse:
    if source is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No order source configured",
        )
    report = board.load_from(source)
    return LoadResponse(
        loaded=report.loaded, rejected=list(report.rejected), error=report.error
    )
