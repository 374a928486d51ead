"""Selection API Routes."""

from fastapi import APIRouter, HTTPException, status

from workcenter_timeline.api.deps import BoardDep
from workcenter_timeline.application.dtos.timeline_dtos import SelectionResponse
from workcenter_timeline.application.services.timeline_service import TimelineBoard
from workcenter_timeline.domain.scheduling.value_objects.enums import SelectionResult

router = APIRouter(prefix="/selection", tags=["selection"])


def _selection_response(
    board: TimelineBoard, order_number: str | None, result: SelectionResult
) -> SelectionResponse:
    if result is SelectionResult.NOT_FOUND:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order not found: {order_number}",
        )
    return SelectionResponse(selected=board.selection.selected, result=result)


@router.get("", response_model=SelectionResponse, summary="Get selection")
async def get_selection(board: BoardDep) -> SelectionResponse:
    return SelectionResponse(selected=board.selection.selected)


@router.put(
    "/{order_number}",
    response_model=SelectionResponse,
    summary="Select order",
    responses={404: {"description": "Order not found"}},
)
async def select_order(order_number: str, board: BoardDep) -> SelectionResponse:
    return _selection_response(board, order_number, board.select(order_number))


@router.delete("", response_model=SelectionResponse, summary="Clear selection")
async def clear_selection(board: BoardDep) -> SelectionResponse:
    return _selection_response(board, None, board.clear_selection())


@router.post(
    "/{order_number}/toggle",
    response_model=SelectionResponse,
    summary="Toggle selection",
    responses={404: {"description": "Order not found"}},
)
async def toggle_selection(order_number: str, board: BoardDep) -> SelectionResponse:
    return _selection_response(board, order_number, board.toggle_selection(order_number))
