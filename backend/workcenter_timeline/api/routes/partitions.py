"""
Partition API Routes.

Moves orders between the scheduled and unscheduled lists. Unknown orders
answer 404 and change nothing; moves that are already satisfied are no-ops.
"""

from fastapi import APIRouter, HTTPException, status

from workcenter_timeline.api.deps import BoardDep
from workcenter_timeline.application.dtos.timeline_dtos import (
    BulkTransitionResponse,
    PartitionResponse,
    TransitionResponse,
)
from workcenter_timeline.application.services.timeline_service import TimelineBoard
from workcenter_timeline.domain.scheduling.value_objects.enums import TransitionResult

router = APIRouter(prefix="/partitions", tags=["partitions"])


def _partitions(board: TimelineBoard) -> PartitionResponse:
    snapshot = board.partition_snapshot()
    return PartitionResponse(
        scheduled=list(snapshot.scheduled), unscheduled=list(snapshot.unscheduled)
    )


def _transition_response(
    board: TimelineBoard, order_number: str, result: TransitionResult
) -> TransitionResponse:
    if result is TransitionResult.NOT_FOUND:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order not found: {order_number}",
        )
    return TransitionResponse(
        order_number=order_number,
        result=result,
        partition=board.partition.state_of(order_number),
    )


@router.get("", response_model=PartitionResponse, summary="List partitions")
async def get_partitions(board: BoardDep) -> PartitionResponse:
    return _partitions(board)


@router.post(
    "/schedule-all",
    response_model=BulkTransitionResponse,
    summary="Schedule every unscheduled order",
)
async def schedule_all(board: BoardDep) -> BulkTransitionResponse:
    moved = board.move_all_to_scheduled()
    return BulkTransitionResponse(moved=moved, partitions=_partitions(board))


@router.post(
    "/unschedule-all",
    response_model=BulkTransitionResponse,
    summary="Unschedule every scheduled order",
)
async def unschedule_all(board: BoardDep) -> BulkTransitionResponse:
    moved = board.move_all_to_unscheduled()
    return BulkTransitionResponse(moved=moved, partitions=_partitions(board))


@router.post(
    "/{order_number}/schedule",
    response_model=TransitionResponse,
    summary="Schedule order",
    responses={404: {"description": "Order not found"}},
)
async def schedule_order(order_number: str, board: BoardDep) -> TransitionResponse:
    result = board.schedule_order(order_number)
    return _transition_response(board, order_number, result)


@router.post(
    "/{order_number}/unschedule",
    response_model=TransitionResponse,
    summary="Unschedule order",
    responses={404: {"description": "Order not found"}},
)
async def unschedule_order(order_number: str, board: BoardDep) -> TransitionResponse:
    result = board.unschedule_order(order_number)
    return _transition_response(board, order_number, result)
