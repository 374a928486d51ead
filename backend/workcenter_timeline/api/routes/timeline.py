"""
Timeline API Routes.

Zoom, width and reference-instant controls plus the per-redraw geometry.
"""

from fastapi import APIRouter, HTTPException, Query, status

from workcenter_timeline.api.deps import BoardDep
from workcenter_timeline.application.dtos.timeline_dtos import (
    BucketResponse,
    PlacementResponse,
    ReferenceRequest,
    TimelineResponse,
    WidthRequest,
    ZoomRequest,
)
from workcenter_timeline.application.services.timeline_service import TimelineBoard
from workcenter_timeline.domain.scheduling.value_objects.enums import TimeSpanKind

router = APIRouter(prefix="/timeline", tags=["timeline"])


def _render(board: TimelineBoard, span: TimeSpanKind) -> TimelineResponse:
    render = board.render(span)
    return TimelineResponse(
        zoom=render.zoom,
        granularity=render.granularity,
        span=render.span,
        grid_width=render.grid_width,
        column_width=render.column_width,
        conversion_factor=render.conversion_factor,
        reference_instant=board.reference_instant,
        timeline_start=render.timeline_start,
        timeline_end=render.timeline_end,
        buckets=[
            BucketResponse(
                start=b.bucket.start,
                end=b.bucket.end,
                granularity=b.bucket.granularity,
                label=b.label.primary,
                secondary_label=b.label.secondary,
            )
            for b in render.buckets
        ],
        time_slots=list(render.time_slots),
        placements=[
            PlacementResponse(
                order_number=p.order_number,
                left=p.left,
                width=p.width,
                slot=p.slot,
                top=p.top,
            )
            for p in render.placements
        ],
        scheduled=list(render.scheduled),
        unscheduled=list(render.unscheduled),
        selected=render.selected,
    )


@router.get(
    "",
    summary="Render timeline",
    description="Buckets, labels and card placements for the current zoom and width.",
    response_model=TimelineResponse,
)
async def get_timeline(
    board: BoardDep,
    zoom: float | None = Query(None, description="Zoom level, clamped to 0..100"),
    width: float | None = Query(None, ge=0, description="Grid width in pixels"),
    span: TimeSpanKind = Query(
        TimeSpanKind.PLANNED, description="Which time pair to place"
    ),
) -> TimelineResponse:
    if zoom is not None:
        _set_zoom(board, zoom)
    if width is not None:
        board.set_grid_width(width)
    return _render(board, span)


def _set_zoom(board: TimelineBoard, zoom: float) -> None:
    try:
        board.set_zoom(zoom)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e


@router.put("/zoom", response_model=TimelineResponse, summary="Set zoom")
async def set_zoom(request: ZoomRequest, board: BoardDep) -> TimelineResponse:
    _set_zoom(board, request.zoom)
    return _render(board, TimeSpanKind.PLANNED)


@router.put("/width", response_model=TimelineResponse, summary="Set grid width")
async def set_width(request: WidthRequest, board: BoardDep) -> TimelineResponse:
    board.set_grid_width(request.width)
    return _render(board, TimeSpanKind.PLANNED)


@router.put(
    "/reference",
    response_model=TimelineResponse,
    summary="Set reference instant",
    description="Centre the timeline on the given instant, or on now when omitted.",
)
async def set_reference(
    request: ReferenceRequest, board: BoardDep
) -> TimelineResponse:
    if request.reference_instant is None:
        board.refresh_reference()
    else:
        board.set_reference_instant(request.reference_instant)
    return _render(board, TimeSpanKind.PLANNED)
