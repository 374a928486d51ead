"""
API Dependencies

Every route works against the single board owned by the application. Routes
are ``async def`` so board access stays on the event loop and is serialized.
"""

from typing import Annotated

from fastapi import Depends, Request

from workcenter_timeline.application.services.timeline_service import TimelineBoard
from workcenter_timeline.infrastructure.order_sources import OrderSource


def get_board(request: Request) -> TimelineBoard:
    return request.app.state.board


def get_order_source(request: Request) -> OrderSource | None:
    return getattr(request.app.state, "order_source", None)


BoardDep = Annotated[TimelineBoard, Depends(get_board)]
OrderSourceDep = Annotated[OrderSource | None, Depends(get_order_source)]
