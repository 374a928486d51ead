"""Health check route."""

from fastapi import APIRouter

from workcenter_timeline.api.deps import BoardDep
from workcenter_timeline.application.dtos.timeline_dtos import HealthResponse
from workcenter_timeline.core.config import settings

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health(board: BoardDep) -> HealthResponse:
    return HealthResponse(
        status="degraded" if board.error else "healthy",
        environment=settings.ENVIRONMENT,
        orders=len(board.repository),
        is_loading=board.is_loading,
        error=board.error,
    )
