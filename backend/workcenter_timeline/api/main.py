from fastapi import APIRouter

from workcenter_timeline.api.routes import (
    health,
    orders,
    partitions,
    selection,
    timeline,
)

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(timeline.router)
api_router.include_router(orders.router)
api_router.include_router(partitions.router)
api_router.include_router(selection.router)
