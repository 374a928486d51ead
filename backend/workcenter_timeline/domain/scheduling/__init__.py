"""
Work-Center Timeline Domain

Orders, the zoom-driven timeline scale, and the services that partition,
select and project orders onto pixel space.
"""

from .entities import WorkCenterOrder
from .repositories import OrderRepository
from .services import (
    PartitionManager,
    ScaleMapper,
    ScaleResult,
    SelectionController,
)

__all__ = [
    "WorkCenterOrder",
    "OrderRepository",
    "PartitionManager",
    "ScaleMapper",
    "ScaleResult",
    "SelectionController",
]
