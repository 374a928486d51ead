"""Domain entities for the timeline board."""

from .order import WorkCenterOrder

__all__ = ["WorkCenterOrder"]
