"""
Domain Events Module

Exports all domain events of the timeline board.
"""

from .domain_events import (
    ColumnWidthChanged,
    # Base class
    DomainEvent,
    OrderAdded,
    OrderChanged,
    # Order source notifications
    OrderCreated,
    OrderDeleted,
    OrderRemoved,
    OrderScheduled,
    # Board events
    OrdersLoaded,
    OrderUnscheduled,
    OrderUpdated,
    SelectionChanged,
    SourceNotification,
    TimelineRescaled,
)

__all__ = [
    "DomainEvent",
    "OrderCreated",
    "OrderChanged",
    "OrderDeleted",
    "SourceNotification",
    "OrdersLoaded",
    "OrderAdded",
    "OrderUpdated",
    "OrderRemoved",
    "OrderScheduled",
    "OrderUnscheduled",
    "SelectionChanged",
    "ColumnWidthChanged",
    "TimelineRescaled",
]
