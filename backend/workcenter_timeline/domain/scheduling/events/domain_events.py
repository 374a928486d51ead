"""
Domain Events

Events raised by the timeline board and the notifications an order source
delivers to it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from ...shared.base import utc_now
from ..entities.order import WorkCenterOrder
from ..value_objects.enums import Granularity, PartitionState


@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""

    event_id: UUID = field(default_factory=uuid4, kw_only=True, compare=False)
    occurred_at: datetime = field(default_factory=utc_now, kw_only=True, compare=False)


# Order source notifications
@dataclass(frozen=True)
class OrderCreated(DomainEvent):
    """The order source produced a new order."""

    order: WorkCenterOrder | Mapping[str, Any]


@dataclass(frozen=True)
class OrderChanged(DomainEvent):
    """The order source changed some fields of an existing order."""

    order_number: str
    changes: Mapping[str, Any]


@dataclass(frozen=True)
class OrderDeleted(DomainEvent):
    """The order source withdrew an order."""

    order_number: str


SourceNotification = OrderCreated | OrderChanged | OrderDeleted


# Board events
@dataclass(frozen=True)
class OrdersLoaded(DomainEvent):
    """Raised after the repository was (re)filled from an order source."""

    loaded: int
    rejected: tuple[str, ...] = ()


@dataclass(frozen=True)
class OrderAdded(DomainEvent):
    order_number: str


@dataclass(frozen=True)
class OrderUpdated(DomainEvent):
    order_number: str
    changed_fields: tuple[str, ...]


@dataclass(frozen=True)
class OrderRemoved(DomainEvent):
    order_number: str
    partition: PartitionState | None
    was_selected: bool


@dataclass(frozen=True)
class OrderScheduled(DomainEvent):
    order_number: str


@dataclass(frozen=True)
class OrderUnscheduled(DomainEvent):
    order_number: str


@dataclass(frozen=True)
class SelectionChanged(DomainEvent):
    previous: str | None
    current: str | None


@dataclass(frozen=True)
class ColumnWidthChanged(DomainEvent):
    """Raised when the per-bucket pixel width differs from the previous scale."""

    column_width: float
    column_count: int


@dataclass(frozen=True)
class TimelineRescaled(DomainEvent):
    granularity: Granularity
    bucket_count: int
    conversion_factor: float
