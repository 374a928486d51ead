"""
Timeline board application service.

The board is the single owned application state of the timeline: the order
repository, the partition, the selection and the current zoom/width/reference
instant. Every mutation goes through it so the cross-component rules hold:

- each stored order is in exactly one partition,
- the selection only ever names a stored order,
- the scale is recomputed whenever zoom, width or reference instant changes,
  and only then.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any
from zoneinfo import ZoneInfo

from workcenter_timeline.core.config import Settings
from workcenter_timeline.core.observability import (
    get_logger,
    record_scale_recomputation,
)
from workcenter_timeline.domain.scheduling.entities.order import WorkCenterOrder
from workcenter_timeline.domain.scheduling.events import (
    DomainEvent,
    OrderAdded,
    OrderChanged,
    OrderCreated,
    OrderDeleted,
    OrderRemoved,
    OrderScheduled,
    OrdersLoaded,
    OrderUnscheduled,
    OrderUpdated,
    SelectionChanged,
    SourceNotification,
    TimelineRescaled,
)
from workcenter_timeline.domain.scheduling.repositories.order_repository import (
    OrderRepository,
    admit_order,
)
from workcenter_timeline.domain.scheduling.services.geometry_projector import (
    BucketLabel,
    OrderPlacement,
    header_labels,
    project_orders,
)
from workcenter_timeline.domain.scheduling.services.partition_manager import (
    PartitionManager,
    PartitionSnapshot,
    sort_by_planned_start,
)
from workcenter_timeline.domain.scheduling.services.scale_mapper import (
    ScaleMapper,
    ScaleResult,
    grid_time_slots,
)
from workcenter_timeline.domain.scheduling.services.selection_controller import (
    SelectionController,
)
from workcenter_timeline.domain.scheduling.value_objects.date_bucket import DateBucket
from workcenter_timeline.domain.scheduling.value_objects.enums import (
    Granularity,
    GridGrain,
    PartitionState,
    SelectionResult,
    TimeSpanKind,
    TransitionResult,
)
from workcenter_timeline.domain.scheduling.value_objects.scale import clamp_zoom
from workcenter_timeline.domain.shared.base import utc_now
from workcenter_timeline.domain.shared.exceptions import (
    DuplicateOrderError,
    OrderSourceError,
    OrderValidationError,
)
from workcenter_timeline.infrastructure.events.event_bus import (
    EventBusInterface,
    InMemoryEventBus,
)
from workcenter_timeline.infrastructure.order_sources import OrderRecord, OrderSource
from workcenter_timeline.infrastructure.repositories.order_repository import (
    InMemoryOrderRepository,
)

logger = get_logger(__name__)

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class LoadReport:
    loaded: int
    rejected: tuple[str, ...] = ()
    error: str | None = None


@dataclass(frozen=True)
class RenderedBucket:
    bucket: DateBucket
    label: BucketLabel


@dataclass(frozen=True)
class TimelineRender:
    """Everything the rendering layer needs for one redraw."""

    zoom: float
    granularity: Granularity
    grid_width: float
    column_width: float
    conversion_factor: float
    buckets: tuple[RenderedBucket, ...]
    placements: tuple[OrderPlacement, ...]
    time_slots: tuple[datetime, ...]
    scheduled: tuple[str, ...]
    unscheduled: tuple[str, ...]
    selected: str | None
    timeline_start: datetime | None = None
    timeline_end: datetime | None = None
    span: TimeSpanKind = field(default=TimeSpanKind.PLANNED)


class TimelineBoard:
    """Owned application state for one work-center timeline."""

    def __init__(
        self,
        *,
        grid_width: float = 1299,
        zoom: float = 50,
        card_height: float = 82,
        card_gap: float = 16,
        grid_grain: GridGrain = GridGrain.HOUR,
        timezone: tzinfo | None = None,
        clock: Clock = utc_now,
        reference_instant: datetime | None = None,
        repository: OrderRepository | None = None,
        event_bus: EventBusInterface | None = None,
    ) -> None:
        self._tz = timezone or ZoneInfo("UTC")
        self._clock = clock
        self.card_height = card_height
        self.card_gap = card_gap
        self.grid_grain = grid_grain

        self.repository = repository or InMemoryOrderRepository()
        self.event_bus = event_bus or InMemoryEventBus()
        self.partition = PartitionManager(o.order_number for o in self.repository)
        self.selection = SelectionController(self.repository)
        self.scale_mapper = ScaleMapper(grid_width)
        self.scale_mapper.subscribe(self.event_bus.publish)

        self.is_loading = False
        self.error: str | None = None

        self._zoom = clamp_zoom(zoom)
        self._reference_instant = self._localize(reference_instant or self._clock())
        self._scale: ScaleResult | None = None
        self._scale_key: tuple[float, datetime, float] | None = None

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> TimelineBoard:
        options: dict[str, Any] = {
            "grid_width": settings.TIMELINE_GRID_WIDTH_PX,
            "zoom": settings.TIMELINE_DEFAULT_ZOOM,
            "card_height": settings.CARD_HEIGHT_PX,
            "card_gap": settings.CARD_GAP_PX,
            "grid_grain": GridGrain(settings.TIMELINE_GRID_GRAIN),
            "timezone": ZoneInfo(settings.TIMEZONE),
        }
        options.update(overrides)
        return cls(**options)

    # Scale inputs

    @property
    def zoom(self) -> float:
        return self._zoom

    def set_zoom(self, value: float) -> float:
        """Clamp slider input into [0, 100] and store it."""
        self._zoom = clamp_zoom(value)
        return self._zoom

    @property
    def grid_width(self) -> float:
        return self.scale_mapper.grid_width

    def set_grid_width(self, width: float) -> None:
        self.scale_mapper.grid_width = width

    @property
    def reference_instant(self) -> datetime:
        return self._reference_instant

    def set_reference_instant(self, instant: datetime) -> None:
        self._reference_instant = self._localize(instant)

    def refresh_reference(self) -> datetime:
        """Re-sample the clock once and use it as the new reference."""
        self._reference_instant = self._localize(self._clock())
        return self._reference_instant

    def _localize(self, instant: datetime) -> datetime:
        if instant.tzinfo is None:
            return instant.replace(tzinfo=self._tz)
        return instant.astimezone(self._tz)

    @property
    def scale(self) -> ScaleResult:
        """Current scale, recomputed only when its inputs changed."""
        key = (self._zoom, self._reference_instant, self.grid_width)
        if self._scale is None or key != self._scale_key:
            self._scale = self.scale_mapper.compute(self._zoom, self._reference_instant)
            self._scale_key = key
            record_scale_recomputation(self._scale.granularity.value)
            logger.debug(
                "Recomputed timeline scale",
                zoom=self._zoom,
                granularity=self._scale.granularity.value,
                buckets=self._scale.column_count,
                conversion_factor=self._scale.conversion_factor,
            )
            self._publish(
                TimelineRescaled(
                    granularity=self._scale.granularity,
                    bucket_count=self._scale.column_count,
                    conversion_factor=self._scale.conversion_factor,
                )
            )
        return self._scale

    # Orders

    def load_from(self, source: OrderSource) -> LoadReport:
        """Replace all orders with the source's records."""
        self.is_loading = True
        self.error = None
        try:
            records = source.list_orders()
        except OrderSourceError as e:
            logger.error("Order source failed", error=e.message, source=e.source)
            self.error = e.message
            return LoadReport(loaded=0, error=e.message)
        finally:
            self.is_loading = False
        return self.set_orders(records)

    def set_orders(self, records: Iterable[OrderRecord]) -> LoadReport:
        """
        Replace all orders. Malformed and duplicate records are skipped and
        reported; every admitted order starts unscheduled.
        """
        self.repository.clear()
        rejected: list[str] = []
        for record in records:
            try:
                self.repository.add(admit_order(record))
            except (OrderValidationError, DuplicateOrderError) as e:
                rejected.append(e.order_number or "")
                logger.warning("Rejected order record", error=e.message)

        self.partition.reset(o.order_number for o in self.repository)
        self._track_selection(self._prune_selection)
        report = LoadReport(loaded=len(self.repository), rejected=tuple(rejected))
        logger.info("Loaded orders", loaded=report.loaded, rejected=len(rejected))
        self._publish(OrdersLoaded(loaded=report.loaded, rejected=report.rejected))
        return report

    def add_order(self, record: OrderRecord) -> WorkCenterOrder:
        """
        Admit a new order as unscheduled.

        Raises:
            OrderValidationError: If the record is malformed
            DuplicateOrderError: If the order number already exists
        """
        order = self.repository.add(admit_order(record))
        self.partition.register(order.order_number)
        self._publish(OrderAdded(order_number=order.order_number))
        return order

    def update_order(
        self, order_number: str, changes: Mapping[str, Any]
    ) -> WorkCenterOrder:
        """
        Apply a partial update; the stored order is untouched when it fails.

        Raises:
            OrderNotFoundError: If the order does not exist
            OrderValidationError: If the update would make the order malformed
        """
        order = self.repository.update(order_number, changes)
        self._publish(
            OrderUpdated(order_number=order_number, changed_fields=tuple(sorted(changes)))
        )
        return order

    def remove_order(self, order_number: str) -> WorkCenterOrder | None:
        """Remove an order together with its partition membership and selection."""
        order = self.repository.remove(order_number)
        if order is None:
            return None
        partition = self.partition.discard(order_number)
        was_selected = self.selection.forget(order_number)
        self._publish(
            OrderRemoved(
                order_number=order_number,
                partition=partition,
                was_selected=was_selected,
            )
        )
        return order

    def get_order(self, order_number: str) -> WorkCenterOrder | None:
        return self.repository.get(order_number)

    def list_orders(self) -> list[WorkCenterOrder]:
        return self.repository.list_orders()

    def apply_notification(self, notification: SourceNotification) -> None:
        """Apply a created/changed/deleted notification from the order source."""
        if isinstance(notification, OrderCreated):
            self.add_order(notification.order)
        elif isinstance(notification, OrderChanged):
            self.update_order(notification.order_number, notification.changes)
        elif isinstance(notification, OrderDeleted):
            self.remove_order(notification.order_number)
        else:
            raise TypeError(
                f"Unsupported order notification: {type(notification).__name__}"
            )

    # Partition

    def schedule_order(self, order_number: str) -> TransitionResult:
        result = self.partition.schedule_order(order_number)
        if result.changed:
            self._publish(OrderScheduled(order_number=order_number))
        return result

    def unschedule_order(self, order_number: str) -> TransitionResult:
        result = self.partition.unschedule_order(order_number)
        if result.changed:
            self._publish(OrderUnscheduled(order_number=order_number))
        return result

    def move_all_to_scheduled(self) -> list[str]:
        moved = self.partition.move_all_to_scheduled()
        for order_number in moved:
            self._publish(OrderScheduled(order_number=order_number))
        return moved

    def move_all_to_unscheduled(self) -> list[str]:
        moved = self.partition.move_all_to_unscheduled()
        for order_number in moved:
            self._publish(OrderUnscheduled(order_number=order_number))
        return moved

    def partition_snapshot(self) -> PartitionSnapshot:
        return self.partition.snapshot()

    def orders_in(
        self, state: PartitionState, chronological: bool = False
    ) -> list[WorkCenterOrder]:
        numbers = (
            self.partition.scheduled
            if state is PartitionState.SCHEDULED
            else self.partition.unscheduled
        )
        if chronological:
            numbers = sort_by_planned_start(numbers, self.repository)
        return [self.repository.get_or_raise(n) for n in numbers]

    # Selection

    @property
    def selected_order(self) -> WorkCenterOrder | None:
        selected = self.selection.selected
        return self.repository.get(selected) if selected is not None else None

    def select(self, order_number: str) -> SelectionResult:
        return self._track_selection(lambda: self.selection.select(order_number))

    def clear_selection(self) -> SelectionResult:
        return self._track_selection(self.selection.clear)

    def toggle_selection(self, order_number: str) -> SelectionResult:
        return self._track_selection(lambda: self.selection.toggle(order_number))

    def _prune_selection(self) -> SelectionResult:
        if self.selection.prune():
            return SelectionResult.CLEARED
        return SelectionResult.UNCHANGED

    def _track_selection(self, change: Callable[[], SelectionResult]) -> SelectionResult:
        previous = self.selection.selected
        result = change()
        if self.selection.selected != previous:
            self._publish(
                SelectionChanged(previous=previous, current=self.selection.selected)
            )
        return result

    # Rendering

    def render(self, span: TimeSpanKind = TimeSpanKind.PLANNED) -> TimelineRender:
        scale = self.scale
        labels = header_labels(scale.buckets, scale.granularity)
        placements = project_orders(
            self.orders_in(PartitionState.SCHEDULED),
            scale,
            self.card_height,
            self.card_gap,
            span=span,
        )
        return TimelineRender(
            zoom=self._zoom,
            granularity=scale.granularity,
            grid_width=scale.grid_width,
            column_width=scale.column_width,
            conversion_factor=scale.conversion_factor,
            buckets=tuple(
                RenderedBucket(bucket=b, label=label)
                for b, label in zip(scale.buckets, labels)
            ),
            placements=tuple(placements),
            time_slots=tuple(grid_time_slots(scale.buckets, self.grid_grain)),
            scheduled=self.partition.scheduled,
            unscheduled=self.partition.unscheduled,
            selected=self.selection.selected,
            timeline_start=scale.timeline_start,
            timeline_end=scale.timeline_end,
            span=span,
        )

    def _publish(self, event: DomainEvent) -> None:
        self.event_bus.publish(event)
