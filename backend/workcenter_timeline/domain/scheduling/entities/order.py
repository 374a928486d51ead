"""Work-center order entity."""

from datetime import datetime, timezone
from typing import Any

from pydantic import Field, field_validator, model_validator

from ...shared.base import Entity
from ..value_objects.enums import ProgressStatus, TimeSpanKind
from ..value_objects.time_window import TimeWindow

TIME_PAIRS: tuple[tuple[str, str], ...] = (
    ("planned_start_time", "planned_end_time"),
    ("updated_start_time", "updated_end_time"),
    ("actual_start_time", "actual_end_time"),
)


class WorkCenterOrder(Entity):
    """
    One schedulable unit of work on a work center.

    The order number is the identity. Updated times default to the planned
    ones; actual times appear once production has started or ended. Every
    time pair must satisfy end >= start, which is what keeps malformed orders
    out of the repository and away from the timeline geometry.
    """

    order_number: str = Field(min_length=1, max_length=50)
    material_number: str = ""
    work_center_number: str = ""
    operation_number: str = ""
    operation_counter: int = Field(default=0, ge=0)
    parent_operation_counter: int = Field(default=0, ge=0)
    operation_description: str = ""
    operation_status: str = ""
    order_status: str = ""

    target_quantity: int = Field(gt=0)
    # Confirmations can run ahead of the target; not clamped.
    confirmed_quantity: int = Field(default=0, ge=0)

    component_check: bool = False
    demand_check: bool = False
    production_resource_tool_check: bool = False

    planned_start_time: datetime
    planned_end_time: datetime
    updated_start_time: datetime | None = None
    updated_end_time: datetime | None = None
    actual_start_time: datetime | None = None
    actual_end_time: datetime | None = None

    @field_validator("order_number")
    @classmethod
    def _strip_order_number(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Order number must not be blank")
        return v

    @field_validator(
        "planned_start_time",
        "planned_end_time",
        "updated_start_time",
        "updated_end_time",
        "actual_start_time",
        "actual_end_time",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        # Order feeds send "" for instants that have not happened yet.
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator(
        "planned_start_time",
        "planned_end_time",
        "updated_start_time",
        "updated_end_time",
        "actual_start_time",
        "actual_end_time",
    )
    @classmethod
    def _assume_utc(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @model_validator(mode="before")
    @classmethod
    def _default_updated_times(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            for updated, planned in (
                ("updated_start_time", "planned_start_time"),
                ("updated_end_time", "planned_end_time"),
            ):
                if planned not in data:
                    continue
                value = data.get(updated)
                if value is None or (isinstance(value, str) and not value.strip()):
                    data[updated] = data[planned]
        return data

    @model_validator(mode="after")
    def _validate_time_pairs(self) -> "WorkCenterOrder":
        for start_field, end_field in TIME_PAIRS:
            start = getattr(self, start_field)
            end = getattr(self, end_field)
            if start is not None and end is not None and end < start:
                raise ValueError(f"{end_field} must not be before {start_field}")
        if self.actual_end_time is not None and self.actual_start_time is None:
            raise ValueError("actual_end_time requires actual_start_time")
        return self

    @property
    def identity(self) -> str:
        return self.order_number

    @property
    def planned_window(self) -> TimeWindow:
        return TimeWindow(start=self.planned_start_time, end=self.planned_end_time)

    @property
    def updated_window(self) -> TimeWindow:
        return TimeWindow(
            start=self.updated_start_time or self.planned_start_time,
            end=self.updated_end_time or self.planned_end_time,
        )

    @property
    def actual_window(self) -> TimeWindow | None:
        """Actual production span, only once both instants are known."""
        if self.actual_start_time is None or self.actual_end_time is None:
            return None
        return TimeWindow(start=self.actual_start_time, end=self.actual_end_time)

    def window(self, kind: TimeSpanKind) -> TimeWindow | None:
        if kind is TimeSpanKind.PLANNED:
            return self.planned_window
        if kind is TimeSpanKind.UPDATED:
            return self.updated_window
        return self.actual_window

    @property
    def has_updated_schedule(self) -> bool:
        """True when the updated span diverges from the planned one."""
        return self.updated_window != self.planned_window

    @property
    def has_started(self) -> bool:
        return self.actual_start_time is not None

    @property
    def has_finished(self) -> bool:
        return self.actual_end_time is not None

    @property
    def progress_percentage(self) -> float:
        return (self.confirmed_quantity / self.target_quantity) * 100

    @property
    def progress_status(self) -> ProgressStatus:
        return ProgressStatus.from_quantities(
            self.confirmed_quantity, self.target_quantity
        )

    @property
    def operation_counter_label(self) -> str:
        return f"{self.operation_counter}/{self.parent_operation_counter}"
