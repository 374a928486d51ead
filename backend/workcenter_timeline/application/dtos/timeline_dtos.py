"""
Timeline Data Transfer Objects.

Request and response models for the HTTP surface. These give the browser
front-end a stable shape independent of the domain model.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from workcenter_timeline.domain.scheduling.value_objects.enums import (
    Granularity,
    PartitionState,
    ProgressStatus,
    SelectionResult,
    TimeSpanKind,
    TransitionResult,
)


class ZoomRequest(BaseModel):
    """Raw slider value; the board clamps it into [0, 100]."""

    zoom: float = Field(..., description="Zoom level, clamped to 0..100")


class WidthRequest(BaseModel):
    width: float = Field(..., ge=0, description="Timeline grid width in pixels")


class ReferenceRequest(BaseModel):
    reference_instant: datetime | None = Field(
        None, description="Instant to centre on; omit to re-read the clock"
    )


class CreateOrderRequest(BaseModel):
    """DTO for adding an order to the board."""

    order_number: str = Field(..., min_length=1, max_length=50)
    material_number: str = ""
    work_center_number: str = ""
    operation_number: str = ""
    operation_counter: int = Field(0, ge=0)
    parent_operation_counter: int = Field(0, ge=0)
    operation_description: str = ""
    operation_status: str = ""
    order_status: str = ""
    target_quantity: int = Field(..., gt=0)
    confirmed_quantity: int = Field(0, ge=0)
    component_check: bool = False
    demand_check: bool = False
    production_resource_tool_check: bool = False
    planned_start_time: datetime
    planned_end_time: datetime
    updated_start_time: datetime | None = None
    updated_end_time: datetime | None = None
    actual_start_time: datetime | None = None
    actual_end_time: datetime | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "order_number": "4711-0010",
                "material_number": "MAT-100",
                "work_center_number": "WC-01",
                "operation_number": "0010",
                "operation_description": "Milling",
                "target_quantity": 100,
                "confirmed_quantity": 0,
                "planned_start_time": "2024-07-01T06:00:00Z",
                "planned_end_time": "2024-07-01T14:00:00Z",
            }
        }
    )


class UpdateOrderRequest(BaseModel):
    """
    Partial update. Only fields present in the request body are applied;
    the order is re-validated as a whole afterwards.
    """

    material_number: str | None = None
    work_center_number: str | None = None
    operation_number: str | None = None
    operation_counter: int | None = Field(None, ge=0)
    parent_operation_counter: int | None = Field(None, ge=0)
    operation_description: str | None = None
    operation_status: str | None = None
    order_status: str | None = None
    target_quantity: int | None = Field(None, gt=0)
    confirmed_quantity: int | None = Field(None, ge=0)
    component_check: bool | None = None
    demand_check: bool | None = None
    production_resource_tool_check: bool | None = None
    planned_start_time: datetime | None = None
    planned_end_time: datetime | None = None
    updated_start_time: datetime | None = None
    updated_end_time: datetime | None = None
    actual_start_time: datetime | None = None
    actual_end_time: datetime | None = None

    @field_validator(
        "target_quantity",
        "planned_start_time",
        "planned_end_time",
    )
    @classmethod
    def _not_null(cls, v):
        """Required order fields may be changed but not cleared."""
        if v is None:
            raise ValueError("Field cannot be cleared")
        return v


class OrderResponse(BaseModel):
    order_number: str
    material_number: str
    work_center_number: str
    operation_number: str
    operation_counter: int
    parent_operation_counter: int
    operation_counter_label: str
    operation_description: str
    operation_status: str
    order_status: str
    target_quantity: int
    confirmed_quantity: int
    progress_percentage: float
    progress_status: ProgressStatus
    component_check: bool
    demand_check: bool
    production_resource_tool_check: bool
    planned_start_time: datetime
    planned_end_time: datetime
    updated_start_time: datetime | None = None
    updated_end_time: datetime | None = None
    actual_start_time: datetime | None = None
    actual_end_time: datetime | None = None
    has_updated_schedule: bool
    updated_at: datetime | None = None
    partition: PartitionState | None = None
    is_selected: bool = False


class LoadResponse(BaseModel):
    loaded: int
    rejected: list[str] = []
    error: str | None = None


class BucketResponse(BaseModel):
    start: datetime
    end: datetime
    granularity: Granularity
    label: str
    secondary_label: str | None = None


class PlacementResponse(BaseModel):
    order_number: str
    left: float
    width: float
    slot: int
    top: float


class TimelineResponse(BaseModel):
    """One redraw worth of timeline geometry."""

    zoom: float
    granularity: Granularity
    span: TimeSpanKind
    grid_width: float
    column_width: float
    conversion_factor: float
    reference_instant: datetime
    timeline_start: datetime | None = None
    timeline_end: datetime | None = None
    buckets: list[BucketResponse]
    time_slots: list[datetime]
    placements: list[PlacementResponse]
    scheduled: list[str]
    unscheduled: list[str]
    selected: str | None = None


class PartitionResponse(BaseModel):
    scheduled: list[str]
    unscheduled: list[str]


class TransitionResponse(BaseModel):
    order_number: str
    result: TransitionResult
    partition: PartitionState | None = None


class BulkTransitionResponse(BaseModel):
    moved: list[str]
    partitions: PartitionResponse


class SelectionResponse(BaseModel):
    selected: str | None = None
    result: SelectionResult | None = None


class HealthResponse(BaseModel):
    status: str
    environment: str
    orders: int
    is_loading: bool
    error: str | None = None
