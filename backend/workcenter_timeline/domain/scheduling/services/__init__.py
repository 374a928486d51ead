"""
Domain Services

Scale mapping, geometry projection, partitioning and selection.
"""

from .geometry_projector import (
    BucketLabel,
    OrderPlacement,
    header_labels,
    offset_of,
    project_orders,
    width_of,
)
from .partition_manager import PartitionManager, PartitionSnapshot
from .scale_mapper import ScaleMapper, ScaleResult, compute_buckets
from .selection_controller import SelectionController

__all__ = [
    "BucketLabel",
    "OrderPlacement",
    "header_labels",
    "offset_of",
    "project_orders",
    "width_of",
    "PartitionManager",
    "PartitionSnapshot",
    "ScaleMapper",
    "ScaleResult",
    "compute_buckets",
    "SelectionController",
]
