"""
Observability Infrastructure

Structured logging with correlation tracking and Prometheus metrics for the
timeline board and its HTTP surface.
"""

import contextvars
import logging
import sys
import uuid
from typing import Any

import structlog
from prometheus_client import Counter, Histogram

from .config import settings

# Context variables for correlation tracking
correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)

# Prometheus metrics
REQUEST_COUNT = Counter(
    "workcenter_timeline_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

REQUEST_DURATION = Histogram(
    "workcenter_timeline_http_request_duration_seconds",
    "HTTP request duration",
    ["method", "endpoint"],
)

SCALE_RECOMPUTATIONS = Counter(
    "workcenter_timeline_scale_recomputations_total",
    "Timeline scale recomputations by granularity",
    ["granularity"],
)

PARTITION_TRANSITIONS = Counter(
    "workcenter_timeline_partition_transitions_total",
    "Partition move attempts by operation and outcome",
    ["operation", "outcome"],
)


class CorrelationIdProcessor:
    """Structlog processor to add correlation ID to all log entries."""

    def __call__(
        self, logger: Any, name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        correlation_id = correlation_id_var.get("")
        if correlation_id:
            event_dict["correlation_id"] = correlation_id
        return event_dict


def setup_structured_logging() -> None:
    """Configure structured logging with JSON output and correlation tracking."""

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        CorrelationIdProcessor(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=settings.ENVIRONMENT == "local")
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set correlation ID for request tracking."""
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())

    correlation_id_var.set(correlation_id)
    return correlation_id


def record_partition_transition(operation: str, outcome: str) -> None:
    if settings.ENABLE_METRICS:
        PARTITION_TRANSITIONS.labels(operation=operation, outcome=outcome).inc()


def record_scale_recomputation(granularity: str) -> None:
    if settings.ENABLE_METRICS:
        SCALE_RECOMPUTATIONS.labels(granularity=granularity).inc()
