import time
import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.routing import APIRoute
from starlette.middleware.base import BaseHTTPMiddleware

from workcenter_timeline.api.main import api_router
from workcenter_timeline.application.services.timeline_service import TimelineBoard
from workcenter_timeline.core.config import Settings, settings
from workcenter_timeline.core.observability import (
    REQUEST_COUNT,
    REQUEST_DURATION,
    get_logger,
    set_correlation_id,
    setup_structured_logging,
)
from workcenter_timeline.infrastructure.order_sources import CsvOrderSource, OrderSource

logger = get_logger(__name__)


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Middleware for request observability and metrics collection."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        set_correlation_id(correlation_id)

        start_time = time.time()
        method = request.method
        path = request.url.path

        logger.debug("Request started", method=method, path=path)

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            REQUEST_COUNT.labels(method=method, endpoint=path, status="500").inc()
            REQUEST_DURATION.labels(method=method, endpoint=path).observe(duration)
            logger.error(
                "Request failed",
                method=method,
                path=path,
                duration_seconds=duration,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            raise

        duration = time.time() - start_time
        status_code = response.status_code
        REQUEST_COUNT.labels(method=method, endpoint=path, status=str(status_code)).inc()
        REQUEST_DURATION.labels(method=method, endpoint=path).observe(duration)
        response.headers["X-Correlation-ID"] = correlation_id

        logger.info(
            "Request completed",
            method=method,
            path=path,
            status_code=status_code,
            duration_seconds=duration,
        )
        return response


def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0]}-{route.name}"


def create_app(
    board: TimelineBoard | None = None,
    order_source: OrderSource | None = None,
    config: Settings = settings,
) -> FastAPI:
    """
    Build the application around one timeline board.

    Without an explicit source, ``ORDER_SOURCE_CSV`` is used when set; the
    board is filled from the source on startup.
    """
    if order_source is None and config.ORDER_SOURCE_CSV:
        order_source = CsvOrderSource(config.ORDER_SOURCE_CSV)
    if board is None:
        board = TimelineBoard.from_settings(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        setup_structured_logging()
        logger.info(
            "Application started",
            project_name=config.PROJECT_NAME,
            environment=config.ENVIRONMENT,
            api_version=config.API_V1_STR,
            order_source=type(order_source).__name__ if order_source else None,
        )
        if order_source is not None:
            board.load_from(order_source)
        yield
        logger.info("Shutting down application")

    app = FastAPI(
        title=config.PROJECT_NAME,
        description="Work-center order timeline: zoomable date buckets, "
        "scheduled/unscheduled partitions and card geometry.",
        version="1.0.0",
        openapi_url=f"{config.API_V1_STR}/openapi.json",
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )
    app.state.board = board
    app.state.order_source = order_source

    app.add_middleware(ObservabilityMiddleware)
    app.include_router(api_router, prefix=config.API_V1_STR)
    return app


app = create_app()
