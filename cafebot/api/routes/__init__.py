"""API route registration."""

from fastapi import APIRouter, FastAPI

from cafebot.config.settings import Settings
from cafebot.observability.logging import get_logger

logger = get_logger(__name__)


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all routes."""
    router = APIRouter(prefix="/v1")

    from cafebot.api.routes.messages import router as messages_router

    router.include_router(messages_router, tags=["Messages"])

    logger.debug("v1_router_created", routes=["messages"])
    return router


def register_routes(app: FastAPI, settings: Settings) -> None:
    """Register all routes with the FastAPI application."""
    app.include_router(create_v1_router())

    from cafebot.api.routes.health import get_metrics
    from cafebot.api.routes.health import router as health_router

    app.include_router(health_router, tags=["Health"])

    metrics = settings.observability.metrics
    if metrics.enabled:
        app.add_api_route(metrics.path, get_metrics, methods=["GET"], tags=["Health"])

    logger.info("routes_registered", metrics_enabled=metrics.enabled)
