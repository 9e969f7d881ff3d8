"""Health check and metrics endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from cafebot import __version__
from cafebot.api.dependencies import BotDep
from cafebot.api.models.health import HealthResponse
from cafebot.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(bot: BotDep) -> HealthResponse:
    """Report service status and the registered sub-conversations."""
    logger.debug("health_check_request")

    sub_conversations = bot.sub_conversations
    return HealthResponse(
        status="healthy" if sub_conversations else "unhealthy",
        version=__version__,
        sub_conversations=sub_conversations,
        timestamp=datetime.now(UTC),
    )


async def get_metrics() -> Response:
    """Get Prometheus metrics in text format for scraping."""
    logger.debug("metrics_request")

    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
