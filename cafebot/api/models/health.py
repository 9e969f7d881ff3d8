"""Health check response model."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response for GET /health."""

    status: Literal["healthy", "unhealthy"]
    version: str
    sub_conversations: list[str]
    timestamp: datetime
