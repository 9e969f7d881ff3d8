"""API request and response models."""

from cafebot.api.models.errors import ErrorBody, ErrorCode, ErrorDetail, ErrorResponse
from cafebot.api.models.health import HealthResponse
from cafebot.api.models.messages import MessageRequest, MessageResponse

__all__ = [
    "ErrorBody",
    "ErrorCode",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "MessageRequest",
    "MessageResponse",
]
