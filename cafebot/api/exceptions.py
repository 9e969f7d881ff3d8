"""API exception hierarchy for consistent error handling.

All API exceptions inherit from CafeBotAPIError, which provides
status_code and error_code attributes used by the global exception
handler to generate consistent error responses.
"""

from cafebot.api.models.errors import ErrorCode


class CafeBotAPIError(Exception):
    """Base exception for all API errors."""

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidRequestError(CafeBotAPIError):
    """Raised when a request is well-formed JSON but cannot be processed."""

    status_code = 400
    error_code = ErrorCode.INVALID_REQUEST
