"""FastAPI application factory.

Creates and configures the FastAPI application with middleware,
exception handlers, and route registration.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cafebot import __version__
from cafebot.api.dependencies import get_settings
from cafebot.api.exceptions import CafeBotAPIError
from cafebot.api.models.errors import ErrorBody, ErrorCode, ErrorDetail, ErrorResponse
from cafebot.api.routes import register_routes
from cafebot.observability.logging import get_logger, setup_logging

logger = get_logger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    This factory function creates a fully configured FastAPI app with:
    - Structured logging
    - CORS middleware
    - Global exception handlers
    - All API routes registered
    """
    settings = get_settings()

    log_config = settings.observability.logging
    setup_logging(
        level=log_config.level,
        format=log_config.format,
        redact_pii=log_config.redact_pii,
    )

    app = FastAPI(
        title="Contoso Cafe Bot API",
        description="Multi-turn conversational dispatcher for the Contoso Cafe assistant",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=settings.api.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)
    register_routes(app, settings)

    logger.info(
        "app_created",
        debug=settings.debug,
        cors_origins=settings.api.cors_origins,
    )

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(CafeBotAPIError)
    async def cafebot_api_error_handler(
        request: Request, exc: CafeBotAPIError
    ) -> JSONResponse:
        """Handle CafeBotAPIError and its subclasses."""
        logger.warning(
            "api_error",
            error_code=exc.error_code.value,
            message=exc.message,
            path=request.url.path,
        )

        response = ErrorResponse(error=ErrorBody(code=exc.error_code, message=exc.message))
        return JSONResponse(
            status_code=exc.status_code,
            content=response.model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle FastAPI request validation errors."""
        logger.warning(
            "validation_error",
            error_count=len(exc.errors()),
            path=request.url.path,
        )

        details = []
        for error in exc.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            details.append(ErrorDetail(field=field, message=error["msg"]))

        response = ErrorResponse(
            error=ErrorBody(
                code=ErrorCode.INVALID_REQUEST,
                message="Request validation failed",
                details=details,
            )
        )
        return JSONResponse(
            status_code=400,
            content=response.model_dump(),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unexpected_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )

        response = ErrorResponse(
            error=ErrorBody(
                code=ErrorCode.INTERNAL_ERROR,
                message="An unexpected error occurred",
            )
        )
        return JSONResponse(
            status_code=500,
            content=response.model_dump(),
        )

    logger.debug("exception_handlers_registered")


# Create the app instance for uvicorn
app = create_app()
