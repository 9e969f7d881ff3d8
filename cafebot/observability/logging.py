"""Structured logging configuration using structlog.

JSON lines in production, a console renderer in development. Turn logs
carry what users tell the bot: the name given to WhoAreYou and the raw
utterance of turns nobody understood. With redaction on (the default)
both are masked before rendering; ids, intents and statuses stay readable.
"""

import sys
from typing import Any, cast

import structlog
from structlog.types import EventDict, WrappedLogger

REDACTED = "[REDACTED]"

# Event keys holding a user's name
NAME_KEYS: frozenset[str] = frozenset({"user_name", "userName_patternAny"})

# Event keys holding free text typed by the user
TEXT_KEYS: frozenset[str] = frozenset({"text", "utterance"})


class PIIRedactor:
    """Processor that masks user names and free text in turn logs.

    Only top-level event keys are inspected; dispatch events are flat.
    Free text keeps its length so operators can still tell an empty
    utterance from a long one.
    """

    def __call__(
        self,
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        for key, value in event_dict.items():
            if key in NAME_KEYS and value is not None:
                event_dict[key] = REDACTED
            elif key in TEXT_KEYS and isinstance(value, str):
                event_dict[key] = f"[TEXT len={len(value)}]"
        return event_dict


def setup_logging(
    level: str = "INFO",
    format: str = "json",
    redact_pii: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: "json" for production, "console" for development
        redact_pii: Mask user names and utterance text
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
    ]
    if redact_pii:
        processors.append(PIIRedactor())
    processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    # Module loggers are created at import time and must follow reconfiguration
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level.upper()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance bound to the given name."""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
