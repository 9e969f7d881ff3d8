"""Configuration section models."""

from cafebot.config.models.api import APIConfig
from cafebot.config.models.dialogs import (
    BookTableConfig,
    CancelConfig,
    DialogsConfig,
    IdentificationConfig,
    QnAConfig,
    StaticReplyConfig,
)
from cafebot.config.models.dispatch import DispatchConfig
from cafebot.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)
from cafebot.config.models.recognizer import RecognizerConfig

__all__ = [
    "APIConfig",
    "BookTableConfig",
    "CancelConfig",
    "DialogsConfig",
    "DispatchConfig",
    "IdentificationConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "QnAConfig",
    "RecognizerConfig",
    "StaticReplyConfig",
]
