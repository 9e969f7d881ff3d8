"""Turn dispatch: permission policy, sub-conversation registry,
orchestration and outcome reconciliation."""

from cafebot.dispatch.context import TurnContext
from cafebot.dispatch.exceptions import (
    CafeBotError,
    DispatchConfigurationError,
    RegistryError,
    UnknownSubConversationError,
)
from cafebot.dispatch.orchestrator import TurnOrchestrator
from cafebot.dispatch.permissions import (
    DEFAULT_PERMISSION_RULES,
    PermissionEvaluator,
    PermissionOutcome,
    PermissionRule,
)
from cafebot.dispatch.reconciler import OutcomeReconciler
from cafebot.dispatch.registry import SubConversation, SubConversationRegistry

__all__ = [
    "CafeBotError",
    "DEFAULT_PERMISSION_RULES",
    "DispatchConfigurationError",
    "OutcomeReconciler",
    "PermissionEvaluator",
    "PermissionOutcome",
    "PermissionRule",
    "RegistryError",
    "SubConversation",
    "SubConversationRegistry",
    "TurnContext",
    "TurnOrchestrator",
    "UnknownSubConversationError",
]
