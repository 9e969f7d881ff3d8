"""Conversation domain models.

Contains the Pydantic models for dispatch:
- TurnSignal / EntityValue for normalized input
- ConversationState / DialogFrame for the sub-conversation stack
- TurnOutcome and its result payloads
- Activity / OutgoingMessage / TurnReply for the message boundary
"""

from cafebot.conversation.models.activity import Activity, OutgoingMessage, TurnReply
from cafebot.conversation.models.outcome import (
    CompletionReason,
    CompletionResult,
    ResultPayload,
    TurnOutcome,
    TurnStatus,
)
from cafebot.conversation.models.signal import EntityValue, TurnSignal
from cafebot.conversation.models.state import ConversationState, DialogFrame

__all__ = [
    # Signals
    "EntityValue",
    "TurnSignal",
    # State
    "ConversationState",
    "DialogFrame",
    # Outcomes
    "CompletionReason",
    "CompletionResult",
    "ResultPayload",
    "TurnOutcome",
    "TurnStatus",
    # Messages
    "Activity",
    "OutgoingMessage",
    "TurnReply",
]
