"""Test factories for creating test data."""

from tests.factories.conversation import (
    ScriptedSubConversation,
    SignalFactory,
    sent_texts,
)

__all__ = [
    "ScriptedSubConversation",
    "SignalFactory",
    "sent_texts",
]
