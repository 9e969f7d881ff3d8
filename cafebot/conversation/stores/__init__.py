"""Conversation state stores."""

from cafebot.conversation.store import ConversationStateStore
from cafebot.conversation.stores.inmemory import InMemoryConversationStateStore

__all__ = [
    "ConversationStateStore",
    "InMemoryConversationStateStore",
]
