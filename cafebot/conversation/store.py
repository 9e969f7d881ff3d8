"""ConversationStateStore abstract interface."""

from abc import ABC, abstractmethod

from cafebot.conversation.models import ConversationState


class ConversationStateStore(ABC):
    """Abstract interface for per-conversation dispatch state.

    Implementations must return the value last saved for a conversation
    (read-your-writes); turns for one conversation are serialized by the
    host, so no further isolation is required.
    """

    @abstractmethod
    async def get(self, conversation_id: str) -> ConversationState | None:
        """Get the state of a conversation."""
        pass

    @abstractmethod
    async def save(self, state: ConversationState) -> str:
        """Save a conversation state, returning its conversation ID."""
        pass

    @abstractmethod
    async def delete(self, conversation_id: str) -> bool:
        """Delete a conversation state."""
        pass

    async def get_or_create(self, conversation_id: str) -> ConversationState:
        """Get existing state or a fresh, idle one (not yet saved)."""
        state = await self.get(conversation_id)
        if state is None:
            state = ConversationState(conversation_id=conversation_id)
        return state
