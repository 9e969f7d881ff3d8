"""In-memory implementation of ConversationStateStore."""

from datetime import UTC, datetime

from cafebot.conversation.models import ConversationState
from cafebot.conversation.store import ConversationStateStore


class InMemoryConversationStateStore(ConversationStateStore):
    """In-memory implementation of ConversationStateStore for testing and development.

    Stores deep copies so that mutations made during a turn only become
    visible to later turns once the state is saved.
    Not suitable for production use.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._states: dict[str, ConversationState] = {}

    async def get(self, conversation_id: str) -> ConversationState | None:
        """Get the state of a conversation."""
        state = self._states.get(conversation_id)
        return state.model_copy(deep=True) if state else None

    async def save(self, state: ConversationState) -> str:
        """Save a conversation state, returning its conversation ID."""
        state.last_activity_at = datetime.now(UTC)
        self._states[state.conversation_id] = state.model_copy(deep=True)
        return state.conversation_id

    async def delete(self, conversation_id: str) -> bool:
        """Delete a conversation state."""
        if conversation_id in self._states:
            del self._states[conversation_id]
            return True
        return False

    def __len__(self) -> int:
        return len(self._states)
