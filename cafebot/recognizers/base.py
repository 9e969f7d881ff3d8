"""IntentRecognizer abstract interface."""

from abc import ABC, abstractmethod

from cafebot.conversation.models import TurnSignal


class IntentRecognizer(ABC):
    """Abstract interface for natural language understanding.

    Implementations may call out to a hosted NLU service; the dispatcher
    only sees the resulting signal.
    """

    @abstractmethod
    async def recognize(self, text: str) -> TurnSignal:
        """Recognize the intent and entities of one message."""
        pass
