"""Per-turn context passed explicitly through the dispatcher."""

from cafebot.conversation.models import OutgoingMessage


class TurnContext:
    """Identity, display text and outbox for one turn.

    ``send`` is the message channel: every message is recorded in
    ``sent`` and marks the turn as responded.
    """

    def __init__(self, conversation_id: str, user_id: str, text: str = "") -> None:
        self.conversation_id = conversation_id
        self.user_id = user_id
        self.text = text
        self.sent: list[OutgoingMessage] = []

    @property
    def responded(self) -> bool:
        return bool(self.sent)

    async def send(
        self,
        message: str | OutgoingMessage,
        suggested_actions: list[str] | None = None,
    ) -> OutgoingMessage:
        """Send a message to the user."""
        if isinstance(message, str):
            message = OutgoingMessage(text=message, suggested_actions=suggested_actions or [])
        self.sent.append(message)
        return message

    def __repr__(self) -> str:
        return (
            f"TurnContext(conversation_id={self.conversation_id!r}, "
            f"user_id={self.user_id!r}, sent={len(self.sent)})"
        )
