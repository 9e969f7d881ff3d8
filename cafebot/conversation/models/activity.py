"""Incoming activities and outgoing messages."""

from typing import Any

from pydantic import BaseModel, Field

from cafebot.conversation.models.outcome import TurnStatus


class Activity(BaseModel):
    """One incoming user message: typed text or a card submission."""

    conversation_id: str = Field(..., min_length=1, description="Conversation identifier")
    user_id: str = Field(..., min_length=1, description="User identifier")
    text: str = Field(default="", description="Typed text")
    value: dict[str, Any] | None = Field(default=None, description="Card submission payload")

    @property
    def is_card_submission(self) -> bool:
        return bool(self.value) and not self.text.strip()


class OutgoingMessage(BaseModel):
    """A message sent to the user."""

    text: str = Field(..., description="Message text (markdown allowed)")
    suggested_actions: list[str] = Field(
        default_factory=list, description="Quick replies offered with the message"
    )


class TurnReply(BaseModel):
    """Everything produced by processing one activity."""

    conversation_id: str
    status: TurnStatus
    active_sub_conversation_id: str | None = None
    messages: list[OutgoingMessage] = Field(default_factory=list)
