"""Message endpoint models."""

from typing import Any

from pydantic import BaseModel, Field

from cafebot.conversation.models import OutgoingMessage, TurnStatus


class MessageRequest(BaseModel):
    """Request body for POST /v1/messages."""

    conversation_id: str = Field(..., min_length=1, description="Conversation identifier")
    user_id: str = Field(..., min_length=1, description="User identifier")
    text: str | None = Field(default=None, description="Typed message text")
    value: dict[str, Any] | None = Field(
        default=None, description="Card submission payload"
    )


class MessageResponse(BaseModel):
    """Messages the bot sent in reply to one request."""

    conversation_id: str
    status: TurnStatus
    active_sub_conversation_id: str | None = None
    messages: list[OutgoingMessage] = Field(default_factory=list)
