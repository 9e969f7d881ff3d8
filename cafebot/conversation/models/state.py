"""Per-conversation dispatch state."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class DialogFrame(BaseModel):
    """One entry of the sub-conversation stack.

    ``state`` belongs to the sub-conversation that owns the frame and
    must hold JSON-serializable values only.
    """

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    sub_conversation_id: str = Field(..., description="Owning sub-conversation")
    state: dict[str, Any] = Field(default_factory=dict, description="Private frame state")
    started_at: datetime = Field(default_factory=utc_now, description="Start time")


class ConversationState(BaseModel):
    """Runtime dispatch state of one conversation.

    The top frame of ``stack`` is the active sub-conversation: it receives
    the next turn. Frames below it are suspended.
    """

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    conversation_id: str = Field(..., description="Conversation identifier")
    stack: list[DialogFrame] = Field(default_factory=list, description="Sub-conversation stack")
    turn_count: int = Field(default=0, ge=0, description="Turns processed")
    created_at: datetime = Field(default_factory=utc_now, description="Creation time")
    last_activity_at: datetime = Field(default_factory=utc_now, description="Last activity")

    @property
    def active_frame(self) -> DialogFrame | None:
        return self.stack[-1] if self.stack else None

    @property
    def active_sub_conversation_id(self) -> str | None:
        """Name of the sub-conversation receiving the next turn, or None when idle."""
        frame = self.active_frame
        return frame.sub_conversation_id if frame else None

    @property
    def is_idle(self) -> bool:
        return not self.stack

    def push(self, sub_conversation_id: str, state: dict[str, Any] | None = None) -> DialogFrame:
        """Start a frame on top of the stack and return it."""
        frame = DialogFrame(sub_conversation_id=sub_conversation_id, state=state or {})
        self.stack.append(frame)
        return frame

    def pop(self) -> DialogFrame | None:
        """Remove and return the active frame."""
        return self.stack.pop() if self.stack else None

    def clear(self) -> list[DialogFrame]:
        """Drop every frame (cancel-all) and return what was removed."""
        removed = list(self.stack)
        self.stack.clear()
        return removed
