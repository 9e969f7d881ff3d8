"""Turn outcome models.

A TurnOutcome is what a sub-conversation (or the orchestrator itself)
reports at the end of its share of a turn. Completed outcomes may carry a
reason telling the reconciler to hand the turn to another flow.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cafebot.conversation.models.signal import TurnSignal


class TurnStatus(str, Enum):
    """Status of a turn outcome.

    - EMPTY: nothing owns the turn
    - WAITING: the active sub-conversation expects more input
    - COMPLETE: the sub-conversation finished
    - CANCELLED: the sub-conversation stack was abandoned by the user
    """

    EMPTY = "empty"
    WAITING = "waiting"
    COMPLETE = "complete"
    CANCELLED = "cancelled"


class CompletionReason(str, Enum):
    """Why a completed sub-conversation hands control elsewhere."""

    INTERRUPTION = "Interruption"
    ABANDON = "Abandon"


class ResultPayload(BaseModel):
    """Turn signal to re-dispatch, plus enough state to restore a flow.

    For an interruption ``turn_signal`` is the interrupting input and
    ``resume`` points back at the interrupted flow. For an abandon the
    payload itself is the resume point.
    """

    model_config = ConfigDict(frozen=True)

    turn_signal: TurnSignal = Field(..., description="Signal to dispatch next")
    sub_conversation_id: str | None = Field(
        default=None, description="Flow this payload restores"
    )
    state: dict[str, Any] = Field(default_factory=dict, description="Frame state to restore")
    resume: "ResultPayload | None" = Field(
        default=None, description="Resume point of an interrupted flow"
    )


class CompletionResult(BaseModel):
    """Result carried by a complete outcome."""

    model_config = ConfigDict(frozen=True)

    reason: CompletionReason | None = Field(default=None, description="Hand-off reason")
    payload: ResultPayload | None = Field(default=None, description="Hand-off payload")
    value: Any = Field(default=None, description="Opaque result value")

    @model_validator(mode="after")
    def _reason_and_payload_together(self) -> "CompletionResult":
        if (self.reason is None) != (self.payload is None):
            raise ValueError("reason and payload must be set together")
        return self


class TurnOutcome(BaseModel):
    """Tagged outcome of a turn."""

    model_config = ConfigDict(frozen=True)

    status: TurnStatus = Field(..., description="Outcome status")
    result: CompletionResult | None = Field(default=None, description="Completion result")

    @model_validator(mode="after")
    def _result_only_when_complete(self) -> "TurnOutcome":
        if self.result is not None and self.status is not TurnStatus.COMPLETE:
            raise ValueError("only complete outcomes carry a result")
        return self

    @property
    def reason(self) -> CompletionReason | None:
        return self.result.reason if self.result else None

    @property
    def ended(self) -> bool:
        """True when the sub-conversation that produced this outcome is over."""
        return self.status in (TurnStatus.COMPLETE, TurnStatus.CANCELLED)

    @classmethod
    def empty(cls) -> "TurnOutcome":
        return cls(status=TurnStatus.EMPTY)

    @classmethod
    def waiting(cls) -> "TurnOutcome":
        return cls(status=TurnStatus.WAITING)

    @classmethod
    def complete(cls, value: Any = None) -> "TurnOutcome":
        result = CompletionResult(value=value) if value is not None else None
        return cls(status=TurnStatus.COMPLETE, result=result)

    @classmethod
    def cancelled(cls) -> "TurnOutcome":
        return cls(status=TurnStatus.CANCELLED)

    @classmethod
    def interrupted(cls, payload: ResultPayload) -> "TurnOutcome":
        return cls(
            status=TurnStatus.COMPLETE,
            result=CompletionResult(reason=CompletionReason.INTERRUPTION, payload=payload),
        )

    @classmethod
    def abandoned(cls, payload: ResultPayload) -> "TurnOutcome":
        return cls(
            status=TurnStatus.COMPLETE,
            result=CompletionResult(reason=CompletionReason.ABANDON, payload=payload),
        )


ResultPayload.model_rebuild()
