"""Tests for TurnOutcome and completion payloads."""

import pytest
from pydantic import ValidationError

from cafebot.conversation.models import (
    CompletionReason,
    CompletionResult,
    ResultPayload,
    TurnOutcome,
    TurnSignal,
    TurnStatus,
)


class TestTurnOutcome:
    """Tests for outcome constructors and invariants."""

    @pytest.mark.parametrize(
        ("outcome", "status", "ended"),
        [
            (TurnOutcome.empty(), TurnStatus.EMPTY, False),
            (TurnOutcome.waiting(), TurnStatus.WAITING, False),
            (TurnOutcome.complete(), TurnStatus.COMPLETE, True),
            (TurnOutcome.cancelled(), TurnStatus.CANCELLED, True),
        ],
    )
    def test_status_and_ended(self, outcome, status, ended):
        assert outcome.status is status
        assert outcome.ended is ended
        assert outcome.reason is None

    def test_complete_with_value(self):
        outcome = TurnOutcome.complete(value={"partySize": "4"})

        assert outcome.result is not None
        assert outcome.result.value == {"partySize": "4"}
        assert outcome.reason is None

    def test_interrupted_carries_reason_and_payload(self):
        payload = ResultPayload(turn_signal=TurnSignal(intent="Cancel"))

        outcome = TurnOutcome.interrupted(payload)

        assert outcome.status is TurnStatus.COMPLETE
        assert outcome.reason is CompletionReason.INTERRUPTION
        assert outcome.result.payload == payload

    def test_abandoned_carries_reason(self):
        payload = ResultPayload(turn_signal=TurnSignal(intent="BookTable"), sub_conversation_id="BookTable")

        outcome = TurnOutcome.abandoned(payload)

        assert outcome.reason is CompletionReason.ABANDON
        assert outcome.reason.value == "Abandon"

    def test_result_only_on_complete(self):
        with pytest.raises(ValidationError):
            TurnOutcome(status=TurnStatus.WAITING, result=CompletionResult(value=1))

    def test_reason_requires_payload(self):
        with pytest.raises(ValidationError):
            CompletionResult(reason=CompletionReason.INTERRUPTION)

    def test_payload_requires_reason(self):
        with pytest.raises(ValidationError):
            CompletionResult(payload=ResultPayload(turn_signal=TurnSignal()))


class TestResultPayload:
    """Tests for nested resume points."""

    def test_nested_resume_point_survives_json(self):
        resume = ResultPayload(
            turn_signal=TurnSignal(intent="BookTable"),
            sub_conversation_id="BookTable",
            state={"reservation": {"partySize": "2"}},
        )
        payload = ResultPayload(turn_signal=TurnSignal(intent="Cancel"), resume=resume)

        restored = ResultPayload.model_validate(payload.model_dump(mode="json"))

        assert restored.resume == resume
        assert restored.resume.state["reservation"]["partySize"] == "2"
