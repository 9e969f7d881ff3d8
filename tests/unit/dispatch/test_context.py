"""Tests for TurnContext."""

import pytest

from cafebot.conversation.models import OutgoingMessage
from cafebot.dispatch import TurnContext


class TestTurnContext:
    """Tests for the per-turn outbox."""

    def test_starts_unresponded(self):
        turn = TurnContext("c1", "u1", text="hi")

        assert not turn.responded
        assert turn.sent == []

    @pytest.mark.asyncio
    async def test_send_text(self):
        turn = TurnContext("c1", "u1")

        message = await turn.send("Hello", suggested_actions=["Yes"])

        assert turn.responded
        assert message == OutgoingMessage(text="Hello", suggested_actions=["Yes"])
        assert turn.sent == [message]

    @pytest.mark.asyncio
    async def test_send_message_keeps_order(self):
        turn = TurnContext("c1", "u1")

        await turn.send(OutgoingMessage(text="one"))
        await turn.send("two")

        assert [m.text for m in turn.sent] == ["one", "two"]
