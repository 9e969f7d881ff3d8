"""Single-turn sub-conversations that answer and finish."""

from cafebot.config.models.dialogs import StaticReplyConfig
from cafebot.conversation.models import (
    DialogFrame,
    OutgoingMessage,
    ResultPayload,
    TurnOutcome,
    TurnSignal,
)
from cafebot.dispatch.context import TurnContext
from cafebot.dispatch.registry import SubConversation


class StaticReplySubConversation(SubConversation):
    """Send a configured reply and complete in the same turn."""

    def __init__(self, name: str, config: StaticReplyConfig) -> None:
        self.name = name
        self._config = config

    async def begin(
        self,
        turn: TurnContext,
        frame: DialogFrame,  # noqa: ARG002
        signal: TurnSignal,  # noqa: ARG002
        options: ResultPayload | None = None,  # noqa: ARG002
    ) -> TurnOutcome:
        await turn.send(
            OutgoingMessage(
                text=self._config.text,
                suggested_actions=list(self._config.suggested_actions),
            )
        )
        return TurnOutcome.complete()

    async def resume(
        self,
        turn: TurnContext,  # noqa: ARG002
        frame: DialogFrame,  # noqa: ARG002
        signal: TurnSignal,  # noqa: ARG002
    ) -> TurnOutcome:
        return TurnOutcome.complete()
