"""Cancel confirmation sub-conversation."""

from cafebot.config.models.dialogs import CancelConfig
from cafebot.conversation.models import (
    DialogFrame,
    OutgoingMessage,
    ResultPayload,
    TurnOutcome,
    TurnSignal,
)
from cafebot.dispatch.context import TurnContext
from cafebot.dispatch.intents import CANCEL, CONFIRMATION_ENTITY
from cafebot.dispatch.registry import SubConversation
from cafebot.observability.logging import get_logger

logger = get_logger(__name__)

RESUME_KEY = "resume"


class CancelConfirmationSubConversation(SubConversation):
    """Ask the user to confirm a cancel.

    When started by an interruption, the interrupted flow's resume point
    is kept in the frame. "yes" (or asking to cancel again) cancels the
    whole stack; "no" abandons the confirmation and restores the
    interrupted flow.
    """

    def __init__(self, config: CancelConfig | None = None, name: str = CANCEL) -> None:
        self.name = name
        self._config = config or CancelConfig()
        self._confirm = {word.lower() for word in self._config.confirm_words}
        self._deny = {word.lower() for word in self._config.deny_words}

    async def begin(
        self,
        turn: TurnContext,
        frame: DialogFrame,
        signal: TurnSignal,
        options: ResultPayload | None = None,
    ) -> TurnOutcome:
        self.remember_trigger(frame, signal)
        if options is not None and options.resume is not None:
            frame.state[RESUME_KEY] = options.resume.model_dump(mode="json")
        await self._ask(turn, self._config.prompt)
        return TurnOutcome.waiting()

    async def resume(
        self,
        turn: TurnContext,
        frame: DialogFrame,
        signal: TurnSignal,
    ) -> TurnOutcome:
        answer = (signal.first_entity_text(CONFIRMATION_ENTITY) or turn.text).strip().lower()

        if signal.intent == CANCEL or answer in self._confirm:
            logger.info("cancel_confirmed", conversation_id=turn.conversation_id)
            await turn.send(self._config.cancelled_message)
            return TurnOutcome.cancelled()

        if answer in self._deny:
            await turn.send(self._config.resume_message)
            raw_resume = frame.state.get(RESUME_KEY)
            logger.info(
                "cancel_declined",
                conversation_id=turn.conversation_id,
                restoring=bool(raw_resume),
            )
            if raw_resume:
                return TurnOutcome.abandoned(ResultPayload.model_validate(raw_resume))
            return TurnOutcome.complete()

        await self._ask(turn, self._config.reprompt)
        return TurnOutcome.waiting()

    async def reprompt(self, turn: TurnContext, frame: DialogFrame) -> TurnOutcome:  # noqa: ARG002
        await self._ask(turn, self._config.prompt)
        return TurnOutcome.waiting()

    async def _ask(self, turn: TurnContext, text: str) -> None:
        await turn.send(
            OutgoingMessage(text=text, suggested_actions=list(self._config.suggested_actions))
        )
