"""Table reservation sub-conversation."""

from typing import Any

from cafebot.config.models.dialogs import BookTableConfig
from cafebot.conversation.models import DialogFrame, ResultPayload, TurnOutcome, TurnSignal
from cafebot.dispatch.context import TurnContext
from cafebot.dispatch.intents import BOOK_TABLE, BOOK_TABLE_CANCEL, BOOK_TABLE_SUBMIT, CANCEL
from cafebot.dispatch.registry import SubConversation
from cafebot.observability.logging import get_logger

logger = get_logger(__name__)

RESERVATION_KEY = "reservation"


class BookTableSubConversation(SubConversation):
    """Collect reservation fields from utterance entities and card submissions.

    Completes once every required field has a value. The reservation card
    posts ``Book_Table_Submit`` with the fields, or ``Book_Table_Cancel``.
    """

    def __init__(self, config: BookTableConfig | None = None, name: str = BOOK_TABLE) -> None:
        self.name = name
        self._config = config or BookTableConfig()

    async def begin(
        self,
        turn: TurnContext,
        frame: DialogFrame,
        signal: TurnSignal,
        options: ResultPayload | None = None,
    ) -> TurnOutcome:
        if self.restores(options):
            frame.state.update(options.state)
            return await self.reprompt(turn, frame)

        self.remember_trigger(frame, signal)
        frame.state[RESERVATION_KEY] = {}
        self._collect(frame, signal)
        if not self.missing_fields(frame):
            return await self._confirm(turn, frame)

        await turn.send(self._config.prompt)
        await turn.send(self._missing_message(frame))
        return TurnOutcome.waiting()

    async def resume(
        self,
        turn: TurnContext,
        frame: DialogFrame,
        signal: TurnSignal,
    ) -> TurnOutcome:
        if signal.intent == CANCEL:
            return TurnOutcome.interrupted(self.interruption(frame, signal))

        if signal.intent == BOOK_TABLE_CANCEL:
            logger.info("reservation_cancelled", conversation_id=turn.conversation_id)
            await turn.send(self._config.cancelled_message)
            return TurnOutcome.cancelled()

        if signal.intent not in (BOOK_TABLE, BOOK_TABLE_SUBMIT):
            return TurnOutcome.empty()

        self._collect(frame, signal)
        if not self.missing_fields(frame):
            return await self._confirm(turn, frame)

        await turn.send(self._missing_message(frame))
        return TurnOutcome.waiting()

    async def reprompt(self, turn: TurnContext, frame: DialogFrame) -> TurnOutcome:
        await turn.send(self._config.resume_prompt)
        await turn.send(self._missing_message(frame))
        return TurnOutcome.waiting()

    def missing_fields(self, frame: DialogFrame) -> list[str]:
        reservation = frame.state.get(RESERVATION_KEY, {})
        return [
            field
            for field in self._config.required_fields
            if reservation.get(field) in (None, "")
        ]

    def _collect(self, frame: DialogFrame, signal: TurnSignal) -> None:
        reservation: dict[str, Any] = dict(frame.state.get(RESERVATION_KEY, {}))
        for field in self._config.required_fields:
            value = signal.first_entity_text(field)
            if value is not None and value.strip():
                reservation[field] = value.strip()
        frame.state[RESERVATION_KEY] = reservation

    def _missing_message(self, frame: DialogFrame) -> str:
        return self._config.missing_template.format(fields=", ".join(self.missing_fields(frame)))

    async def _confirm(self, turn: TurnContext, frame: DialogFrame) -> TurnOutcome:
        reservation = dict(frame.state[RESERVATION_KEY])
        logger.info(
            "reservation_completed",
            conversation_id=turn.conversation_id,
            fields=sorted(reservation),
        )
        await turn.send(self._config.confirmation_template.format(**reservation))
        return TurnOutcome.complete(value=reservation)
