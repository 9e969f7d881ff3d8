"""Canned answers for QnA, ChitChat and Help."""

import re

from cafebot.config.models.dialogs import QnAConfig
from cafebot.conversation.models import DialogFrame, ResultPayload, TurnOutcome, TurnSignal
from cafebot.dispatch.context import TurnContext
from cafebot.dispatch.intents import QNA
from cafebot.dispatch.registry import SubConversation
from cafebot.observability.logging import get_logger

logger = get_logger(__name__)

_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_question(text: str) -> str:
    """Lower-case, drop punctuation and collapse whitespace."""
    text = _PUNCTUATION.sub("", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


class QnASubConversation(SubConversation):
    """Look the turn text up in a question -> answer table."""

    def __init__(self, config: QnAConfig, name: str = QNA) -> None:
        self.name = name
        self._config = config
        self._answers = {normalize_question(q): a for q, a in config.answers.items()}

    def answer_for(self, text: str) -> str | None:
        return self._answers.get(normalize_question(text))

    async def begin(
        self,
        turn: TurnContext,
        frame: DialogFrame,  # noqa: ARG002
        signal: TurnSignal,
        options: ResultPayload | None = None,  # noqa: ARG002
    ) -> TurnOutcome:
        answer = self.answer_for(turn.text)
        if answer is None:
            logger.debug(
                "qna_default_answer",
                conversation_id=turn.conversation_id,
                intent=signal.intent,
            )
            answer = self._config.default_answer
        await turn.send(answer)
        return TurnOutcome.complete()

    async def resume(
        self,
        turn: TurnContext,  # noqa: ARG002
        frame: DialogFrame,  # noqa: ARG002
        signal: TurnSignal,  # noqa: ARG002
    ) -> TurnOutcome:
        return TurnOutcome.complete()
