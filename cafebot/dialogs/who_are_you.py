"""Identification sub-conversation: ask for the user's name."""

from cafebot.config.models.dialogs import IdentificationConfig
from cafebot.conversation.models import DialogFrame, ResultPayload, TurnOutcome, TurnSignal
from cafebot.dispatch.context import TurnContext
from cafebot.dispatch.intents import CANCEL, NONE_INTENT, USER_NAME_ENTITY, WHO_ARE_YOU
from cafebot.dispatch.registry import SubConversation
from cafebot.observability.logging import get_logger
from cafebot.profile import UserProfileStore, capitalize_name

logger = get_logger(__name__)


class IdentificationSubConversation(SubConversation):
    """Prompt for a name until one is given, then store it on the profile.

    A name is taken from the ``userName_patternAny`` entity, or from the
    raw text of a turn no intent was recognized for. Cancel interrupts
    the flow; other recognized intents are left to the dispatcher so they
    run on top of this one.
    """

    def __init__(
        self,
        profile_store: UserProfileStore,
        config: IdentificationConfig | None = None,
        name: str = WHO_ARE_YOU,
    ) -> None:
        self.name = name
        self._profile_store = profile_store
        self._config = config or IdentificationConfig()

    async def begin(
        self,
        turn: TurnContext,
        frame: DialogFrame,
        signal: TurnSignal,
        options: ResultPayload | None = None,
    ) -> TurnOutcome:
        if self.restores(options):
            frame.state.update(options.state)
            await turn.send(self._config.resume_prompt)
            return TurnOutcome.waiting()

        self.remember_trigger(frame, signal)
        frame.state["attempts"] = 0
        await turn.send(self._config.prompt)
        return TurnOutcome.waiting()

    async def resume(
        self,
        turn: TurnContext,
        frame: DialogFrame,
        signal: TurnSignal,
    ) -> TurnOutcome:
        if signal.intent == CANCEL:
            return TurnOutcome.interrupted(self.interruption(frame, signal))

        user_name = self._extract_name(turn, signal)
        if user_name:
            profile = await self._profile_store.get_or_create(turn.user_id)
            profile.rename(user_name)
            await self._profile_store.save(profile)
            logger.info("user_identified", user_id=turn.user_id, user_name=user_name)
            await turn.send(self._config.greeting.format(user_name=user_name))
            return TurnOutcome.complete(value=user_name)

        if signal.intent not in ("", NONE_INTENT, self.name):
            return TurnOutcome.empty()

        frame.state["attempts"] = frame.state.get("attempts", 0) + 1
        await turn.send(self._config.reprompt)
        return TurnOutcome.waiting()

    async def reprompt(self, turn: TurnContext, frame: DialogFrame) -> TurnOutcome:  # noqa: ARG002
        await turn.send(self._config.resume_prompt)
        return TurnOutcome.waiting()

    @staticmethod
    def _extract_name(turn: TurnContext, signal: TurnSignal) -> str:
        raw_name = signal.first_entity_text(USER_NAME_ENTITY)
        if raw_name is None and signal.intent in ("", NONE_INTENT):
            raw_name = turn.text
        return capitalize_name(raw_name or "")
