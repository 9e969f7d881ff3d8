"""Sub-conversation contract and registry.

The registry maps intent names to sub-conversation handles. A handle is
registered under its own name and, optionally, under alias intents that
share it (QnA, ChitChat and Help are one handle).
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from cafebot.conversation.models import DialogFrame, ResultPayload, TurnOutcome, TurnSignal
from cafebot.dispatch.context import TurnContext
from cafebot.dispatch.exceptions import RegistryError, UnknownSubConversationError
from cafebot.observability.logging import get_logger

logger = get_logger(__name__)

# Frame state key holding the signal that started a flow
TRIGGER_KEY = "trigger"


class SubConversation(ABC):
    """A self-contained multi-turn interaction.

    The orchestrator pushes a frame before calling ``begin`` and pops it
    once ``begin`` or ``resume`` returns a complete or cancelled outcome.
    Implementations keep their per-conversation state in ``frame.state``.
    """

    name: str

    @abstractmethod
    async def begin(
        self,
        turn: TurnContext,
        frame: DialogFrame,
        signal: TurnSignal,
        options: ResultPayload | None = None,
    ) -> TurnOutcome:
        """Start the sub-conversation for ``signal``.

        ``options`` is set when the turn was handed over by another flow
        (an interruption payload, or the resume point of an abandoned flow).
        """
        pass

    @abstractmethod
    async def resume(
        self,
        turn: TurnContext,
        frame: DialogFrame,
        signal: TurnSignal,
    ) -> TurnOutcome:
        """Continue with the next turn's input."""
        pass

    async def reprompt(self, turn: TurnContext, frame: DialogFrame) -> TurnOutcome:  # noqa: ARG002
        """Re-ask for input after a nested sub-conversation finished."""
        return TurnOutcome.waiting()

    def remember_trigger(self, frame: DialogFrame, signal: TurnSignal) -> None:
        """Keep the signal that started this flow so it can be restarted."""
        frame.state[TRIGGER_KEY] = signal.model_dump(mode="json")

    def trigger(self, frame: DialogFrame) -> TurnSignal:
        raw = frame.state.get(TRIGGER_KEY)
        return TurnSignal.model_validate(raw) if raw else TurnSignal(intent=self.name)

    def restores(self, options: ResultPayload | None) -> bool:
        """True when ``options`` is a resume point for this flow."""
        return options is not None and options.sub_conversation_id == self.name

    def resume_point(self, frame: DialogFrame) -> ResultPayload:
        """Payload that restarts this flow with its current frame state."""
        return ResultPayload(
            turn_signal=self.trigger(frame),
            sub_conversation_id=self.name,
            state=dict(frame.state),
        )

    def interruption(self, frame: DialogFrame, signal: TurnSignal) -> ResultPayload:
        """Payload handing ``signal`` to another flow, with a way back here."""
        return ResultPayload(turn_signal=signal, resume=self.resume_point(frame))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class SubConversationRegistry:
    """Intent name -> sub-conversation lookup."""

    def __init__(self) -> None:
        self._by_name: dict[str, SubConversation] = {}
        self._by_intent: dict[str, SubConversation] = {}

    def register(
        self,
        sub_conversation: SubConversation,
        *,
        aliases: Iterable[str] = (),
    ) -> SubConversation:
        """Register a handle under its name and any alias intents.

        Raises:
            RegistryError: If the name or an alias is already taken
        """
        intents = [sub_conversation.name, *aliases]
        for intent in intents:
            if intent in self._by_intent:
                raise RegistryError(
                    f"Intent '{intent}' is already routed to '{self._by_intent[intent].name}'"
                )
        self._by_name[sub_conversation.name] = sub_conversation
        for intent in intents:
            self._by_intent[intent] = sub_conversation

        logger.debug(
            "sub_conversation_registered",
            sub_conversation=sub_conversation.name,
            intents=intents,
        )
        return sub_conversation

    def resolve(self, intent: str) -> SubConversation | None:
        """Return the handle an intent starts, if any."""
        return self._by_intent.get(intent)

    def get(self, name: str) -> SubConversation:
        """Return the handle registered under ``name``.

        Raises:
            UnknownSubConversationError: If nothing is registered under it
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownSubConversationError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def names(self) -> list[str]:
        return list(self._by_name)

    @property
    def intents(self) -> list[str]:
        return list(self._by_intent)
