"""Turn host: from an incoming activity to the messages it produced.

CafeBot loads conversation state, builds the turn signal, runs the
orchestrator and persists the result. Turns of one conversation never
overlap; different conversations run concurrently.
"""

from cafebot.config.settings import Settings
from cafebot.conversation.locks import ConversationLocks
from cafebot.conversation.models import Activity, TurnReply, TurnSignal
from cafebot.conversation.store import ConversationStateStore
from cafebot.conversation.stores import InMemoryConversationStateStore
from cafebot.dialogs import build_registry
from cafebot.dispatch.context import TurnContext
from cafebot.dispatch.exceptions import DispatchConfigurationError
from cafebot.dispatch.orchestrator import TurnOrchestrator
from cafebot.observability.logging import get_logger
from cafebot.profile import UserProfileStore
from cafebot.profile.stores import InMemoryUserProfileStore
from cafebot.recognizers import IntentRecognizer, PatternRecognizer

logger = get_logger(__name__)


class CafeBot:
    """Process activities for any number of conversations."""

    def __init__(
        self,
        orchestrator: TurnOrchestrator,
        recognizer: IntentRecognizer,
        state_store: ConversationStateStore,
        locks: ConversationLocks | None = None,
    ) -> None:
        if orchestrator is None:
            raise DispatchConfigurationError("A turn orchestrator is required")
        if recognizer is None:
            raise DispatchConfigurationError("An intent recognizer is required")
        if state_store is None:
            raise DispatchConfigurationError("A conversation state store is required")

        self._orchestrator = orchestrator
        self._recognizer = recognizer
        self._state_store = state_store
        self._locks = locks if locks is not None else ConversationLocks()

    @property
    def sub_conversations(self) -> list[str]:
        return self._orchestrator.registry.names

    async def on_turn(self, activity: Activity) -> TurnReply:
        """Handle one activity and return the reply for it."""
        async with self._locks.acquire(activity.conversation_id):
            signal = await self._signal_for(activity)

            state = await self._state_store.get_or_create(activity.conversation_id)
            turn = TurnContext(
                conversation_id=activity.conversation_id,
                user_id=activity.user_id,
                text=activity.text,
            )

            outcome = await self._orchestrator.dispatch(signal, state, turn)

            state.turn_count += 1
            await self._state_store.save(state)

        return TurnReply(
            conversation_id=activity.conversation_id,
            status=outcome.status,
            active_sub_conversation_id=state.active_sub_conversation_id,
            messages=list(turn.sent),
        )

    async def _signal_for(self, activity: Activity) -> TurnSignal:
        if activity.is_card_submission:
            assert activity.value is not None
            signal = TurnSignal.from_card_input(activity.value)
            logger.debug(
                "card_submission_received",
                conversation_id=activity.conversation_id,
                intent=signal.intent,
            )
            return signal
        return await self._recognizer.recognize(activity.text)


def create_bot(
    settings: Settings,
    state_store: ConversationStateStore | None = None,
    profile_store: UserProfileStore | None = None,
    recognizer: IntentRecognizer | None = None,
) -> CafeBot:
    """Wire a bot with the built-in sub-conversations.

    Stores default to the in-memory implementations.
    """
    if profile_store is None:
        profile_store = InMemoryUserProfileStore()
    if state_store is None:
        state_store = InMemoryConversationStateStore()
    registry = build_registry(settings, profile_store)
    orchestrator = TurnOrchestrator(
        registry=registry,
        profile_store=profile_store,
        config=settings.dispatch,
    )

    logger.info(
        "bot_created",
        sub_conversations=registry.names,
        max_redispatch_depth=settings.dispatch.max_redispatch_depth,
    )
    return CafeBot(
        orchestrator=orchestrator,
        recognizer=recognizer if recognizer is not None else PatternRecognizer(settings.recognizer),
        state_store=state_store,
    )
