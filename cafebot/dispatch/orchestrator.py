"""Turn orchestration.

TurnOrchestrator is the single entry point for a recognized turn:

1. Evaluate the permission policy for the requested intent
2. Resume the active sub-conversation, if any
3. Begin the sub-conversation matching the intent when nothing answered
4. Reconcile the resulting outcome (hand-offs, restores, closing prompt)
"""

import json
import time
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote_plus

from cafebot.config.models.dispatch import DispatchConfig
from cafebot.conversation.models import (
    ConversationState,
    DialogFrame,
    ResultPayload,
    TurnOutcome,
    TurnSignal,
    TurnStatus,
)
from cafebot.dispatch.context import TurnContext
from cafebot.dispatch.exceptions import DispatchConfigurationError
from cafebot.dispatch.intents import (
    NONE_INTENT,
    QUERY_ENTITY,
    USER_NAME_ENTITY,
    WHAT_CAN_YOU_DO,
    WHO_ARE_YOU,
)
from cafebot.dispatch.permissions import PermissionEvaluator
from cafebot.dispatch.reconciler import OutcomeReconciler
from cafebot.dispatch.registry import SubConversation, SubConversationRegistry
from cafebot.observability.logging import get_logger
from cafebot.observability.metrics import (
    DISPATCH_LATENCY,
    FALLBACK_RESPONSES,
    MALFORMED_CARD_PAYLOADS,
    PERMISSION_DENIALS,
    SUB_CONVERSATIONS_STARTED,
    TURNS_DISPATCHED,
)
from cafebot.profile import UserProfileStore, capitalize_name

logger = get_logger(__name__)


class TurnOrchestrator:
    """Route one turn through the sub-conversation stack.

    Owns no per-conversation data: the conversation state and turn context
    are passed in on every call, so one orchestrator serves every
    conversation.
    """

    def __init__(
        self,
        registry: SubConversationRegistry,
        profile_store: UserProfileStore,
        evaluator: PermissionEvaluator | None = None,
        reconciler: OutcomeReconciler | None = None,
        config: DispatchConfig | None = None,
    ) -> None:
        if registry is None:
            raise DispatchConfigurationError("A sub-conversation registry is required")
        if profile_store is None:
            raise DispatchConfigurationError("A user profile store is required")

        self._registry = registry
        self._profile_store = profile_store
        self._config = config or DispatchConfig()
        self._evaluator = evaluator or PermissionEvaluator()
        self._reconciler = reconciler or OutcomeReconciler(registry, self._config)

    @property
    def registry(self) -> SubConversationRegistry:
        return self._registry

    async def dispatch(
        self,
        signal: TurnSignal,
        state: ConversationState,
        turn: TurnContext,
    ) -> TurnOutcome:
        """Process one turn and return its final outcome.

        Mutates ``state`` in place; the caller persists it.
        """
        start_time = time.perf_counter()
        active_id = self._live_active_id(state)

        logger.info(
            "dispatching_turn",
            conversation_id=turn.conversation_id,
            intent=signal.intent,
            entity_count=len(signal.entities),
            active_sub_conversation=active_id,
        )

        if not await self._permitted(signal, active_id, turn):
            return self._finish(TurnOutcome.empty(), state, turn, start_time)

        # Denied turns leave the stack exactly as it was, stale frames included
        self._drop_stale_frames(state, turn)

        outcome: TurnOutcome | None = None
        if active_id is not None:
            outcome = await self._resume_active(signal, state, turn)

        # A flow that ended hands its outcome straight to the reconciler
        if outcome is None or (
            not outcome.ended and (outcome.status is TurnStatus.EMPTY or not turn.responded)
        ):
            if self._is_already_active(signal, state, outcome):
                logger.info(
                    "sub_conversation_already_active",
                    conversation_id=turn.conversation_id,
                    intent=signal.intent,
                )
            else:
                outcome = await self.begin_child(signal, state, turn)

        async def redispatch(
            next_signal: TurnSignal,
            options: ResultPayload | None,
            depth: int,
        ) -> TurnOutcome:
            return await self.begin_child(next_signal, state, turn, options=options, depth=depth)

        final = await self._reconciler.reconcile(outcome, signal, state, turn, redispatch)
        return self._finish(final, state, turn, start_time)

    async def begin_child(
        self,
        signal: TurnSignal,
        state: ConversationState,
        turn: TurnContext,
        options: ResultPayload | None = None,
        depth: int = 0,
    ) -> TurnOutcome:
        """Begin the sub-conversation matching ``signal.intent``.

        WhoAreYou and WhatCanYouDo get special handling before (or instead
        of) starting a flow; unknown intents get the fallback reply.
        """
        intent = signal.intent or NONE_INTENT

        if intent == WHO_ARE_YOU:
            return await self._begin_who_are_you(signal, state, turn, options)
        if intent == WHAT_CAN_YOU_DO:
            return await self._begin_what_can_you_do(signal, state, turn, options, depth)

        sub_conversation = self._registry.resolve(intent) if intent != NONE_INTENT else None
        if sub_conversation is None:
            return await self._fallback(signal, turn)
        return await self._start(sub_conversation, signal, state, turn, options)

    async def _begin_who_are_you(
        self,
        signal: TurnSignal,
        state: ConversationState,
        turn: TurnContext,
        options: ResultPayload | None,
    ) -> TurnOutcome:
        profile = await self._profile_store.get_or_create(turn.user_id)

        raw_name = signal.first_entity_text(USER_NAME_ENTITY)
        if raw_name is not None:
            user_name = capitalize_name(raw_name)
            if user_name:
                profile.rename(user_name)
                await self._profile_store.save(profile)
                logger.info("user_name_updated", user_id=turn.user_id, user_name=user_name)
                await turn.send(self._returning_greeting(user_name))
                return TurnOutcome.empty()

        if profile.is_identified:
            await turn.send(self._returning_greeting(profile.user_name))
            return TurnOutcome.empty()

        sub_conversation = self._registry.resolve(WHO_ARE_YOU)
        if sub_conversation is None:
            return await self._fallback(signal, turn)

        # Restoring an abandoned identification keeps the greeting to one
        if options is None or options.sub_conversation_id != sub_conversation.name:
            await turn.send(self._config.greeting_template.format(bot_name=self._config.bot_name))
        return await self._start(sub_conversation, signal, state, turn, options)

    async def _begin_what_can_you_do(
        self,
        signal: TurnSignal,
        state: ConversationState,
        turn: TurnContext,
        options: ResultPayload | None,
        depth: int,
    ) -> TurnOutcome:
        query = signal.first_entity(QUERY_ENTITY)
        if query is None:
            sub_conversation = self._registry.resolve(WHAT_CAN_YOU_DO)
            if sub_conversation is None:
                return await self._fallback(signal, turn)
            return await self._start(sub_conversation, signal, state, turn, options)

        payload = self._decode_query(query)
        if payload is None:
            MALFORMED_CARD_PAYLOADS.inc()
            logger.warning("card_query_malformed", conversation_id=turn.conversation_id)
            await turn.send(self._config.malformed_card_message)
            return TurnOutcome.empty()

        if depth >= self._config.max_redispatch_depth:
            logger.warning(
                "card_query_depth_exceeded",
                conversation_id=turn.conversation_id,
                depth=depth,
            )
            await turn.send(self._config.malformed_card_message)
            return TurnOutcome.empty()

        text = payload.get("text")
        if text is not None:
            turn.text = str(text)
            await turn.send(self._config.echo_template.format(text=turn.text))

        nested = TurnSignal.from_query_payload(payload)
        if not await self._permitted(nested, state.active_sub_conversation_id, turn):
            return TurnOutcome.empty()

        if state.active_frame is not None and self._resolves_to_active(nested.intent, state):
            logger.info(
                "card_query_resumed_active",
                conversation_id=turn.conversation_id,
                intent=nested.intent,
                sub_conversation=state.active_sub_conversation_id,
            )
            return await self._resume_active(nested, state, turn)

        logger.info(
            "card_query_redispatched",
            conversation_id=turn.conversation_id,
            intent=nested.intent,
            depth=depth + 1,
        )
        return await self.begin_child(nested, state, turn, options=options, depth=depth + 1)

    @staticmethod
    def _decode_query(query: Any) -> dict[str, Any] | None:
        """Decode a card query entity into a payload dict, or None if malformed."""
        if isinstance(query, Mapping):
            return dict(query)
        if not isinstance(query, str):
            return None
        try:
            decoded = json.loads(query)
        except ValueError:
            return None
        return decoded if isinstance(decoded, dict) else None

    async def _start(
        self,
        sub_conversation: SubConversation,
        signal: TurnSignal,
        state: ConversationState,
        turn: TurnContext,
        options: ResultPayload | None,
    ) -> TurnOutcome:
        frame = state.push(sub_conversation.name)
        SUB_CONVERSATIONS_STARTED.labels(sub_conversation=sub_conversation.name).inc()
        logger.info(
            "sub_conversation_started",
            conversation_id=turn.conversation_id,
            sub_conversation=sub_conversation.name,
            intent=signal.intent,
            restoring=options.sub_conversation_id if options else None,
            stack_depth=len(state.stack),
        )

        outcome = await sub_conversation.begin(turn, frame, signal, options)
        if outcome.ended:
            self._end_frame(state, frame, outcome, turn)
        return outcome

    async def _resume_active(
        self,
        signal: TurnSignal,
        state: ConversationState,
        turn: TurnContext,
    ) -> TurnOutcome:
        frame = state.active_frame
        assert frame is not None
        sub_conversation = self._registry.get(frame.sub_conversation_id)

        outcome = await sub_conversation.resume(turn, frame, signal)
        logger.debug(
            "sub_conversation_resumed",
            conversation_id=turn.conversation_id,
            sub_conversation=frame.sub_conversation_id,
            status=outcome.status.value,
        )
        if outcome.ended:
            self._end_frame(state, frame, outcome, turn)
        return outcome

    async def _fallback(self, signal: TurnSignal, turn: TurnContext) -> TurnOutcome:
        FALLBACK_RESPONSES.inc()
        logger.info(
            "intent_not_understood",
            conversation_id=turn.conversation_id,
            intent=signal.intent,
            text=turn.text,
        )
        await turn.send(self._config.fallback_message)
        url = self._config.fallback_search_url.format(query=quote_plus(turn.text))
        await turn.send(self._config.fallback_search_message.format(url=url))
        return TurnOutcome.empty()

    def _returning_greeting(self, user_name: str) -> str:
        return self._config.returning_greeting_template.format(
            user_name=user_name,
            bot_name=self._config.bot_name,
        )

    def _is_already_active(
        self,
        signal: TurnSignal,
        state: ConversationState,
        outcome: TurnOutcome | None,
    ) -> bool:
        """True when the intent would start a second copy of the waiting flow."""
        if outcome is None or outcome.status is not TurnStatus.WAITING:
            return False
        return self._resolves_to_active(signal.intent, state)

    def _resolves_to_active(self, intent: str, state: ConversationState) -> bool:
        target = self._registry.resolve(intent)
        return target is not None and target.name == state.active_sub_conversation_id

    async def _permitted(
        self,
        signal: TurnSignal,
        active_id: str | None,
        turn: TurnContext,
    ) -> bool:
        """Apply the permission policy; a denial sends its reason."""
        permission = self._evaluator.evaluate(signal.intent, active_id)
        if permission.allowed:
            return True

        PERMISSION_DENIALS.labels(rule=permission.rule or "unknown").inc()
        logger.info(
            "turn_denied",
            conversation_id=turn.conversation_id,
            intent=signal.intent,
            rule=permission.rule,
            active_sub_conversation=active_id,
        )
        await turn.send(permission.reason)
        return False

    def _end_frame(
        self,
        state: ConversationState,
        frame: DialogFrame,
        outcome: TurnOutcome,
        turn: TurnContext,
    ) -> None:
        if state.active_frame is frame:
            state.pop()
        logger.info(
            "sub_conversation_ended",
            conversation_id=turn.conversation_id,
            sub_conversation=frame.sub_conversation_id,
            status=outcome.status.value,
            reason=outcome.reason.value if outcome.reason else None,
        )

    def _live_active_id(self, state: ConversationState) -> str | None:
        """Id of the topmost frame whose sub-conversation is still registered."""
        for frame in reversed(state.stack):
            if frame.sub_conversation_id in self._registry:
                return frame.sub_conversation_id
        return None

    def _drop_stale_frames(self, state: ConversationState, turn: TurnContext) -> None:
        """Frames whose sub-conversation is no longer registered cannot resume."""
        stale = [f.sub_conversation_id for f in state.stack if f.sub_conversation_id not in self._registry]
        if stale:
            logger.warning(
                "stale_sub_conversations_dropped",
                conversation_id=turn.conversation_id,
                sub_conversations=stale,
            )
            state.stack = [f for f in state.stack if f.sub_conversation_id in self._registry]

    @staticmethod
    def _finish(
        outcome: TurnOutcome,
        state: ConversationState,
        turn: TurnContext,
        start_time: float,
    ) -> TurnOutcome:
        elapsed = time.perf_counter() - start_time
        DISPATCH_LATENCY.observe(elapsed)
        TURNS_DISPATCHED.labels(status=outcome.status.value).inc()
        logger.info(
            "turn_dispatched",
            conversation_id=turn.conversation_id,
            status=outcome.status.value,
            active_sub_conversation=state.active_sub_conversation_id,
            messages_sent=len(turn.sent),
            elapsed_ms=round(elapsed * 1000, 2),
        )
        return outcome
