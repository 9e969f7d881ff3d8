"""Outcome reconciliation.

Turns the outcome of whichever sub-conversation handled a turn into the
next step: hand the turn to another flow, restore a suspended flow, or
close with a prompt. Sub-conversations that ended have already been popped
from the stack by the orchestrator when their outcome reaches here.
"""

from collections.abc import Awaitable, Callable

from cafebot.config.models.dispatch import DispatchConfig
from cafebot.conversation.models import (
    ConversationState,
    OutgoingMessage,
    ResultPayload,
    TurnOutcome,
    TurnSignal,
    TurnStatus,
)
from cafebot.dispatch.context import TurnContext
from cafebot.dispatch.exceptions import DispatchConfigurationError, UnknownSubConversationError
from cafebot.dispatch.registry import SubConversationRegistry
from cafebot.observability.logging import get_logger
from cafebot.observability.metrics import REDISPATCHES

logger = get_logger(__name__)

# (signal, options, depth) -> outcome of beginning the matching sub-conversation
Redispatch = Callable[[TurnSignal, ResultPayload | None, int], Awaitable[TurnOutcome | None]]


class OutcomeReconciler:
    """Decide what follows a sub-conversation's outcome.

    - complete + Interruption: begin the flow named by the payload's signal
    - complete + Abandon: begin the flow again from its carried resume point
    - complete: restore a suspended flow, or send the closing prompt
    - cancelled: drop the whole stack and send the closing prompt
    - waiting / empty: nothing to do
    """

    def __init__(
        self,
        registry: SubConversationRegistry,
        config: DispatchConfig | None = None,
    ) -> None:
        if registry is None:
            raise DispatchConfigurationError("A sub-conversation registry is required")
        self._registry = registry
        self._config = config or DispatchConfig()

    async def reconcile(
        self,
        outcome: TurnOutcome | None,
        signal: TurnSignal,
        state: ConversationState,
        turn: TurnContext,
        redispatch: Redispatch,
        depth: int = 0,
    ) -> TurnOutcome:
        """Reconcile ``outcome`` and return the turn's final outcome.

        Afterwards ``state.active_sub_conversation_id`` names the flow that
        receives the next turn, and is None exactly when the conversation
        is idle.
        """
        if outcome is None:
            logger.warning(
                "undefined_outcome_defaulted",
                conversation_id=turn.conversation_id,
                intent=signal.intent,
            )
            return TurnOutcome.empty()

        if outcome.status is TurnStatus.COMPLETE:
            if outcome.reason is not None:
                return await self._hand_off(outcome, state, turn, redispatch, depth)
            return await self._complete(outcome, state, turn)

        if outcome.status is TurnStatus.CANCELLED:
            return await self._cancel(outcome, state, turn)

        return outcome

    async def _hand_off(
        self,
        outcome: TurnOutcome,
        state: ConversationState,
        turn: TurnContext,
        redispatch: Redispatch,
        depth: int,
    ) -> TurnOutcome:
        """Re-dispatch the signal carried by an Interruption or Abandon."""
        assert outcome.result is not None and outcome.result.payload is not None
        reason = outcome.result.reason
        payload = outcome.result.payload

        if depth >= self._config.max_redispatch_depth:
            logger.warning(
                "redispatch_depth_exceeded",
                conversation_id=turn.conversation_id,
                reason=reason.value if reason else None,
                intent=payload.turn_signal.intent,
                depth=depth,
            )
            return TurnOutcome.empty()

        REDISPATCHES.labels(reason=reason.value if reason else "none").inc()
        logger.info(
            "redispatching_turn",
            conversation_id=turn.conversation_id,
            reason=reason.value if reason else None,
            intent=payload.turn_signal.intent,
            restores=payload.sub_conversation_id,
            active_sub_conversation=state.active_sub_conversation_id,
            depth=depth + 1,
        )

        next_outcome = await redispatch(payload.turn_signal, payload, depth + 1)
        return await self.reconcile(
            next_outcome,
            payload.turn_signal,
            state,
            turn,
            redispatch,
            depth + 1,
        )

    async def _complete(
        self,
        outcome: TurnOutcome,
        state: ConversationState,
        turn: TurnContext,
    ) -> TurnOutcome:
        """Restore the next suspended flow, or close the conversation turn."""
        while state.active_frame is not None:
            frame = state.active_frame
            try:
                suspended = self._registry.get(frame.sub_conversation_id)
            except UnknownSubConversationError:
                logger.warning(
                    "suspended_sub_conversation_unregistered",
                    conversation_id=turn.conversation_id,
                    sub_conversation=frame.sub_conversation_id,
                )
                state.pop()
                continue

            restored = await suspended.reprompt(turn, frame)
            if not restored.ended:
                logger.info(
                    "sub_conversation_restored",
                    conversation_id=turn.conversation_id,
                    sub_conversation=frame.sub_conversation_id,
                )
                return restored
            state.pop()

        await self._send_closing_prompt(turn)
        return outcome

    async def _cancel(
        self,
        outcome: TurnOutcome,
        state: ConversationState,
        turn: TurnContext,
    ) -> TurnOutcome:
        """Cancel-all: every frame goes, not just the top one."""
        removed = state.clear()
        logger.info(
            "sub_conversations_cancelled",
            conversation_id=turn.conversation_id,
            frames_removed=len(removed),
        )
        await self._send_closing_prompt(turn)
        return outcome

    async def _send_closing_prompt(self, turn: TurnContext) -> None:
        await turn.send(
            OutgoingMessage(
                text=self._config.closing_prompt,
                suggested_actions=list(self._config.suggested_queries),
            )
        )
