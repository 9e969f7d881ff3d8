"""Permission policy for requested intents.

Decides, from the requested intent and the active sub-conversation alone,
whether a turn may proceed. The policy is a table of rules; the first rule
that covers the intent decides, and intents no rule covers are allowed.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cafebot.dispatch.intents import (
    BOOK_TABLE,
    BOOK_TABLE_CANCEL,
    BOOK_TABLE_SUBMIT,
    CANCEL,
    WHAT_CAN_YOU_DO,
    WHO_ARE_YOU,
)

CANCEL_FIRST_REASON = (
    "Sorry! I'm unable to process that. You can say 'cancel' to cancel this conversation.."
)


class PermissionOutcome(BaseModel):
    """Allow/deny decision with a user-facing reason."""

    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: str = ""
    rule: str | None = Field(default=None, description="Rule that denied the request")

    @classmethod
    def allow(cls) -> "PermissionOutcome":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str, rule: str | None = None) -> "PermissionOutcome":
        return cls(allowed=False, reason=reason, rule=rule)


class PermissionRule(BaseModel):
    """One row of the permission policy.

    Exactly one of ``allowed_when_active`` (the intent is only valid while
    one of these sub-conversations owns the turn; idle counts as none) or
    ``denied_when_active`` (the intent is refused while one of these owns
    the turn) must be set.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    intents: frozenset[str]
    allowed_when_active: frozenset[str] | None = None
    denied_when_active: frozenset[str] | None = None
    reason: str

    @model_validator(mode="after")
    def _one_condition(self) -> "PermissionRule":
        if (self.allowed_when_active is None) == (self.denied_when_active is None):
            raise ValueError(
                f"rule '{self.name}' needs exactly one of allowed_when_active/denied_when_active"
            )
        return self

    def applies_to(self, intent: str) -> bool:
        return intent in self.intents

    def permits(self, active_sub_conversation_id: str | None) -> bool:
        if self.allowed_when_active is not None:
            return active_sub_conversation_id in self.allowed_when_active
        return active_sub_conversation_id not in (self.denied_when_active or frozenset())


DEFAULT_PERMISSION_RULES: tuple[PermissionRule, ...] = (
    # Reservation card actions only make sense while the booking flow is active
    PermissionRule(
        name="book_table_card_only",
        intents=frozenset({BOOK_TABLE_SUBMIT, BOOK_TABLE_CANCEL}),
        allowed_when_active=frozenset({BOOK_TABLE}),
        reason="Sorry! I'm unable to process that. To start a new table reservation, try 'Book a table'",
    ),
    # Cancel needs a multi-turn flow (or the confirmation itself) to act on
    PermissionRule(
        name="cancel_requires_flow",
        intents=frozenset({CANCEL}),
        allowed_when_active=frozenset({BOOK_TABLE, WHO_ARE_YOU, CANCEL}),
        reason="Sure, but there is nothing to cancel..",
    ),
    PermissionRule(
        name="what_can_you_do_exclusive",
        intents=frozenset({WHAT_CAN_YOU_DO}),
        denied_when_active=frozenset({WHO_ARE_YOU}),
        reason=CANCEL_FIRST_REASON,
    ),
    PermissionRule(
        name="who_are_you_exclusive",
        intents=frozenset({WHO_ARE_YOU}),
        denied_when_active=frozenset({BOOK_TABLE}),
        reason=CANCEL_FIRST_REASON,
    ),
)


class PermissionEvaluator:
    """Evaluate requested intents against the permission policy."""

    def __init__(self, rules: tuple[PermissionRule, ...] | list[PermissionRule] | None = None) -> None:
        self._rules = tuple(DEFAULT_PERMISSION_RULES if rules is None else rules)

    @property
    def rules(self) -> tuple[PermissionRule, ...]:
        return self._rules

    def evaluate(
        self,
        requested_intent: str,
        active_sub_conversation_id: str | None,
    ) -> PermissionOutcome:
        """Decide whether ``requested_intent`` may run now.

        Pure function of its inputs and the rule table.
        """
        for rule in self._rules:
            if not rule.applies_to(requested_intent):
                continue
            if rule.permits(active_sub_conversation_id):
                return PermissionOutcome.allow()
            return PermissionOutcome.deny(rule.reason, rule=rule.name)
        return PermissionOutcome.allow()
