"""Turn signal models.

A turn signal is the normalized form of one incoming message: the
recognized intent plus the entities extracted alongside it. Signals are
built once per turn and never mutated afterwards.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

INTENT_KEY = "intent"


class EntityValue(BaseModel):
    """A single named entity extracted from user input."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Entity name")
    value: Any = Field(default=None, description="Entity value")


class TurnSignal(BaseModel):
    """Normalized intent and entities for one turn."""

    model_config = ConfigDict(frozen=True)

    intent: str = Field(default="", description="Recognized intent name")
    entities: tuple[EntityValue, ...] = Field(
        default=(), description="Entities in extraction order"
    )

    def entity_values(self, name: str) -> list[Any]:
        """Return every value recorded for an entity name, in order."""
        return [entity.value for entity in self.entities if entity.name == name]

    def first_entity(self, name: str) -> Any | None:
        """Return the first value recorded for an entity name, if any."""
        for entity in self.entities:
            if entity.name == name:
                return entity.value
        return None

    def first_entity_text(self, name: str) -> str | None:
        """First value of an entity as text; list values contribute their first item."""
        value = self.first_entity(name)
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        return None if value is None else str(value)

    def has_entity(self, name: str) -> bool:
        return any(entity.name == name for entity in self.entities)

    @classmethod
    def from_card_input(cls, card_value: Mapping[str, Any]) -> "TurnSignal":
        """Build a signal from an interactive card submission.

        The field named ``intent`` (case and surrounding whitespace ignored)
        carries the target intent; every other field becomes an entity.
        """
        intent = ""
        entities: list[EntityValue] = []
        for key, value in card_value.items():
            if key.lower().strip() == INTENT_KEY:
                intent = value if isinstance(value, str) else str(value)
            else:
                entities.append(EntityValue(name=key, value=value))
        return cls(intent=intent, entities=tuple(entities))

    @classmethod
    def from_recognizer_result(
        cls,
        intent: str | None,
        entities: Mapping[str, Any],
        entity_names: Iterable[str] | None = None,
    ) -> "TurnSignal":
        """Build a signal from an NLU result.

        When ``entity_names`` is given only those entities are kept, in the
        order the names are listed.
        """
        if entity_names is None:
            items = list(entities.items())
        else:
            items = [(name, entities[name]) for name in entity_names if name in entities]
        return cls(
            intent=intent or "",
            entities=tuple(EntityValue(name=name, value=value) for name, value in items),
        )

    @classmethod
    def from_query_payload(cls, payload: Mapping[str, Any]) -> "TurnSignal":
        """Build a signal from a decoded "what can you do" card query.

        The payload holds ``intent``, an optional ``text`` (display only) and
        an optional ``entities`` list of ``{"name": ..., "value": ...}`` items.
        """
        entities: list[EntityValue] = []
        raw_entities = payload.get("entities") or []
        if isinstance(raw_entities, list):
            for item in raw_entities:
                if isinstance(item, Mapping) and "name" in item:
                    entities.append(EntityValue(name=str(item["name"]), value=item.get("value")))
        intent = payload.get(INTENT_KEY) or ""
        return cls(intent=str(intent), entities=tuple(entities))
