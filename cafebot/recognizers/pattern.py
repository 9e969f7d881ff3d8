"""Regular-expression intent recognizer for development and tests."""

import re

from cafebot.config.models.recognizer import RecognizerConfig
from cafebot.conversation.models import TurnSignal
from cafebot.dispatch.exceptions import DispatchConfigurationError
from cafebot.observability.logging import get_logger
from cafebot.recognizers.base import IntentRecognizer

logger = get_logger(__name__)


class PatternRecognizer(IntentRecognizer):
    """Match text against configured patterns, first intent wins.

    Named groups in a matching pattern become entities, e.g.
    ``my name is (?P<userName_patternAny>.+)``.
    """

    def __init__(self, config: RecognizerConfig | None = None) -> None:
        self._config = config or RecognizerConfig()
        self._patterns: list[tuple[str, re.Pattern[str]]] = []
        for intent, patterns in self._config.patterns.items():
            for pattern in patterns:
                try:
                    self._patterns.append((intent, re.compile(pattern, re.IGNORECASE)))
                except re.error as e:
                    raise DispatchConfigurationError(
                        f"Invalid pattern for intent '{intent}': {pattern!r} ({e})"
                    ) from e

        logger.debug(
            "pattern_recognizer_initialized",
            intents=len(self._config.patterns),
            patterns=len(self._patterns),
        )

    async def recognize(self, text: str) -> TurnSignal:
        text = text.strip()
        if text:
            for intent, pattern in self._patterns:
                match = pattern.search(text)
                if match is None:
                    continue
                entities = {
                    name: value.strip()
                    for name, value in match.groupdict().items()
                    if value and value.strip()
                }
                return TurnSignal.from_recognizer_result(intent, entities)

        return TurnSignal(intent=self._config.default_intent)
