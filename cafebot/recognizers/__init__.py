"""Intent recognizers that turn message text into a TurnSignal."""

from cafebot.recognizers.base import IntentRecognizer
from cafebot.recognizers.pattern import PatternRecognizer

__all__ = ["IntentRecognizer", "PatternRecognizer"]
