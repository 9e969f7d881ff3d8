"""Pattern recognizer configuration."""

from pydantic import BaseModel, Field


class RecognizerConfig(BaseModel):
    """Regex patterns used by the development recognizer.

    Patterns are tried in declaration order; the first intent with a
    matching pattern wins. Named groups become entities.
    """

    default_intent: str = Field(
        default="None",
        description="Intent reported when no pattern matches",
    )
    patterns: dict[str, list[str]] = Field(
        default_factory=dict,
        description="intent -> regular expressions (case-insensitive)",
    )
