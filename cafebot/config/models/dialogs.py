"""Configuration for the built-in sub-conversations."""

from string import Formatter

from pydantic import BaseModel, Field, model_validator


class IdentificationConfig(BaseModel):
    """Who-are-you sub-conversation texts."""

    prompt: str = Field(default="What's your name?")
    reprompt: str = Field(default="Sorry, I didn't catch that. What's your name?")
    resume_prompt: str = Field(default="Let's get back to it. What's your name?")
    greeting: str = Field(default="Hey there {user_name}! Nice to meet you.")


class CancelConfig(BaseModel):
    """Cancel confirmation texts and accepted answers."""

    prompt: str = Field(default="Are you sure you want to cancel?")
    reprompt: str = Field(default="Please answer 'yes' or 'no'. Are you sure you want to cancel?")
    cancelled_message: str = Field(default="Sure. I've cancelled that!")
    resume_message: str = Field(default="Ok. Let's get back to what we were doing.")
    confirm_words: list[str] = Field(
        default_factory=lambda: ["yes", "y", "yeah", "yep", "sure", "ok", "okay"],
    )
    deny_words: list[str] = Field(default_factory=lambda: ["no", "n", "nope", "nah"])
    suggested_actions: list[str] = Field(default_factory=lambda: ["Yes", "No"])


class BookTableConfig(BaseModel):
    """Table reservation texts and required reservation fields."""

    prompt: str = Field(
        default="Sure. Fill in the reservation card and I'll book a table for you."
    )
    resume_prompt: str = Field(default="Let's get back to your table reservation.")
    missing_template: str = Field(
        default="I still need the following to book your table: {fields}."
    )
    confirmation_template: str = Field(
        default="Ok. I have a table for {partySize} at {cafeLocation} on {datetime}."
    )
    cancelled_message: str = Field(default="Ok. I've cancelled your table reservation.")
    required_fields: list[str] = Field(
        default_factory=lambda: ["cafeLocation", "datetime", "partySize"],
    )

    @model_validator(mode="after")
    def check_confirmation_fields(self) -> "BookTableConfig":
        """The confirmation may only name fields the reservation collects."""
        unknown = sorted(
            name
            for name in confirmation_placeholders(self.confirmation_template)
            if name not in self.required_fields
        )
        if unknown:
            raise ValueError(
                f"confirmation_template names fields outside required_fields: {', '.join(unknown)}"
            )
        return self


def confirmation_placeholders(template: str) -> set[str]:
    """Top-level field names referenced by a ``str.format`` template."""
    names: set[str] = set()
    for _, field_name, _, _ in Formatter().parse(template):
        if field_name is None:
            continue
        base = field_name.split(".", 1)[0].split("[", 1)[0]
        if not base or base.isdigit():
            raise ValueError(f"confirmation_template needs named fields, got '{{{field_name}}}'")
        names.add(base)
    return names


class QnAConfig(BaseModel):
    """Canned answers for QnA, ChitChat and Help."""

    answers: dict[str, str] = Field(
        default_factory=dict,
        description="normalized question -> answer",
    )
    default_answer: str = Field(
        default="I can help you book a table, find cafe locations and answer questions about Contoso Cafe.",
    )


class StaticReplyConfig(BaseModel):
    """Single-turn reply with optional suggested actions."""

    text: str
    suggested_actions: list[str] = Field(default_factory=list)


class DialogsConfig(BaseModel):
    """Built-in sub-conversation configuration."""

    who_are_you: IdentificationConfig = Field(default_factory=IdentificationConfig)
    cancel: CancelConfig = Field(default_factory=CancelConfig)
    book_table: BookTableConfig = Field(default_factory=BookTableConfig)
    qna: QnAConfig = Field(default_factory=QnAConfig)
    find_cafe_locations: StaticReplyConfig = Field(
        default_factory=lambda: StaticReplyConfig(
            text="We have cafes in Seattle, Bellevue, Redmond and Renton.",
            suggested_actions=["Book a table"],
        )
    )
    what_can_you_do: StaticReplyConfig = Field(
        default_factory=lambda: StaticReplyConfig(
            text="I can help you book a table, find cafe locations and answer questions. Pick one below!",
            suggested_actions=["Book a table", "Find cafe locations", "Who are you?"],
        )
    )
