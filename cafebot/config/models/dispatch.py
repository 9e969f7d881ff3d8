"""Turn dispatch configuration."""

from pydantic import BaseModel, Field


class DispatchConfig(BaseModel):
    """Texts and limits used by the orchestrator and reconciler."""

    bot_name: str = Field(default="Contoso Cafe Bot", description="Name used in greetings")
    max_redispatch_depth: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Maximum nested re-dispatches (card payloads, interruptions) per turn",
    )
    closing_prompt: str = Field(
        default="Is there anything else I can help you with?",
        description="Sent when a sub-conversation completes or is cancelled",
    )
    suggested_queries: list[str] = Field(
        default_factory=lambda: [
            "Book a table",
            "Find cafe locations",
            "Who are you?",
            "What can you do?",
        ],
        description="Suggested follow-ups attached to the closing prompt",
    )
    fallback_message: str = Field(
        default="I'm still learning.. Sorry, I do not know how to help you with that.",
        description="Sent for unrecognized intents",
    )
    fallback_search_url: str = Field(
        default="https://www.bing.com/search?q={query}",
        description="Web search link template; {query} is the url-encoded turn text",
    )
    fallback_search_message: str = Field(
        default="Follow [this link]({url}) to search the web!",
        description="Second fallback message; {url} is the rendered search link",
    )
    malformed_card_message: str = Field(
        default="Try and choose a query from the card before you click the 'Let's talk!' button.",
        description="Sent when a card query payload cannot be decoded",
    )
    echo_template: str = Field(
        default="You said: '{text}'",
        description="Echo of the query text carried by a card payload",
    )
    greeting_template: str = Field(
        default="Hello, I'm the {bot_name}.",
        description="Greeting before the identification sub-conversation starts",
    )
    returning_greeting_template: str = Field(
        default="Hello {user_name}, Nice to meet you again! I'm the {bot_name}.",
        description="Greeting for users whose name is known",
    )
