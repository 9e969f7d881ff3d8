"""Dispatcher exception hierarchy.

User-facing problems (denied requests, unknown intents, malformed card
payloads) are chat messages, not exceptions. Exceptions are reserved for
wiring mistakes that must stop the bot from starting.
"""


class CafeBotError(Exception):
    """Base exception for cafebot."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DispatchConfigurationError(CafeBotError):
    """A required collaborator was not supplied."""

    pass


class RegistryError(CafeBotError):
    """Sub-conversation registration conflict."""

    pass


class UnknownSubConversationError(CafeBotError):
    """No sub-conversation is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No sub-conversation registered as '{name}'")
        self.name = name
