"""Registry wiring for the built-in sub-conversations."""

from cafebot.config.settings import Settings
from cafebot.dialogs.book_table import BookTableSubConversation
from cafebot.dialogs.cancel import CancelConfirmationSubConversation
from cafebot.dialogs.qna import QnASubConversation
from cafebot.dialogs.reply import StaticReplySubConversation
from cafebot.dialogs.who_are_you import IdentificationSubConversation
from cafebot.dispatch.intents import (
    CHIT_CHAT,
    FIND_CAFE_LOCATIONS,
    HELP,
    WHAT_CAN_YOU_DO,
)
from cafebot.dispatch.registry import SubConversationRegistry
from cafebot.profile import UserProfileStore


def build_registry(settings: Settings, profile_store: UserProfileStore) -> SubConversationRegistry:
    """Register every built-in sub-conversation under its intent."""
    dialogs = settings.dialogs
    registry = SubConversationRegistry()

    registry.register(BookTableSubConversation(dialogs.book_table))
    registry.register(IdentificationSubConversation(profile_store, dialogs.who_are_you))
    registry.register(CancelConfirmationSubConversation(dialogs.cancel))
    registry.register(
        StaticReplySubConversation(FIND_CAFE_LOCATIONS, dialogs.find_cafe_locations)
    )
    registry.register(StaticReplySubConversation(WHAT_CAN_YOU_DO, dialogs.what_can_you_do))
    registry.register(QnASubConversation(dialogs.qna), aliases=(CHIT_CHAT, HELP))

    return registry
