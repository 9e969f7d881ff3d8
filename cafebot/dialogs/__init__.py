"""Built-in sub-conversations of the cafe bot."""

from cafebot.dialogs.book_table import BookTableSubConversation
from cafebot.dialogs.cancel import CancelConfirmationSubConversation
from cafebot.dialogs.factory import build_registry
from cafebot.dialogs.qna import QnASubConversation
from cafebot.dialogs.reply import StaticReplySubConversation
from cafebot.dialogs.who_are_you import IdentificationSubConversation

__all__ = [
    "BookTableSubConversation",
    "CancelConfirmationSubConversation",
    "IdentificationSubConversation",
    "QnASubConversation",
    "StaticReplySubConversation",
    "build_registry",
]
