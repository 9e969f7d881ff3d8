"""Tests for the built-in registry wiring."""

from cafebot.dialogs import (
    BookTableSubConversation,
    CancelConfirmationSubConversation,
    IdentificationSubConversation,
    QnASubConversation,
    StaticReplySubConversation,
)


class TestBuildRegistry:
    def test_every_intent_is_routed(self, registry):
        assert isinstance(registry.resolve("BookTable"), BookTableSubConversation)
        assert isinstance(registry.resolve("WhoAreYou"), IdentificationSubConversation)
        assert isinstance(registry.resolve("Cancel"), CancelConfirmationSubConversation)
        assert isinstance(registry.resolve("FindCafeLocations"), StaticReplySubConversation)
        assert isinstance(registry.resolve("WhatCanYouDo"), StaticReplySubConversation)
        assert isinstance(registry.resolve("QnA"), QnASubConversation)

    def test_qna_aliases_share_one_handle(self, registry):
        qna = registry.resolve("QnA")

        assert registry.resolve("ChitChat") is qna
        assert registry.resolve("Help") is qna

    def test_none_intent_is_not_routed(self, registry):
        assert registry.resolve("None") is None
