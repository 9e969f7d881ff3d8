"""Tests for per-conversation turn serialization."""

import asyncio

import pytest

from cafebot.conversation.locks import ConversationLocks


class TestConversationLocks:
    """Tests for ConversationLocks."""

    @pytest.mark.asyncio
    async def test_same_conversation_is_serialized(self):
        """Turns of one conversation never overlap."""
        locks = ConversationLocks()
        events: list[str] = []

        async def turn(name: str) -> None:
            async with locks.acquire("c1"):
                events.append(f"{name}-start")
                await asyncio.sleep(0.01)
                events.append(f"{name}-end")

        await asyncio.gather(turn("a"), turn("b"))

        assert events in (
            ["a-start", "a-end", "b-start", "b-end"],
            ["b-start", "b-end", "a-start", "a-end"],
        )

    @pytest.mark.asyncio
    async def test_different_conversations_run_concurrently(self):
        locks = ConversationLocks()
        inside = asyncio.Event()
        release = asyncio.Event()

        async def first() -> None:
            async with locks.acquire("c1"):
                inside.set()
                await release.wait()

        task = asyncio.create_task(first())
        await inside.wait()

        async with locks.acquire("c2"):
            assert locks.is_locked("c1")
            assert locks.is_locked("c2")

        release.set()
        await task

    @pytest.mark.asyncio
    async def test_locks_are_released_when_unused(self):
        locks = ConversationLocks()

        async with locks.acquire("c1"):
            assert len(locks) == 1

        assert len(locks) == 0
        assert not locks.is_locked("c1")

    @pytest.mark.asyncio
    async def test_lock_released_on_error(self):
        locks = ConversationLocks()

        with pytest.raises(RuntimeError):
            async with locks.acquire("c1"):
                raise RuntimeError("boom")

        assert not locks.is_locked("c1")
        assert len(locks) == 0
