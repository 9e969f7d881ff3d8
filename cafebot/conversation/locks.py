"""Per-conversation turn serialization.

Ensures only one turn runs per conversation at a time while different
conversations proceed concurrently. In-process counterpart of a
distributed session mutex; a multi-process deployment needs a shared lock.
"""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager


class ConversationLocks:
    """Registry of asyncio locks keyed by conversation ID."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._holders: dict[str, int] = {}

    @asynccontextmanager
    async def acquire(self, conversation_id: str) -> AsyncGenerator[None, None]:
        """Hold the conversation's lock for the duration of the block.

        Usage:
            async with locks.acquire("conversation-1"):
                # process exactly one turn
        """
        lock = self._locks.setdefault(conversation_id, asyncio.Lock())
        self._holders[conversation_id] = self._holders.get(conversation_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[conversation_id] -= 1
            if self._holders[conversation_id] == 0:
                # Nobody holds or waits on it any more
                del self._holders[conversation_id]
                del self._locks[conversation_id]

    def is_locked(self, conversation_id: str) -> bool:
        lock = self._locks.get(conversation_id)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        return len(self._locks)
