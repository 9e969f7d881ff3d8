"""Tests for InMemoryUserProfileStore."""

import pytest

from cafebot.profile import UserProfile
from cafebot.profile.stores import InMemoryUserProfileStore


@pytest.fixture
def store() -> InMemoryUserProfileStore:
    return InMemoryUserProfileStore()


class TestProfileOperations:
    """Tests for profile CRUD operations."""

    @pytest.mark.asyncio
    async def test_save_and_get(self, store):
        await store.save(UserProfile(user_id="u1", user_name="Alice"))

        profile = await store.get("u1")

        assert profile is not None
        assert profile.user_name == "Alice"

    @pytest.mark.asyncio
    async def test_get_or_create_does_not_save(self, store):
        profile = await store.get_or_create("u1")

        assert profile.user_id == "u1"
        assert not profile.is_identified
        assert await store.get("u1") is None

    @pytest.mark.asyncio
    async def test_returned_profiles_are_copies(self, store):
        await store.save(UserProfile(user_id="u1", user_name="Alice"))

        profile = await store.get("u1")
        profile.rename("Mallory")

        assert (await store.get("u1")).user_name == "Alice"

    @pytest.mark.asyncio
    async def test_delete(self, store):
        await store.save(UserProfile(user_id="u1"))

        assert await store.delete("u1") is True
        assert await store.delete("u1") is False
