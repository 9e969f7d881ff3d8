"""UserProfileStore abstract interface."""

from abc import ABC, abstractmethod

from cafebot.profile.models import UserProfile


class UserProfileStore(ABC):
    """Abstract interface for per-user profile storage."""

    @abstractmethod
    async def get(self, user_id: str) -> UserProfile | None:
        """Get a profile by user ID."""
        pass

    @abstractmethod
    async def save(self, profile: UserProfile) -> str:
        """Save a profile, returning its user ID."""
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> bool:
        """Delete a profile."""
        pass

    async def get_or_create(self, user_id: str) -> UserProfile:
        """Get the stored profile or an empty one (not yet saved)."""
        profile = await self.get(user_id)
        if profile is None:
            profile = UserProfile(user_id=user_id)
        return profile
