"""In-memory implementation of UserProfileStore."""

from cafebot.profile.models import UserProfile
from cafebot.profile.store import UserProfileStore


class InMemoryUserProfileStore(UserProfileStore):
    """In-memory implementation of UserProfileStore for testing and development.

    Not suitable for production use.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._profiles: dict[str, UserProfile] = {}

    async def get(self, user_id: str) -> UserProfile | None:
        """Get a profile by user ID."""
        profile = self._profiles.get(user_id)
        return profile.model_copy(deep=True) if profile else None

    async def save(self, profile: UserProfile) -> str:
        """Save a profile, returning its user ID."""
        self._profiles[profile.user_id] = profile.model_copy(deep=True)
        return profile.user_id

    async def delete(self, user_id: str) -> bool:
        """Delete a profile."""
        if user_id in self._profiles:
            del self._profiles[user_id]
            return True
        return False
