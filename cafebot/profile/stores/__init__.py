"""User profile stores."""

from cafebot.profile.store import UserProfileStore
from cafebot.profile.stores.inmemory import InMemoryUserProfileStore

__all__ = [
    "UserProfileStore",
    "InMemoryUserProfileStore",
]
