"""User profile domain."""

from cafebot.profile.models import UNKNOWN_USER_NAME, UserProfile, capitalize_name
from cafebot.profile.store import UserProfileStore

__all__ = [
    "UNKNOWN_USER_NAME",
    "UserProfile",
    "UserProfileStore",
    "capitalize_name",
]
