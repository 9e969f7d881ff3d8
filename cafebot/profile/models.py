"""User profile models."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

# Placeholder stored when the user declined to give a name
UNKNOWN_USER_NAME = "Human"


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


def capitalize_name(name: str) -> str:
    """Upper-case the first character and keep the rest as typed."""
    name = name.strip()
    return name[:1].upper() + name[1:]


class UserProfile(BaseModel):
    """What the bot remembers about a user across conversations."""

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    user_id: str = Field(..., description="User identifier")
    user_name: str = Field(default="", description="Name the user introduced themselves with")
    created_at: datetime = Field(default_factory=utc_now, description="Creation time")
    updated_at: datetime = Field(default_factory=utc_now, description="Last update")

    @property
    def is_identified(self) -> bool:
        """False while the name is unset or the unknown placeholder."""
        return self.user_name not in ("", UNKNOWN_USER_NAME)

    def rename(self, user_name: str) -> None:
        self.user_name = user_name
        self.updated_at = utc_now()
