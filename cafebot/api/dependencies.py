"""Dependency injection for API routes.

Provides the settings, stores and bot used by API endpoints. Instances
are created once and reused; tests call ``reset_dependencies``.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from cafebot.bot import CafeBot, create_bot
from cafebot.config.settings import Settings, load_layers, set_toml_config
from cafebot.conversation.store import ConversationStateStore
from cafebot.conversation.stores import InMemoryConversationStateStore
from cafebot.observability.logging import get_logger
from cafebot.profile import UserProfileStore
from cafebot.profile.stores import InMemoryUserProfileStore

logger = get_logger(__name__)

_state_store: ConversationStateStore | None = None
_profile_store: UserProfileStore | None = None
_bot: CafeBot | None = None


@lru_cache
def get_settings() -> Settings:
    """Get application settings.

    Loads configuration from TOML files and environment variables.
    Cached to avoid reloading on every request.
    """
    try:
        toml_config = load_layers()
        set_toml_config(toml_config)
    except FileNotFoundError:
        logger.warning("config_file_not_found", msg="Using default configuration")
        set_toml_config({})

    return Settings()


def get_state_store() -> ConversationStateStore:
    global _state_store
    if _state_store is None:
        _state_store = InMemoryConversationStateStore()
        logger.info("state_store_initialized", store_type="inmemory")
    return _state_store


def get_profile_store() -> UserProfileStore:
    global _profile_store
    if _profile_store is None:
        _profile_store = InMemoryUserProfileStore()
        logger.info("profile_store_initialized", store_type="inmemory")
    return _profile_store


def get_bot(
    settings: Annotated[Settings, Depends(get_settings)],
    state_store: Annotated[ConversationStateStore, Depends(get_state_store)],
    profile_store: Annotated[UserProfileStore, Depends(get_profile_store)],
) -> CafeBot:
    """Get the CafeBot instance, wired on first use."""
    global _bot
    if _bot is None:
        _bot = create_bot(settings, state_store=state_store, profile_store=profile_store)
    return _bot


SettingsDep = Annotated[Settings, Depends(get_settings)]
StateStoreDep = Annotated[ConversationStateStore, Depends(get_state_store)]
ProfileStoreDep = Annotated[UserProfileStore, Depends(get_profile_store)]
BotDep = Annotated[CafeBot, Depends(get_bot)]


def reset_dependencies() -> None:
    """Reset all cached dependencies.

    Used for testing to ensure fresh instances.
    """
    global _state_store, _profile_store, _bot
    _state_store = None
    _profile_store = None
    _bot = None
    get_settings.cache_clear()
