"""Shared test fixtures for the cafebot test suite."""

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from cafebot.config.settings import Settings, set_toml_config
from cafebot.conversation.models import ConversationState
from cafebot.conversation.stores import InMemoryConversationStateStore
from cafebot.dialogs import build_registry
from cafebot.dispatch import SubConversationRegistry, TurnContext, TurnOrchestrator
from cafebot.profile.stores import InMemoryUserProfileStore

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "debug = true",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            toml_file = test_config_dir / filename
            toml_file.write_text(content)

    return _create_toml_files


class EnvOverrideContext:
    """Context manager for temporarily setting environment variables."""

    def __init__(self, overrides: dict[str, str]) -> None:
        self.overrides = overrides
        self.original_env: dict[str, str | None] = {}

    def __enter__(self) -> None:
        for key, value in self.overrides.items():
            self.original_env[key] = os.environ.get(key)
            os.environ[key] = value

    def __exit__(self, *args: Any) -> None:
        for key in self.overrides:
            original = self.original_env[key]
            if original is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = original


@pytest.fixture
def env_override() -> Generator[Callable[[dict[str, str]], EnvOverrideContext], None, None]:
    """Context manager for temporarily setting environment variables.

    Usage:
        def test_something(env_override):
            with env_override({"CAFEBOT_DEBUG": "true"}):
                # test code here
    """

    def _env_override(overrides: dict[str, str]) -> EnvOverrideContext:
        return EnvOverrideContext(overrides)

    yield _env_override


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache before and after each test.

    This ensures test isolation for configuration tests.
    """
    from cafebot.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def project_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Settings loaded from the repository's config/ with test overrides."""
    from cafebot.config import get_settings

    monkeypatch.setenv("CAFEBOT_CONFIG_DIR", str(CONFIG_DIR))
    monkeypatch.setenv("CAFEBOT_ENV", "test")
    get_settings.cache_clear()
    return get_settings()


@pytest.fixture
def settings() -> Settings:
    """Settings built from model defaults only."""
    set_toml_config({})
    return Settings()


@pytest.fixture
def profile_store() -> InMemoryUserProfileStore:
    return InMemoryUserProfileStore()


@pytest.fixture
def state_store() -> InMemoryConversationStateStore:
    return InMemoryConversationStateStore()


@pytest.fixture
def registry(settings: Settings, profile_store: InMemoryUserProfileStore) -> SubConversationRegistry:
    return build_registry(settings, profile_store)


@pytest.fixture
def orchestrator(
    registry: SubConversationRegistry,
    profile_store: InMemoryUserProfileStore,
    settings: Settings,
) -> TurnOrchestrator:
    return TurnOrchestrator(registry, profile_store, config=settings.dispatch)


@pytest.fixture
def state() -> ConversationState:
    return ConversationState(conversation_id="conv-1")


@pytest.fixture
def make_turn() -> Callable[..., TurnContext]:
    """Factory for turn contexts of the default test user."""

    def _make_turn(text: str = "", user_id: str = "user-1") -> TurnContext:
        return TurnContext(conversation_id="conv-1", user_id=user_id, text=text)

    return _make_turn
