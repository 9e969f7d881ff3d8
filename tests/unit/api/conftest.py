"""Fixtures for API tests."""

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from cafebot.api.app import create_app
from cafebot.api.dependencies import (
    get_profile_store,
    get_settings,
    get_state_store,
    reset_dependencies,
)
from cafebot.config.settings import Settings
from cafebot.conversation.stores import InMemoryConversationStateStore
from cafebot.profile.stores import InMemoryUserProfileStore


@pytest.fixture
def app(
    project_settings: Settings,
    state_store: InMemoryConversationStateStore,
    profile_store: InMemoryUserProfileStore,
) -> Generator[FastAPI, None, None]:
    """Application wired to fresh in-memory stores."""
    reset_dependencies()

    app = create_app()
    app.dependency_overrides[get_settings] = lambda: project_settings
    app.dependency_overrides[get_state_store] = lambda: state_store
    app.dependency_overrides[get_profile_store] = lambda: profile_store

    yield app

    reset_dependencies()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Test client."""
    return TestClient(app)
