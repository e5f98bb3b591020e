"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from fitness_buddy_api.app.core.store import ResourceStore
from fitness_buddy_api.app.main import create_app


@pytest.fixture
def store():
    """A store holding the example profile and workout."""
    return ResourceStore.seeded()


@pytest.fixture
def empty_store():
    """A store with no records at all."""
    return ResourceStore()


@pytest.fixture
def client(store):
    """Test client for an app serving the seeded ``store`` fixture."""
    return TestClient(create_app(store=store))


@pytest.fixture
def sample_profile():
    """A profile payload as the web client sends it."""
    return {
        "email": "jane@example.com",
        "username": "jane_roe",
        "age": 31,
        "location": "Boston",
        "goal": "Endurance",
        "workout": "Running",
    }
