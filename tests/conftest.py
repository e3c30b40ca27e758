"""Shared pytest fixtures for TripMate tests."""

from __future__ import annotations

import sys

sys.dont_write_bytecode = True

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from tests.helpers import InMemoryEntityStore  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_oidc_jwks_cache():
    """Reset the module-level JWKS cache so keys never leak between tests."""
    import tripmate.api.auth as auth_module

    auth_module._jwks_cache = None
    auth_module._jwks_cache_time = 0
    yield
    auth_module._jwks_cache = None
    auth_module._jwks_cache_time = 0


@pytest.fixture
def store() -> InMemoryEntityStore:
    return InMemoryEntityStore()


@pytest.fixture
def client_as(store):
    """Build a TestClient authenticated as a user with the given role.

    Usage:
        client = client_as("staff")
    """
    from tripmate.api.auth import CurrentUser, get_current_user
    from tripmate.api.factory import create_app
    from tripmate.api.store import get_store

    def _make(role: str = "admin") -> TestClient:
        app = create_app(role="admin")
        user = CurrentUser(
            id="user-uuid-1",
            external_subject="user-123",
            email="admin@example.com",
            name="Admin User",
            role=role,
        )
        app.dependency_overrides[get_current_user] = lambda: user
        app.dependency_overrides[get_store] = lambda: store
        return TestClient(app)

    return _make
