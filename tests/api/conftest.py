"""
Fixtures for HTTP API tests.

Builds the full application with the identity resolver and services
replaced through dependency_overrides.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ragchat.api.deps import get_identity_resolver
from ragchat.api.main import create_app
from ragchat.boundary.auth.supabase_identity import CallerIdentity

VALID_TOKEN = "valid-token"


class FakeIdentityResolver:
    """Accepts a single token and maps it to a fixed caller."""

    def __init__(self, caller: CallerIdentity) -> None:
        self.caller = caller
        self.tokens: list[str | None] = []

    async def get_caller(self, token: str | None) -> CallerIdentity | None:
        self.tokens.append(token)
        return self.caller if token == VALID_TOKEN else None


@pytest.fixture
def caller(owner_id: str) -> CallerIdentity:
    return CallerIdentity(id=owner_id, email="student@example.com")


@pytest.fixture
def identity_resolver(caller: CallerIdentity) -> FakeIdentityResolver:
    return FakeIdentityResolver(caller)


@pytest.fixture
def app(identity_resolver: FakeIdentityResolver) -> FastAPI:
    """Create the application with authentication stubbed."""
    app = create_app()
    app.dependency_overrides[get_identity_resolver] = lambda: identity_resolver
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Provide TestClient for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {VALID_TOKEN}"}
