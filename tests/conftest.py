"""Pytest configuration and fixtures for cowconnect.

HTTP tests run the app in-process over httpx.ASGITransport with the
Firestore client, classifier and storage replaced by in-memory doubles.
ID tokens are "verified" by treating the bearer token as the Firebase uid.
"""

import json

import pytest
from httpx import ASGITransport, AsyncClient

from cowconnect.api.v1 import dependencies
from cowconnect.core.limiter import limiter
from cowconnect.main import create_app
from tests.fakes import FakeClassifier, FakeFirestore, FakeStorage

ACCEPT = json.dumps({"relevant": True, "needsReview": False})
ACCEPT_NEEDS_REVIEW = json.dumps({"relevant": True, "needsReview": True})
REJECT = json.dumps({"relevant": False, "needsReview": False})


def auth(user_id: str) -> dict[str, str]:
    """Authorization header for user_id (see the fake token verifier)."""
    return {"Authorization": f"Bearer {user_id}"}


@pytest.fixture
def fake_db() -> FakeFirestore:
    return FakeFirestore()


@pytest.fixture
def classifier() -> FakeClassifier:
    return FakeClassifier()


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
async def client(
    fake_db: FakeFirestore,
    classifier: FakeClassifier,
    storage: FakeStorage,
    monkeypatch: pytest.MonkeyPatch,
) -> AsyncClient:
    """Async HTTP client against a fresh app wired to the in-memory doubles."""

    async def fake_verify(token: str, project_id: str | None = None) -> dict:
        if token == "bad-token":
            raise ValueError("Invalid token: signature mismatch")
        return {"sub": token}

    monkeypatch.setattr(dependencies, "verify_id_token", fake_verify)
    monkeypatch.setattr(limiter, "enabled", False)

    app = create_app()
    app.dependency_overrides[dependencies.get_firestore] = lambda: fake_db
    app.dependency_overrides[dependencies.get_classifier] = lambda: classifier
    app.dependency_overrides[dependencies.get_storage] = lambda: storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
