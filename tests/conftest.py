"""
Shared fixtures.

Tests never touch Firebase: identity is a static token table and
storage is the in-memory document store.
"""

import pytest
from fastapi.testclient import TestClient

from finance_tracker.api import create_app
from finance_tracker.models.user import VerifiedUser
from finance_tracker.services.clients import ServiceClients
from finance_tracker.services.identity import IdentityVerifier, InvalidTokenError
from finance_tracker.services.storage import InMemoryDocumentStore


ALICE = VerifiedUser(uid="alice-uid", email="alice@example.com")
BOB = VerifiedUser(uid="bob-uid", email="bob@example.com")
NO_EMAIL = VerifiedUser(uid="anon-uid")

TOKENS = {
    "alice-token": ALICE,
    "bob-token": BOB,
    "anon-token": NO_EMAIL,
}


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class CountingDocumentStore(InMemoryDocumentStore):
    """In-memory store that can report how many documents it holds."""

    def count(self, collection: str) -> int:
        return len(self._collection(collection))


class StaticTokenVerifier(IdentityVerifier):
    """Accepts only the tokens it was built with."""

    def __init__(self, tokens: dict[str, VerifiedUser]):
        self._tokens = tokens

    async def verify(self, token: str) -> VerifiedUser:
        try:
            return self._tokens[token]
        except KeyError:
            raise InvalidTokenError(f"unknown token: {token}")


@pytest.fixture
def store() -> CountingDocumentStore:
    return CountingDocumentStore()


@pytest.fixture
def clients(store) -> ServiceClients:
    return ServiceClients(identity=StaticTokenVerifier(TOKENS), store=store)


@pytest.fixture
def app(clients):
    return create_app(clients=clients)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def alice_headers() -> dict[str, str]:
    return bearer("alice-token")


@pytest.fixture
def bob_headers() -> dict[str, str]:
    return bearer("bob-token")
