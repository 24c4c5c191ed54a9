"""Pytest configuration and fixtures for the tasks API.

The Firestore REST API is replaced by tests.fakes.FakeFirestore behind an
httpx.MockTransport, so repository and HTTP tests run the real client code
without network access.
"""

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from tasks_api.core.config import get_settings
from tasks_api.infrastructure.firebase import FirestoreConnection, FirestoreRESTClient
from tasks_api.infrastructure.firebase.repositories import FirestoreTaskRepository
from tasks_api.main import create_app
from tests.fakes import FakeCredentials, FakeFirestore


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch: pytest.MonkeyPatch):
    """Drop Firestore credentials from env and reset the settings cache around each test."""
    monkeypatch.delenv("FIREBASE_SERVICE_ACCOUNT_KEY", raising=False)
    monkeypatch.delenv("FIREBASE_SERVICE_ACCOUNT_PATH", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_firestore() -> FakeFirestore:
    return FakeFirestore()


@pytest.fixture
async def firestore_client(fake_firestore: FakeFirestore) -> FirestoreRESTClient:
    """FirestoreRESTClient wired to the in-memory fake."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(fake_firestore.handler))
    client = FirestoreRESTClient(
        fake_firestore.project_id, FakeCredentials(), http_client=http
    )
    yield client
    await http.aclose()


@pytest.fixture
def db_connection(firestore_client: FirestoreRESTClient) -> FirestoreConnection:
    """A connection that is already connected to the fake."""
    return FirestoreConnection(client=firestore_client)


@pytest.fixture
def task_repo(db_connection: FirestoreConnection) -> FirestoreTaskRepository:
    return FirestoreTaskRepository(db_connection, "tasks")


@pytest.fixture
def app(db_connection: FirestoreConnection) -> FastAPI:
    """App with the lifespan's state set by hand (ASGITransport does not run lifespan)."""
    application = create_app()
    application.state.db = db_connection
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
