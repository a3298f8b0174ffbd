"""
Shared fixtures.  Settings are read from the environment at import time,
so the test secret and a cheap bcrypt cost are set before anything else.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient

from auth.jwt import reset_signer
from database.memory_store import InMemoryStore
from main import create_app


@pytest.fixture(autouse=True)
def _fresh_signer():
    reset_signer()
    yield
    reset_signer()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def client(store) -> TestClient:
    return TestClient(create_app(store=store))


@pytest.fixture
def auth_headers(client) -> dict:
    """Register a user and return headers carrying its token."""
    resp = client.post("/register", json={"username": "alice", "password": "s3cret"})
    assert resp.status_code == 200
    return {"Authorization": resp.json()["token"]}
