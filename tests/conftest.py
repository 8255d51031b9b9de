"""
Shared fixtures.

The environment is configured before the app is imported: settings are read
once at import time, so the test database and signing key must be in place
first.
"""

import asyncio
import os
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="finance-tracker-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["SECRET_KEY"] = "test-signing-key-that-is-long-enough-for-hs256"
os.environ["CREATE_TABLES_ON_STARTUP"] = "true"

import pytest
from fastapi.testclient import TestClient

from finance_tracker.core.database import Base, engine
from finance_tracker.main import app

TEST_SECRET_KEY = os.environ["SECRET_KEY"]


async def _reset_schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
def client():
    asyncio.run(_reset_schema())
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def signup(client, name="Alice", email="alice@example.com", password="secret123") -> dict:
    response = client.post(
        "/api/auth/signup",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def alice(client) -> dict:
    """Signed-up user; returns the signup body plus ready-made headers."""
    body = signup(client)
    body["headers"] = auth_headers(body["token"])
    return body


@pytest.fixture
def bob(client) -> dict:
    body = signup(client, name="Bob", email="bob@example.com", password="hunter22")
    body["headers"] = auth_headers(body["token"])
    return body


@pytest.fixture
def coffee() -> dict:
    return {
        "title": "Coffee",
        "amount": 4.50,
        "type": "expense",
        "category": "Food",
        "date": "2024-03-01",
    }
