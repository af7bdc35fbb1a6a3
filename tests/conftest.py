import asyncio
import os
import tempfile
import uuid

# configure before anything imports tasktrack.config
_DB_DIR = tempfile.mkdtemp(prefix="tasktrack-tests-")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(_DB_DIR, "test.db")
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["AUTH_RATE_LIMIT"] = "100000"
os.environ["APP_ENV"] = "test"

import pytest
from fastapi.testclient import TestClient

from tasktrack.database import drop_models, init_models
from tasktrack.main import create_app

PASSWORD = "SecurePass123"


async def _reset_schema():
    await drop_models()
    await init_models()


# Recreate all tables for each test
@pytest.fixture(autouse=True)
def setup_database():
    asyncio.run(_reset_schema())
    yield
    asyncio.run(drop_models())


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def unique_email(prefix="user"):
    return f"{prefix}_{uuid.uuid4().hex[:8]}@example.com"


def register(client, name="Test User", email=None, password=PASSWORD):
    """Register a user and return (token, user)."""
    r = client.post("/auth/register", json={"name": name, "email": email or unique_email(), "password": password})
    assert r.status_code == 201, r.text
    body = r.json()
    return body["token"], body["user"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def token(client):
    return register(client)[0]


@pytest.fixture
def other_token(client):
    return register(client, name="Other User", email=unique_email("other"))[0]
