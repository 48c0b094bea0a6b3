"""Shared fixtures: an app on in-memory SQLite with a temporary upload dir."""

import pytest
from fastapi.testclient import TestClient

from gamestore.config import Settings
from gamestore.main import create_app

TEST_SECRET = "test-secret-key"
TEST_EMAIL = "gamer@gamestore.io"
TEST_PASSWORD = "s3cret-pass"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        SECRET_KEY=TEST_SECRET,
        BCRYPT_ROUNDS=4,
        UPLOAD_DIR=str(tmp_path / "uploads"),
        SEED_PLATFORMS=["PlayStation 5", "Nintendo Switch", "PC"],
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # Entering the context runs the lifespan: tables + seeded platforms
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def token(client):
    resp = client.post("/api/register", json={"email": TEST_EMAIL, "password": TEST_PASSWORD})
    assert resp.status_code == 201
    return resp.json()["token"]


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}
