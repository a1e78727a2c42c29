import os

# Settings are read at import time, so point them at a throwaway SQLite file
# before anything from todo_api is imported.
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["JWT_SECRET"] = "test-secret"

import uuid

import pytest
from fastapi.testclient import TestClient

from todo_api.database import Base, SessionLocal, engine
from todo_api.main import app


@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def signup(client: TestClient, name: str = None):
    """Register a fresh user and return (user_id, auth headers)."""
    name = name or f"user_{uuid.uuid4().hex[:8]}"
    r = client.post("/api/auth/signup", json={
        "username": name,
        "email": f"{name}@example.com",
        "password": "correct_horse_battery_staple",
    })
    assert r.status_code == 201, r.text
    data = r.json()
    return data["user"]["id"], {"Authorization": f"Bearer {data['token']}"}


@pytest.fixture
def auth_headers(client):
    return signup(client)[1]
