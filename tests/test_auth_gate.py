import pytest
from jose import jwt

from todo_api import config
from todo_api.database import get_db
from todo_api.main import app
from todo_api.models.task import Task
from todo_api.utils.auth import create_token

from conftest import signup


@pytest.fixture
def db_calls():
    """Replace the session dependency with one that records every use."""
    calls = []

    def tracking_get_db():
        calls.append(1)
        raise AssertionError("database session opened for an unauthenticated request")
        yield  # pragma: no cover

    app.dependency_overrides[get_db] = tracking_get_db
    yield calls
    app.dependency_overrides.pop(get_db, None)


ROUTES = [
    ("get", "/api/todos", None),
    ("post", "/api/todos", {"title": "sneaky"}),
    ("put", "/api/todos/1", {"title": "sneaky", "priority": "low"}),
    ("delete", "/api/todos/1", None),
]


@pytest.mark.parametrize("method,path,body", ROUTES)
def test_missing_token_is_rejected_before_store_access(client, db_calls, method, path, body):
    kwargs = {"json": body} if body is not None else {}
    r = getattr(client, method)(path, **kwargs)
    assert r.status_code == 401
    assert r.json()["detail"] == "Not authenticated"
    assert db_calls == []


@pytest.mark.parametrize("header", [
    "Bearer not-a-jwt",
    "Basic dXNlcjpwYXNz",
    "Bearer",
    "Bearer " + jwt.encode({"sub": "1"}, "some-other-secret", algorithm="HS256"),
    "Bearer " + jwt.encode({"username": "nobody"}, "test-secret", algorithm="HS256"),
    "Bearer " + jwt.encode({"sub": "abc"}, "test-secret", algorithm="HS256"),
])
def test_invalid_token_is_rejected_before_store_access(client, db_calls, header):
    r = client.get("/api/todos", headers={"Authorization": header})
    assert r.status_code == 401
    assert r.json()["detail"] == "Not authenticated"
    assert db_calls == []


def test_expired_token_is_rejected(client, monkeypatch, db_calls):
    monkeypatch.setattr(config, "ACCESS_TOKEN_EXPIRE_MINUTES", -5)
    token = create_token(1, "someone")
    r = client.post("/api/todos", json={"title": "late"}, headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert db_calls == []


def test_rejected_create_writes_nothing(client, db):
    r = client.post("/api/todos", json={"title": "no token"})
    assert r.status_code == 401
    assert db.query(Task).count() == 0


def test_valid_token_reaches_the_service(client):
    _, headers = signup(client)
    r = client.get("/api/todos", headers=headers)
    assert r.status_code == 200
    assert r.json() == []
