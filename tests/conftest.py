# tests/conftest.py

import pytest
from fastapi.testclient import TestClient

from auth import security
from fakes import FakeStore

TEST_JWT_SECRET = "test-secret-for-student-records"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def jwt_env(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("JWT_ALG", "HS256")


@pytest.fixture
def store(monkeypatch):
    return FakeStore().install(monkeypatch)


@pytest.fixture
def client(store):
    # No context manager: the lifespan (DB pool, schema) must not run.
    from main import app

    return TestClient(app)


@pytest.fixture
def admin_headers():
    token = security.build_access_token(subject="registrar", role="admin")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def student_headers():
    token = security.build_access_token(subject="S1", role="student")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed(client, admin_headers):
    """
    One course (CS101) and one student (S1), created through the API.
    """
    client.post("/api/courses", json={"code": "cs101", "title": "Intro"}, headers=admin_headers)
    client.post(
        "/api/students",
        json={"student_id": "S1", "email": "a@x.com", "name": "A", "year": 1},
        headers=admin_headers,
    )
    return client
