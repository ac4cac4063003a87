"""
Tests for application-level behavior: health checks and error rendering.
"""

import pytest
from fastapi.testclient import TestClient

from jobboard.core.database import get_db
from main import app


@pytest.fixture
def lenient_client(db_session, db_engine, monkeypatch):
    """Client that returns 500 responses instead of re-raising server errors"""
    monkeypatch.setattr("jobboard.core.database.engine", db_engine)
    app.dependency_overrides[get_db] = lambda: db_session

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_store_failure_is_internal_error(lenient_client, seeded_db, admin_headers):
    response = lenient_client.post(
        "/jobs",
        json={"title": "New", "companyHandle": "no-such-company"},
        headers=admin_headers,
    )

    assert response.status_code == 500
    assert response.json() == {"error": {"message": "Internal server error", "status": 500}}
