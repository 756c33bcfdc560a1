"""
Common test fixtures for the API tests.

Every test gets its own SQLite database in a temporary directory and a
``TestClient`` bound to it.  ``auth_headers`` and ``other_auth_headers``
belong to two different organizers so ownership rules can be checked;
``event`` is an event owned by the first of them.
"""
import pytest
from fastapi.testclient import TestClient

from event_registration_api.app.core.config import settings
from event_registration_api.app.core.db import init_db
from event_registration_api.app.main import app


API = "/api/v1"

EVENT_PAYLOAD = {
    "title": "Meetup",
    "description": "Monthly meetup",
    "dateStart": "2030-05-01T18:00:00+00:00",
    "dateEnd": "2030-05-01T21:00:00+00:00",
    "type": "conference",
    "location": "Hall A",
}


def signup_and_login(client, email, name="Organizer", password="pass12345"):
    """Create a user and return ``Authorization`` headers for them."""
    resp = client.post(f"{API}/users/", json={"name": name, "email": email, "password": password})
    assert resp.status_code == 201
    resp = client.post(f"{API}/users/login", json={"email": email, "password": password})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def db(tmp_path, monkeypatch):
    """Point the store at a fresh database file and migrate it."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "test.db"))
    init_db()
    return tmp_path / "test.db"


@pytest.fixture
def client(db):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    return signup_and_login(client, "owner@example.com", name="Owner")


@pytest.fixture
def other_auth_headers(client):
    return signup_and_login(client, "other@example.com", name="Other")


@pytest.fixture
def event(client, auth_headers):
    """Create an event owned by the ``auth_headers`` user."""
    resp = client.post(f"{API}/events/", json=EVENT_PAYLOAD, headers=auth_headers)
    assert resp.status_code == 200
    return resp.json()
