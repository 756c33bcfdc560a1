"""
API tests for user accounts.

Covers sign-up validation, login and the bearer-token guard used by
the organizer endpoints.
"""
from conftest import API, signup_and_login

from event_registration_api.app.core.security import create_access_token


def test_signup_returns_user_without_password(client):
    resp = client.post(
        f"{API}/users/",
        json={"name": "Jane", "email": "Jane@Example.com", "password": "secret1"},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["email"] == "jane@example.com"
    assert body["name"] == "Jane"
    assert "password" not in body
    assert body["id"] > 0


def test_signup_rejects_duplicate_email(client):
    payload = {"name": "Jane", "email": "jane@example.com", "password": "secret1"}
    assert client.post(f"{API}/users/", json=payload).status_code == 201
    resp = client.post(f"{API}/users/", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"errors": [{"field": "email", "message": "User already exists"}]}


def test_signup_validation_messages(client):
    resp = client.post(f"{API}/users/", json={"name": "", "email": "not-an-email", "password": "123"})
    assert resp.status_code == 400
    errors = {e["field"]: e["message"] for e in resp.json()["errors"]}
    assert errors["name"] == "Name is required"
    assert errors["email"] == "Please include a valid email"
    assert errors["password"] == "Please enter a password with 6 or more characters"


def test_signup_rejects_email_without_dotted_domain(client):
    for email in ("jane@localhost", "@example.com"):
        resp = client.post(f"{API}/users/", json={"name": "Jane", "email": email, "password": "pass12345"})
        assert resp.status_code == 400
        assert resp.json() == {"errors": [{"field": "email", "message": "Please include a valid email"}]}


def test_login_with_wrong_password(client):
    signup_and_login(client, "jane@example.com")
    resp = client.post(f"{API}/users/login", json={"email": "jane@example.com", "password": "wrong-pass"})
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["message"] == "Invalid credentials"


def test_me_returns_current_user(client, auth_headers):
    resp = client.get(f"{API}/users/me", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["email"] == "owner@example.com"


def test_me_requires_token(client):
    resp = client.get(f"{API}/users/me")
    assert resp.status_code == 401


def test_tampered_token_is_rejected(client, auth_headers):
    token = auth_headers["Authorization"].split(" ", 1)[1]
    header, payload, signature = token.split(".")
    first = "A" if signature[0] != "A" else "B"
    forged = f"{header}.{payload}.{first}{signature[1:]}"
    resp = client.get(f"{API}/users/me", headers={"Authorization": f"Bearer {forged}"})
    assert resp.status_code == 401


def test_expired_token_is_rejected(client, auth_headers):
    token = create_access_token({"sub": "owner@example.com"}, expires_delta=-10)
    resp = client.get(f"{API}/users/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_token_for_unknown_user_is_rejected(client):
    token = create_access_token({"sub": "ghost@example.com"})
    resp = client.get(f"{API}/users/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "User no longer exists"
