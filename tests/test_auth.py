"""Tests for mock authentication routes and session handling."""

from datetime import datetime, timedelta

import pytest

from aquamate.constants import PROFILE_STORAGE_KEY, SESSION_STORAGE_KEY
from aquamate.services import reminders as reminder_service
from aquamate.services.storage import get_store

from conftest import AJAX, DEMO_EMAIL, DEMO_PASSWORD


def _register(client, **overrides):
    body = {
        "email": "ana@aquamate.com",
        "password": "secret1",
        "confirm_password": "secret1",
        "user_name": "ana",
    }
    body.update(overrides)
    return client.post("/auth/register", json=body, headers=AJAX)


def test_login_with_demo_credentials(client, app):
    resp = client.post("/auth/login", json={"email": DEMO_EMAIL.upper(), "password": DEMO_PASSWORD}, headers=AJAX)

    assert resp.status_code == 200
    assert resp.get_json()["session"]["email"] == DEMO_EMAIL
    with app.app_context():
        assert get_store().get(SESSION_STORAGE_KEY)["email"] == DEMO_EMAIL


def test_login_requires_both_fields(client):
    resp = client.post("/auth/login", json={"email": DEMO_EMAIL, "password": ""}, headers=AJAX)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Please enter email and password."


def test_login_with_wrong_password(client, app):
    resp = client.post("/auth/login", json={"email": DEMO_EMAIL, "password": "nope"}, headers=AJAX)

    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Invalid email or password."
    with app.app_context():
        assert get_store().get(SESSION_STORAGE_KEY) is None


def test_login_accepts_form_posts(client):
    resp = client.post("/auth/login", data={"email": DEMO_EMAIL, "password": DEMO_PASSWORD}, headers=AJAX)
    assert resp.status_code == 200


def test_register_signs_in(client):
    resp = _register(client)

    assert resp.status_code == 201
    session = resp.get_json()["session"]
    assert session["email"] == "ana@aquamate.com"
    assert session["user_name"] == "ana"
    assert client.get("/auth/session").get_json()["is_authenticated"] is True


def test_register_password_mismatch_mutates_nothing(client, app):
    with app.app_context():
        existing = reminder_service.build_reminder("Water", datetime.now() + timedelta(days=1))
        reminder_service.save_reminders([existing])

    resp = _register(client, confirm_password="secret2")

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Passwords do not match."
    with app.app_context():
        assert get_store().get(SESSION_STORAGE_KEY) is None
        assert reminder_service.load_reminders() == [existing]
    assert client.get("/auth/session").get_json()["is_authenticated"] is False


@pytest.mark.parametrize("overrides, message", [
    ({"user_name": ""}, "All fields are required."),
    ({"confirm_password": ""}, "All fields are required."),
    ({"email": "not-an-email"}, "Please enter a valid email."),
    ({"password": "12345", "confirm_password": "12345"}, "Password must have at least 6 characters."),
    # Length is checked before the match
    ({"password": "123", "confirm_password": "456"}, "Password must have at least 6 characters."),
])
def test_register_validation(client, overrides, message):
    resp = _register(client, **overrides)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == message


def test_logout_clears_session_and_profile(auth_client, app):
    auth_client.put("/api/v1/profile", json={"fullName": "Ana"}, headers=AJAX)

    resp = auth_client.post("/auth/logout", headers=AJAX)

    assert resp.status_code == 200
    with app.app_context():
        assert get_store().get(SESSION_STORAGE_KEY) is None
        assert get_store().get(PROFILE_STORAGE_KEY) is None


def test_logout_requires_session(client):
    assert client.post("/auth/logout", headers=AJAX).status_code == 401


def test_mutations_require_ajax_header(client):
    resp = client.post("/auth/login", json={"email": DEMO_EMAIL, "password": DEMO_PASSWORD})
    assert resp.status_code == 403


def test_protected_routes_require_session(client):
    for path in ("/api/v1/home", "/api/v1/plants", "/api/v1/reminders", "/api/v1/reminders/today",
                 "/api/v1/profile", "/api/v1/notifications"):
        resp = client.get(path)
        assert resp.status_code == 401, path
        assert resp.get_json()["success"] is False


def test_security_headers(client):
    resp = client.get("/auth/session")
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "DENY"


def test_storage_failure_returns_generic_error(client, app, monkeypatch):
    def broken_set(key, value):
        raise OSError("disk full")

    with app.app_context():
        monkeypatch.setattr(get_store(), "set", broken_set)

    resp = client.post("/auth/login", json={"email": DEMO_EMAIL, "password": DEMO_PASSWORD}, headers=AJAX)

    assert resp.status_code == 500
    assert resp.get_json()["error"] == "We couldn't save your changes. Please try again."


@pytest.mark.parametrize("body", [["user@aquamate.com", "123456"], "user@aquamate.com", 42])
def test_login_rejects_non_object_json(client, body):
    resp = client.post("/auth/login", json=body, headers=AJAX)

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Invalid request body."
