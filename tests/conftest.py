"""Shared pytest fixtures: an app on TestConfig with storage in a temp dir."""

import pytest

from aquamate import create_app
from aquamate.extensions import notifications

AJAX = {"X-Requested-With": "XMLHttpRequest"}

DEMO_EMAIL = "user@aquamate.com"
DEMO_PASSWORD = "123456"


@pytest.fixture
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("APP_CONFIG", "aquamate.config.TestConfig")
    app = create_app({"AQUAMATE_DATA_DIR": str(tmp_path)})
    yield app
    notifications.shutdown()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    resp = client.post(
        "/auth/login",
        json={"email": DEMO_EMAIL, "password": DEMO_PASSWORD},
        headers=AJAX,
    )
    assert resp.status_code == 200
    return client


@pytest.fixture
def plants(app_ctx):
    from aquamate.services import plants as plant_service
    return {p["name"]: p for p in plant_service.get_plants()}
