from __future__ import annotations

import pytest

from hygienist_visits.database.bootstrap import seed_demo_data
from hygienist_visits.database.memory_store import InMemoryStore
from hygienist_visits.main import create_app

TESTING_SETTINGS = "hygienist_visits.config.testing"


@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def seeded_store(store: InMemoryStore) -> InMemoryStore:
    seed_demo_data(store)
    return store


@pytest.fixture()
def app(seeded_store: InMemoryStore):
    return create_app(settings_module=TESTING_SETTINGS, store=seeded_store)


@pytest.fixture()
def client(app):
    return app.test_client()


def _login(client, username: str, password: str):
    resp = client.post("/api/auth/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return client


@pytest.fixture()
def admin_client(client):
    return _login(client, "admin", "admin123")


@pytest.fixture()
def user_client(client):
    return _login(client, "user", "user123")
