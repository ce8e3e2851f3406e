"""Shared fixtures: an application over a throwaway SQLite file."""

import sqlite3

import pytest
from fastapi.testclient import TestClient

from catalog_api.app.core.config import Settings
from catalog_api.app.main import create_app

TEST_SECRET = "test-secret"


def make_settings(tmp_path, **overrides) -> Settings:
    values = dict(
        database_url=str(tmp_path / "catalog-test.db"),
        secret_key=TEST_SECRET,
        # Keep hashing fast in tests.
        password_hash_iterations=1000,
        auth_required=False,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings_factory(tmp_path):
    """Build settings over the test database with some fields overridden."""
    return lambda **overrides: make_settings(tmp_path, **overrides)


@pytest.fixture
def settings(settings_factory):
    return settings_factory()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # Entering the context runs the startup handler, which creates the schema.
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(settings, client):
    """Direct connection to the database behind ``client``."""
    conn = sqlite3.connect(settings.database_url)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def category(client):
    response = client.post("/categories", json={"name": "Shoes"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def product(client, category):
    response = client.post(
        "/products",
        json={"name": "Runner", "price": 49.99, "category_id": category["id"]},
    )
    assert response.status_code == 201
    return response.json()
