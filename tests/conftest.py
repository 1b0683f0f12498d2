"""Shared fixtures: every test gets its own SQLite file and a fixed admin key."""

import pytest
from fastapi.testclient import TestClient

from localdirectory.infrastructure.config import get_settings
from localdirectory.infrastructure.persistence import init_database

ADMIN_KEY = "supersecretadminkey"
API_URL = "http://testserver/api"


@pytest.fixture(autouse=True)
def settings_env(tmp_path, monkeypatch):
    """Point settings at a temporary database and a known admin key."""
    monkeypatch.setenv("DATABASE_FILE", str(tmp_path / "directory.db"))
    monkeypatch.setenv("ADMIN_KEY", ADMIN_KEY)
    monkeypatch.setenv("DIRECTORY_DATA_SOURCE", "live")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def db(tmp_path):
    """Initialized database on the same file the app uses."""
    return init_database(tmp_path / "directory.db")


@pytest.fixture
def client():
    """Test client with the app's lifespan running."""
    from localdirectory.web.app import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def kitchen():
    return {
        "name": "Mama Zainab's Kitchen",
        "category": "Restaurant",
        "location": "Daura",
        "description": "Home-cooked meals",
    }
