"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from webhook_receiver.config import Settings, get_settings
from webhook_receiver.main import create_app

WEBHOOK_SECRET = "test-webhook-secret"


@pytest.fixture
def test_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Set up test environment variables."""
    monkeypatch.setenv("GITHUB_WEBHOOK_SECRET", WEBHOOK_SECRET)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    # Clear the settings cache
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def client(test_settings: Settings) -> TestClient:
    """Create test client with test settings."""
    return TestClient(create_app(test_settings))
