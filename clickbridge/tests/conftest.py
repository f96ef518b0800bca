import json

import pytest
from fastapi.testclient import TestClient

from clickbridge.core.config import Settings
from clickbridge.db.repository import InMemoryClickStore
from clickbridge.main import create_app


TEST_PHONE = "14155552671"
TEST_ADMIN_TOKEN = "test-admin-token"

SLUG_CONFIGS = {
    "default": {"slug": "default", "baseText": "Hi Tal", "defaultUtmCampaign": "x-default"},
    "pune": {"slug": "pune", "baseText": "Hi from Pune", "defaultUtmCampaign": "x-pune"},
    "chennai": {"slug": "chennai", "baseText": "Hi from Chennai", "phoneOverride": "919876543210"},
}


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def test_settings():
    """Settings isolated from the host environment and any .env file."""
    return Settings(
        _env_file=None,
        APP_ENV="test",
        WHATSAPP_NUMBER=TEST_PHONE,
        ADMIN_TOKEN=TEST_ADMIN_TOKEN,
        DATABASE_URL=None,
        REDIS_HOST=None,
        SLUG_CONFIG_PATH=None,
        SLUG_CONFIG_JSON=json.dumps(SLUG_CONFIGS),
    )


@pytest.fixture
def store():
    return InMemoryClickStore()


@pytest.fixture
def app(test_settings, store):
    return create_app(test_settings, store=store)


@pytest.fixture
def client(app):
    """Test client with the application lifespan (store init/close) running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers():
    return {"X-Admin-Token": TEST_ADMIN_TOKEN}
