import pytest
from fastapi.testclient import TestClient

from app.client.api import InventoryApi
from app.client.orchestrator import InventoryOrchestrator
from app.core.config import Settings
from app.core.seed_data import SAMPLE_ITEMS
from app.main import create_app
from app.repositories.item_repository import InMemoryItemRepository

ALLOWED_ORIGIN = "http://localhost:5173"


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL=None,
        SEED_SAMPLE_DATA=False,
        CORS_ORIGINS=[ALLOWED_ORIGIN],
        SERVICE_NAME="Test Inventory API",
    )


@pytest.fixture
def repository():
    repo = InMemoryItemRepository()
    repo.load(SAMPLE_ITEMS)
    return repo


@pytest.fixture
def client(settings, repository):
    app = create_app(settings, repository=repository)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def orchestrator(client):
    api = InventoryApi(base_url="http://testserver/api", session=client, timeout=5)
    return InventoryOrchestrator(api)
