"""Common test fixtures and configuration."""

import pytest
from fastapi.testclient import TestClient

from portalgrid.core.dependencies import get_layout_repository
from portalgrid.core.repository import InMemoryLayoutRepository
from portalgrid.core.services import LayoutService
from portalgrid.main import app
from portalgrid.schemas.portal import GridItem


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without the HTTP stack")
    config.addinivalue_line("markers", "integration: tests going through the API")


@pytest.fixture
def client():
    """Create a test client for the FastAPI app with an empty layout store."""
    get_layout_repository.cache_clear()
    yield TestClient(app)
    get_layout_repository.cache_clear()


@pytest.fixture
def layout_service():
    """Layout service backed by a fresh in-memory repository."""
    return LayoutService(
        InMemoryLayoutRepository(default_cols=12, default_row_height=90, default_gap=8)
    )


@pytest.fixture
def stacked_pair():
    """Two 4x2 widgets stacked in the first column."""
    return [
        GridItem(id="W1", key="tasks", x=0, y=0, w=4, h=2),
        GridItem(id="W2", key="invoices", x=0, y=2, w=4, h=2),
    ]
