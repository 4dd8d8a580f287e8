"""Pytest fixtures for the commerce client, shipping pipeline and API tests."""

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_commerce_client
from src.api.main import app
from src.integrations.clients.mocks.woocommerce import MockWooCommerceClient


@pytest.fixture
def commerce():
    """In-memory WooCommerce store for tests."""
    return MockWooCommerceClient()


@pytest.fixture
def api_client_for():
    """Build a TestClient whose endpoints talk to the given commerce client."""

    def _build(client):
        app.dependency_overrides[get_commerce_client] = lambda: client
        return TestClient(app)

    yield _build
    app.dependency_overrides.clear()


@pytest.fixture
def api_client(api_client_for, commerce):
    return api_client_for(commerce)
