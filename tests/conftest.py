"""
Shared fixtures
"""

import pytest
from fastapi.testclient import TestClient

from smartflora.main import create_app
from smartflora.network import NetworkSimulator
from smartflora.store import MemoryKeyValueStore


@pytest.fixture
def kv_store():
    return MemoryKeyValueStore()


@pytest.fixture
def network():
    """Network without latency or failures."""
    return NetworkSimulator(latency_scale=0)


@pytest.fixture
def client(kv_store, network):
    with TestClient(create_app(kv_store=kv_store, network=network)) as test_client:
        yield test_client


@pytest.fixture
def logged_in_client(client):
    response = client.post("/sessions/login", json={"scan_payload": "mock_qr_data"})
    assert response.status_code == 201
    return client
