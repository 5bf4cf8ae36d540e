"""
Tests for session routes
"""

from fastapi.testclient import TestClient

from smartflora.main import create_app
from smartflora.network import NetworkSimulator
from smartflora.store import MemoryKeyValueStore


def test_current_session_empty(client):
    """Test that no session is current before login."""
    response = client.get("/sessions/current")
    assert response.status_code == 200
    assert response.json() is None


def test_login(client):
    """Test login creates and selects a new session."""
    response = client.post("/sessions/login", json={"scan_payload": "x"})
    assert response.status_code == 201
    data = response.json()
    assert data["anonymous_id"].startswith("anon_")
    assert data["user_name"] == f"User {data['anonymous_id'][5:]}"
    assert data["token"]

    current = client.get("/sessions/current").json()
    assert current == data


def test_login_always_mints_new_identity(client):
    """Test that scanning the same code twice yields two identities."""
    first = client.post("/sessions/login", json={"scan_payload": "same"}).json()
    second = client.post("/sessions/login", json={"scan_payload": "same"}).json()
    assert first["anonymous_id"] != second["anonymous_id"]

    sessions = client.get("/sessions").json()
    assert [s["anonymous_id"] for s in sessions] == [
        first["anonymous_id"],
        second["anonymous_id"],
    ]


def test_login_network_failure(kv_store):
    """Test that a failed login returns 503 and stores nothing."""
    failing = NetworkSimulator(latency_scale=0, failure_rate=1.0)
    with TestClient(create_app(kv_store=kv_store, network=failing)) as client:
        response = client.post("/sessions/login", json={"scan_payload": "x"})
        assert response.status_code == 503
        assert client.get("/sessions/current").json() is None
        assert client.get("/sessions").json() == []


def test_logout_keeps_registry(client):
    """Test logout clears the current session only."""
    session = client.post("/sessions/login", json={"scan_payload": "x"}).json()

    response = client.post("/sessions/logout")
    assert response.status_code == 204
    assert client.get("/sessions/current").json() is None
    assert client.get("/sessions").json() == [session]


def test_switch_session(client):
    """Test switching back to an earlier identity."""
    first = client.post("/sessions/login", json={"scan_payload": "a"}).json()
    client.post("/sessions/login", json={"scan_payload": "b"})

    response = client.post(f"/sessions/{first['anonymous_id']}/switch")
    assert response.status_code == 200
    assert response.json() == first
    assert client.get("/sessions/current").json() == first


def test_switch_unknown_session(client):
    """Test switching to an unknown id returns 404."""
    response = client.post("/sessions/anon_missing/switch")
    assert response.status_code == 404


def test_rename_current_session(client):
    """Test renaming updates both the registry and the current session."""
    other = client.post("/sessions/login", json={"scan_payload": "a"}).json()
    session = client.post("/sessions/login", json={"scan_payload": "b"}).json()

    response = client.patch(
        f"/sessions/{session['anonymous_id']}", json={"user_name": "Alex"}
    )
    assert response.status_code == 204

    assert client.get("/sessions/current").json()["user_name"] == "Alex"
    names = {s["anonymous_id"]: s["user_name"] for s in client.get("/sessions").json()}
    assert names[session["anonymous_id"]] == "Alex"
    assert names[other["anonymous_id"]] == other["user_name"]


def test_rename_rejects_empty_name(client):
    session = client.post("/sessions/login", json={"scan_payload": "x"}).json()
    response = client.patch(
        f"/sessions/{session['anonymous_id']}", json={"user_name": ""}
    )
    assert response.status_code == 422


def test_sessions_persist_across_restart():
    """Test that a new app over the same store sees earlier sessions."""
    store = MemoryKeyValueStore()
    network = NetworkSimulator(latency_scale=0)

    with TestClient(create_app(kv_store=store, network=network)) as client:
        session = client.post("/sessions/login", json={"scan_payload": "x"}).json()

    with TestClient(create_app(kv_store=store, network=network)) as client:
        assert client.get("/sessions/current").json() == session


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
