"""Tests for the /api/health endpoint."""


def test_health_returns_ok(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200

    data = resp.json()
    assert data["status"] == "ok"
    assert data["version"] == "0.1.0"
    assert data["upstream"] is True
    assert data["open_wizards"] == 0
    assert "timestamp" in data


def test_health_counts_open_wizards(client):
    client.post("/api/wizards", json={"booking_date": "2025-06-02"})
    client.post("/api/wizards", json={"booking_date": "2025-06-02"})

    assert client.get("/api/health").json()["open_wizards"] == 2


def test_health_degraded_without_upstream(client, mock_registry):
    mock_registry.store = None

    data = client.get("/api/health").json()
    assert data["status"] == "degraded"
    assert data["upstream"] is False


def test_openapi_lists_wizard_routes(client):
    resp = client.get("/openapi.json")
    assert resp.status_code == 200
    paths = resp.json()["paths"]
    assert "/api/wizards" in paths
    assert "/api/wizards/{wizard_id}/slots/toggle" in paths
