"""Tests for health endpoints and request id propagation."""


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ready(client):
    response = client.get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ready", "checks": {"database": True}}


def test_not_ready(client, test_db, monkeypatch):
    monkeypatch.setattr(
        test_db,
        "health_check",
        lambda: {"healthy": False, "latency_ms": 0, "error": "connection refused"},
    )

    response = client.get("/health/ready")

    assert response.status_code == 503
    assert response.json() == {"status": "not_ready", "checks": {"database": False}}


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["x-request-id"] == "abc123"


def test_request_id_is_generated(client):
    response = client.get("/api/issues/apitest")
    assert len(response.headers["x-request-id"]) == 8
