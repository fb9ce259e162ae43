def test_health_ok(client):
    res = client.get("/api/health")
    assert res.status_code == 200

    data = res.get_json()
    assert data["status"] == "ok"
    assert data["indicators"]["policies"] == "ok"
    assert "timestamp" in data


def test_health_without_policies_returns_error(app, client, monkeypatch):
    monkeypatch.delitem(app.extensions, "sanitize_policy")

    res = client.get("/api/health")
    assert res.status_code == 500

    data = res.get_json()
    assert data["status"] == "error"
    assert data["indicators"]["policies"] == "critical"


def test_no_environment_endpoint(client):
    """El entorno de ejecución no se expone por la API."""
    assert client.get("/api/meta/env").status_code == 404


def test_request_id_header(client):
    res = client.get("/api/health")
    assert res.headers.get("X-Request-ID")
    assert res.headers["X-Request-ID"] != client.get("/api/health").headers["X-Request-ID"]
