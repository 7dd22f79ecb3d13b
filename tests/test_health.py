# File: tests/test_health.py

def test_health_endpoint(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


def test_unknown_route_uses_error_body(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert "error" in resp.json()
