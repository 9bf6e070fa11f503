# tests/test_smoke_endpoints.py
from __future__ import annotations


def test_root(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["status"] == "OK"

def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": "agent-admin"}

def test_readyz_pings_db(client):
    r = client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["db"] == "ok"
    assert r.json()["dialect"] == "sqlite"

def test_request_id_generated(client):
    r = client.get("/healthz")
    assert r.headers.get("X-Request-ID")

def test_request_id_reused(client):
    r = client.get("/healthz", headers={"X-Request-ID": "abc-123"})
    assert r.headers["X-Request-ID"] == "abc-123"

def test_v1_prefix_is_rewritten(client, panchayath):
    r = client.get("/api/v1/panchayaths")
    assert r.status_code == 200
    assert r.json()["count"] == 1

def test_unknown_route_404(client):
    r = client.get("/api/nope")
    assert r.status_code == 404
