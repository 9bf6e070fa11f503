# tests/test_panchayaths_api.py
from __future__ import annotations


def test_create_and_list_sorted_by_name(client):
    for name in ("Vaikom", "Athirampuzha"):
        r = client.post("/api/panchayaths", json={"name": name, "district": "Kottayam", "number_of_wards": 3})
        assert r.status_code == 201
        assert r.json()["status"] == "SUCCESS"
    r = client.get("/api/panchayaths")
    assert r.status_code == 200
    body = r.json()
    assert body["count"] == 2
    assert [p["name"] for p in body["items"]] == ["Athirampuzha", "Vaikom"]

def test_blank_name_rejected(client):
    r = client.post("/api/panchayaths", json={"name": "  ", "district": "Kottayam"})
    assert r.status_code == 400

def test_zero_wards_rejected(client):
    r = client.post("/api/panchayaths", json={"name": "X", "district": "Y", "number_of_wards": 0})
    assert r.status_code == 400

def test_get_missing_404(client):
    assert client.get("/api/panchayaths/nope").status_code == 404

def test_update_and_noop(client, panchayath):
    pid = panchayath["id"]
    r = client.put(f"/api/panchayaths/{pid}", json={"district": "Alappuzha"})
    assert r.status_code == 200
    assert r.json()["item"]["district"] == "Alappuzha"
    r = client.put(f"/api/panchayaths/{pid}", json={})
    assert r.json()["status"] == "NOOP"

def test_shrinking_wards_below_assigned_agent_conflicts(client, panchayath, make_agent):
    make_agent("Anu", "coordinator", ward=4)
    r = client.put(f"/api/panchayaths/{panchayath['id']}", json={"number_of_wards": 2})
    assert r.status_code == 409
    r = client.put(f"/api/panchayaths/{panchayath['id']}", json={"number_of_wards": 4})
    assert r.status_code == 200

def test_delete_refused_while_agents_exist(client, panchayath, make_agent):
    agent = make_agent("Anu", "coordinator")
    r = client.delete(f"/api/panchayaths/{panchayath['id']}")
    assert r.status_code == 409
    client.delete(f"/api/agents/{agent['id']}")
    r = client.delete(f"/api/panchayaths/{panchayath['id']}")
    assert r.status_code == 200
    assert client.get("/api/panchayaths").json()["count"] == 0
