# tests/test_agents_api.py
from __future__ import annotations


def test_create_chain_with_superior_names(client, make_agent):
    coord = make_agent("Anitha", "coordinator")
    sup = make_agent("Biju", "supervisor", coord["id"])
    assert sup["superior_name"] == "Anitha"
    assert sup["panchayath_name"] == "Kumarakom"
    assert coord["superior_id"] is None

def test_list_newest_first_and_filter(client, panchayath, make_agent):
    make_agent("First", "coordinator")
    make_agent("Second", "coordinator")
    r = client.get("/api/agents", params={"panchayath_id": panchayath["id"]})
    assert r.status_code == 200
    assert [a["name"] for a in r.json()["items"]] == ["Second", "First"]
    assert client.get("/api/agents", params={"panchayath_id": "other"}).json()["count"] == 0

def test_unknown_role_is_422(client, panchayath):
    r = client.post("/api/agents", json={
        "name": "X", "phone_number": "1", "role": "boss", "panchayath_id": panchayath["id"],
    })
    assert r.status_code == 422

def test_missing_panchayath_rejected(client):
    r = client.post("/api/agents", json={
        "name": "X", "phone_number": "1", "role": "coordinator", "panchayath_id": "missing",
    })
    assert r.status_code == 400

def test_ward_out_of_range_rejected(client, panchayath):
    r = client.post("/api/agents", json={
        "name": "X", "phone_number": "1", "role": "coordinator",
        "panchayath_id": panchayath["id"], "ward": 6,
    })
    assert r.status_code == 400

def test_coordinator_cannot_have_superior(client, panchayath, make_agent):
    coord = make_agent("Anitha", "coordinator")
    r = client.post("/api/agents", json={
        "name": "X", "phone_number": "1", "role": "coordinator",
        "panchayath_id": panchayath["id"], "superior_id": coord["id"],
    })
    assert r.status_code == 400

def test_superior_must_be_one_level_up(client, panchayath, make_agent):
    coord = make_agent("Anitha", "coordinator")
    r = client.post("/api/agents", json={
        "name": "X", "phone_number": "1", "role": "pro",
        "panchayath_id": panchayath["id"], "superior_id": coord["id"],
    })
    assert r.status_code == 400
    assert "Group Leader" in r.json()["detail"]

def test_superior_must_share_panchayath(client, make_agent):
    other = client.post("/api/panchayaths", json={"name": "Vaikom", "district": "Kottayam"}).json()["item"]
    coord = make_agent("Anitha", "coordinator")
    r = client.post("/api/agents", json={
        "name": "X", "phone_number": "1", "role": "supervisor",
        "panchayath_id": other["id"], "superior_id": coord["id"],
    })
    assert r.status_code == 400

def test_agent_cannot_report_to_itself(client, make_agent):
    coord = make_agent("Anitha", "coordinator")
    sup = make_agent("Biju", "supervisor", coord["id"])
    r = client.put(f"/api/agents/{sup['id']}", json={"superior_id": sup["id"]})
    assert r.status_code == 400

def test_potential_superiors(client, panchayath, make_agent):
    make_agent("Anitha", "coordinator")
    c2 = make_agent("Aswathy", "coordinator")
    make_agent("Biju", "supervisor", c2["id"])
    r = client.get("/api/agents/potential-superiors", params={"panchayath_id": panchayath["id"], "role": "supervisor"})
    assert r.status_code == 200
    assert [a["name"] for a in r.json()["items"]] == ["Anitha", "Aswathy"]
    r = client.get("/api/agents/potential-superiors", params={"panchayath_id": panchayath["id"], "role": "coordinator"})
    assert r.json()["count"] == 0

def test_partial_update_and_clear_superior(client, make_agent):
    coord = make_agent("Anitha", "coordinator")
    sup = make_agent("Biju", "supervisor", coord["id"])
    r = client.put(f"/api/agents/{sup['id']}", json={"phone_number": "9999"})
    assert r.status_code == 200
    item = r.json()["item"]
    assert item["phone_number"] == "9999"
    assert item["superior_id"] == coord["id"]
    r = client.put(f"/api/agents/{sup['id']}", json={"superior_id": None})
    assert r.json()["item"]["superior_id"] is None

def test_role_change_blocked_by_subordinates(client, make_agent):
    coord = make_agent("Anitha", "coordinator")
    sup = make_agent("Biju", "supervisor", coord["id"])
    make_agent("Chandran", "group_leader", sup["id"])
    r = client.put(f"/api/agents/{sup['id']}", json={"role": "group_leader", "superior_id": None})
    assert r.status_code == 409

def test_delete_detaches_subordinates(client, make_agent):
    coord = make_agent("Anitha", "coordinator")
    sup = make_agent("Biju", "supervisor", coord["id"])
    r = client.delete(f"/api/agents/{coord['id']}")
    assert r.status_code == 200
    assert client.get(f"/api/agents/{coord['id']}").status_code == 404
    assert client.get(f"/api/agents/{sup['id']}").json()["superior_id"] is None

def test_get_missing_404(client):
    assert client.get("/api/agents/nope").status_code == 404
    assert client.delete("/api/agents/nope").status_code == 404
