# tests/test_activity_api.py
from __future__ import annotations


def test_default_points_rules(client):
    r = client.get("/api/points/rules")
    assert r.status_code == 200
    rules = {x["role"]: x["daily_points"] for x in r.json()["items"]}
    assert rules == {"coordinator": 100, "supervisor": 75, "group_leader": 50, "pro": 25}
    assert [x["role"] for x in r.json()["items"]] == ["coordinator", "supervisor", "group_leader", "pro"]

def test_update_points_rule(client):
    r = client.put("/api/points/rules/pro", json={"daily_points": 30, "bonus_points_allowed": False})
    assert r.status_code == 200
    assert r.json()["item"] == {"role": "pro", "role_label": "P.R.O", "daily_points": 30, "bonus_points_allowed": False}

def test_negative_points_rejected(client):
    assert client.put("/api/points/rules/pro", json={"daily_points": -1}).status_code == 400

def test_unknown_role_rule_422(client):
    assert client.put("/api/points/rules/boss", json={"daily_points": 1}).status_code == 422

def test_present_day_earns_points_plus_bonus(client, make_agent):
    agent = make_agent("Devi", "pro")
    r = client.post("/api/activities", json={"agent_id": agent["id"], "activity_date": "2026-10-18", "bonus_points": 5})
    assert r.status_code == 201
    assert r.json()["item"]["points"] == 30

def test_leave_day_earns_nothing(client, make_agent):
    agent = make_agent("Devi", "pro")
    r = client.post("/api/activities", json={"agent_id": agent["id"], "activity_date": "2026-10-18", "status": "leave"})
    assert r.json()["item"]["points"] == 0

def test_bonus_on_leave_rejected(client, make_agent):
    agent = make_agent("Devi", "pro")
    r = client.post("/api/activities", json={
        "agent_id": agent["id"], "activity_date": "2026-10-18", "status": "leave", "bonus_points": 5,
    })
    assert r.status_code == 400

def test_bonus_disallowed_by_rule(client, make_agent):
    agent = make_agent("Devi", "pro")
    client.put("/api/points/rules/pro", json={"bonus_points_allowed": False})
    r = client.post("/api/activities", json={"agent_id": agent["id"], "bonus_points": 5})
    assert r.status_code == 400

def test_default_date_is_today_and_relog_overwrites(client, make_agent):
    agent = make_agent("Devi", "pro")
    first = client.post("/api/activities", json={"agent_id": agent["id"]}).json()["item"]
    assert first["activity_date"] == "2026-10-19"
    second = client.post("/api/activities", json={"agent_id": agent["id"], "status": "leave"}).json()["item"]
    assert second["id"] == first["id"]
    items = client.get("/api/activities", params={"agent_id": agent["id"]}).json()["items"]
    assert len(items) == 1
    assert items[0]["status"] == "leave"

def test_unknown_agent_404(client):
    assert client.post("/api/activities", json={"agent_id": "ghost"}).status_code == 404

def test_list_range_and_points_summary(client, make_agent):
    agent = make_agent("Devi", "pro")
    for day, status in (("2026-10-15", "present"), ("2026-10-16", "leave"), ("2026-10-17", "present")):
        client.post("/api/activities", json={"agent_id": agent["id"], "activity_date": day, "status": status})

    r = client.get("/api/activities", params={"start": "2026-10-16", "end": "2026-10-17"})
    assert [x["activity_date"] for x in r.json()["items"]] == ["2026-10-16", "2026-10-17"]

    summary = client.get(f"/api/points/agents/{agent['id']}").json()
    assert summary["total_points"] == 50
    assert summary["days_present"] == 2
    assert summary["days_leave"] == 1

def test_bad_range_rejected(client):
    assert client.get("/api/activities", params={"start": "2026-10-20", "end": "2026-10-01"}).status_code == 400
    assert client.get("/api/activities", params={"start": "yesterday"}).status_code == 400

def test_delete_activity(client, make_agent):
    agent = make_agent("Devi", "pro")
    item = client.post("/api/activities", json={"agent_id": agent["id"]}).json()["item"]
    assert client.delete(f"/api/activities/{item['id']}").status_code == 200
    assert client.delete(f"/api/activities/{item['id']}").status_code == 404
