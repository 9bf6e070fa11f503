# tests/conftest.py
from __future__ import annotations

from datetime import datetime, timezone

import pytest
from starlette.testclient import TestClient

from agent_admin.common.clock import FixedClock, get_clock
from agent_admin.main import app
from agent_admin.storage.db import init_db, reset_engine

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def client(tmp_path, monkeypatch, clock):
    # Fresh SQLite file per test; the engine re-reads DATABASE_URL after reset.
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'admin.db'}")
    reset_engine()
    init_db()
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_engine()


@pytest.fixture
def panchayath(client):
    r = client.post("/api/panchayaths", json={"name": "Kumarakom", "district": "Kottayam", "number_of_wards": 5})
    assert r.status_code == 201, r.text
    return r.json()["item"]


@pytest.fixture
def make_agent(client, panchayath):
    counter = {"n": 0}

    def _make(name, role, superior_id=None, **extra):
        counter["n"] += 1
        body = {
            "name": name,
            "phone_number": extra.pop("phone_number", f"90000000{counter['n']:02d}"),
            "role": role,
            "panchayath_id": extra.pop("panchayath_id", panchayath["id"]),
            "superior_id": superior_id,
            **extra,
        }
        r = client.post("/api/agents", json=body)
        assert r.status_code == 201, r.text
        return r.json()["item"]

    return _make
