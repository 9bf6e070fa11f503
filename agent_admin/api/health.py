# agent_admin/api/health.py
from __future__ import annotations
from fastapi import APIRouter, HTTPException
from typing import Dict, Any, List
from sqlalchemy import inspect
from agent_admin.models import Base
from agent_admin.storage.db import get_engine, ping

router = APIRouter(prefix="", tags=["Health"])


def _missing_tables() -> List[str]:
    present = set(inspect(get_engine()).get_table_names())
    return sorted(t for t in Base.metadata.tables if t not in present)


@router.get("/healthz")
def healthz() -> Dict[str, Any]:
    # App is up
    return {"status": "ok", "service": "agent-admin"}

@router.get("/readyz")
def readyz() -> Dict[str, Any]:
    # DB ping
    try:
        ping()
    except Exception as e:
        raise HTTPException(status_code=503, detail=f"DB ping failed: {e}")

    # Schema present (alembic upgrade or DB_AUTO_CREATE)
    missing = _missing_tables()
    if missing:
        raise HTTPException(status_code=503, detail=f"Missing tables: {', '.join(missing)}")

    return {"status": "ok", "db": "ok", "dialect": get_engine().dialect.name}
