# agent_admin/api/activity.py
from __future__ import annotations

from datetime import date
from typing import Any, Dict, Literal, Optional
from fastapi import APIRouter
from pydantic import BaseModel

from agent_admin.api.deps import DB, Now
from agent_admin.services.hierarchy import Role
from agent_admin.services.validation import validate_range
from agent_admin.storage import activity as store

router = APIRouter(tags=["Daily Activity & Points"])


class PointsRuleUpdate(BaseModel):
    daily_points: Optional[int] = None
    bonus_points_allowed: Optional[bool] = None


class ActivityLog(BaseModel):
    agent_id: str
    activity_date: Optional[date] = None  # defaults to today
    status: Literal["present", "leave"] = "present"
    notes: str = ""
    bonus_points: int = 0


@router.get("/points/rules")
def list_points_rules(session: DB) -> Dict[str, Any]:
    items = store.list_points_rules(session)
    return {"count": len(items), "items": items}


@router.put("/points/rules/{role}")
def update_points_rule(role: Role, payload: PointsRuleUpdate, session: DB) -> Dict[str, Any]:
    item = store.update_points_rule(
        session,
        role,
        daily_points=payload.daily_points,
        bonus_points_allowed=payload.bonus_points_allowed,
    )
    return {"status": "SUCCESS", "item": item}


@router.get("/points/agents/{agent_id}")
def agent_points(agent_id: str, session: DB, start: Optional[str] = None, end: Optional[str] = None) -> Dict[str, Any]:
    d_start, d_end = validate_range(start, end)
    return store.agent_points(session, agent_id, d_start, d_end)


@router.post("/activities", status_code=201)
def log_activity(payload: ActivityLog, session: DB, clock: Now) -> Dict[str, Any]:
    item = store.log_activity(
        session,
        agent_id=payload.agent_id,
        activity_date=payload.activity_date or clock.today(),
        status=payload.status,
        notes=payload.notes,
        bonus_points=payload.bonus_points,
    )
    return {"status": "SUCCESS", "item": item}


@router.get("/activities")
def list_activities(
    session: DB,
    agent_id: Optional[str] = None,
    panchayath_id: Optional[str] = None,
    start: Optional[str] = None,
    end: Optional[str] = None,
) -> Dict[str, Any]:
    d_start, d_end = validate_range(start, end)
    items = store.list_activities(
        session, agent_id=agent_id, panchayath_id=panchayath_id, start=d_start, end=d_end
    )
    return {"count": len(items), "items": items}


@router.delete("/activities/{activity_id}")
def delete_activity(activity_id: str, session: DB) -> Dict[str, Any]:
    store.delete_activity(session, activity_id)
    return {"status": "SUCCESS", "id": activity_id}
