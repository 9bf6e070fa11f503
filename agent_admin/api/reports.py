# agent_admin/api/reports.py
from __future__ import annotations

from typing import Any, Dict, Optional
from fastapi import APIRouter

from agent_admin.api.deps import DB, Now
from agent_admin.services.reports import overview
from agent_admin.services.validation import parse_day
from agent_admin.storage.activity import list_activities
from agent_admin.storage.agents import list_agents
from agent_admin.storage.panchayaths import get_panchayath

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/overview")
def reports_overview(
    session: DB,
    clock: Now,
    panchayath_id: Optional[str] = None,
    as_of: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Leave, inactivity and super-performer reports plus the active percentage,
    for one panchayath or for everyone.
    """
    day = parse_day(as_of, "as_of") or clock.today()
    if panchayath_id:
        get_panchayath(session, panchayath_id)
    agents = list_agents(session, panchayath_id)
    activities = list_activities(session, panchayath_id=panchayath_id, end=day)
    out = overview(agents, activities, day)
    out["panchayath_id"] = panchayath_id
    return out
