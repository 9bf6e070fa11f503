# agent_admin/api/hierarchy.py
from __future__ import annotations

from typing import Any, Dict, Optional
from fastapi import APIRouter

from agent_admin.api.deps import DB
from agent_admin.services.hierarchy import (
    build_hierarchy,
    find_hierarchy_issues,
    hierarchy_to_dicts,
    role_label,
    role_level,
    search_agents,
)
from agent_admin.storage.agents import list_agents
from agent_admin.storage.panchayaths import get_panchayath

router = APIRouter(prefix="/hierarchy", tags=["Hierarchy"])


@router.get("/{panchayath_id}")
def panchayath_hierarchy(panchayath_id: str, session: DB, search: Optional[str] = None) -> Dict[str, Any]:
    """
    Chart view (roots) and table view (flat rows with level) for one panchayath.
    The search term only narrows the table.
    """
    panchayath = get_panchayath(session, panchayath_id)
    agents = list_agents(session, panchayath_id)
    roots = build_hierarchy(agents)
    table = [
        {**a, "level": role_level(a["role"]), "role_label": role_label(a["role"])}
        for a in search_agents(agents, search)
    ]
    return {
        "panchayath": panchayath,
        "agent_count": len(agents),
        "roots": hierarchy_to_dicts(roots),
        "table": table,
        "issues": find_hierarchy_issues(agents),
    }
