# agent_admin/api/agents.py
from __future__ import annotations

from typing import Any, Dict, Optional
from fastapi import APIRouter
from pydantic import BaseModel

from agent_admin.api.deps import DB
from agent_admin.services.hierarchy import Role
from agent_admin.storage import agents as store

router = APIRouter(
    prefix="/agents",
    tags=["Agents"],
)


class AgentCreate(BaseModel):
    name: str
    phone_number: str
    panchayath_id: str
    role: Role = Role.PRO
    superior_id: Optional[str] = None
    ward: Optional[int] = None


class AgentUpdate(BaseModel):
    name: Optional[str] = None
    phone_number: Optional[str] = None
    panchayath_id: Optional[str] = None
    role: Optional[Role] = None
    superior_id: Optional[str] = None
    ward: Optional[int] = None


@router.get("")
def list_agents(session: DB, panchayath_id: Optional[str] = None) -> Dict[str, Any]:
    items = store.list_agents(session, panchayath_id, newest_first=True)
    return {"count": len(items), "items": items}


@router.get("/potential-superiors")
def potential_superiors(panchayath_id: str, role: Role, session: DB) -> Dict[str, Any]:
    items = store.list_potential_superiors(session, panchayath_id, role)
    return {"count": len(items), "items": items}


@router.post("", status_code=201)
def create_agent(payload: AgentCreate, session: DB) -> Dict[str, Any]:
    item = store.create_agent(session, payload.model_dump(mode="json"))
    return {"status": "SUCCESS", "item": item}


@router.get("/{agent_id}")
def get_agent(agent_id: str, session: DB) -> Dict[str, Any]:
    return store.get_agent(session, agent_id)


@router.put("/{agent_id}")
def update_agent(agent_id: str, payload: AgentUpdate, session: DB) -> Dict[str, Any]:
    changes = payload.model_dump(mode="json", exclude_unset=True)
    if not changes:
        return {"status": "NOOP", "item": store.get_agent(session, agent_id)}
    item = store.update_agent(session, agent_id, changes)
    return {"status": "SUCCESS", "item": item}


@router.delete("/{agent_id}")
def delete_agent(agent_id: str, session: DB) -> Dict[str, Any]:
    store.delete_agent(session, agent_id)
    return {"status": "SUCCESS", "id": agent_id}
