# agent_admin/api/teams.py
from __future__ import annotations

from typing import Any, Dict, Optional
from fastapi import APIRouter
from pydantic import BaseModel

from agent_admin.api.deps import DB
from agent_admin.storage import teams as store

router = APIRouter(
    prefix="/teams",
    tags=["Teams"],
)


class TeamCreate(BaseModel):
    name: str
    description: str = ""


class TeamUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class ExistingAgentMember(BaseModel):
    agent_id: str


class NewMember(BaseModel):
    name: str
    phone_number: str
    panchayath_id: str
    ward: Optional[int] = None


@router.get("")
def list_teams(session: DB) -> Dict[str, Any]:
    items = store.list_teams(session)
    return {"count": len(items), "items": items}


@router.post("", status_code=201)
def create_team(payload: TeamCreate, session: DB) -> Dict[str, Any]:
    item = store.create_team(session, name=payload.name, description=payload.description)
    return {"status": "SUCCESS", "item": item}


@router.get("/{team_id}")
def get_team(team_id: str, session: DB) -> Dict[str, Any]:
    return store.get_team(session, team_id)


@router.put("/{team_id}")
def update_team(team_id: str, payload: TeamUpdate, session: DB) -> Dict[str, Any]:
    item = store.update_team(session, team_id, name=payload.name, description=payload.description)
    return {"status": "SUCCESS", "item": item}


@router.delete("/{team_id}")
def delete_team(team_id: str, session: DB) -> Dict[str, Any]:
    store.delete_team(session, team_id)
    return {"status": "SUCCESS", "id": team_id}


@router.get("/{team_id}/available-agents")
def available_agents(team_id: str, session: DB, q: Optional[str] = None) -> Dict[str, Any]:
    items = store.list_available_agents(session, team_id, q)
    return {"count": len(items), "items": items}


@router.post("/{team_id}/members/existing", status_code=201)
def add_existing_agent(team_id: str, payload: ExistingAgentMember, session: DB) -> Dict[str, Any]:
    member = store.add_existing_agent(session, team_id, payload.agent_id)
    return {"status": "SUCCESS", "member": member}


@router.post("/{team_id}/members/new", status_code=201)
def add_new_member(team_id: str, payload: NewMember, session: DB) -> Dict[str, Any]:
    member = store.add_new_member(
        session,
        team_id,
        name=payload.name,
        phone_number=payload.phone_number,
        panchayath_id=payload.panchayath_id,
        ward=payload.ward,
    )
    return {"status": "SUCCESS", "member": member}


@router.delete("/{team_id}/members/{member_id}")
def remove_member(team_id: str, member_id: str, session: DB) -> Dict[str, Any]:
    store.remove_member(session, team_id, member_id)
    return {"status": "SUCCESS", "id": member_id}
