# agent_admin/storage/teams.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from agent_admin.common.date_rules import from_storage
from agent_admin.models import Agent, Panchayath, Team, TeamMember
from agent_admin.services.errors import ConflictError, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


def _member_row(m: TeamMember) -> Dict[str, Any]:
    return {
        "id": m.id,
        "name": m.name,
        "phone_number": m.phone_number,
        "role": m.role,
        "panchayath_id": m.panchayath_id,
        "ward": m.ward,
        "is_existing_agent": bool(m.is_existing_agent),
        "agent_id": m.agent_id,
        "original_role": m.original_role,
    }


def _members(session: Session, team_id: str) -> List[TeamMember]:
    return list(session.scalars(
        select(TeamMember).where(TeamMember.team_id == team_id).order_by(TeamMember.position)
    ).all())


def _team_row(session: Session, t: Team) -> Dict[str, Any]:
    members = [_member_row(m) for m in _members(session, t.id)]
    return {
        "id": t.id,
        "name": t.name,
        "description": t.description,
        "created_at": from_storage(t.created_at),
        "member_count": len(members),
        "members": members,
    }


def load_team(session: Session, team_id: str) -> Team:
    t = session.get(Team, team_id)
    if t is None:
        raise NotFoundError(f"Team {team_id} not found")
    return t


def list_teams(session: Session) -> List[Dict[str, Any]]:
    teams = session.scalars(select(Team).order_by(Team.created_at, Team.name)).all()
    return [_team_row(session, t) for t in teams]


def get_team(session: Session, team_id: str) -> Dict[str, Any]:
    return _team_row(session, load_team(session, team_id))


def create_team(session: Session, *, name: str, description: str = "") -> Dict[str, Any]:
    if not name or not name.strip():
        raise InvalidInputError("name is required")
    t = Team(name=name.strip(), description=description or "")
    session.add(t)
    session.commit()
    logger.info("Team created id=%s name=%s", t.id, t.name)
    return _team_row(session, t)


def update_team(session: Session, team_id: str, *, name: Optional[str] = None, description: Optional[str] = None) -> Dict[str, Any]:
    t = load_team(session, team_id)
    if name is not None:
        if not name.strip():
            raise InvalidInputError("name is required")
        t.name = name.strip()
    if description is not None:
        t.description = description
    session.commit()
    return _team_row(session, t)


def delete_team(session: Session, team_id: str) -> None:
    t = load_team(session, team_id)
    session.execute(delete(TeamMember).where(TeamMember.team_id == t.id))
    session.delete(t)
    session.commit()
    logger.info("Team deleted id=%s", team_id)


def _phone_taken_in_team(session: Session, team_id: str, phone: str) -> bool:
    found = session.scalar(
        select(func.count()).select_from(TeamMember)
        .where(TeamMember.team_id == team_id, TeamMember.phone_number == phone)
    )
    return bool(found)


def _next_position(session: Session, team_id: str) -> int:
    highest = session.scalar(select(func.max(TeamMember.position)).where(TeamMember.team_id == team_id))
    return 0 if highest is None else highest + 1


def add_existing_agent(session: Session, team_id: str, agent_id: str) -> Dict[str, Any]:
    t = load_team(session, team_id)
    a = session.get(Agent, agent_id)
    if a is None:
        raise NotFoundError(f"Agent {agent_id} not found")
    if _phone_taken_in_team(session, t.id, a.phone_number):
        raise ConflictError("This member is already part of the team")
    m = TeamMember(
        team_id=t.id,
        position=_next_position(session, t.id),
        name=a.name,
        phone_number=a.phone_number,
        role=f"{a.role} + team member",
        panchayath_id=a.panchayath_id,
        ward=a.ward,
        is_existing_agent=True,
        agent_id=a.id,
        original_role=a.role,
    )
    session.add(m)
    session.commit()
    logger.info("Team member added team=%s agent=%s", t.id, a.id)
    return _member_row(m)


def add_new_member(
    session: Session,
    team_id: str,
    *,
    name: str,
    phone_number: str,
    panchayath_id: str,
    ward: Optional[int] = None,
) -> Dict[str, Any]:
    t = load_team(session, team_id)
    name = (name or "").strip()
    phone = (phone_number or "").strip()
    if not name or not phone or not panchayath_id:
        raise InvalidInputError("name, phone_number and panchayath_id are required")
    if session.get(Panchayath, panchayath_id) is None:
        raise InvalidInputError(f"Panchayath {panchayath_id} does not exist")

    taken = session.scalar(select(func.count()).select_from(Agent).where(Agent.phone_number == phone))
    if taken:
        raise ConflictError(
            "This phone number already exists in the agent hierarchy; add the existing agent instead"
        )
    if _phone_taken_in_team(session, t.id, phone):
        raise ConflictError("This member is already part of the team")

    m = TeamMember(
        team_id=t.id,
        position=_next_position(session, t.id),
        name=name,
        phone_number=phone,
        role="team member",
        panchayath_id=panchayath_id,
        ward=ward,
        is_existing_agent=False,
    )
    session.add(m)
    session.commit()
    logger.info("Team member created team=%s member=%s", t.id, m.id)
    return _member_row(m)


def remove_member(session: Session, team_id: str, member_id: str) -> None:
    load_team(session, team_id)
    m = session.get(TeamMember, member_id)
    if m is None or m.team_id != team_id:
        raise NotFoundError(f"Member {member_id} not found in team {team_id}")
    session.delete(m)
    session.commit()
    logger.info("Team member removed team=%s member=%s", team_id, member_id)


def list_available_agents(session: Session, team_id: str, query: Optional[str] = None) -> List[Dict[str, Any]]:
    """Agents not yet in the team (matched by phone), filtered by name or phone."""
    load_team(session, team_id)
    member_phones = {m.phone_number for m in _members(session, team_id)}
    needle = (query or "").strip()
    out: List[Dict[str, Any]] = []
    for a in session.scalars(select(Agent).order_by(Agent.name)).all():
        if a.phone_number in member_phones:
            continue
        if needle and needle.lower() not in a.name.lower() and needle not in a.phone_number:
            continue
        out.append({
            "id": a.id,
            "name": a.name,
            "phone_number": a.phone_number,
            "role": a.role,
            "panchayath_id": a.panchayath_id,
            "ward": a.ward,
        })
    return out
