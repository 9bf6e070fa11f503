# agent_admin/storage/agents.py
"""
Agent store.

Rows come back as plain dicts carrying the superior's and the panchayath's
name, which is what both the management table and the hierarchy builder
consume.

Placement rules enforced on every write:
  - the panchayath exists and the ward (if any) is within its ward count
  - coordinators report to nobody
  - anyone else reports to nobody or to an agent of the next-higher role in
    the same panchayath
Since each superior sits exactly one level up, stored chains cannot loop.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session, aliased

from agent_admin.common.date_rules import from_storage
from agent_admin.models import Agent, DailyActivity, Panchayath, TeamMember
from agent_admin.services.errors import ConflictError, InvalidInputError, NotFoundError
from agent_admin.services.hierarchy import Role

logger = logging.getLogger(__name__)

_FIELDS = ("name", "phone_number", "role", "superior_id", "panchayath_id", "ward")


def _row(a: Agent, superior_name: Optional[str], panchayath_name: Optional[str]) -> Dict[str, Any]:
    return {
        "id": a.id,
        "name": a.name,
        "phone_number": a.phone_number,
        "role": a.role,
        "superior_id": a.superior_id,
        "superior_name": superior_name,
        "panchayath_id": a.panchayath_id,
        "panchayath_name": panchayath_name,
        "ward": a.ward,
        "created_at": from_storage(a.created_at),
        "updated_at": from_storage(a.updated_at),
    }


def _select_rows():
    sup = aliased(Agent)
    return (
        select(Agent, sup.name, Panchayath.name)
        .outerjoin(sup, Agent.superior_id == sup.id)
        .outerjoin(Panchayath, Agent.panchayath_id == Panchayath.id)
    )


def load_agent(session: Session, agent_id: str) -> Agent:
    a = session.get(Agent, agent_id)
    if a is None:
        raise NotFoundError(f"Agent {agent_id} not found")
    return a


def list_agents(session: Session, panchayath_id: Optional[str] = None, *, newest_first: bool = False) -> List[Dict[str, Any]]:
    """
    Agents ordered by role level (coordinator first), then creation time.
    newest_first=True gives the management-table ordering instead.
    """
    stmt = _select_rows()
    if panchayath_id:
        stmt = stmt.where(Agent.panchayath_id == panchayath_id)
    rows = [_row(a, sup_name, p_name) for a, sup_name, p_name in session.execute(stmt).all()]
    if newest_first:
        rows.sort(key=lambda r: r["created_at"], reverse=True)
    else:
        rows.sort(key=lambda r: (Role.parse(r["role"]).level, r["created_at"]))
    return rows


def get_agent(session: Session, agent_id: str) -> Dict[str, Any]:
    found = session.execute(_select_rows().where(Agent.id == agent_id)).first()
    if found is None:
        raise NotFoundError(f"Agent {agent_id} not found")
    a, sup_name, p_name = found
    return _row(a, sup_name, p_name)


def list_potential_superiors(session: Session, panchayath_id: str, role: Any) -> List[Dict[str, Any]]:
    """Agents that may be picked as superior for a new agent of `role`."""
    sup_role = Role.parse(role).superior_role
    if not panchayath_id or sup_role is None:
        return []
    rows = session.scalars(
        select(Agent)
        .where(Agent.panchayath_id == panchayath_id, Agent.role == sup_role.value)
        .order_by(Agent.name)
    ).all()
    return [{"id": a.id, "name": a.name, "role": a.role} for a in rows]


def _check_placement(session: Session, data: Dict[str, Any], agent_id: Optional[str] = None) -> None:
    if not str(data.get("name") or "").strip():
        raise InvalidInputError("name is required")
    if not str(data.get("phone_number") or "").strip():
        raise InvalidInputError("phone_number is required")

    role = Role.parse(data.get("role"))

    p = session.get(Panchayath, data.get("panchayath_id")) if data.get("panchayath_id") else None
    if p is None:
        raise InvalidInputError(f"Panchayath {data.get('panchayath_id')} does not exist")

    ward = data.get("ward")
    if ward is not None and not (1 <= int(ward) <= p.number_of_wards):
        raise InvalidInputError(f"ward must be between 1 and {p.number_of_wards}")

    sup_id = data.get("superior_id")
    if not sup_id:
        return
    if role.superior_role is None:
        raise InvalidInputError("A coordinator cannot have a superior")
    if agent_id is not None and sup_id == agent_id:
        raise InvalidInputError("An agent cannot be its own superior")
    sup = session.get(Agent, sup_id)
    if sup is None:
        raise InvalidInputError(f"Superior {sup_id} does not exist")
    if sup.panchayath_id != p.id:
        raise InvalidInputError("Superior must belong to the same panchayath")
    if sup.role != role.superior_role.value:
        raise InvalidInputError(
            f"A {role.label} must report to a {role.superior_role.label}, not a {Role.parse(sup.role).label}"
        )


def create_agent(session: Session, data: Dict[str, Any]) -> Dict[str, Any]:
    payload = {k: data.get(k) for k in _FIELDS}
    payload["superior_id"] = payload.get("superior_id") or None
    _check_placement(session, payload)
    a = Agent(
        name=payload["name"].strip(),
        phone_number=payload["phone_number"].strip(),
        role=Role.parse(payload["role"]).value,
        superior_id=payload["superior_id"],
        panchayath_id=payload["panchayath_id"],
        ward=int(payload["ward"]) if payload.get("ward") is not None else None,
    )
    session.add(a)
    session.commit()
    logger.info("Agent created id=%s role=%s panchayath=%s", a.id, a.role, a.panchayath_id)
    return get_agent(session, a.id)


def update_agent(session: Session, agent_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    """
    Partial update. Keys present in `changes` are applied; an explicit None
    clears superior_id / ward.
    """
    a = load_agent(session, agent_id)
    merged = {k: getattr(a, k) for k in _FIELDS}
    for k in _FIELDS:
        if k in changes:
            merged[k] = changes[k]
    merged["superior_id"] = merged.get("superior_id") or None
    _check_placement(session, merged, agent_id=a.id)

    new_role = Role.parse(merged["role"])
    if new_role.value != a.role or merged["panchayath_id"] != a.panchayath_id:
        subs = session.scalars(select(Agent).where(Agent.superior_id == a.id)).all()
        for sub in subs:
            if Role.parse(sub.role).superior_role is not new_role or sub.panchayath_id != merged["panchayath_id"]:
                raise ConflictError(
                    f"Agent has {len(subs)} subordinate(s); reassign them before changing role or panchayath"
                )

    a.name = str(merged["name"]).strip()
    a.phone_number = str(merged["phone_number"]).strip()
    a.role = new_role.value
    a.superior_id = merged["superior_id"]
    a.panchayath_id = merged["panchayath_id"]
    a.ward = int(merged["ward"]) if merged.get("ward") is not None else None
    session.commit()
    logger.info("Agent updated id=%s", a.id)
    return get_agent(session, a.id)


def delete_agent(session: Session, agent_id: str) -> None:
    """Subordinates are detached (they become roots); team memberships lose the agent link."""
    a = load_agent(session, agent_id)
    detached = session.execute(
        update(Agent).where(Agent.superior_id == a.id).values(superior_id=None)
    ).rowcount
    session.execute(update(TeamMember).where(TeamMember.agent_id == a.id).values(agent_id=None))
    session.execute(delete(DailyActivity).where(DailyActivity.agent_id == a.id))
    session.delete(a)
    session.commit()
    logger.info("Agent deleted id=%s detached_subordinates=%s", agent_id, detached)
