# agent_admin/storage/panchayaths.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from agent_admin.common.date_rules import from_storage
from agent_admin.models import Agent, Panchayath, TeamMember
from agent_admin.services.errors import ConflictError, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


def _row(p: Panchayath) -> Dict[str, Any]:
    return {
        "id": p.id,
        "name": p.name,
        "district": p.district,
        "number_of_wards": p.number_of_wards,
        "created_at": from_storage(p.created_at),
    }


def _clean(name: Optional[str], district: Optional[str], number_of_wards: Optional[int]) -> None:
    if name is not None and not name.strip():
        raise InvalidInputError("name is required")
    if district is not None and not district.strip():
        raise InvalidInputError("district is required")
    if number_of_wards is not None and int(number_of_wards) < 1:
        raise InvalidInputError("number_of_wards must be at least 1")


def load_panchayath(session: Session, panchayath_id: str) -> Panchayath:
    p = session.get(Panchayath, panchayath_id)
    if p is None:
        raise NotFoundError(f"Panchayath {panchayath_id} not found")
    return p


def list_panchayaths(session: Session) -> List[Dict[str, Any]]:
    rows = session.scalars(select(Panchayath).order_by(Panchayath.name, Panchayath.created_at)).all()
    return [_row(p) for p in rows]


def get_panchayath(session: Session, panchayath_id: str) -> Dict[str, Any]:
    return _row(load_panchayath(session, panchayath_id))


def find_panchayath(session: Session, key: str) -> Dict[str, Any]:
    """Look up by id, falling back to an exact (case-insensitive) name match."""
    p = session.get(Panchayath, key)
    if p is None:
        p = session.scalars(
            select(Panchayath).where(func.lower(Panchayath.name) == key.strip().lower())
        ).first()
    if p is None:
        raise NotFoundError(f"Panchayath {key} not found")
    return _row(p)


def create_panchayath(session: Session, *, name: str, district: str, number_of_wards: int) -> Dict[str, Any]:
    _clean(name, district, number_of_wards)
    p = Panchayath(name=name.strip(), district=district.strip(), number_of_wards=int(number_of_wards))
    session.add(p)
    session.commit()
    logger.info("Panchayath created id=%s name=%s", p.id, p.name)
    return _row(p)


def update_panchayath(session: Session, panchayath_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    p = load_panchayath(session, panchayath_id)
    _clean(changes.get("name"), changes.get("district"), changes.get("number_of_wards"))

    new_wards = changes.get("number_of_wards")
    if new_wards is not None and int(new_wards) < p.number_of_wards:
        highest = session.scalar(select(func.max(Agent.ward)).where(Agent.panchayath_id == p.id))
        if highest is not None and highest > int(new_wards):
            raise ConflictError(f"Agents are still assigned to ward {highest}")

    for key in ("name", "district"):
        if changes.get(key) is not None:
            setattr(p, key, changes[key].strip())
    if new_wards is not None:
        p.number_of_wards = int(new_wards)
    session.commit()
    logger.info("Panchayath updated id=%s", p.id)
    return _row(p)


def delete_panchayath(session: Session, panchayath_id: str) -> None:
    p = load_panchayath(session, panchayath_id)
    n_agents = session.scalar(select(func.count()).select_from(Agent).where(Agent.panchayath_id == p.id))
    if n_agents:
        raise ConflictError(f"Panchayath still has {n_agents} agent(s)")
    session.execute(
        update(TeamMember).where(TeamMember.panchayath_id == p.id).values(panchayath_id=None)
    )
    session.delete(p)
    session.commit()
    logger.info("Panchayath deleted id=%s", panchayath_id)
