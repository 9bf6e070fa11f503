# agent_admin/storage/activity.py
"""
Daily activity log and the per-role points table.

A present day earns the role's daily points plus any bonus (when the role
allows bonuses); a leave day earns nothing. One entry per agent per day:
logging the same day again overwrites it.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from agent_admin.common.date_rules import from_storage
from agent_admin.models import Agent, DailyActivity, PointsRule
from agent_admin.services import config
from agent_admin.services.errors import InvalidInputError, NotFoundError
from agent_admin.services.hierarchy import Role

logger = logging.getLogger(__name__)

ACTIVITY_STATUSES = ("present", "leave")


def _rule_row(r: PointsRule) -> Dict[str, Any]:
    return {
        "role": r.role,
        "role_label": Role.parse(r.role).label,
        "daily_points": r.daily_points,
        "bonus_points_allowed": bool(r.bonus_points_allowed),
    }


def _activity_row(e: DailyActivity) -> Dict[str, Any]:
    return {
        "id": e.id,
        "agent_id": e.agent_id,
        "activity_date": e.activity_date,
        "status": e.status,
        "notes": e.notes,
        "bonus_points": e.bonus_points,
        "points": e.points,
        "updated_at": from_storage(e.updated_at),
    }


def _ensure_rules(session: Session) -> Dict[str, PointsRule]:
    rules = {r.role: r for r in session.scalars(select(PointsRule)).all()}
    missing = [role for role in Role if role.value not in rules]
    for role in missing:
        r = PointsRule(
            role=role.value,
            daily_points=config.DEFAULT_DAILY_POINTS[role.value],
            bonus_points_allowed=config.DEFAULT_BONUS_ALLOWED,
        )
        session.add(r)
        rules[role.value] = r
    if missing:
        session.commit()
        logger.info("Seeded points rules for %s", ",".join(r.value for r in missing))
    return rules


def list_points_rules(session: Session) -> List[Dict[str, Any]]:
    rules = _ensure_rules(session)
    return [_rule_row(rules[role.value]) for role in Role]


def update_points_rule(
    session: Session,
    role: Any,
    *,
    daily_points: Optional[int] = None,
    bonus_points_allowed: Optional[bool] = None,
) -> Dict[str, Any]:
    r = _ensure_rules(session)[Role.parse(role).value]
    if daily_points is not None:
        if int(daily_points) < 0:
            raise InvalidInputError("daily_points cannot be negative")
        r.daily_points = int(daily_points)
    if bonus_points_allowed is not None:
        r.bonus_points_allowed = bool(bonus_points_allowed)
    session.commit()
    logger.info("Points rule updated role=%s daily=%s bonus=%s", r.role, r.daily_points, r.bonus_points_allowed)
    return _rule_row(r)


def log_activity(
    session: Session,
    *,
    agent_id: str,
    activity_date: date,
    status: str = "present",
    notes: str = "",
    bonus_points: int = 0,
) -> Dict[str, Any]:
    a = session.get(Agent, agent_id)
    if a is None:
        raise NotFoundError(f"Agent {agent_id} not found")
    if status not in ACTIVITY_STATUSES:
        raise InvalidInputError(f"status must be one of {', '.join(ACTIVITY_STATUSES)}")
    bonus = int(bonus_points or 0)
    if bonus < 0:
        raise InvalidInputError("bonus_points cannot be negative")

    rule = _ensure_rules(session)[Role.parse(a.role).value]
    if status == "leave":
        if bonus:
            raise InvalidInputError("Bonus points cannot be awarded on a leave day")
        points = 0
    else:
        if bonus and not rule.bonus_points_allowed:
            raise InvalidInputError(f"Bonus points are not allowed for {Role.parse(a.role).label}")
        points = rule.daily_points + bonus

    # Upsert-like behavior: update if the day is already logged, else insert
    e = session.scalars(
        select(DailyActivity).where(
            DailyActivity.agent_id == a.id, DailyActivity.activity_date == activity_date
        )
    ).first()
    if e is None:
        e = DailyActivity(agent_id=a.id, activity_date=activity_date)
        session.add(e)
    e.status = status
    e.notes = notes or ""
    e.bonus_points = bonus
    e.points = points
    session.commit()
    logger.info("Activity logged agent=%s date=%s status=%s points=%s", a.id, activity_date, status, points)
    return _activity_row(e)


def list_activities(
    session: Session,
    *,
    agent_id: Optional[str] = None,
    panchayath_id: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[Dict[str, Any]]:
    stmt = select(DailyActivity).order_by(DailyActivity.activity_date, DailyActivity.agent_id)
    if agent_id:
        stmt = stmt.where(DailyActivity.agent_id == agent_id)
    if panchayath_id:
        stmt = stmt.join(Agent, Agent.id == DailyActivity.agent_id).where(Agent.panchayath_id == panchayath_id)
    if start is not None:
        stmt = stmt.where(DailyActivity.activity_date >= start)
    if end is not None:
        stmt = stmt.where(DailyActivity.activity_date <= end)
    return [_activity_row(e) for e in session.scalars(stmt).all()]


def delete_activity(session: Session, activity_id: str) -> None:
    e = session.get(DailyActivity, activity_id)
    if e is None:
        raise NotFoundError(f"Activity {activity_id} not found")
    session.delete(e)
    session.commit()
    logger.info("Activity deleted id=%s", activity_id)


def agent_points(session: Session, agent_id: str, start: Optional[date] = None, end: Optional[date] = None) -> Dict[str, Any]:
    a = session.get(Agent, agent_id)
    if a is None:
        raise NotFoundError(f"Agent {agent_id} not found")
    entries = list_activities(session, agent_id=a.id, start=start, end=end)
    return {
        "agent_id": a.id,
        "name": a.name,
        "role": a.role,
        "start": start,
        "end": end,
        "total_points": sum(e["points"] for e in entries),
        "days_present": sum(1 for e in entries if e["status"] == "present"),
        "days_leave": sum(1 for e in entries if e["status"] == "leave"),
        "entries": entries,
    }
