# agent_admin/storage/tasks.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from agent_admin.common.date_rules import from_storage, to_storage
from agent_admin.models import Agent, Task, Team
from agent_admin.services.errors import ConflictError, InvalidInputError, NotFoundError
from agent_admin.services.task_status import TaskStatus, can_transition, resolve_status

logger = logging.getLogger(__name__)

PRIORITIES = ("normal", "medium", "high")
ALLOCATION_TYPES = ("individual", "team")


def _row(t: Task, now: Optional[datetime] = None) -> Dict[str, Any]:
    out = {
        "id": t.id,
        "title": t.title,
        "description": t.description,
        "priority": t.priority,
        "due_date": from_storage(t.due_date),
        "allocation_type": t.allocation_type,
        "assigned_to": t.assigned_to,
        "assigned_to_name": t.assigned_to_name,
        "status": t.status,
        "created_at": from_storage(t.created_at),
        "completed_at": from_storage(t.completed_at),
    }
    if now is not None:
        out["effective_status"] = resolve_status(t.status, out["due_date"], now).value
    return out


def _check_priority(priority: str) -> str:
    if priority not in PRIORITIES:
        raise InvalidInputError(f"priority must be one of {', '.join(PRIORITIES)}")
    return priority


def _resolve_assignee(session: Session, allocation_type: str, assigned_to: str) -> str:
    if allocation_type == "individual":
        a = session.get(Agent, assigned_to)
        if a is None:
            raise InvalidInputError(f"Agent {assigned_to} does not exist")
        return a.name
    if allocation_type == "team":
        team = session.get(Team, assigned_to)
        if team is None:
            raise InvalidInputError(f"Team {assigned_to} does not exist")
        return team.name
    raise InvalidInputError(f"allocation_type must be one of {', '.join(ALLOCATION_TYPES)}")


def load_task(session: Session, task_id: str) -> Task:
    t = session.get(Task, task_id)
    if t is None:
        raise NotFoundError(f"Task {task_id} not found")
    return t


def list_tasks(session: Session, now: datetime) -> List[Dict[str, Any]]:
    rows = session.scalars(select(Task).order_by(Task.created_at, Task.id)).all()
    return [_row(t, now) for t in rows]


def get_task(session: Session, task_id: str, now: datetime) -> Dict[str, Any]:
    return _row(load_task(session, task_id), now)


def create_task(session: Session, data: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    title = str(data.get("title") or "").strip()
    if not title:
        raise InvalidInputError("title is required")
    if data.get("due_date") is None:
        raise InvalidInputError("due_date is required")
    if not data.get("assigned_to"):
        raise InvalidInputError("assigned_to is required")

    allocation_type = data.get("allocation_type") or "individual"
    assignee_name = _resolve_assignee(session, allocation_type, data["assigned_to"])

    t = Task(
        title=title,
        description=str(data.get("description") or ""),
        priority=_check_priority(data.get("priority") or "normal"),
        due_date=to_storage(data["due_date"]),
        allocation_type=allocation_type,
        assigned_to=data["assigned_to"],
        assigned_to_name=assignee_name,
        status=TaskStatus.PENDING.value,
        created_at=to_storage(now),
    )
    session.add(t)
    session.commit()
    logger.info("Task created id=%s assigned_to=%s (%s)", t.id, t.assigned_to, allocation_type)
    return _row(t, now)


def update_task(session: Session, task_id: str, changes: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    """Edits title, description, priority and due date; assignment stays as created."""
    t = load_task(session, task_id)
    if "title" in changes:
        title = str(changes["title"] or "").strip()
        if not title:
            raise InvalidInputError("title is required")
        t.title = title
    if changes.get("description") is not None:
        t.description = str(changes["description"])
    if changes.get("priority") is not None:
        t.priority = _check_priority(changes["priority"])
    if changes.get("due_date") is not None:
        t.due_date = to_storage(changes["due_date"])
    session.commit()
    logger.info("Task updated id=%s", t.id)
    return _row(t, now)


def set_task_status(session: Session, task_id: str, target: Any, now: datetime) -> Dict[str, Any]:
    t = load_task(session, task_id)
    tgt = TaskStatus.parse(target)
    if not can_transition(t.status, from_storage(t.due_date), tgt, now):
        current = resolve_status(t.status, from_storage(t.due_date), now)
        raise ConflictError(f"Cannot mark a {current.value} task as {tgt.value}")
    t.status = tgt.value
    t.completed_at = to_storage(now) if tgt is TaskStatus.COMPLETED else None
    session.commit()
    logger.info("Task status changed id=%s status=%s", t.id, t.status)
    return _row(t, now)


def delete_task(session: Session, task_id: str) -> None:
    t = load_task(session, task_id)
    session.delete(t)
    session.commit()
    logger.info("Task deleted id=%s", task_id)
