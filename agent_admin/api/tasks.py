# agent_admin/api/tasks.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Literal, Optional
from fastapi import APIRouter
from pydantic import BaseModel

from agent_admin.api.deps import DB, Now
from agent_admin.services.task_status import TaskStatus, count_by_status
from agent_admin.storage import tasks as store

router = APIRouter(
    prefix="/tasks",
    tags=["Tasks"],
)


class TaskCreate(BaseModel):
    title: str
    description: str = ""
    priority: Literal["normal", "medium", "high"] = "normal"
    due_date: datetime
    allocation_type: Literal["individual", "team"] = "individual"
    assigned_to: str


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[Literal["normal", "medium", "high"]] = None
    due_date: Optional[datetime] = None


class TaskStatusChange(BaseModel):
    status: Literal["completed", "cancelled"]


@router.get("")
def list_tasks(session: DB, clock: Now, status: Optional[TaskStatus] = None) -> Dict[str, Any]:
    """All tasks, or one effective-status bucket (pending / completed / cancelled / expired)."""
    items = store.list_tasks(session, clock.now())
    if status is not None:
        items = [t for t in items if t["effective_status"] == status.value]
    return {"count": len(items), "items": items}


@router.get("/summary")
def task_summary(session: DB, clock: Now) -> Dict[str, Any]:
    now = clock.now()
    items = store.list_tasks(session, now)
    return {"total": len(items), "counts": count_by_status(items, now)}


@router.post("", status_code=201)
def create_task(payload: TaskCreate, session: DB, clock: Now) -> Dict[str, Any]:
    item = store.create_task(session, payload.model_dump(), clock.now())
    return {"status": "SUCCESS", "item": item}


@router.get("/{task_id}")
def get_task(task_id: str, session: DB, clock: Now) -> Dict[str, Any]:
    return store.get_task(session, task_id, clock.now())


@router.put("/{task_id}")
def update_task(task_id: str, payload: TaskUpdate, session: DB, clock: Now) -> Dict[str, Any]:
    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        return {"status": "NOOP", "item": store.get_task(session, task_id, clock.now())}
    item = store.update_task(session, task_id, changes, clock.now())
    return {"status": "SUCCESS", "item": item}


@router.post("/{task_id}/status")
def change_task_status(task_id: str, payload: TaskStatusChange, session: DB, clock: Now) -> Dict[str, Any]:
    item = store.set_task_status(session, task_id, payload.status, clock.now())
    return {"status": "SUCCESS", "item": item}


@router.delete("/{task_id}")
def delete_task(task_id: str, session: DB) -> Dict[str, Any]:
    store.delete_task(session, task_id)
    return {"status": "SUCCESS", "id": task_id}
