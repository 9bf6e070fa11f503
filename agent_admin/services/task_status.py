# agent_admin/services/task_status.py
"""
Effective task status.

Only pending/completed/cancelled are ever stored. "expired" is a view over a
pending task whose due date has passed, recomputed on every read, so the same
task can move from pending to expired between two reads with no write.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping

from agent_admin.common.date_rules import as_utc
from agent_admin.services.errors import UnknownStatusError


class TaskStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    EXPIRED = "expired"

    @classmethod
    def parse(cls, raw: Any) -> "TaskStatus":
        if isinstance(raw, TaskStatus):
            return raw
        try:
            return cls(str(raw))
        except ValueError:
            raise UnknownStatusError(raw) from None


TERMINAL = {TaskStatus.COMPLETED, TaskStatus.CANCELLED}
BUCKETS = (TaskStatus.PENDING, TaskStatus.COMPLETED, TaskStatus.CANCELLED, TaskStatus.EXPIRED)


def resolve_status(status: Any, due_date: datetime, now: datetime) -> TaskStatus:
    st = TaskStatus.parse(status)
    if st is not TaskStatus.PENDING:
        return st
    if as_utc(due_date) < as_utc(now):
        return TaskStatus.EXPIRED
    return TaskStatus.PENDING


def effective_status(task: Mapping[str, Any], now: datetime) -> TaskStatus:
    return resolve_status(task.get("status"), task["due_date"], now)


def group_by_status(tasks: Iterable[Mapping[str, Any]], now: datetime) -> Dict[str, List[Mapping[str, Any]]]:
    groups: Dict[str, List[Mapping[str, Any]]] = {b.value: [] for b in BUCKETS}
    for task in tasks:
        groups[effective_status(task, now).value].append(task)
    return groups


def count_by_status(tasks: Iterable[Mapping[str, Any]], now: datetime) -> Dict[str, int]:
    return {k: len(v) for k, v in group_by_status(tasks, now).items()}


def can_transition(status: Any, due_date: datetime, target: Any, now: datetime) -> bool:
    """
    Only a live pending task may be completed or cancelled; expired tasks need
    a new due date first.
    """
    tgt = TaskStatus.parse(target)
    if tgt not in TERMINAL:
        return False
    return resolve_status(status, due_date, now) is TaskStatus.PENDING
