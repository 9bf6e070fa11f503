# agent_admin/common/date_rules.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def as_utc(value: datetime) -> datetime:
    """
    Return an aware UTC datetime.
    Naive values are taken to already be UTC (that is how they are stored).
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_storage(value: Optional[datetime]) -> Optional[datetime]:
    """Naive UTC for DATETIME columns (MySQL and SQLite both drop tzinfo)."""
    if value is None:
        return None
    return as_utc(value).replace(tzinfo=None)


def from_storage(value: Optional[datetime]) -> Optional[datetime]:
    return as_utc(value) if value is not None else None
