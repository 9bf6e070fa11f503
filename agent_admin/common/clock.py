# agent_admin/common/clock.py
from __future__ import annotations

from datetime import datetime, timezone

from agent_admin.common.date_rules import as_utc


class Clock:
    """Source of "now" for status derivation and reports."""

    def now(self) -> datetime:
        raise NotImplementedError

    def today(self):
        return self.now().date()


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    def __init__(self, at: datetime):
        self._at = as_utc(at)

    def now(self) -> datetime:
        return self._at

    def set(self, at: datetime) -> None:
        self._at = as_utc(at)


_system_clock = SystemClock()


def get_clock() -> Clock:
    """FastAPI dependency; tests override it with a FixedClock."""
    return _system_clock
