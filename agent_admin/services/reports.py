# agent_admin/services/reports.py
"""
Attendance reports derived from the daily activity log.

All functions are pure: they take agent rows, activity rows and an "as of"
date, and ignore activity logged after that date. A streak counts
consecutive days with the same status ending at as_of, or at the day before
when as_of has not been logged yet. A day with no entry breaks a streak.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional

from agent_admin.services import config

Row = Mapping[str, Any]


def _days_by_agent(activities: Iterable[Row], as_of: date) -> Dict[Any, Dict[date, Row]]:
    out: Dict[Any, Dict[date, Row]] = {}
    for e in activities:
        if e["activity_date"] > as_of:
            continue
        out.setdefault(e["agent_id"], {})[e["activity_date"]] = e
    return out


def _streak(days: Mapping[date, Row], status: str, as_of: date) -> int:
    d = as_of if as_of in days else as_of - timedelta(days=1)
    n = 0
    while d in days and days[d]["status"] == status:
        n += 1
        d -= timedelta(days=1)
    return n


def leave_streak(days: Mapping[date, Row], as_of: date) -> int:
    return _streak(days, "leave", as_of)


def present_streak(days: Mapping[date, Row], as_of: date) -> int:
    return _streak(days, "present", as_of)


def _on_leave(days: Mapping[date, Row], as_of: date, threshold: int) -> bool:
    return leave_streak(days, as_of) >= threshold


def _last_present(days: Mapping[date, Row]) -> Optional[date]:
    present = [d for d, e in days.items() if e["status"] == "present"]
    return max(present) if present else None


def _joined_on(agent: Row) -> Optional[date]:
    created = agent.get("created_at")
    if isinstance(created, datetime):
        return created.date()
    return created


def _idle_days(agent: Row, days: Mapping[date, Row], as_of: date) -> int:
    ref = _last_present(days) or _joined_on(agent) or as_of
    return max((as_of - ref).days, 0)


def _brief(agent: Row) -> Dict[str, Any]:
    return {"agent_id": agent["id"], "name": agent.get("name"), "role": agent.get("role")}


def leave_report(agents: Iterable[Row], activities: Iterable[Row], as_of: date,
                 min_days: Optional[int] = None) -> List[Dict[str, Any]]:
    threshold = config.LEAVE_STREAK_DAYS if min_days is None else min_days
    by_agent = _days_by_agent(activities, as_of)
    out = []
    for a in agents:
        days = by_agent.get(a["id"], {})
        if _on_leave(days, as_of, threshold):
            n = leave_streak(days, as_of)
            out.append({**_brief(a), "days": n, "status": "On Leave"})
    out.sort(key=lambda r: (-r["days"], str(r["name"])))
    return out


def inactive_report(agents: Iterable[Row], activities: Iterable[Row], as_of: date,
                    min_days: Optional[int] = None) -> List[Dict[str, Any]]:
    threshold = config.INACTIVE_DAYS if min_days is None else min_days
    by_agent = _days_by_agent(activities, as_of)
    out = []
    for a in agents:
        days = by_agent.get(a["id"], {})
        idle = _idle_days(a, days, as_of)
        if idle >= threshold:
            out.append({**_brief(a), "days": idle, "last_active": _last_present(days)})
    out.sort(key=lambda r: (-r["days"], str(r["name"])))
    return out


def super_performers(agents: Iterable[Row], activities: Iterable[Row], as_of: date,
                     min_streak: Optional[int] = None, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """Agents with no leave on record and a long unbroken present streak."""
    threshold = config.SUPER_PERFORMER_MIN_STREAK if min_streak is None else min_streak
    cap = config.SUPER_PERFORMER_LIMIT if limit is None else limit
    by_agent = _days_by_agent(activities, as_of)
    out = []
    for a in agents:
        days = by_agent.get(a["id"], {})
        if any(e["status"] == "leave" for e in days.values()):
            continue
        streak = present_streak(days, as_of)
        if streak and streak >= threshold:
            points = sum(int(e.get("points") or 0) for e in days.values())
            out.append({**_brief(a), "streak": streak, "points": points})
    out.sort(key=lambda r: (-r["streak"], -r["points"], str(r["name"])))
    return out[:cap]


def panchayath_performance(agents: Iterable[Row], activities: Iterable[Row], as_of: date,
                           inactive_days: Optional[int] = None, leave_days: Optional[int] = None) -> Dict[str, Any]:
    """
    Each agent lands in exactly one bucket:
      on_leave   on a leave streak of leave_days or more (same rule as leave_report)
      inactive   idle for inactive_days or more
      active     everyone else
    """
    threshold = config.INACTIVE_DAYS if inactive_days is None else inactive_days
    leave_threshold = config.LEAVE_STREAK_DAYS if leave_days is None else leave_days
    by_agent = _days_by_agent(activities, as_of)
    total = active = on_leave = inactive = 0
    for a in agents:
        total += 1
        days = by_agent.get(a["id"], {})
        if _on_leave(days, as_of, leave_threshold):
            on_leave += 1
        elif _idle_days(a, days, as_of) >= threshold:
            inactive += 1
        else:
            active += 1
    return {
        "total_agents": total,
        "active_agents": active,
        "on_leave": on_leave,
        "inactive": inactive,
        "percentage": round(active * 100 / total) if total else 0,
    }


def overview(agents: Iterable[Row], activities: Iterable[Row], as_of: date) -> Dict[str, Any]:
    agent_rows = list(agents)
    activity_rows = list(activities)
    return {
        "as_of": as_of,
        "leaves": leave_report(agent_rows, activity_rows, as_of),
        "inactive": inactive_report(agent_rows, activity_rows, as_of),
        "super_performers": super_performers(agent_rows, activity_rows, as_of),
        "panchayath_performance": panchayath_performance(agent_rows, activity_rows, as_of),
    }
