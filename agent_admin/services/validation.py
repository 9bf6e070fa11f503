# agent_admin/services/validation.py
"""
Request-level validators for date query parameters.
"""
from __future__ import annotations

from datetime import date
from typing import Optional, Tuple

from fastapi import HTTPException


def parse_day(value: Optional[str], field: str = "date") -> Optional[date]:
    """
    Parse a 'YYYY-MM-DD' query value.

    Returns:
        date, or None when the value is missing/blank

    Raises:
        HTTPException(400) if the value is not a calendar date
    """
    if value is None or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid {field}: {value}. Expected YYYY-MM-DD",
        )


def validate_range(start: Optional[str], end: Optional[str]) -> Tuple[Optional[date], Optional[date]]:
    d_start = parse_day(start, "start")
    d_end = parse_day(end, "end")
    if d_start and d_end and d_start > d_end:
        raise HTTPException(status_code=400, detail="start must not be after end")
    return d_start, d_end
