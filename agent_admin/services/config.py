# agent_admin/services/config.py
from __future__ import annotations
import os

def env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None: return default
    try:
        return bool(int(v))
    except Exception:
        return str(v).strip().lower() in ("true", "yes", "y", "on")

def env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None: return default
    try:
        return int(v)
    except Exception:
        return default

def env_str(name: str, default: str) -> str:
    v = os.getenv(name)
    return v if v is not None else default

# Environment
ENV = env_str("ENV", "local")                 # local | dev | prod
LOG_LEVEL = env_str("LOG_LEVEL", "INFO").upper()

# Database
DB_ECHO = env_bool("DB_ECHO", False)
DB_AUTO_CREATE = env_bool("DB_AUTO_CREATE", ENV != "prod")

# Report thresholds (days)
LEAVE_STREAK_DAYS = env_int("LEAVE_STREAK_DAYS", 3)
INACTIVE_DAYS = env_int("INACTIVE_DAYS", 10)
SUPER_PERFORMER_MIN_STREAK = env_int("SUPER_PERFORMER_MIN_STREAK", 30)
SUPER_PERFORMER_LIMIT = env_int("SUPER_PERFORMER_LIMIT", 10)

# Daily points seeded for each role on first use
DEFAULT_DAILY_POINTS = {
    "coordinator": env_int("POINTS_COORDINATOR", 100),
    "supervisor": env_int("POINTS_SUPERVISOR", 75),
    "group_leader": env_int("POINTS_GROUP_LEADER", 50),
    "pro": env_int("POINTS_PRO", 25),
}
DEFAULT_BONUS_ALLOWED = env_bool("POINTS_BONUS_ALLOWED", True)
