# agent_admin/services/errors.py
from __future__ import annotations


class AdminError(Exception):
    """Base class for storage-level failures that map onto an HTTP status."""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidInputError(AdminError):
    status_code = 400


class NotFoundError(AdminError):
    status_code = 404


class ConflictError(AdminError):
    status_code = 409


# ---- contract violations raised by the pure core ----

class UnknownRoleError(ValueError):
    def __init__(self, role: object):
        super().__init__(f"Unknown agent role: {role!r}")
        self.role = role


class UnknownStatusError(ValueError):
    def __init__(self, status: object):
        super().__init__(f"Unknown task status: {status!r}")
        self.status = status


class DuplicateAgentError(ValueError):
    def __init__(self, agent_id: object):
        super().__init__(f"Agent {agent_id!r} appears more than once in the batch")
        self.agent_id = agent_id
