# agent_admin/services/hierarchy.py
"""
Agent hierarchy construction.

Agents arrive as a flat list of records, each optionally pointing at its
superior through ``superior_id``. The builder turns that list into a forest:

    coordinator (level 1)
      └── supervisor (level 2)
            └── group_leader (level 3)
                  └── pro (level 4)

Records are plain mappings (the shape returned by the agent store), so the
same functions work for API responses, the CLI and tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Set, Tuple

from agent_admin.services.errors import DuplicateAgentError, UnknownRoleError

logger = logging.getLogger(__name__)


class Role(str, Enum):
    COORDINATOR = "coordinator"
    SUPERVISOR = "supervisor"
    GROUP_LEADER = "group_leader"
    PRO = "pro"

    @classmethod
    def parse(cls, raw: Any) -> "Role":
        if isinstance(raw, Role):
            return raw
        try:
            return cls(str(raw))
        except ValueError:
            raise UnknownRoleError(raw) from None

    @property
    def level(self) -> int:
        return _LEVELS[self]

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def superior_role(self) -> Optional["Role"]:
        """The role one level up, or None for the outermost role."""
        return _BY_LEVEL.get(self.level - 1)


_LEVELS = {
    Role.COORDINATOR: 1,
    Role.SUPERVISOR: 2,
    Role.GROUP_LEADER: 3,
    Role.PRO: 4,
}
_BY_LEVEL = {lvl: role for role, lvl in _LEVELS.items()}
_LABELS = {
    Role.COORDINATOR: "Coordinator",
    Role.SUPERVISOR: "Supervisor",
    Role.GROUP_LEADER: "Group Leader",
    Role.PRO: "P.R.O",
}


def role_level(role: Any) -> int:
    return Role.parse(role).level


def role_label(role: Any) -> str:
    return Role.parse(role).label


def superior_role(role: Any) -> Optional[Role]:
    return Role.parse(role).superior_role


@dataclass
class AgentNode:
    agent: Dict[str, Any]
    subordinates: List["AgentNode"] = field(default_factory=list)

    @property
    def id(self) -> Any:
        return self.agent["id"]


def _superior_id(rec: Mapping[str, Any]) -> Any:
    """The superior reference, or None; ids are opaque, only None and "" mean unset."""
    sup_id = rec.get("superior_id")
    return None if sup_id is None or sup_id == "" else sup_id


def build_hierarchy(agents: Iterable[Mapping[str, Any]]) -> List[AgentNode]:
    """
    Build the forest of agents for one panchayath.

    - every record gets a fresh node before any linking happens
    - a record whose superior is in the batch is appended to that superior's
      subordinates, in input order
    - everything else (no superior, or a superior outside the batch) is a root

    Agents trapped in a superior cycle are linked to each other but never
    reach a root, so they do not show up in the returned forest. Use
    walk_hierarchy() to traverse the result safely.

    Raises UnknownRoleError for a role outside the ladder and
    DuplicateAgentError when an id repeats.
    """
    records = list(agents)
    nodes: Dict[Any, AgentNode] = {}
    for rec in records:
        agent_id = rec["id"]
        if agent_id in nodes:
            raise DuplicateAgentError(agent_id)
        Role.parse(rec.get("role"))
        nodes[agent_id] = AgentNode(agent=dict(rec))

    roots: List[AgentNode] = []
    for rec in records:
        node = nodes[rec["id"]]
        sup_id = _superior_id(rec)
        if sup_id is not None and sup_id in nodes:
            nodes[sup_id].subordinates.append(node)
        else:
            roots.append(node)
    return roots


def walk_hierarchy(roots: Iterable[AgentNode]) -> Iterator[Tuple[int, AgentNode]]:
    """
    Depth-first, pre-order walk yielding (depth, node).

    Each agent id is visited once; a node reached a second time (cycle or a
    node shared between parents) is skipped.
    """
    seen: Set[Any] = set()
    stack: List[Tuple[int, AgentNode]] = [(0, n) for n in reversed(list(roots))]
    while stack:
        depth, node = stack.pop()
        if node.id in seen:
            logger.warning("Hierarchy walk skipped repeated agent id=%s", node.id)
            continue
        seen.add(node.id)
        yield depth, node
        for child in reversed(node.subordinates):
            stack.append((depth + 1, child))


def hierarchy_to_dicts(roots: Iterable[AgentNode]) -> List[Dict[str, Any]]:
    """Nested JSON-ready dicts; repeated ids are cut off."""
    seen: Set[Any] = set()

    def _convert(node: AgentNode) -> Optional[Dict[str, Any]]:
        if node.id in seen:
            return None
        seen.add(node.id)
        out = dict(node.agent)
        out["level"] = role_level(out.get("role"))
        out["role_label"] = role_label(out.get("role"))
        children = (_convert(c) for c in node.subordinates)
        out["subordinates"] = [c for c in children if c is not None]
        return out

    converted = (_convert(r) for r in roots)
    return [c for c in converted if c is not None]


def find_hierarchy_issues(agents: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Read-time diagnostics for a batch of agents.

    kinds:
      missing_superior     superior_id set but not present in the batch
      role_order           superior is not exactly one level up
      panchayath_mismatch  superior belongs to another panchayath
      cycle                agent sits on a superior cycle
    """
    records = list(agents)
    by_id: Dict[Any, Mapping[str, Any]] = {r["id"]: r for r in records}
    issues: List[Dict[str, Any]] = []

    for rec in records:
        sup_id = _superior_id(rec)
        if sup_id is None:
            continue
        sup = by_id.get(sup_id)
        if sup is None:
            issues.append({
                "agent_id": rec["id"],
                "kind": "missing_superior",
                "detail": f"superior {sup_id} is not in this panchayath",
            })
            continue
        if role_level(sup.get("role")) != role_level(rec.get("role")) - 1:
            issues.append({
                "agent_id": rec["id"],
                "kind": "role_order",
                "detail": f"{role_label(rec.get('role'))} reports to {role_label(sup.get('role'))}",
            })
        if rec.get("panchayath_id") and sup.get("panchayath_id") and rec["panchayath_id"] != sup["panchayath_id"]:
            issues.append({
                "agent_id": rec["id"],
                "kind": "panchayath_mismatch",
                "detail": f"superior {sup_id} belongs to panchayath {sup['panchayath_id']}",
            })

    # Superior pointers form a functional graph; colour nodes while following them.
    state: Dict[Any, int] = {}  # 1 = on current path, 2 = finished
    in_cycle: Set[Any] = set()
    for rec in records:
        path: List[Any] = []
        cur = rec["id"]
        while cur in by_id and state.get(cur) is None:
            state[cur] = 1
            path.append(cur)
            cur = _superior_id(by_id[cur])
        if cur in by_id and state.get(cur) == 1:
            in_cycle.update(path[path.index(cur):])
        for agent_id in path:
            state[agent_id] = 2

    for rec in records:
        if rec["id"] in in_cycle:
            issues.append({
                "agent_id": rec["id"],
                "kind": "cycle",
                "detail": "superior chain loops back to this agent",
            })

    if issues:
        logger.warning("Hierarchy issues found: %d", len(issues))
    return issues


def search_agents(agents: Iterable[Mapping[str, Any]], term: Optional[str]) -> List[Mapping[str, Any]]:
    """Table filter: name (case-insensitive), phone substring or role label."""
    records = list(agents)
    needle = (term or "").strip()
    if not needle:
        return records
    lowered = needle.lower()
    out: List[Mapping[str, Any]] = []
    for rec in records:
        name = str(rec.get("name") or "").lower()
        phone = str(rec.get("phone_number") or "")
        label = role_label(rec.get("role")).lower()
        if lowered in name or needle in phone or lowered in label:
            out.append(rec)
    return out
