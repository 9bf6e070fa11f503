# agent_admin/cli/show_hierarchy.py
"""
Print one panchayath's agent hierarchy as a tree.

    python -m agent_admin.cli.show_hierarchy --panchayath "Kottayam North"
"""
from __future__ import annotations

import argparse
from typing import Iterable, List, Optional, Set, TextIO
import sys

from agent_admin.services.hierarchy import AgentNode, build_hierarchy, find_hierarchy_issues, role_label
from agent_admin.storage.agents import list_agents
from agent_admin.storage.db import session_scope
from agent_admin.storage.panchayaths import find_panchayath


def _label(node: AgentNode) -> str:
    a = node.agent
    ward = f" ward {a['ward']}" if a.get("ward") else ""
    return f"{a['name']} [{role_label(a['role'])}] {a.get('phone_number') or ''}{ward}".rstrip()


def render_tree(roots: Iterable[AgentNode], out: TextIO, prefix: str = "", _seen: Optional[Set] = None) -> None:
    seen = set() if _seen is None else _seen
    entries: List[AgentNode] = [n for n in roots if n.id not in seen]
    count = len(entries)
    for i, node in enumerate(entries):
        seen.add(node.id)
        is_last = (i == count - 1)
        connector = "└── " if is_last else "├── "
        out.write(prefix + connector + _label(node) + "\n")
        extension = "    " if is_last else "│   "
        render_tree(node.subordinates, out, prefix + extension, seen)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Show the agent hierarchy of a panchayath")
    ap.add_argument("--panchayath", required=True, help="panchayath id or exact name")
    args = ap.parse_args(argv)

    with session_scope() as session:
        panchayath = find_panchayath(session, args.panchayath)
        agents = list_agents(session, panchayath["id"])

    print(f"{panchayath['name']} ({panchayath['district']}) - {len(agents)} agent(s)\n")
    if not agents:
        print("No agents found for this panchayath")
        return 0
    render_tree(build_hierarchy(agents), sys.stdout)

    issues = find_hierarchy_issues(agents)
    if issues:
        print(f"\n{len(issues)} issue(s):")
        for issue in issues:
            print(f"  {issue['kind']}: {issue['agent_id']} ({issue['detail']})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
