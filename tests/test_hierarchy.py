# tests/test_hierarchy.py
from __future__ import annotations

import pytest

from agent_admin.services.errors import DuplicateAgentError, UnknownRoleError
from agent_admin.services.hierarchy import (
    AgentNode,
    Role,
    build_hierarchy,
    find_hierarchy_issues,
    hierarchy_to_dicts,
    role_label,
    role_level,
    search_agents,
    superior_role,
    walk_hierarchy,
)

pytestmark = pytest.mark.unit


def _agent(agent_id, role, superior_id=None, **extra):
    return {"id": agent_id, "role": role, "superior_id": superior_id, "name": agent_id, **extra}


def _shape(nodes):
    return [(n.id, _shape(n.subordinates)) for n in nodes]


def test_role_levels_are_fixed():
    assert [role_level(r) for r in ("coordinator", "supervisor", "group_leader", "pro")] == [1, 2, 3, 4]

def test_role_labels():
    assert role_label("group_leader") == "Group Leader"
    assert role_label(Role.PRO) == "P.R.O"

def test_superior_role_ladder():
    assert superior_role("coordinator") is None
    assert superior_role("supervisor") is Role.COORDINATOR
    assert superior_role("pro") is Role.GROUP_LEADER

@pytest.mark.parametrize("bad", [None, "", "admin", "Coordinator"])
def test_unknown_role_fails_fast(bad):
    with pytest.raises(UnknownRoleError):
        role_level(bad)


def test_chain_builds_single_root():
    roots = build_hierarchy([
        _agent("A", "coordinator"),
        _agent("B", "supervisor", "A"),
        _agent("C", "group_leader", "B"),
    ])
    assert _shape(roots) == [("A", [("B", [("C", [])])])]

def test_unresolvable_superior_becomes_root():
    roots = build_hierarchy([_agent("X", "pro", "missing-id")])
    assert _shape(roots) == [("X", [])]

def test_subordinate_listed_before_superior_still_links():
    roots = build_hierarchy([
        _agent("C", "group_leader", "B"),
        _agent("B", "supervisor", "A"),
        _agent("A", "coordinator"),
    ])
    assert _shape(roots) == [("A", [("B", [("C", [])])])]

def test_sibling_order_follows_input():
    roots = build_hierarchy([
        _agent("A", "coordinator"),
        _agent("S2", "supervisor", "A"),
        _agent("S1", "supervisor", "A"),
        _agent("S3", "supervisor", "A"),
    ])
    assert [n.id for n in roots[0].subordinates] == ["S2", "S1", "S3"]

def test_every_agent_appears_exactly_once():
    agents = [
        _agent("A", "coordinator"),
        _agent("B", "supervisor", "A"),
        _agent("C", "supervisor", "A"),
        _agent("D", "group_leader", "B"),
        _agent("E", "pro", "D"),
        _agent("F", "pro", "gone"),
        _agent("G", "coordinator"),
    ]
    ids = [node.id for _, node in walk_hierarchy(build_hierarchy(agents))]
    assert sorted(ids) == sorted(a["id"] for a in agents)
    assert len(ids) == len(set(ids))

def test_build_is_idempotent():
    agents = [_agent("A", "coordinator"), _agent("B", "supervisor", "A")]
    assert build_hierarchy(agents) == build_hierarchy(agents)

def test_input_is_not_mutated():
    agents = [_agent("A", "coordinator"), _agent("B", "supervisor", "A")]
    before = [dict(a) for a in agents]
    roots = build_hierarchy(agents)
    roots[0].agent["name"] = "changed"
    assert agents == before
    assert "subordinates" not in agents[0]

def test_empty_batch():
    assert build_hierarchy([]) == []

def test_duplicate_ids_rejected():
    with pytest.raises(DuplicateAgentError):
        build_hierarchy([_agent("A", "coordinator"), _agent("A", "supervisor")])

def test_unknown_role_in_batch_rejected():
    with pytest.raises(UnknownRoleError):
        build_hierarchy([_agent("A", "coordinator"), _agent("B", "boss", "A")])


def test_cycle_members_are_not_roots_and_walk_terminates():
    agents = [
        _agent("R", "coordinator"),
        _agent("P", "supervisor", "Q"),
        _agent("Q", "supervisor", "P"),
    ]
    roots = build_hierarchy(agents)
    assert [n.id for n in roots] == ["R"]
    assert [n.id for _, n in walk_hierarchy(roots)] == ["R"]

def test_walk_skips_repeated_nodes():
    a = AgentNode(agent=_agent("A", "coordinator"))
    b = AgentNode(agent=_agent("B", "supervisor", "A"))
    a.subordinates.append(b)
    b.subordinates.append(a)
    assert [(d, n.id) for d, n in walk_hierarchy([a])] == [(0, "A"), (1, "B")]

def test_walk_depths_preorder():
    roots = build_hierarchy([
        _agent("A", "coordinator"),
        _agent("B", "supervisor", "A"),
        _agent("C", "group_leader", "B"),
        _agent("D", "supervisor", "A"),
    ])
    assert [(d, n.id) for d, n in walk_hierarchy(roots)] == [(0, "A"), (1, "B"), (2, "C"), (1, "D")]

def test_hierarchy_to_dicts_adds_level_and_label():
    out = hierarchy_to_dicts(build_hierarchy([_agent("A", "coordinator"), _agent("B", "supervisor", "A")]))
    assert out[0]["level"] == 1
    assert out[0]["role_label"] == "Coordinator"
    assert out[0]["subordinates"][0]["id"] == "B"
    assert out[0]["subordinates"][0]["level"] == 2
    assert out[0]["subordinates"][0]["subordinates"] == []

def test_hierarchy_to_dicts_cuts_cycles():
    a = AgentNode(agent=_agent("A", "coordinator"))
    b = AgentNode(agent=_agent("B", "supervisor", "A"))
    a.subordinates.append(b)
    b.subordinates.append(a)
    out = hierarchy_to_dicts([a])
    assert out[0]["subordinates"][0]["subordinates"] == []


def test_issues_clean_hierarchy():
    agents = [
        _agent("A", "coordinator", panchayath_id="p1"),
        _agent("B", "supervisor", "A", panchayath_id="p1"),
    ]
    assert find_hierarchy_issues(agents) == []

def test_issues_detected():
    agents = [
        _agent("A", "coordinator", panchayath_id="p1"),
        _agent("B", "pro", "A", panchayath_id="p1"),
        _agent("C", "group_leader", "ghost", panchayath_id="p1"),
        _agent("D", "supervisor", "A", panchayath_id="p2"),
        _agent("E", "supervisor", "F", panchayath_id="p1"),
        _agent("F", "supervisor", "E", panchayath_id="p1"),
    ]
    kinds = {(i["agent_id"], i["kind"]) for i in find_hierarchy_issues(agents)}
    assert ("B", "role_order") in kinds
    assert ("C", "missing_superior") in kinds
    assert ("D", "panchayath_mismatch") in kinds
    assert ("E", "cycle") in kinds
    assert ("F", "cycle") in kinds
    assert not any(agent_id == "A" for agent_id, _ in kinds)

def test_self_reference_is_a_cycle():
    kinds = {(i["agent_id"], i["kind"]) for i in find_hierarchy_issues([_agent("A", "supervisor", "A")])}
    assert ("A", "cycle") in kinds


def test_search_by_name_phone_and_role():
    agents = [
        _agent("1", "coordinator", name="Anitha Kumari", phone_number="9847000001"),
        _agent("2", "group_leader", name="Biju", phone_number="9847000002"),
        _agent("3", "pro", name="Chandran", phone_number="9746000003"),
    ]
    assert [a["id"] for a in search_agents(agents, "anitha")] == ["1"]
    assert [a["id"] for a in search_agents(agents, "9746")] == ["3"]
    assert [a["id"] for a in search_agents(agents, "group leader")] == ["2"]
    assert len(search_agents(agents, "  ")) == 3
    assert len(search_agents(agents, None)) == 3


def test_falsy_ids_are_still_links():
    roots = build_hierarchy([
        {"id": 0, "role": "coordinator", "superior_id": None},
        {"id": 1, "role": "supervisor", "superior_id": 0},
    ])
    assert _shape(roots) == [(0, [(1, [])])]

def test_blank_superior_means_root():
    roots = build_hierarchy([_agent("A", "coordinator", ""), _agent("B", "supervisor", "")])
    assert [n.id for n in roots] == ["A", "B"]

def test_issues_follow_falsy_ids():
    agents = [
        {"id": 0, "role": "coordinator", "superior_id": None},
        {"id": 1, "role": "pro", "superior_id": 0},
    ]
    kinds = {(i["agent_id"], i["kind"]) for i in find_hierarchy_issues(agents)}
    assert kinds == {(1, "role_order")}
