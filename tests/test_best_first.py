"""
Engine tests on small explicit graphs.

GraphState wraps a node name; GraphData holds the edges, the goal nodes and
an optional heuristic table. Moving onto a goal node is a Success.
"""
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Dict, FrozenSet, List, Tuple

import pytest

from brutalize.search.best_first import ROOT, Node, best_first, reconstruct_path, solve
from brutalize.search.bfs import bfs
from brutalize.search.replay import IllegalMoveError, replay
from brutalize.search.state import Indeterminate, State, Success


@dataclass(frozen=True)
class GraphData:
    edges: Dict[str, List[Tuple[str, str]]]
    goals: FrozenSet[str]
    h: Dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class GraphState(State):
    node: str

    def transitions(self, data: GraphData):
        out = []
        for action, target in data.edges.get(self.node, []):
            if target in data.goals:
                out.append((action, Success()))
            else:
                out.append((action, Indeterminate(GraphState(target))))
        return out

    def heuristic(self, data: GraphData):
        return data.h.get(self.node, 0)


def graph(edges, goals=("G",), h=None):
    return GraphData(edges, frozenset(goals), h or {})


# ---------- seeding ----------

def test_first_level_success_returns_single_action():
    data = graph({"S": [("x", "A"), ("y", "G")], "A": [("z", "G")]})
    res = best_first(GraphState("S"), data)
    assert res["path"] == ["y"]
    assert res["g"] == 1
    assert res["termination"] == "ok"


def test_root_without_moves_is_unsolvable():
    res = best_first(GraphState("S"), graph({}))
    assert res["path"] is None
    assert res["termination"] == "exhausted"
    assert res["expanded"] == 1


def test_root_is_not_expanded_twice():
    data = graph({"S": [("go", "A")], "A": [("back", "S")]})
    res = best_first(GraphState("S"), data)
    assert res["path"] is None
    assert res["expanded"] == 2
    assert res["generated"] == 2
    assert res["duplicates"] == 1


# ---------- main loop ----------

def test_finds_shortest_path_with_zero_heuristic():
    data = graph({
        "S": [("a1", "A"), ("b1", "B")],
        "A": [("a2", "C")],
        "C": [("a3", "G")],
        "B": [("b2", "G")],
    })
    assert solve(GraphState("S"), data) == ["b1", "b2"]


def test_heuristic_steers_expansion_order():
    # Long corridor on the left, short one on the right; h is exact.
    edges = {"S": [("left", "L1"), ("right", "R1")]}
    for i in range(1, 6):
        edges[f"L{i}"] = [("step", f"L{i + 1}")]
    edges["L6"] = [("step", "G")]
    edges["R1"] = [("step", "R2")]
    edges["R2"] = [("step", "G")]
    h = {f"L{i}": 7 - i for i in range(1, 7)}
    h.update({"R1": 2, "R2": 1})
    res = best_first(GraphState("S"), graph(edges, h=h))
    assert res["path"] == ["right", "step", "step"]
    # only the right corridor is expanded after the root
    assert res["expanded"] == 3


def test_duplicate_pushes_are_discarded_at_pop():
    # Diamond: D is reached from both B and C, and is a dead end.
    data = graph({
        "S": [("b", "B"), ("c", "C")],
        "B": [("d", "D")],
        "C": [("d", "D")],
    })
    res = best_first(GraphState("S"), data)
    assert res["path"] is None
    assert res["duplicates"] == 1
    assert res["expanded"] == 4  # S, B, C, D
    assert res["peak_closed"] == 4


def test_cycle_without_goal_is_exhausted():
    data = graph({
        "S": [("n", "A")],
        "A": [("n", "B"), ("s", "S")],
        "B": [("n", "C"), ("s", "A")],
        "C": [("n", "S"), ("s", "B")],
    })
    assert solve(GraphState("S"), data) is None


def test_unreachable_goal_is_exhausted():
    data = graph({"S": [("a", "A")], "X": [("g", "G")]})
    assert solve(GraphState("S"), data) is None


def test_heuristic_values_need_only_order_and_int_addition():
    data = graph(
        {"S": [("a", "A"), ("b", "B")], "A": [("g", "G")], "B": [("c", "C")], "C": [("g", "G")]},
        h={"A": Fraction(1, 2), "B": Fraction(3, 2), "C": Fraction(1, 2)},
    )
    assert solve(GraphState("S"), data) == ["a", "g"]


def test_same_input_gives_same_length():
    data = graph({
        "S": [("a", "A"), ("b", "B"), ("c", "C")],
        "A": [("x", "D")], "B": [("x", "D")], "C": [("x", "E")],
        "D": [("y", "G")], "E": [("y", "F")], "F": [("z", "G")],
    })
    lengths = {len(solve(GraphState("S"), data)) for _ in range(5)}
    assert lengths == {3}


def test_matches_breadth_first_length():
    # 5x5 open grid from a corner to the opposite corner: 8 moves.
    edges = {}
    for x in range(5):
        for y in range(5):
            moves = []
            for name, dx, dy in (("R", 1, 0), ("U", 0, 1), ("L", -1, 0), ("D", 0, -1)):
                nx, ny = x + dx, y + dy
                if 0 <= nx < 5 and 0 <= ny < 5:
                    moves.append((name, "G" if (nx, ny) == (4, 4) else f"{nx},{ny}"))
            edges[f"{x},{y}"] = moves
    h = {f"{x},{y}": (4 - x) + (4 - y) for x in range(5) for y in range(5)}
    data = graph(edges, h=h)

    res = best_first(GraphState("0,0"), data)
    ref = bfs(GraphState("0,0"), data)
    assert res["g"] == ref["g"] == 8
    assert ref["algorithm"] == "BFS"
    replay(GraphState("0,0"), data, res["path"])


# ---------- helpers ----------

def test_nodes_order_by_estimate_only():
    a = Node(1, 10, GraphState("A"), 1)
    b = Node(2, 0, GraphState("B"), 2)
    assert a < b
    assert not b < a
    assert not Node(2, 0, GraphState("C"), 3) < b


def test_reconstruct_path_walks_back_to_root():
    history = [(ROOT, "a"), (1, "b"), (2, "c")]
    assert reconstruct_path(history, 3, "d") == ["a", "b", "c", "d"]
    assert history == []


def test_reconstruct_path_skips_sibling_branches():
    history = [(ROOT, "a"), (ROOT, "b"), (2, "c")]
    assert reconstruct_path(history, 3, "d") == ["b", "c", "d"]
    assert history == [(ROOT, "a")]


def test_reconstruct_path_from_root():
    history = [(ROOT, "a")]
    assert reconstruct_path(history, ROOT, "z") == ["z"]
    assert history == [(ROOT, "a")]


def test_replay_rejects_illegal_and_unfinished_sequences():
    data = graph({"S": [("a", "A")], "A": [("b", "B"), ("g", "G")]})
    states = replay(GraphState("S"), data, ["a", "g"])
    assert states == [GraphState("S"), GraphState("A")]
    with pytest.raises(IllegalMoveError):
        replay(GraphState("S"), data, ["x"])
    with pytest.raises(IllegalMoveError):
        replay(GraphState("S"), data, ["a", "b"])
    with pytest.raises(IllegalMoveError):
        replay(GraphState("S"), data, ["a", "g", "a"])
