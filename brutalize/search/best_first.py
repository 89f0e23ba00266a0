from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set, Tuple
import heapq
from time import perf_counter

from brutalize.search.state import State, Success

ROOT = 0  # history index of the initial state


@dataclass(eq=False)
class Node:
    estimate: Any
    distance: int
    state: State
    index: int

    # Estimate only: equal estimates are left to the heap.
    def __lt__(self, other: "Node") -> bool:
        return self.estimate < other.estimate


def reconstruct_path(history: List[Tuple[int, Any]], index: int, last_action: Any) -> List[Any]:
    """
    Walk the (parent index, action) chain from `index` back to ROOT.
    Consumes `history`: everything at or after the cursor is dropped on the way.
    """
    actions = [last_action]
    while index != ROOT:
        parent, action = history[index - 1]
        del history[index - 1:]
        actions.append(action)
        index = parent
    actions.reverse()
    return actions


def best_first(initial_state: State, data: Any) -> Dict[str, Any]:
    """
    Best-first (A*) search with instrumentation.

    States are marked visited when popped, so a state can sit in the queue
    several times; only its lowest-estimate copy is expanded. The first
    success seen while expanding in estimate order is returned, which is
    optimal when the heuristic is admissible and consistent.
    """
    t0 = perf_counter()

    visited: Set[State] = set()
    history: List[Tuple[int, Any]] = []
    open_heap: List[Node] = []

    expanded = 0
    generated = 0
    duplicates = 0
    peak_open = 0

    def result(path: Optional[List[Any]], termination: str) -> Dict[str, Any]:
        return {
            "path": path,
            "g": len(path) if path is not None else None,
            "expanded": expanded,
            "generated": generated,
            "duplicates": duplicates,
            "peak_open": peak_open,
            "peak_closed": len(visited),
            "time": perf_counter() - t0,
            "algorithm": "best-first",
            "termination": termination,
        }

    # Seed: the root is always expanded.
    for action, outcome in initial_state.transitions(data):
        generated += 1
        if isinstance(outcome, Success):
            return result([action], "ok")
        history.append((ROOT, action))
        child = outcome.state
        heapq.heappush(open_heap, Node(child.heuristic(data) + 1, 1, child, len(history)))
    visited.add(initial_state)
    expanded += 1

    while open_heap:
        peak_open = max(peak_open, len(open_heap))
        node = heapq.heappop(open_heap)
        if node.state in visited:
            duplicates += 1
            continue

        visited.add(node.state)
        expanded += 1
        distance = node.distance + 1

        for action, outcome in node.state.transitions(data):
            generated += 1
            if isinstance(outcome, Success):
                return result(reconstruct_path(history, node.index, action), "ok")
            history.append((node.index, action))
            child = outcome.state
            heapq.heappush(open_heap, Node(child.heuristic(data) + distance, distance, child, len(history)))

    return result(None, "exhausted")


def solve(initial_state: State, data: Any) -> Optional[List[Any]]:
    """Shortest action sequence from `initial_state` to a success, or None if none exists."""
    return best_first(initial_state, data)["path"]
