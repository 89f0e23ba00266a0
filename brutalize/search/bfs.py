from collections import deque
from time import perf_counter
from typing import Any, Dict, List, Optional, Set, Tuple

from brutalize.search.state import State, Success


def bfs(start: State, data: Any):
    """Uninformed breadth-first search; the first success found has minimum length."""
    t0 = perf_counter()
    q = deque([start])
    parent: Dict[State, Optional[Tuple[State, Any]]] = {start: None}
    expanded = generated = 0
    seen: Set[State] = {start}
    peak = 1
    while q:
        peak = max(peak, len(q))
        s = q.popleft()
        expanded += 1
        for action, outcome in s.transitions(data):
            generated += 1
            if isinstance(outcome, Success):
                # reconstruct
                path: List[Any] = [action]
                link = parent[s]
                while link is not None:
                    s, a = link
                    path.append(a); link = parent[s]
                path.reverse()
                return {"path": path, "g": len(path), "expanded": expanded, "generated": generated,
                        "peak_open": peak, "peak_closed": len(seen),
                        "time": perf_counter()-t0, "algorithm": "BFS", "termination": "ok"}
            s2 = outcome.state
            if s2 in seen: continue
            seen.add(s2); parent[s2] = (s, action); q.append(s2)
    return {"path": None, "g": None, "expanded": expanded, "generated": generated,
            "peak_open": peak, "peak_closed": len(seen),
            "time": perf_counter()-t0, "algorithm": "BFS", "termination": "exhausted"}
