from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple, List, Dict
import random

from brutalize.domains.grid import Direction
from brutalize.heuristics.linear_conflict import linear_conflict
from brutalize.heuristics.manhattan import tile_manhattan
from brutalize.search.state import Indeterminate, State, Success

Tiles = Tuple[int, ...]

HEURISTICS = ("manhattan", "linear_conflict", "zero")

# Blank moves as (direction, row delta, col delta); rows count from the top.
_MOVES = (
    (Direction.UP, -1, 0),
    (Direction.DOWN, 1, 0),
    (Direction.LEFT, 0, -1),
    (Direction.RIGHT, 0, 1),
)


class SlidingPuzzle:
    """
    Generic R×C sliding-tile puzzle (0 is the blank).
    Works for 3×3 (8-puzzle), 3×4, 4×4 (15-puzzle), etc.
    """
    def __init__(self, rows: int, cols: int = None, heuristic: str = "manhattan"):
        cols = rows if cols is None else cols
        if rows < 2 or cols < 2:
            raise ValueError(f"board must be at least 2x2, got {rows}x{cols}")
        if heuristic not in HEURISTICS:
            raise ValueError(f"unknown heuristic {heuristic!r}")
        self.R = rows
        self.C = cols
        self.size = rows * cols
        self.heuristic = heuristic
        self.GOAL: Tiles = tuple(list(range(1, self.size)) + [0])

        # Precompute blank moves per index
        self._nei: Dict[int, Tuple[Tuple[Direction, int], ...]] = {}
        for i in range(self.size):
            r, c = divmod(i, cols)
            moves = []
            for d, dr, dc in _MOVES:
                if 0 <= r + dr < rows and 0 <= c + dc < cols:
                    moves.append((d, i + dr * cols + dc))
            self._nei[i] = tuple(moves)

        # Goal positions for each tile
        self._goal_pos: Dict[int, Tuple[int, int]] = {}
        for t in range(1, self.size):
            idx = t - 1
            self._goal_pos[t] = (idx // cols, idx % cols)

    def initial(self, tiles) -> "TileState":
        tiles = tuple(tiles)
        if sorted(tiles) != list(range(self.size)):
            raise ValueError(f"expected a permutation of 0..{self.size - 1}, got {tiles}")
        return TileState(tiles)

    # ---------- Core dynamics ----------
    def neighbors(self, s: Tiles) -> List[Tuple[Direction, Tiles]]:
        z = s.index(0)
        out: List[Tuple[Direction, Tiles]] = []
        for d, j in self._nei[z]:
            lst = list(s)
            lst[z], lst[j] = lst[j], lst[z]
            out.append((d, tuple(lst)))
        return out

    # ---------- Instance generation ----------
    def scramble(self, depth: int, seed: int) -> Tiles:
        """Depth-limited random walk from GOAL with no immediate backtrack."""
        rng = random.Random(seed)
        s = self.GOAL
        last_blank = None
        for _ in range(depth):
            z = s.index(0)
            cand = [j for _, j in self._nei[z]]
            if last_blank in cand and len(cand) > 1:
                cand.remove(last_blank)
            j = rng.choice(cand)
            lst = list(s)
            lst[z], lst[j] = lst[j], lst[z]
            last_blank = z
            s = tuple(lst)
        return s

    def is_solvable(self, s: Tiles) -> bool:
        """Solvability rules:
           - C odd: inversions must be even
           - C even: (inversions + blank_row_from_bottom) must be ODD
             (row count is 1-based from the bottom)
        """
        arr = [x for x in s if x != 0]
        inv = 0
        for i in range(len(arr)):
            for j in range(i + 1, len(arr)):
                if arr[i] > arr[j]:
                    inv += 1
        if self.C % 2 == 1:
            return (inv % 2) == 0
        # even C
        blank_row_from_bottom = self.R - s.index(0) // self.C  # 1-based from bottom
        # Goal has inv=0 and blank_row_from_bottom=1 (odd) -> solvable
        return ((inv + blank_row_from_bottom) % 2) == 1

    # ---------- Heuristics ----------
    def manhattan(self, s: Tiles) -> int:
        return tile_manhattan(s, self.C, self._goal_pos)

    def linear_conflict(self, s: Tiles) -> int:
        return linear_conflict(s, self.R, self.C, self._goal_pos)

    def estimate(self, s: Tiles) -> int:
        if self.heuristic == "manhattan":
            return self.manhattan(s)
        if self.heuristic == "linear_conflict":
            return self.linear_conflict(s)
        return 0


@dataclass(frozen=True)
class TileState(State):
    tiles: Tiles

    def transitions(self, data: SlidingPuzzle):
        out = []
        for d, s2 in data.neighbors(self.tiles):
            if s2 == data.GOAL:
                out.append((d, Success()))
            else:
                out.append((d, Indeterminate(TileState(s2))))
        return out

    def heuristic(self, data: SlidingPuzzle) -> int:
        return data.estimate(self.tiles)
