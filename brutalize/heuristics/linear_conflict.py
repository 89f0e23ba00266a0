from typing import Dict, Tuple

from brutalize.heuristics.manhattan import tile_manhattan

Tiles = Tuple[int, ...]


def _conflicts(line, axis: int, other: int, goal_pos) -> int:
    # line: tiles of one row (axis=0) or column (axis=1) at index `other`
    tiles = [t for t in line if t != 0 and goal_pos[t][axis] == other]
    extra = 0
    for i in range(len(tiles)):
        gi = goal_pos[tiles[i]][1 - axis]
        for j in range(i + 1, len(tiles)):
            if gi > goal_pos[tiles[j]][1 - axis]:
                extra += 2
    return extra


def linear_conflict(s: Tiles, rows: int, cols: int, goal_pos: Dict[int, Tuple[int, int]]) -> int:
    """Manhattan + 2 per pair of linearly-conflicting tiles (rows & cols)."""
    m = tile_manhattan(s, cols, goal_pos)
    for r in range(rows):
        m += _conflicts(s[r * cols:(r + 1) * cols], 0, r, goal_pos)
    for c in range(cols):
        m += _conflicts([s[c + r * cols] for r in range(rows)], 1, c, goal_pos)
    return m
