from typing import Dict, Tuple

from brutalize.domains.grid import Vec2

Tiles = Tuple[int, ...]


def manhattan(a: Vec2, b: Vec2) -> int:
    d = abs(a - b)
    return d.x + d.y


def tile_manhattan(s: Tiles, cols: int, goal_pos: Dict[int, Tuple[int, int]]) -> int:
    """Sum of Manhattan distances to goal positions (blank ignored)."""
    dist = 0
    for idx, tile in enumerate(s):
        if tile == 0:
            continue
        r, c = divmod(idx, cols)
        gr, gc = goal_pos[tile]
        dist += abs(r - gr) + abs(c - gc)
    return dist
