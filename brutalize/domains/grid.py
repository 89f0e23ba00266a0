from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, order=True)
class Vec2:
    x: int
    y: int

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __abs__(self) -> "Vec2":
        return Vec2(abs(self.x), abs(self.y))


class Direction(Enum):
    """Board moves; y grows upwards."""
    RIGHT = (1, 0)
    UP = (0, 1)
    LEFT = (-1, 0)
    DOWN = (0, -1)

    @property
    def vector(self) -> Vec2:
        return Vec2(*self.value)

    def reverse(self) -> "Direction":
        x, y = self.value
        return Direction((-x, -y))

    def __str__(self) -> str:
        return self.name.capitalize()


class Grid:
    """Rectangular tile map stored row-major from the bottom row up."""
    def __init__(self, width: int, height: int, tiles, outside):
        self.width = width
        self.height = height
        self.tiles = tuple(tiles)
        self.outside = outside
        assert len(self.tiles) == width * height

    def contains(self, p: Vec2) -> bool:
        return 0 <= p.x < self.width and 0 <= p.y < self.height

    def __getitem__(self, p: Vec2):
        if not self.contains(p):
            return self.outside
        return self.tiles[p.x + p.y * self.width]

    def render(self, glyphs, overlays, margin: int = 0) -> str:
        """
        Draw the map top row first. `glyphs` maps tile -> char; `overlays`
        is an iterable of (position, char) drawn in order over the tiles.
        `margin` extra cells of the outside tile are drawn around the map.
        """
        width = self.width + 2 * margin
        height = self.height + 2 * margin
        rows = [[glyphs[self[Vec2(x - margin, y - margin)]] for x in range(width)]
                for y in range(height)]
        for p, ch in overlays:
            x, y = p.x + margin, p.y + margin
            if 0 <= x < width and 0 <= y < height:
                rows[y][x] = ch
        return "\n".join("".join(row) for row in reversed(rows)) + "\n"
