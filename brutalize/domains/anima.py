from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, NamedTuple, Tuple

from brutalize.domains.grid import Direction, Grid, Vec2
from brutalize.domains.parse_error import ParseError, parse_ints
from brutalize.heuristics.manhattan import manhattan
from brutalize.search.state import Indeterminate, State, Success

DIRECTIONS = (Direction.RIGHT, Direction.UP, Direction.LEFT, Direction.DOWN)


class Color(IntEnum):
    RED = 0
    BLUE = 1


class Tile(Enum):
    PASSABLE = "."
    IMPASSABLE = " "


class Actor(NamedTuple):
    position: Vec2
    color: Color


class Goal(NamedTuple):
    position: Vec2
    color: Color


@dataclass(frozen=True)
class AnimaData:
    grid: Grid
    goals: Tuple[Goal, ...]

    def is_solved_by(self, state: "AnimaState") -> bool:
        actors = set(state.actors)
        return all(Actor(g.position, g.color) in actors for g in self.goals)


@dataclass(frozen=True)
class AnimaState(State):
    """
    Red actors move with the chosen direction, blue actors against it.
    Actors are kept sorted so that equal boards compare equal.
    """
    actors: Tuple[Actor, ...]

    def __post_init__(self):
        object.__setattr__(self, "actors", tuple(sorted(self.actors)))

    def move(self, data: AnimaData, direction: Direction) -> "AnimaState":
        step = direction.vector
        moved: List[Actor] = []
        for actor in self.actors:
            target = actor.position + step if actor.color is Color.RED else actor.position - step
            if data.grid[target] is Tile.PASSABLE:
                actor = actor._replace(position=target)
            moved.append(actor)

        # Actors that end up sharing a cell both stay where they were.
        done = False
        while not done:
            done = True
            for i in range(len(moved)):
                for j in range(i + 1, len(moved)):
                    if moved[i].position == moved[j].position:
                        moved[i] = self.actors[i]
                        moved[j] = self.actors[j]
                        done = False

        return AnimaState(tuple(moved))

    def transitions(self, data: AnimaData):
        out = []
        for direction in DIRECTIONS:
            state = self.move(data, direction)
            if data.is_solved_by(state):
                out.append((direction, Success()))
            else:
                out.append((direction, Indeterminate(state)))
        return out

    def heuristic(self, data: AnimaData) -> int:
        """
        Largest distance from a goal to its nearest actor, at least 1: a
        queued state is never solved, so one more move is always needed.
        """
        farthest = max(
            (min((manhattan(g.position, a.position) for a in self.actors), default=0)
             for g in data.goals),
            default=0,
        )
        return max(1, farthest)


_GOAL_CHARS = {"r": Color.RED, "b": Color.BLUE}
_ACTOR_CHARS = {"R": Color.RED, "B": Color.BLUE}


def parse(text: str) -> Tuple[AnimaState, AnimaData]:
    """
    Board rows first (top row first): '.' floor, ' ' wall, 'r'/'b' goal on floor.
    Then one empty line and one actor per line: "R x y" or "B x y".
    """
    lines = text.splitlines()
    if not lines:
        raise ParseError("no_rows", "puzzle has no rows")
    width = len(lines[0])
    try:
        height = lines.index("")
    except ValueError:
        raise ParseError("no_line_break_after_rows", "expected an empty line after the board rows") from None

    tiles = [Tile.IMPASSABLE] * (width * height)
    goals: List[Goal] = []
    for row, line in enumerate(lines[:height]):
        line_number = row + 1
        y = height - 1 - row
        if len(line) != width:
            raise ParseError("uneven_rows", f"row is {len(line)} wide, expected {width}", line_number)
        for x, ch in enumerate(line):
            if ch in _GOAL_CHARS:
                goals.append(Goal(Vec2(x, y), _GOAL_CHARS[ch]))
                tile = Tile.PASSABLE
            elif ch == ".":
                tile = Tile.PASSABLE
            elif ch == " ":
                tile = Tile.IMPASSABLE
            else:
                raise ParseError("unexpected_character", f"unexpected character {ch!r}", line_number, x + 1)
            tiles[x + y * width] = tile

    actors: List[Actor] = []
    for line_number, line in enumerate(lines[height + 1:], start=height + 2):
        if not line.strip():
            continue
        pieces = line.split(" ")
        if pieces[0] not in _ACTOR_CHARS:
            raise ParseError("invalid_actor_color", f"invalid actor color {pieces[0]!r}", line_number)
        x, y = parse_ints(pieces[1:], ["x", "y"], "actor", line_number)
        position = Vec2(x, y)
        if any(a.position == position for a in actors):
            raise ParseError("overlapping_actors", f"two actors at ({x}, {y})", line_number)
        actors.append(Actor(position, _ACTOR_CHARS[pieces[0]]))

    grid = Grid(width, height, tiles, outside=Tile.IMPASSABLE)
    return AnimaState(tuple(actors)), AnimaData(grid, tuple(goals))


def display(state: AnimaState, data: AnimaData) -> str:
    glyphs = {Tile.PASSABLE: ".", Tile.IMPASSABLE: " "}
    overlays = [(g.position, "r" if g.color is Color.RED else "b") for g in data.goals]
    overlays += [(a.position, "R" if a.color is Color.RED else "B") for a in state.actors]
    return data.grid.render(glyphs, overlays)
