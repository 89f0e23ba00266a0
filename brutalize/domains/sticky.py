from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from brutalize.domains.grid import Direction, Grid, Vec2
from brutalize.domains.parse_error import ParseError, numbered_lines, parse_ints, read_board
from brutalize.heuristics.manhattan import manhattan
from brutalize.search.state import Indeterminate, State, Success

DIRECTIONS = (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT)


class Tile(Enum):
    EMPTY = "_"
    GROUND = "."


LEGEND = {tile.value: tile for tile in Tile}


@dataclass(frozen=True)
class StickyData:
    grid: Grid
    goal: Vec2


@dataclass(frozen=True)
class StickyState(State):
    """
    The player drags along any wall directly behind it and pushes the chest.
    Walls are interchangeable and kept sorted.
    """
    player: Vec2
    chest: Vec2
    walls: Tuple[Vec2, ...]

    def __post_init__(self):
        object.__setattr__(self, "walls", tuple(sorted(self.walls)))

    def move(self, data: StickyData, direction: Direction) -> Optional["StickyState"]:
        """The state after stepping in `direction`, or None if the step is illegal."""
        forward = direction.vector
        player = self.player + forward
        if data.grid[player] is Tile.EMPTY:
            return None
        if player in self.walls:
            return None

        behind = self.player + direction.reverse().vector
        walls = tuple(self.player if w == behind else w for w in self.walls)

        chest = self.chest
        if chest == player:
            beyond = chest + forward
            if data.grid[beyond] is not Tile.GROUND or beyond in walls:
                return None
            chest = beyond

        return StickyState(player, chest, walls)

    def transitions(self, data: StickyData):
        out = []
        for direction in DIRECTIONS:
            state = self.move(data, direction)
            if state is None:
                continue
            if state.chest == data.goal:
                out.append((direction, Success()))
            else:
                out.append((direction, Indeterminate(state)))
        return out

    def heuristic(self, data: StickyData) -> int:
        return manhattan(self.chest, data.goal)


def _read_walls(lines, line_number: int, count: int) -> List[Vec2]:
    walls = []
    for i in range(count):
        try:
            line_number, line = next(lines)
        except StopIteration:
            raise ParseError("unexpected_end_of_walls",
                             f"expected {count} walls, found {i}", line_number) from None
        x, y = parse_ints(line.split(" "), ["x", "y"], "wall", line_number)
        walls.append(Vec2(x, y))
    return walls


def parse(text: str) -> Tuple[StickyState, StickyData]:
    """
    Line commands, in any order, each given once:

        puzzle W H      followed by H rows, top row first ('_' empty, '.' ground)
        start X Y       player position
        end X Y         goal for the chest
        chest X Y
        walls N         followed by N lines "X Y"
    """
    found: Dict[str, object] = {}
    lines = numbered_lines(text)
    for line_number, line in lines:
        if not line.strip():
            continue
        pieces = line.split(" ")
        command = pieces[0]
        if command not in ("puzzle", "start", "end", "chest", "walls"):
            raise ParseError("invalid_command", f"invalid command {command!r}", line_number)
        if command in found:
            raise ParseError(f"{command}_already_defined", f"{command} is defined twice", line_number)

        if command == "puzzle":
            width, height = parse_ints(pieces[1:], ["width", "height"], "puzzle", line_number)
            if width < 0 or height < 0:
                raise ParseError("invalid_puzzle_size", f"negative puzzle size {width} x {height}", line_number)
            found[command] = (width, height, read_board(lines, line_number, width, height, LEGEND))
        elif command == "walls":
            (count,) = parse_ints(pieces[1:], ["count"], "walls", line_number)
            if count < 0:
                raise ParseError("invalid_walls_count", f"negative walls count {count}", line_number)
            found[command] = _read_walls(lines, line_number, count)
        else:
            x, y = parse_ints(pieces[1:], ["x", "y"], command, line_number)
            found[command] = Vec2(x, y)

    for command in ("puzzle", "start", "end", "chest", "walls"):
        if command not in found:
            raise ParseError(f"missing_{command}", f"no {command} definition")

    width, height, tiles = found["puzzle"]
    grid = Grid(width, height, tiles, outside=Tile.EMPTY)
    state = StickyState(found["start"], found["chest"], tuple(found["walls"]))
    return state, StickyData(grid, found["end"])


def display(state: StickyState, data: StickyData) -> str:
    glyphs = {Tile.EMPTY: " ", Tile.GROUND: "."}
    overlays = [(data.goal, "*")]
    overlays += [(w, "#") for w in state.walls]
    overlays += [(state.chest, "X"), (state.player, "P")]
    return data.grid.render(glyphs, overlays)
