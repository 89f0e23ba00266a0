from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, List, NamedTuple, Optional, Tuple

from brutalize.domains.grid import Direction, Grid, Vec2
from brutalize.domains.parse_error import ParseError, numbered_lines, parse_ints, parse_word, read_board
from brutalize.heuristics.manhattan import manhattan
from brutalize.search.state import Indeterminate, State, Success

DIRECTIONS = (Direction.RIGHT, Direction.UP, Direction.LEFT, Direction.DOWN)


class Tile(Enum):
    EMPTY = " "
    GROUND = "."
    GRILL = "#"
    WALL = "X"


LEGEND = {tile.value: tile for tile in Tile}


class Status(Enum):
    SOLVED = "solved"
    UNSOLVED = "unsolved"
    FAILED = "failed"


class Cooked(IntEnum):
    UNCOOKED = 0
    COOKED = 1
    BURNED = 2


class Orientation(IntEnum):
    HORIZONTAL = 0
    VERTICAL = 1


# pushes in these directions turn the sausage over
_ROLLS = {
    Orientation.HORIZONTAL: (Direction.UP, Direction.DOWN),
    Orientation.VERTICAL: (Direction.LEFT, Direction.RIGHT),
}

RAW = (Cooked.UNCOOKED,) * 4


@dataclass(frozen=True, order=True)
class Sausage:
    """
    Two cells long, from `position` to the right or upwards. `cooked` holds
    the top of both halves then the bottom of both halves.
    """
    position: Vec2
    orientation: Orientation
    cooked: Tuple[Cooked, Cooked, Cooked, Cooked] = RAW

    @property
    def end(self) -> Vec2:
        if self.orientation is Orientation.HORIZONTAL:
            return self.position + Direction.RIGHT.vector
        return self.position + Direction.UP.vector

    def overlap(self, p: Vec2) -> bool:
        return p == self.position or p == self.end

    def overlaps(self, other: "Sausage") -> bool:
        return self.overlap(other.position) or self.overlap(other.end)

    def pushed(self, direction: Direction, data: "SausageData", can_roll: bool) -> "Sausage":
        top_a, top_b, bottom_a, bottom_b = self.cooked
        if can_roll and direction in _ROLLS[self.orientation]:
            top_a, top_b, bottom_a, bottom_b = bottom_a, bottom_b, top_a, top_b
        position = self.position + direction.vector
        moved = Sausage(position, self.orientation)
        if data.grid[moved.position] is Tile.GRILL:
            bottom_a = _cook(bottom_a)
        if data.grid[moved.end] is Tile.GRILL:
            bottom_b = _cook(bottom_b)
        return Sausage(position, self.orientation, (top_a, top_b, bottom_a, bottom_b))

    def in_wall(self, data: "SausageData") -> bool:
        return data.grid[self.position] is Tile.WALL or data.grid[self.end] is Tile.WALL


def _cook(side: Cooked) -> Cooked:
    return Cooked.COOKED if side == Cooked.UNCOOKED else Cooked.BURNED


class Player(NamedTuple):
    position: Vec2
    orientation: Direction

    @property
    def fork(self) -> Vec2:
        return self.position + self.orientation.vector


@dataclass(frozen=True)
class SausageData:
    grid: Grid
    goal: Player

    def status_of(self, state: "SausageState") -> Status:
        if self.grid[state.player.position] is Tile.EMPTY:
            return Status.FAILED

        solved = True
        for sausage in state.sausages:
            # a sausage on the fork is held up even over empty tiles
            if (not sausage.overlap(state.player.fork)
                    and self.grid[sausage.position] is Tile.EMPTY
                    and self.grid[sausage.end] is Tile.EMPTY):
                return Status.FAILED
            for side in sausage.cooked:
                if side == Cooked.BURNED:
                    return Status.FAILED
                if side == Cooked.UNCOOKED:
                    solved = False

        if state.player != self.goal:
            solved = False
        return Status.SOLVED if solved else Status.UNSOLVED


def _push(sausages: List[Sausage], index: int, direction: Direction, data: SausageData, can_roll: bool) -> bool:
    """Move sausages[index] and everything it bumps into; False if one ends in a wall."""
    sausages[index] = sausages[index].pushed(direction, data, can_roll)
    if sausages[index].in_wall(data):
        return False
    for i in range(len(sausages)):
        if i != index and sausages[index].overlaps(sausages[i]):
            if not _push(sausages, i, direction, data, True):
                return False
    return True


def _strafe(data: SausageData, player: Player, sausages: List[Sausage], direction: Direction) -> Optional[Player]:
    """Step forwards, backwards or, with a sausage on the fork, sideways."""
    old_fork = player.fork
    forward = direction.vector
    position = player.position + forward
    fork = position + player.orientation.vector
    if data.grid[position] is Tile.WALL or data.grid[fork] is Tile.WALL:
        return None

    impaled = None
    for i in range(len(sausages)):
        if sausages[i].overlap(old_fork):
            # an impaled sausage moves with the player without rolling
            before = list(sausages)
            if _push(sausages, i, direction, data, False):
                impaled = i
            elif direction != player.orientation.reverse():
                return None
            else:
                sausages[:] = before
                impaled = None
        elif sausages[i].overlap(position):
            if not _push(sausages, i, direction, data, True):
                return None
        elif sausages[i].overlap(fork):
            before = list(sausages)
            if not _push(sausages, i, direction, data, True):
                if direction != player.orientation:
                    return None
                # the fork goes into the sausage it cannot shove
                sausages[:] = before
                impaled = i

    if data.grid[position] is Tile.GRILL:
        position = position - forward
        if impaled is not None:
            before = list(sausages)
            if not _push(sausages, impaled, direction.reverse(), data, False):
                sausages[:] = before

    return Player(position, player.orientation)


def _rotate(data: SausageData, player: Player, sausages: List[Sausage], direction: Direction) -> Optional[Player]:
    """Swing the fork a quarter turn to face `direction`."""
    mid = player.position + direction.vector
    top = mid + player.orientation.vector
    if data.grid[top] is Tile.WALL:
        return None

    hit = next((i for i, s in enumerate(sausages) if s.overlap(top)), None)
    if hit is not None and not _push(sausages, hit, direction, data, True):
        return None

    # a wall at mid stops the turn halfway, after the top sausage moved
    if data.grid[mid] is Tile.WALL:
        return player

    hit = next((i for i, s in enumerate(sausages) if s.overlap(mid)), None)
    if hit is not None:
        before = list(sausages)
        if not _push(sausages, hit, player.orientation.reverse(), data, True):
            sausages[:] = before
            return player

    return Player(player.position, direction)


@dataclass(frozen=True)
class SausageState(State):
    """
    A player with a fork, pushing, rolling and carrying sausages over grills.
    Sausages are kept sorted so that equal boards compare equal.
    """
    player: Player
    sausages: Tuple[Sausage, ...]

    def __post_init__(self):
        object.__setattr__(self, "sausages", tuple(sorted(self.sausages)))

    def move(self, data: SausageData, direction: Direction) -> Optional["SausageState"]:
        """The state after pressing `direction`, or None if nothing can move that way."""
        sausages = list(self.sausages)
        impaled = any(s.overlap(self.player.fork) for s in self.sausages)
        if impaled or direction in (self.player.orientation, self.player.orientation.reverse()):
            player = _strafe(data, self.player, sausages, direction)
        else:
            player = _rotate(data, self.player, sausages, direction)
        if player is None:
            return None
        return SausageState(player, tuple(sausages))

    def transitions(self, data: SausageData):
        out = []
        for direction in DIRECTIONS:
            state = self.move(data, direction)
            if state is None:
                continue
            status = data.status_of(state)
            if status is Status.SOLVED:
                out.append((direction, Success()))
            elif status is Status.UNSOLVED:
                out.append((direction, Indeterminate(state)))
        return out

    def heuristic(self, data: SausageData) -> int:
        # queued states are unsolved, so at least one move remains
        return max(1, manhattan(self.player.position, data.goal.position))


ORIENTATIONS = {o.name.lower(): o for o in Orientation}
FACINGS = {d.name.lower(): d for d in Direction}


def _read_sausages(lines, line_number: int, count: int) -> List[Sausage]:
    sausages = []
    for i in range(count):
        try:
            line_number, line = next(lines)
        except StopIteration:
            raise ParseError("unexpected_end_of_sausages",
                             f"expected {count} sausages, found {i}", line_number) from None
        pieces = line.split(" ")
        x, y = parse_ints(pieces, ["x", "y"], "sausage", line_number)
        orientation = parse_word(pieces[2:], ORIENTATIONS, "sausage", "orientation", line_number)
        sausages.append(Sausage(Vec2(x, y), orientation))
    return sausages


def parse(text: str) -> Tuple[SausageState, SausageData]:
    """
    Line commands, in any order, each given once:

        puzzle W H      followed by H rows, top row first
                        (' ' empty, '.' ground, '#' grill, 'X' wall)
        start X Y D     where the player starts and must finish, facing
                        right, up, left or down
        sausages N      followed by N lines "X Y horizontal|vertical"
    """
    found: Dict[str, object] = {}
    lines = numbered_lines(text)
    for line_number, line in lines:
        if not line.strip():
            continue
        pieces = line.split(" ")
        command = pieces[0]
        if command not in ("puzzle", "start", "sausages"):
            raise ParseError("invalid_command", f"invalid command {command!r}", line_number)
        if command in found:
            raise ParseError(f"{command}_already_defined", f"{command} is defined twice", line_number)

        if command == "puzzle":
            width, height = parse_ints(pieces[1:], ["width", "height"], "puzzle", line_number)
            if width < 0 or height < 0:
                raise ParseError("invalid_puzzle_size", f"negative puzzle size {width} x {height}", line_number)
            found[command] = (width, height, read_board(lines, line_number, width, height, LEGEND))
        elif command == "start":
            x, y = parse_ints(pieces[1:], ["x", "y"], "start", line_number)
            facing = parse_word(pieces[3:], FACINGS, "start", "orientation", line_number)
            found[command] = Player(Vec2(x, y), facing)
        else:
            (count,) = parse_ints(pieces[1:], ["count"], "sausages", line_number)
            if count < 0:
                raise ParseError("invalid_sausages_count", f"negative sausages count {count}", line_number)
            found[command] = _read_sausages(lines, line_number, count)

    for command in ("puzzle", "start", "sausages"):
        if command not in found:
            raise ParseError(f"missing_{command}", f"no {command} definition")

    width, height, tiles = found["puzzle"]
    data = SausageData(Grid(width, height, tiles, outside=Tile.EMPTY), found["start"])
    return SausageState(found["start"], tuple(found["sausages"])), data


def display(state: SausageState, data: SausageData) -> str:
    """The board with a one-tile margin, since sausages may hang over the edge."""
    glyphs = {tile: tile.value for tile in Tile}
    overlays = []
    for sausage in state.sausages:
        overlays += [(sausage.position, "S"), (sausage.end, "s")]
    overlays += [(state.player.position, "P"), (state.player.fork, "F")]
    return data.grid.render(glyphs, overlays, margin=1)
