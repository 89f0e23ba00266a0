from __future__ import annotations
from typing import Dict, Iterator, List, Optional, Tuple


class ParseError(Exception):
    """
    Malformed puzzle text.

    `kind` names the failure (e.g. "uneven_rows"); `line` and `column` are
    1-based and None when the error is not tied to a position.
    """
    def __init__(self, kind: str, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.line = line
        self.column = column

    def __str__(self) -> str:
        where = []
        if self.line is not None:
            where.append(f"line {self.line}")
        if self.column is not None:
            where.append(f"column {self.column}")
        return f"{', '.join(where)}: {self.message}" if where else self.message


def numbered_lines(text: str) -> Iterator[Tuple[int, str]]:
    return enumerate(text.splitlines(), start=1)


def read_board(lines, line_number: int, width: int, height: int, legend: Dict[str, object]) -> list:
    """
    Read `height` rows of exactly `width` characters from `lines`, top row
    first, into a row-major list starting at the bottom row.
    """
    tiles: list = [None] * (width * height)
    for y in range(height - 1, -1, -1):
        found = height - 1 - y
        try:
            line_number, line = next(lines)
        except StopIteration:
            raise ParseError("unexpected_end_of_puzzle",
                             f"expected {height} board rows, found {found}", line_number) from None
        if len(line) != width:
            raise ParseError("uneven_rows", f"row is {len(line)} wide, expected {width}", line_number)
        for x, ch in enumerate(line):
            if ch not in legend:
                raise ParseError("unexpected_character", f"unexpected character {ch!r}", line_number, x + 1)
            tiles[x + y * width] = legend[ch]
    return tiles


def parse_word(pieces: List[str], choices: Dict[str, object], kind: str, name: str, line: int):
    """Look up `pieces[0]` in `choices`, e.g. "right" for an orientation."""
    if not pieces or pieces[0] == "":
        raise ParseError(f"missing_{kind}_{name}", f"missing {kind} {name}", line)
    if pieces[0] not in choices:
        raise ParseError(f"invalid_{kind}_{name}",
                         f"invalid {kind} {name} {pieces[0]!r}, expected one of {', '.join(choices)}", line)
    return choices[pieces[0]]


def parse_ints(pieces: List[str], names: List[str], kind: str, line: int) -> List[int]:
    """Read one integer per name from `pieces`, e.g. names=["x", "y"] for a coordinate."""
    out = []
    for i, name in enumerate(names):
        if i >= len(pieces) or pieces[i] == "":
            raise ParseError(f"missing_{kind}_{name}", f"missing {kind} {name}", line)
        try:
            out.append(int(pieces[i]))
        except ValueError:
            raise ParseError(f"invalid_{kind}_{name}",
                             f"invalid {kind} {name} {pieces[i]!r}", line) from None
    return out
