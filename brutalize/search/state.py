from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Iterable, Tuple, TypeVar, Union

S = TypeVar("S", bound="State")


@dataclass(frozen=True)
class Indeterminate(Generic[S]):
    """The move is legal and leads to `state`, which is not a goal."""
    state: S


@dataclass(frozen=True)
class Success:
    """The move is legal and solves the puzzle."""


Transition = Union[Indeterminate, Success]


class State(ABC):
    """
    Contract a puzzle domain implements to be searched.

    Subclasses are immutable values: equality and hashing must describe the
    configuration only, so interchangeable pieces are kept in a canonical
    (sorted) order. `data` is the immutable puzzle definition shared by every
    state of one run.

    transitions(data) -> [(action, Indeterminate(next) | Success())]
        every legal move, in a stable order; illegal moves are left out.
    heuristic(data) -> value
        estimate of the remaining moves; must support `<` and `value + int`.
        0 is always valid and turns the search into uniform-cost search.
    """

    @abstractmethod
    def transitions(self, data: Any) -> Iterable[Tuple[Any, Transition]]:
        ...

    @abstractmethod
    def heuristic(self, data: Any) -> Any:
        ...
