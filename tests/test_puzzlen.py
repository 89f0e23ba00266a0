import pytest

from brutalize.domains.grid import Direction
from brutalize.domains.puzzlen import SlidingPuzzle, TileState
from brutalize.experiments.runner import make_unsolvable_variant
from brutalize.search.best_first import best_first, solve
from brutalize.search.bfs import bfs
from brutalize.search.state import Indeterminate, Success


def test_goal_and_blank_moves():
    dom = SlidingPuzzle(3)
    assert dom.GOAL == (1, 2, 3, 4, 5, 6, 7, 8, 0)
    moves = dom.neighbors(dom.GOAL)
    assert [d for d, _ in moves] == [Direction.UP, Direction.LEFT]
    assert moves[0][1] == (1, 2, 3, 4, 5, 0, 7, 8, 6)


def test_move_onto_goal_is_success():
    dom = SlidingPuzzle(3)
    state = dom.initial((1, 2, 3, 4, 5, 6, 7, 0, 8))
    outcomes = dict(state.transitions(dom))
    assert isinstance(outcomes[Direction.RIGHT], Success)
    assert isinstance(outcomes[Direction.UP], Indeterminate)
    assert solve(state, dom) == [Direction.RIGHT]


@pytest.mark.parametrize("rows,cols", [(3, 3), (4, 4), (3, 4), (2, 3)])
def test_scrambles_are_solvable(rows, cols):
    dom = SlidingPuzzle(rows, cols)
    for seed in range(20):
        s = dom.scramble(15, seed)
        assert dom.is_solvable(s)
        assert not dom.is_solvable(make_unsolvable_variant(s))


@pytest.mark.parametrize("heuristic", ["manhattan", "linear_conflict", "zero"])
def test_best_first_is_optimal(heuristic):
    dom = SlidingPuzzle(3, heuristic=heuristic)
    for seed in range(6):
        tiles = dom.scramble(10, seed)
        if tiles == dom.GOAL:
            continue
        start = dom.initial(tiles)
        assert best_first(start, dom)["g"] == bfs(start, dom)["g"]


def test_unsolvable_board_exhausts_state_space():
    dom = SlidingPuzzle(2)
    start = dom.initial((2, 1, 3, 0))
    assert not dom.is_solvable(start.tiles)
    res = best_first(start, dom)
    assert res["path"] is None
    assert res["termination"] == "exhausted"
    # 4! / 2 configurations share the unsolvable parity
    assert res["expanded"] == 12


def test_heuristics():
    dom = SlidingPuzzle(3)
    assert dom.manhattan(dom.GOAL) == 0
    swapped = (2, 1, 3, 4, 5, 6, 7, 8, 0)
    assert dom.manhattan(swapped) == 2
    assert dom.linear_conflict(swapped) == 4
    assert TileState(swapped).heuristic(SlidingPuzzle(3, heuristic="zero")) == 0
    assert TileState(swapped).heuristic(SlidingPuzzle(3, heuristic="linear_conflict")) == 4


def test_invalid_arguments():
    with pytest.raises(ValueError):
        SlidingPuzzle(1)
    with pytest.raises(ValueError):
        SlidingPuzzle(3, heuristic="euclid")
    with pytest.raises(ValueError):
        SlidingPuzzle(3).initial((1, 2, 3))
