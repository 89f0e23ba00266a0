from __future__ import annotations
from typing import Any, List, Sequence

from brutalize.search.state import State, Success


class IllegalMoveError(ValueError):
    """An action sequence does not replay to a solution."""


def replay(initial_state: State, data: Any, actions: Sequence[Any]) -> List[State]:
    """
    Re-derive the states a solution passes through.

    Returns the state seen before each action (the first is `initial_state`).
    The last action must be a success and no earlier one may be.
    """
    states: List[State] = []
    state = initial_state
    for step, action in enumerate(actions):
        states.append(state)
        outcome = next((o for a, o in state.transitions(data) if a == action), None)
        if outcome is None:
            raise IllegalMoveError(f"move {step + 1} ({action}) is not legal")
        last = step == len(actions) - 1
        if isinstance(outcome, Success):
            if not last:
                raise IllegalMoveError(f"move {step + 1} ({action}) solves the puzzle early")
        else:
            if last:
                raise IllegalMoveError(f"move {step + 1} ({action}) does not solve the puzzle")
            state = outcome.state
    return states
