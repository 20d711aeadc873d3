# Defines the interface a problem payload hands to the generic best-first driver.
# heapsearch/core/problem.py
from __future__ import annotations
from typing import Iterable, Protocol, TypeVar

State = TypeVar("State")


class Problem(Protocol[State]):
    """
    Implicit state-space problem for best-first search.

    States are immutable values; expand() must build fresh successors and never
    mutate the state it was given, because that state may still be compared
    against entries in the frontier.
    """
    def initial_states(self) -> Iterable[State]: ...
    def is_goal(self, s: State) -> bool: ...
    def expand(self, s: State) -> Iterable[State]: ...
    def is_preferable(self, a: State, b: State) -> bool: ...
    def cost(self, s: State) -> float: ...
    # Optional: states that are popped but never expanded (e.g. a lost fight).
    def is_dead(self, s: State) -> bool: return False
