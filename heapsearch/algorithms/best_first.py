from __future__ import annotations
import os
from typing import Callable, Iterable, Optional, TypeVar
from ..core.frontiers import PriorityQueue
from ..core.metrics import SearchResult, MeasuredRun, FrontierCounters
from ..core.problem import Problem
from ..core.errors import SearchExhaustedError
from ..core.logging import get_search_logger

S = TypeVar("S")

PROGRESS_EVERY = int(os.getenv("HEAPSEARCH_PROGRESS_EVERY", "10000"))

logger = get_search_logger(__name__)


def best_first_search(
    seeds: Iterable[S],
    is_goal: Callable[[S], bool],
    expand: Callable[[S], Iterable[S]],
    prefer: Callable[[S, S], bool],
    is_dead: Optional[Callable[[S], bool]] = None,
    cost: Optional[Callable[[S], float]] = None,
    name: str = "BestFirst",
) -> SearchResult:
    """
    Generic best-first search over lazily generated states.

    Pops the most preferable state, drops it if it is dead, returns it if it is
    a goal and otherwise pushes every successor back. Each popped state is
    expanded at most once from that entry; nothing is de-duplicated, so the
    result is optimal only if `prefer` never favours a successor over the
    state it came from.

    Raises SearchExhaustedError when the frontier runs dry.
    """
    frontier: PriorityQueue[S] = PriorityQueue(prefer)
    counters = FrontierCounters()

    with MeasuredRun() as meter:
        for seed in seeds:
            frontier.insert(seed)
            counters.inserted += 1
        counters.saw_frontier(len(frontier))
        logger.info("%s: seeded frontier with %d state(s)", name, len(frontier))

        while not frontier.is_empty():
            state = frontier.extract_best()

            # lazy discard: dead branches stay in the frontier until popped
            if is_dead is not None and is_dead(state):
                counters.discarded += 1
                continue

            if is_goal(state):
                logger.info(
                    "%s: goal reached after %d expansions (%d discarded, frontier peak %d)",
                    name, counters.expanded, counters.discarded, counters.max_frontier,
                )
                return SearchResult(
                    algo=name,
                    state=state,
                    cost=None if cost is None else cost(state),
                    nodes_expanded=counters.expanded,
                    nodes_discarded=counters.discarded,
                    max_frontier=counters.max_frontier,
                    time_s=meter.elapsed,
                    peak_kb=meter.peak_kb,
                )

            counters.expanded += 1
            for child in expand(state):
                frontier.insert(child)
                counters.inserted += 1
            counters.saw_frontier(len(frontier))

            if PROGRESS_EVERY and counters.expanded % PROGRESS_EVERY == 0:
                logger.debug(
                    "%s: %d expanded, %d in frontier, %d inserted so far",
                    name, counters.expanded, len(frontier), counters.inserted,
                )

    logger.info("%s: frontier exhausted after %d expansions", name, counters.expanded)
    raise SearchExhaustedError(
        f"{name}: frontier exhausted after {counters.expanded} expansions without reaching a goal",
        nodes_expanded=counters.expanded,
    )


def solve(problem: Problem, name: Optional[str] = None) -> SearchResult:
    """Run best_first_search with the callbacks a Problem provides."""
    return best_first_search(
        problem.initial_states(),
        is_goal=problem.is_goal,
        expand=problem.expand,
        prefer=problem.is_preferable,
        is_dead=getattr(problem, "is_dead", None),
        cost=problem.cost,
        name=name or type(problem).__name__,
    )
