from collections import deque


def sanity_check_problem(problem, max_states: int = 10_000):
    """
    Walks states breadth-first from every seed and checks that expand()
    hands back fresh states and leaves its input untouched (compared by repr).
    Missing-data errors from expand() propagate unchanged.
    """
    q = deque(problem.initial_states())
    visited = 0
    while q and visited < max_states:
        s = q.popleft()
        visited += 1
        before = repr(s)
        for s2 in problem.expand(s):
            if s2 is s:
                raise AssertionError(f"expand returned its input state {s!r}")
            q.append(s2)
        if repr(s) != before:
            raise AssertionError(f"expand mutated {before} into {s!r}")
    return f"OK: visited {visited} states; expand never reused or mutated a state."
