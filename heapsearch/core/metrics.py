# heapsearch/core/metrics.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional
import time, tracemalloc


@dataclass
class SearchResult:
    algo: str
    state: Any
    cost: Optional[float]
    nodes_expanded: int
    nodes_discarded: int
    max_frontier: int
    time_s: float
    peak_kb: int

    def as_row(self) -> Dict[str, Any]:
        """JSON-friendly summary; the goal state itself is left out."""
        return {
            "algo": self.algo,
            "success": True,
            "cost": self.cost,
            "nodes_expanded": self.nodes_expanded,
            "nodes_discarded": self.nodes_discarded,
            "max_frontier": self.max_frontier,
            "time_s": self.time_s,
            "peak_kb": self.peak_kb,
            "error": None,
        }


@dataclass
class FrontierCounters:
    """Running tallies kept by the driver while the search is RUNNING."""
    expanded: int = 0
    discarded: int = 0
    inserted: int = 0
    max_frontier: int = 0

    def saw_frontier(self, size: int) -> None:
        if size > self.max_frontier:
            self.max_frontier = size


class MeasuredRun:
    """
    Context manager for wall time and peak traced memory of one search run.
    .elapsed and .peak_kb can be read inside the with-block as well as after it.
    Tracing is only started if nobody else is already tracing.
    """
    def __init__(self) -> None:
        self.t0: Optional[float] = None
        self.t1: Optional[float] = None
        self._peak_kb: int = 0
        self._owns_tracing: bool = False

    def __enter__(self) -> "MeasuredRun":
        if not tracemalloc.is_tracing():
            tracemalloc.start()
            self._owns_tracing = True
        self.t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.t1 = time.perf_counter()
        _, peak = tracemalloc.get_traced_memory()
        self._peak_kb = max(self._peak_kb, peak // 1024)
        if self._owns_tracing:
            tracemalloc.stop()
            self._owns_tracing = False
        return False  # never suppress: exhaustion must reach the caller

    @property
    def elapsed(self) -> float:
        if self.t0 is None:
            return 0.0
        if self.t1 is None:
            return time.perf_counter() - self.t0
        return self.t1 - self.t0

    @property
    def peak_kb(self) -> int:
        if self.t1 is None and tracemalloc.is_tracing():
            _, peak = tracemalloc.get_traced_memory()
            return max(self._peak_kb, peak // 1024)
        return self._peak_kb
