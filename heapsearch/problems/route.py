# heapsearch/problems/route.py
# Shortest route that visits every city exactly once (open path, any start).
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Mapping, Tuple

from ..core.errors import InvalidTransitionError
from ..core.problem import Problem


# --- Input --------------------------------------------------------------------

def parse_distance(entry: str) -> Tuple[str, str, int]:
    """'London to Dublin = 464' -> ('London', 'Dublin', 464)"""
    parts = entry.split(" = ")
    if len(parts) != 2:
        raise ValueError(f"Malformed line: {entry!r}")
    locations, distance = parts
    try:
        dist = int(distance)
    except ValueError:
        raise ValueError(f"Malformed line: {entry!r}") from None

    ends = locations.split(" to ")
    if len(ends) != 2 or not all(ends):
        raise ValueError(f"Malformed line: {entry!r}")
    return ends[0], ends[1], dist


class RouteMap:
    """Symmetric distance table: {city: {neighbour: distance}}."""

    def __init__(self, legs: Mapping[str, Mapping[str, int]] | None = None):
        self.legs: Dict[str, Dict[str, int]] = {}
        for start, destinations in (legs or {}).items():
            self.legs.setdefault(start, {})
            for end, dist in destinations.items():
                self.legs[start][end] = dist
                self.legs.setdefault(end, {})

    def add(self, start: str, end: str, dist: int) -> None:
        self.legs.setdefault(start, {})[end] = dist
        self.legs.setdefault(end, {})[start] = dist

    @property
    def cities(self) -> List[str]:
        return list(self.legs)

    def __len__(self) -> int:
        return len(self.legs)

    def neighbours(self, city: str) -> Iterable[str]:
        return self.legs.get(city, {}).keys()

    def leg(self, start: str, end: str) -> int:
        dist = self.legs.get(start, {}).get(end)
        if dist is None:
            raise InvalidTransitionError(f"no distance from {start} to {end}")
        return dist


def load_route_map(lines: Iterable[str]) -> RouteMap:
    route_map = RouteMap()
    for line in lines:
        line = line.strip()
        if line:
            route_map.add(*parse_distance(line))
    return route_map


# --- State --------------------------------------------------------------------

@dataclass(frozen=True)
class Path:
    visits: Tuple[str, ...]
    length: int = 0
    seen: FrozenSet[str] = field(init=False, repr=False, compare=False)
    end: str = field(init=False, compare=False)

    def __post_init__(self):
        if not self.visits:
            raise ValueError("A Path cannot be empty")
        object.__setattr__(self, "visits", tuple(self.visits))
        object.__setattr__(self, "seen", frozenset(self.visits))
        object.__setattr__(self, "end", self.visits[-1])

    @classmethod
    def for_starting_point(cls, start: str) -> "Path":
        return cls((start,), 0)

    def extend(self, route_map: RouteMap) -> List["Path"]:
        # the leg is looked up from the destination side, so an asymmetric table fails loudly
        return [
            Path(self.visits + (destination,), self.length + route_map.leg(destination, self.end))
            for destination in route_map.neighbours(self.end)
            if destination not in self.seen
        ]

    def is_preferable_to(self, other: "Path") -> bool:
        if self.length == other.length:
            # More cities visited is closer to a full route; full ties keep self.
            return len(self.seen) >= len(other.seen)
        return self.length < other.length


# --- Problem definition -------------------------------------------------------

class RouteProblem(Problem):
    """
    States are Paths; one seed per city, successors append an unvisited
    neighbour of the last city. Goal: every city on the map visited.
    """

    def __init__(self, route_map: RouteMap):
        self.route_map = route_map

    def initial_states(self) -> List[Path]:
        return [Path.for_starting_point(city) for city in self.route_map.cities]

    def is_goal(self, s: Path) -> bool:
        return len(s.seen) == len(self.route_map)

    def expand(self, s: Path) -> List[Path]:
        return s.extend(self.route_map)

    def is_preferable(self, a: Path, b: Path) -> bool:
        return a.is_preferable_to(b)

    def cost(self, s: Path) -> float:
        return s.length


SAMPLE_DISTANCES = [
    "London to Dublin = 464",
    "London to Belfast = 518",
    "Dublin to Belfast = 141",
]


def sample_route_problem() -> RouteProblem:
    """London/Dublin/Belfast; the shortest route is 605."""
    return RouteProblem(load_route_map(SAMPLE_DISTANCES))
