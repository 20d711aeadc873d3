# heapsearch/problems/synthesis.py
# Fewest replacements needed to build a molecule from the base symbol, searched backwards.
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, TypeVar

from ..core.problem import Problem

Rule = Tuple[str, str]
T = TypeVar("T")


def parse_rule(line: str) -> Rule:
    """'H => HO' -> ('H', 'HO')"""
    parts = line.split(" => ")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Could not parse: {line!r}")
    return parts[0], parts[1]


def load_synthesis(lines: Iterable[str]) -> Tuple[List[Rule], str]:
    """Rules first, the target molecule on the last non-blank line."""
    rows = [line.strip() for line in lines if line.strip()]
    if not rows:
        raise ValueError("No molecule found in synthesis input")
    molecule = rows.pop()
    return [parse_rule(r) for r in rows], molecule


def replacements(to_find: str, to_place: str, molecule: str) -> List[str]:
    """Every molecule made by swapping one occurrence of to_find for to_place."""
    bits = molecule.split(to_find)
    return [
        to_find.join(bits[: i + 1]) + to_place + to_find.join(bits[i + 1:])
        for i in range(len(bits) - 1)
    ]


def step(molecule: str, rules: Sequence[Rule]) -> List[str]:
    return [out for to_find, to_place in rules for out in replacements(to_find, to_place, molecule)]


def distinct(items: Iterable[T]) -> List[T]:
    return list(dict.fromkeys(items))


def flip(rule: Rule) -> Rule:
    return rule[1], rule[0]


def calibrate(rules: Sequence[Rule], molecule: str) -> int:
    """Number of distinct molecules one forward replacement away."""
    return len(distinct(step(molecule, rules)))


@dataclass(frozen=True)
class Synthesis:
    molecule: str
    replacements: int = 0

    def is_preferable_to(self, other: "Synthesis") -> bool:
        # Shorter is assumed closer to the base symbol. Not admissible for
        # arbitrary grammars; works for grammars that only ever grow molecules.
        return len(self.molecule) < len(other.molecule)


class SynthesisProblem(Problem):
    """
    Start from the target molecule and apply the rules in reverse until only
    the base symbol is left; replacements counts the steps taken.
    """

    def __init__(self, rules: Sequence[Rule], molecule: str, base: str = "e"):
        self.rules = list(rules)
        self.reverse_rules = [flip(r) for r in self.rules]
        self.molecule = molecule
        self.base = base

    def initial_states(self) -> List[Synthesis]:
        return [Synthesis(self.molecule, 0)]

    def is_goal(self, s: Synthesis) -> bool:
        return s.molecule == self.base

    def expand(self, s: Synthesis) -> List[Synthesis]:
        return [
            Synthesis(candidate, s.replacements + 1)
            for candidate in distinct(step(s.molecule, self.reverse_rules))
        ]

    def is_preferable(self, a: Synthesis, b: Synthesis) -> bool:
        return a.is_preferable_to(b)

    def cost(self, s: Synthesis) -> float:
        return s.replacements


SAMPLE_RULES = [
    "e => H",
    "e => O",
    "H => HO",
    "H => OH",
    "O => HH",
]


def sample_synthesis_problem(molecule: str = "HOH") -> SynthesisProblem:
    """HOH needs 3 replacements, HOHOHO needs 6."""
    rules, _ = load_synthesis(SAMPLE_RULES + [molecule])
    return SynthesisProblem(rules, molecule)
