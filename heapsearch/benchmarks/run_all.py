# heapsearch/benchmarks/run_all.py
from __future__ import annotations

import argparse
import json
import os
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..algorithms.best_first import solve
from ..core.logging import get_search_logger
from ..core.problem import Problem

# ---- Tunables (overridable via environment variables) -----------------------
PLAYER_HP   = int(os.getenv("PLAYER_HP", "50"))      # combat: player hit points
PLAYER_MANA = int(os.getenv("PLAYER_MANA", "500"))   # combat: player starting mana

logger = get_search_logger(__name__)


# ---- Helpers ----------------------------------------------------------------
def _fmt_time(x):
    if isinstance(x, (int, float)):
        return f"{float(x):.4f}"
    return "n/a"


def _read_lines(path: str) -> List[str]:
    return Path(path).read_text().splitlines()


def _load_problems(args: argparse.Namespace) -> List[Tuple[str, Callable[[], Problem]]]:
    """
    One (name, factory) pair per puzzle. Files given on the command line win;
    with no files at all the bundled samples run.
    Factories are called inside the per-puzzle error handling so a bad input
    file fails only its own row.
    """
    from ..problems.route import RouteProblem, load_route_map, sample_route_problem
    from ..problems.synthesis import SynthesisProblem, load_synthesis, sample_synthesis_problem
    from ..problems.combat import CombatProblem, Player, parse_boss, sample_combat_problem

    problems: List[Tuple[str, Callable[[], Problem]]] = []
    if not (args.route or args.synthesis or args.combat):
        problems.append(("Route", sample_route_problem))
        problems.append(("Synthesis", sample_synthesis_problem))
        problems.append(("Combat", sample_combat_problem))
        return problems

    if args.route:
        problems.append(("Route", lambda: RouteProblem(load_route_map(_read_lines(args.route)))))
    if args.synthesis:
        problems.append(("Synthesis", lambda: SynthesisProblem(*load_synthesis(_read_lines(args.synthesis)))))
    if args.combat:
        player = Player(hp=args.player_hp, mana=args.player_mana)
        problems.append(("Combat", lambda: CombatProblem(parse_boss(_read_lines(args.combat)), player)))
    return problems


def run_problems(problems: List[Tuple[str, Callable[[], Problem]]]) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for name, factory in problems:
        print(f"→ Running {name} ...")
        try:
            r = solve(factory(), name=name)
            print(
                f"  {r.algo}: OK "
                f"answer={r.cost} "
                f"expanded={r.nodes_expanded}, "
                f"discarded={r.nodes_discarded}, "
                f"time={_fmt_time(r.time_s)}s"
            )
            rows.append(r.as_row())
        except Exception as e:
            logger.error("%s failed: %r", name, e)
            print(f"  {name}: ERROR {repr(e)}")
            rows.append({
                "algo": name,
                "success": False,
                "error": repr(e),
                "cost": None,
                "nodes_expanded": getattr(e, "nodes_expanded", None),
                "nodes_discarded": None,
                "max_frontier": None,
                "time_s": None,
                "peak_kb": None,
            })
    return rows


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Best-first search over the bundled puzzle payloads.")
    p.add_argument("--route", help="distance list ('A to B = 12' per line)")
    p.add_argument("--synthesis", help="replacement rules followed by the target molecule")
    p.add_argument("--combat", help="boss stat block ('Hit Points: N' / 'Damage: N')")
    p.add_argument("--player-hp", type=int, default=PLAYER_HP)
    p.add_argument("--player-mana", type=int, default=PLAYER_MANA)
    p.add_argument("--json", help="write the results document to this file")
    p.add_argument("--plot", help="write a comparison chart (PNG) to this file")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    rows = run_problems(_load_problems(args))

    out = {"results": rows, "ts": time.time()}
    print(json.dumps(out, indent=2))

    if args.json:
        Path(args.json).write_text(json.dumps(out, indent=2))
        logger.info("Wrote %s", args.json)

    if args.plot:
        from ..plots.plotting import bar_compare
        ok = [r for r in rows if r["success"]]
        if ok:
            bar_compare(ok, title="heapsearch puzzles").savefig(args.plot, dpi=160)
            logger.info("Wrote %s", args.plot)
        else:
            logger.warning("No successful runs to plot")

    return 0 if all(r["success"] for r in rows) else 1


if __name__ == "__main__":
    raise SystemExit(main())
