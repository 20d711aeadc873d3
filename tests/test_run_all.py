import json
import logging

import matplotlib

matplotlib.use("Agg")

import pytest

from heapsearch.benchmarks.run_all import build_parser, main
from heapsearch.core.logging import get_search_logger
from heapsearch.plots.plotting import bar_compare
from heapsearch.problems.checks import sanity_check_problem
from heapsearch.problems.route import sample_route_problem
from heapsearch.problems.synthesis import sample_synthesis_problem


def test_samples_run_by_default(tmp_path, capsys):
    out_json = tmp_path / "results.json"
    assert main(["--json", str(out_json)]) == 0

    data = json.loads(out_json.read_text())
    answers = {row["algo"]: row["cost"] for row in data["results"]}
    assert answers == {"Route": 605, "Synthesis": 3, "Combat": 226}
    assert "→ Running Route" in capsys.readouterr().out


def test_input_files(tmp_path):
    route = tmp_path / "route.txt"
    route.write_text("A to B = 2\nB to C = 3\nA to C = 9\n")
    combat = tmp_path / "boss.txt"
    combat.write_text("Hit Points: 14\nDamage: 8\n")
    out_json = tmp_path / "results.json"

    code = main([
        "--route", str(route),
        "--combat", str(combat),
        "--player-hp", "10",
        "--player-mana", "250",
        "--json", str(out_json),
    ])
    assert code == 0
    rows = json.loads(out_json.read_text())["results"]
    assert [r["algo"] for r in rows] == ["Route", "Combat"]
    assert rows[0]["cost"] == 5


def test_failures_are_reported_per_puzzle(tmp_path):
    route = tmp_path / "route.txt"
    route.write_text("A to B = 2\nC to D = 3\n")
    bad = tmp_path / "rules.txt"
    bad.write_text("H -> HO\nHOH\n")
    out_json = tmp_path / "results.json"

    assert main(["--route", str(route), "--synthesis", str(bad), "--json", str(out_json)]) == 1
    rows = json.loads(out_json.read_text())["results"]
    assert [r["success"] for r in rows] == [False, False]
    assert "SearchExhaustedError" in rows[0]["error"]
    assert rows[0]["nodes_expanded"] > 0
    assert "ValueError" in rows[1]["error"]


def test_player_defaults_come_from_environment():
    args = build_parser().parse_args([])
    assert args.player_hp == 50
    assert args.player_mana == 500


def test_plot_is_written(tmp_path):
    png = tmp_path / "chart.png"
    assert main(["--plot", str(png)]) == 0
    assert png.stat().st_size > 0


def test_bar_compare_accepts_rows_and_results():
    from heapsearch.algorithms.best_first import solve

    result = solve(sample_route_problem(), name="Route")
    fig = bar_compare([result, {"algo": "Other", "cost": 3, "nodes_expanded": 1}], title="t")
    assert len(fig.axes) == 4
    assert fig.axes[1].get_title().startswith("Answer")


@pytest.mark.parametrize("factory", [sample_route_problem, sample_synthesis_problem])
def test_sample_problems_pass_sanity_check(factory):
    assert sanity_check_problem(factory(), max_states=200).startswith("OK")


def test_sanity_check_catches_reused_state():
    class Loop:
        def initial_states(self):
            return ["x"]

        def expand(self, s):
            return [s]

    with pytest.raises(AssertionError, match="returned its input"):
        sanity_check_problem(Loop())


def test_logger_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "search.log"
    logger = get_search_logger("tests", log_file=str(log_file), level="info")
    logger.info("hello frontier")
    for h in logger.handlers:
        h.flush()
    assert logger.name == "heapsearch.tests"
    assert len(logger.handlers) == 2
    assert "hello frontier" in log_file.read_text()

    # reconfiguring replaces the handlers instead of stacking them
    logger = get_search_logger("tests", log_file=None, level=logging.WARNING)
    assert len(logger.handlers) == 1

    with pytest.raises(ValueError, match="Unknown log level"):
        get_search_logger("tests", level="chatty")
