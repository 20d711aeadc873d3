# heapsearch/plots/plotting.py
# Bar charts comparing search runs: nodes expanded, answer, wall time and peak memory.
# Accepts SearchResult objects or the row dicts written by benchmarks.run_all.
from __future__ import annotations
import matplotlib.pyplot as plt


def _field(r, name):
    if isinstance(r, dict):
        return r.get(name)
    return getattr(r, name, None)


def bar_compare(results, title="Search Comparison"):
    names = [_field(r, "algo") for r in results]
    nodes = [_field(r, "nodes_expanded") or 0 for r in results]
    costs = [_field(r, "cost") or 0 for r in results]
    times = [_field(r, "time_s") or 0 for r in results]
    mems  = [_field(r, "peak_kb") or 0 for r in results]

    fig, axs = plt.subplots(2, 2, figsize=(11,8))
    axs = axs.ravel()
    axs[0].bar(names, nodes); axs[0].set_title("Nodes Expanded"); axs[0].tick_params(axis='x', rotation=45)
    axs[1].bar(names, costs); axs[1].set_title("Answer (cost of goal state)"); axs[1].tick_params(axis='x', rotation=45)
    axs[2].bar(names, times); axs[2].set_title("Time (s)"); axs[2].tick_params(axis='x', rotation=45)
    axs[3].bar(names, mems); axs[3].set_title("Peak Memory (KB)"); axs[3].tick_params(axis='x', rotation=45)
    fig.suptitle(title)
    fig.tight_layout(rect=[0,0,1,0.95])
    return fig
