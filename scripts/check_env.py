#!/usr/bin/env python3
"""Check that this checkout can run the solvers.

Verifies installed dependency versions against the minimums the code relies
on, that numpy can spawn independent generators for the parallel trials, and
that a triangle gets a proper 3-coloring under both strategies.
"""

import os
import re
import sys
from importlib import metadata
from typing import Dict, Tuple

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

REQUIRED: Dict[str, Tuple[int, ...]] = {
    "numpy": (1, 25),  # Generator.spawn
    "networkx": (2, 8),
}
# only needed by runner.py --render
OPTIONAL: Dict[str, Tuple[int, ...]] = {
    "matplotlib": (3, 5),
}


def parse_version(text: str) -> Tuple[int, ...]:
    match = re.match(r"(\d+(?:\.\d+)*)", text)
    if match is None:
        return ()
    return tuple(int(part) for part in match.group(1).split("."))


def check_dependency(dist: str, minimum: Tuple[int, ...]) -> Tuple[bool, str]:
    try:
        installed = metadata.version(dist)
    except metadata.PackageNotFoundError:
        return False, "not installed"
    wanted = ".".join(str(p) for p in minimum)
    if parse_version(installed) < minimum:
        return False, f"version {installed} < {wanted}"
    return True, f"version {installed} >= {wanted}"


def check_spawn() -> Tuple[bool, str]:
    import numpy as np

    rng = np.random.default_rng(0)
    if not hasattr(rng, "spawn"):
        return False, "numpy Generator has no spawn()"
    streams = rng.spawn(2)
    if streams[0].integers(1 << 30) == streams[1].integers(1 << 30):
        return False, "spawned streams are not independent"
    return True, "Generator.spawn available"


def check_solvers() -> Tuple[bool, str]:
    from gcp_graph import ColoringGraph, count_conflicts
    from parallel_tabu_search import ParallelTabuSearchSolver
    from tabu_config import TabuConfig
    from tabu_search import TabuSearchSolver

    triangle = ColoringGraph.from_edges(3, [(0, 1), (1, 2), (0, 2)])
    results = []
    for solver_cls in (TabuSearchSolver, ParallelTabuSearchSolver):
        config = TabuConfig(max_colors=3, max_iterations=100, neighbor_reps=20, seed=0, workers=2)
        coloring, conflicts = solver_cls(triangle, config).solve(initial_solution=[0, 0, 0])
        if conflicts or count_conflicts(triangle, coloring):
            return False, f"{solver_cls.strategy} strategy left {conflicts} conflicts on a triangle"
        results.append(solver_cls.strategy)
    return True, "triangle solved by " + ", ".join(results)


def main() -> int:
    print("=== tabu-gcp environment check ===")
    print(f"Python: {sys.version.split()[0]}")

    failed = []
    for dist, minimum in REQUIRED.items():
        ok, detail = check_dependency(dist, minimum)
        print(f"[{'OK' if ok else 'FAIL'}] {dist:<12} {detail}")
        if not ok:
            failed.append(dist)
    for dist, minimum in OPTIONAL.items():
        ok, detail = check_dependency(dist, minimum)
        print(f"[{'OK' if ok else 'WARN'}] {dist:<12} {detail} (optional, for --render)")

    if failed:
        print(f"\nMissing or outdated: {', '.join(failed)}")
        print("Try: pip install -e .[test]")
        return 1

    for name, check in (("spawn", check_spawn), ("solvers", check_solvers)):
        ok, detail = check()
        print(f"[{'OK' if ok else 'FAIL'}] {name:<12} {detail}")
        if not ok:
            return 1

    print("\nReady: python runner.py graph.txt -K 100 [--strategy parallel]")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
