import argparse
import json
import sys
import time

import networkx as nx
import numpy as np

from gcp_graph import GraphFormatError, conflicting_pairs, count_conflicts, read_graph_from_file
from gcp_graph.loader import FORMATS
from parallel_tabu_search import ParallelTabuSearchSolver
from tabu_config import EXHAUSTED_POLICIES, SELECTIONS, TabuConfig
from tabu_search import TabuSearchSolver


def build_parser():
    parser = argparse.ArgumentParser(description="Tabu search graph coloring (sequential or thread-parallel)")
    parser.add_argument("graph", type=str, help="graph file path")
    parser.add_argument("--format", choices=FORMATS, default="auto", help="graph file format")
    parser.add_argument("-K", "--colors", type=int, default=100, help="palette size")
    parser.add_argument("--tabu-iters", type=int, default=5000, help="outer iteration budget")
    parser.add_argument("--neighbor-reps", type=int, default=700, help="trial moves per iteration")
    parser.add_argument("--tabu-size", type=int, default=4, help="tabu list capacity")
    parser.add_argument("--strategy", choices=["sequential", "parallel"], default="sequential",
                        help="execution strategy")
    parser.add_argument("--workers", type=int, default=None, help="worker threads (parallel strategy)")
    parser.add_argument("--selection", choices=SELECTIONS, default="best",
                        help="how the parallel strategy picks the winning trial")
    parser.add_argument("--on-exhausted", choices=EXHAUSTED_POLICIES, default="keep",
                        help="what to commit when no trial of an iteration is accepted")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("-v", "--verbose", action="store_true", help="print search progress")
    parser.add_argument("-R", "--render", action="store_true", help="draw the final coloring")
    parser.add_argument("-O", "--output", type=str, default=None, help="JSON result file")
    return parser


def print_report(graph, coloring, elapsed):
    print("Final coloring:" + "".join(f" {int(c)}" for c in coloring))
    for i, j, color in conflicting_pairs(graph, coloring):
        print(f"Conflict: {i} {j} - color {color}")
    print(f"Number of conflicts: {count_conflicts(graph, coloring)}")
    print(f"Execution time: {elapsed} seconds")
    sys.stdout.flush()


def render(graph, coloring, k, conflicts):
    import matplotlib.colors as mcolors
    import matplotlib.pyplot as plt

    drawn = nx.Graph(graph.to_networkx())
    nodes = list(drawn.nodes())
    color_map = [int(coloring[node]) for node in nodes]

    plt.figure(figsize=(10, 8))
    pos = nx.spring_layout(drawn, seed=42)
    cmap = mcolors.ListedColormap(plt.cm.jet(np.linspace(0, 1, max(k, 1))))

    nx.draw_networkx_nodes(drawn, pos, nodelist=nodes, node_color=color_map, cmap=cmap,
                           vmin=0, vmax=max(k - 1, 1))
    nx.draw_networkx_labels(drawn, pos, labels={node: node for node in nodes})

    conflict_edges = [(i, j) for i, j, _ in conflicting_pairs(graph, coloring) if i != j]
    conflict_set = set(conflict_edges)
    other_edges = [edge for edge in drawn.edges() if tuple(sorted(edge)) not in conflict_set]

    nx.draw_networkx_edges(drawn, pos, edgelist=other_edges)
    nx.draw_networkx_edges(drawn, pos, edgelist=conflict_edges, edge_color="red")

    plt.title(f"Used Colors: {len(set(color_map))}, Conflicts: {conflicts}")
    plt.show()


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        graph = read_graph_from_file(args.graph, fmt=args.format)
    except GraphFormatError as exc:
        print(f"Error parsing graph: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error opening file: {args.graph} ({exc.strerror or exc})", file=sys.stderr)
        return 1

    try:
        config = TabuConfig(
            max_colors=args.colors,
            max_iterations=args.tabu_iters,
            neighbor_reps=args.neighbor_reps,
            tabu_list_size=args.tabu_size,
            seed=args.seed,
            workers=args.workers,
            selection=args.selection,
            on_exhausted=args.on_exhausted,
            verbose=args.verbose,
        )
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    solver_cls = ParallelTabuSearchSolver if args.strategy == "parallel" else TabuSearchSolver
    solver = solver_cls(graph, config)

    start = time.perf_counter()
    solution, conflicts = solver.solve()
    elapsed = time.perf_counter() - start

    print_report(graph, solution, elapsed)

    if args.render:
        render(graph, solution, solver.k, conflicts)

    if args.output:
        output = {
            "solution": solution.tolist(),
            "conflicts": conflicts,
            "colors": solver.k,
            "nodes": graph.vertex_count(),
            "edges": graph.edge_count(),
            "iterations": solver.iterations,
            "strategy": args.strategy,
            "selection": args.selection if args.strategy == "parallel" else None,
            "seed": args.seed,
            "execution_time": elapsed,
        }
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(output, f, indent=2)
        print(f"Result saved to: {args.output}")
        sys.stdout.flush()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
