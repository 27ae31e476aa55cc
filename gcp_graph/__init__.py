from .conflicts import (
    ParallelConflictEvaluator,
    candidates,
    conflicting_pairs,
    count_conflicts,
    evaluate,
)
from .graph import ColoringGraph
from .loader import GraphFormatError, parse_graph, read_graph_from_file

__all__ = [
    "ColoringGraph",
    "GraphFormatError",
    "ParallelConflictEvaluator",
    "candidates",
    "conflicting_pairs",
    "count_conflicts",
    "evaluate",
    "parse_graph",
    "read_graph_from_file",
]
