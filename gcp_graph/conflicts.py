import threading
from concurrent.futures import Executor
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .graph import ColoringGraph


def evaluate(graph: ColoringGraph, coloring: Sequence[int]) -> Tuple[int, np.ndarray]:
    """Return ``(conflicts, membership)`` for a coloring.

    Every ordered adjacent pair with equal colors is counted and both of its
    endpoints are marked; the total is halved since a symmetric adjacency
    visits each conflicting edge twice.
    """
    colors = np.asarray(coloring)
    src, dst = graph.sources, graph.indices
    same = colors[src] == colors[dst]
    membership = np.zeros(graph.vertex_count(), dtype=bool)
    membership[src[same]] = True
    membership[dst[same]] = True
    return int(np.count_nonzero(same)) // 2, membership


def count_conflicts(graph: ColoringGraph, coloring: Sequence[int]) -> int:
    colors = np.asarray(coloring)
    return int(np.count_nonzero(colors[graph.sources] == colors[graph.indices])) // 2


def candidates(membership: np.ndarray) -> np.ndarray:
    """Vertices touching at least one conflicting edge, ascending."""
    return np.flatnonzero(membership)


def conflicting_pairs(graph: ColoringGraph, coloring: Sequence[int]) -> List[Tuple[int, int, int]]:
    """One ``(i, j, color)`` per distinct unordered conflicting pair, ``i <= j``.

    Self-loops are listed as ``(i, i, color)``; parallel edges appear once.
    """
    colors = np.asarray(coloring)
    seen = set()
    pairs = []
    for u in range(graph.vertex_count()):
        for w in graph.neighbors(u):
            if colors[u] != colors[w]:
                continue
            key = (u, w) if u <= w else (w, u)
            if key in seen:
                continue
            seen.add(key)
            pairs.append((key[0], key[1], int(colors[u])))
    return pairs


class ParallelConflictEvaluator:
    """Conflict counting split over contiguous vertex partitions.

    Each partition scores its slice of ordered pairs in a worker of
    ``executor``; partial sums are added up and halved. Conflicted vertices
    go into one shared membership array, written under a lock.
    """

    def __init__(self, graph: ColoringGraph, executor: Executor, chunks: int):
        if chunks < 1:
            raise ValueError(f"chunks must be >= 1, got {chunks}")
        self.graph = graph
        self._executor = executor
        self._lock = threading.Lock()
        n = graph.vertex_count()
        bounds = np.linspace(0, n, min(chunks, max(n, 1)) + 1).astype(np.int64)
        indptr = graph.indptr
        self._slices = [
            (int(indptr[lo]), int(indptr[hi]))
            for lo, hi in zip(bounds[:-1], bounds[1:])
            if indptr[hi] > indptr[lo]
        ]

    def _score_partition(self, colors: np.ndarray, start: int, stop: int,
                         membership: Optional[np.ndarray]) -> int:
        src = self.graph.sources[start:stop]
        dst = self.graph.indices[start:stop]
        same = colors[src] == colors[dst]
        hits = int(np.count_nonzero(same))
        if hits and membership is not None:
            with self._lock:
                membership[src[same]] = True
                membership[dst[same]] = True
        return hits

    def _reduce(self, colors: np.ndarray, membership: Optional[np.ndarray]) -> int:
        futures = [
            self._executor.submit(self._score_partition, colors, start, stop, membership)
            for start, stop in self._slices
        ]
        return sum(f.result() for f in futures) // 2

    def evaluate(self, coloring: Sequence[int]) -> Tuple[int, np.ndarray]:
        colors = np.asarray(coloring)
        membership = np.zeros(self.graph.vertex_count(), dtype=bool)
        return self._reduce(colors, membership), membership

    def count(self, coloring: Sequence[int]) -> int:
        return self._reduce(np.asarray(coloring), None)
