from collections import Counter
from typing import Iterable, List, Sequence, Tuple

import networkx as nx
import numpy as np


class ColoringGraph:
    """Immutable undirected graph on vertices ``0..n-1``.

    Neighbor lists are kept exactly as given: parallel edges repeat a
    neighbor, and a self-loop puts the vertex twice into its own list.
    The ordered pairs are also flattened into CSR arrays (``indptr``,
    ``indices``, ``sources``) so conflict counting can run over numpy.
    """

    def __init__(self, adjacency: Sequence[Sequence[int]]):
        adj = tuple(tuple(int(w) for w in nbrs) for nbrs in adjacency)
        n = len(adj)
        for u, nbrs in enumerate(adj):
            for w in nbrs:
                if not 0 <= w < n:
                    raise ValueError(f"vertex {u} has out-of-range neighbor {w} (n={n})")

        pairs = Counter((u, w) for u, nbrs in enumerate(adj) for w in nbrs)
        for (u, w), count in pairs.items():
            if pairs.get((w, u), 0) != count:
                raise ValueError(f"adjacency is not symmetric for edge ({u}, {w})")

        self._adj = adj
        self._n = n

        degrees = np.fromiter((len(nbrs) for nbrs in adj), dtype=np.int64, count=n)
        indptr = np.zeros(n + 1, dtype=np.int64)
        np.cumsum(degrees, out=indptr[1:])
        indices = np.fromiter((w for nbrs in adj for w in nbrs), dtype=np.int64, count=int(indptr[-1]))
        sources = np.repeat(np.arange(n, dtype=np.int64), degrees)
        for arr in (indptr, indices, sources):
            arr.flags.writeable = False
        self.indptr = indptr
        self.indices = indices
        self.sources = sources

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[Tuple[int, int]]) -> "ColoringGraph":
        """Build from 0-based undirected edges; each endpoint goes into the other's list."""
        if n < 0:
            raise ValueError(f"vertex count must be non-negative, got {n}")
        adj: List[List[int]] = [[] for _ in range(n)]
        for u, v in edges:
            if not (0 <= u < n and 0 <= v < n):
                raise ValueError(f"edge ({u}, {v}) out of range for n={n}")
            adj[u].append(v)
            adj[v].append(u)
        return cls(adj)

    @classmethod
    def from_networkx(cls, graph) -> "ColoringGraph":
        if graph.is_directed():
            raise ValueError("graph coloring needs an undirected graph")
        index = {node: i for i, node in enumerate(graph.nodes())}
        # MultiGraph.edges() yields every parallel edge once
        edges = [(index[u], index[v]) for u, v in graph.edges()]
        return cls.from_edges(len(index), edges)

    def to_networkx(self) -> nx.MultiGraph:
        graph = nx.MultiGraph()
        graph.add_nodes_from(range(self._n))
        for u, nbrs in enumerate(self._adj):
            loops = 0
            for w in nbrs:
                if u < w:
                    graph.add_edge(u, w)
                elif u == w:
                    loops += 1
            graph.add_edges_from([(u, u)] * (loops // 2))
        return graph

    def neighbors(self, v: int) -> Tuple[int, ...]:
        return self._adj[v]

    def vertex_count(self) -> int:
        return self._n

    def edge_count(self) -> int:
        return int(self.indices.size) // 2

    def degree(self, v: int) -> int:
        return len(self._adj[v])

    def palette_size(self, requested: int) -> int:
        # no point in more colors than vertices
        return min(int(requested), self._n)

    def adjacency(self) -> List[List[int]]:
        return [list(nbrs) for nbrs in self._adj]

    def __len__(self) -> int:
        return self._n

    def __repr__(self) -> str:
        return f"ColoringGraph(n={self._n}, edges={self.edge_count()})"
