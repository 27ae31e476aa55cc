import sys
from contextlib import contextmanager
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple, Union

import numpy as np

from gcp_graph import ColoringGraph, candidates, count_conflicts, evaluate
from tabu_config import TabuConfig
from tabu_memory import TabuMemory

Move = Tuple[int, np.ndarray, int]
IterationCallback = Callable[[int, np.ndarray, int, TabuMemory], None]


class Verdict(Enum):
    REJECT = "reject"
    TABU = "tabu"
    PLAIN = "plain"
    ASPIRATION = "aspiration"

    @property
    def accepted(self) -> bool:
        return self in (Verdict.PLAIN, Verdict.ASPIRATION)


def make_rng(rng=None, seed: Optional[int] = None) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(seed if rng is None else rng)


class TabuSearchSolver:
    """Conflict-driven tabu search for graph k-coloring.

    Each outer iteration samples up to ``neighbor_reps`` single-vertex
    recolorings among the conflicted vertices and commits the first one the
    acceptance policy lets through. Subclasses change how an iteration's
    trials are executed; the state machine and acceptance stay here.
    """

    strategy = "sequential"

    def __init__(
        self,
        graph: Union[ColoringGraph, Sequence[Sequence[int]]],
        config: Optional[TabuConfig] = None,
        rng: Union[np.random.Generator, int, None] = None,
    ):
        self.graph = graph if isinstance(graph, ColoringGraph) else ColoringGraph(graph)
        self.config = config if config is not None else TabuConfig()
        self.n = self.graph.vertex_count()
        self.k = self.graph.palette_size(self.config.max_colors)
        self.rng = make_rng(rng, self.config.seed)
        self.memory: Optional[TabuMemory] = None
        self.iterations = 0

    def calculate_conflicts(self, solution: Sequence[int]) -> int:
        return count_conflicts(self.graph, solution)

    def evaluate(self, solution: Sequence[int]) -> Tuple[int, np.ndarray]:
        return evaluate(self.graph, solution)

    def generate_initial_solution(self) -> np.ndarray:
        if self.n == 0:
            return np.zeros(0, dtype=np.int64)
        return self.rng.integers(0, self.k, size=self.n, dtype=np.int64)

    def propose_trial(self, current: np.ndarray, pool: np.ndarray,
                      rng: np.random.Generator) -> Tuple[int, np.ndarray]:
        """Recolor one random candidate; the color always changes when k > 1."""
        vertex = int(pool[rng.integers(len(pool))])
        color = int(rng.integers(self.k - 1)) if self.k > 1 else 0
        if color == current[vertex]:
            color = self.k - 1
        trial = current.copy()
        trial[vertex] = color
        return vertex, trial

    @staticmethod
    def accept_trial(memory: TabuMemory, conflicts: int, new_conflicts: int, vertex: int) -> Verdict:
        if new_conflicts >= conflicts:
            return Verdict.REJECT
        if new_conflicts <= memory.aspiration_threshold(conflicts):
            memory.tighten_aspiration(conflicts, new_conflicts - 1)
            memory.remove_if_present(vertex)
            return Verdict.ASPIRATION
        if memory.is_tabu(vertex):
            return Verdict.TABU
        return Verdict.PLAIN

    def search_iteration(self, current: np.ndarray, conflicts: int, pool: np.ndarray,
                         memory: TabuMemory) -> Optional[Move]:
        last = None
        for _ in range(self.config.neighbor_reps):
            vertex, trial = self.propose_trial(current, pool, self.rng)
            new_conflicts = self.calculate_conflicts(trial)
            last = (vertex, trial, new_conflicts)
            if self.accept_trial(memory, conflicts, new_conflicts, vertex).accepted:
                return last
        if self.config.on_exhausted == "last_trial":
            return last
        return None

    @contextmanager
    def session(self):
        yield

    def _log(self, message: str) -> None:
        if self.config.verbose:
            print(f"[Tabu/{self.strategy}] {message}")
            sys.stdout.flush()

    def _check_solution(self, solution: Sequence[int]) -> np.ndarray:
        current = np.array(solution, dtype=np.int64)
        if current.shape != (self.n,):
            raise ValueError(f"initial coloring must have {self.n} entries, got shape {current.shape}")
        if self.n and (current.min() < 0 or current.max() >= self.k):
            raise ValueError(f"initial coloring must use colors in [0, {self.k})")
        return current

    def solve(self, initial_solution: Optional[Sequence[int]] = None,
              callback: Optional[IterationCallback] = None) -> Tuple[np.ndarray, int]:
        """Run the search; returns the final coloring and its conflict count.

        The count is the one tracked by the search for the returned coloring.
        A nonzero count means the budget ran out before a proper coloring
        was found.
        """
        current = (
            self._check_solution(initial_solution)
            if initial_solution is not None
            else self.generate_initial_solution()
        )
        memory = TabuMemory(self.n, self.config.tabu_list_size)
        self.memory = memory
        self.iterations = 0
        remaining = self.config.max_iterations
        log_every = self.config.log_every

        with self.session():
            conflicts = self.calculate_conflicts(current)
            self._log(f"start n={self.n} k={self.k} conflicts={conflicts}")
            while remaining > 0:
                conflicts, membership = self.evaluate(current)
                if conflicts == 0:
                    break

                move = self.search_iteration(current, conflicts, candidates(membership), memory)
                if move is not None:
                    vertex, current, conflicts = move
                    memory.record_move(vertex)

                remaining -= 1
                self.iterations += 1
                if self.iterations % log_every == 0:
                    self._log(f"iter={self.iterations} conflicts={conflicts} tabu={memory.tabu_list()}")
                if callback is not None:
                    callback(self.iterations, current, conflicts, memory)

        self._log(f"done iter={self.iterations} conflicts={conflicts}")
        return current, conflicts


def solve_coloring(adj_list: List[List[int]], k: int, parallel: bool = False, **kwargs) -> Tuple[np.ndarray, int]:
    """Convenience wrapper taking a plain adjacency list and a palette size."""
    config = TabuConfig(max_colors=k, **kwargs)
    if parallel:
        from parallel_tabu_search import ParallelTabuSearchSolver

        return ParallelTabuSearchSolver(adj_list, config).solve()
    return TabuSearchSolver(adj_list, config).solve()
