import threading
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from typing import List, Optional, Sequence, Tuple

import numpy as np

from gcp_graph import ParallelConflictEvaluator
from tabu_memory import TabuMemory
from tabu_search import Move, TabuSearchSolver


class ParallelTabuSearchSolver(TabuSearchSolver):
    """Tabu search whose trials and conflict counts run on thread pools.

    Two pools are used: one for the trials of a batch and one for the
    partitioned conflict counts, including the recount each trial does of
    its own coloring. Trials block on counting work only, so the trial pool
    can never starve itself.

    Each trial slot owns one generator, spawned from the solver's generator
    once per ``solve()``, so no generator state is shared between threads.
    """

    strategy = "parallel"

    def __init__(self, graph, config=None, rng=None):
        super().__init__(graph, config, rng)
        self.workers = self.config.resolved_workers()
        self._lock = threading.Lock()
        self._evaluator: Optional[ParallelConflictEvaluator] = None
        self._trial_pool: Optional[ThreadPoolExecutor] = None
        self._streams: List[np.random.Generator] = []

    @contextmanager
    def session(self):
        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="tabu-count") as count_pool, \
                ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="tabu-trial") as trial_pool:
            self._evaluator = ParallelConflictEvaluator(self.graph, count_pool, self.workers)
            self._trial_pool = trial_pool
            # trial i of every batch draws from stream i; batches never overlap
            self._streams = self.rng.spawn(self.config.neighbor_reps)
            try:
                yield
            finally:
                self._evaluator = None
                self._trial_pool = None
                self._streams = []

    def calculate_conflicts(self, solution: Sequence[int]) -> int:
        if self._evaluator is None:
            return super().calculate_conflicts(solution)
        return self._evaluator.count(solution)

    def evaluate(self, solution: Sequence[int]) -> Tuple[int, np.ndarray]:
        if self._evaluator is None:
            return super().evaluate(solution)
        return self._evaluator.evaluate(solution)

    def _run_trial(self, current: np.ndarray, pool: np.ndarray, rng: np.random.Generator) -> Move:
        vertex, trial = self.propose_trial(current, pool, rng)
        return vertex, trial, self.calculate_conflicts(trial)

    def _spawn(self) -> List[np.random.Generator]:
        return self._streams

    def search_iteration(self, current: np.ndarray, conflicts: int, pool: np.ndarray,
                         memory: TabuMemory) -> Optional[Move]:
        if self._trial_pool is None:
            raise RuntimeError("parallel search iteration outside of a solver session")
        if self.config.selection == "last_writer":
            return self._select_last_writer(current, conflicts, pool, memory)
        return self._select_best(current, conflicts, pool, memory)

    def _select_best(self, current, conflicts, pool, memory) -> Optional[Move]:
        """Run the whole batch, then apply acceptance in trial order and keep
        the accepted trial with the fewest conflicts (lowest index on ties)."""
        futures = [self._trial_pool.submit(self._run_trial, current, pool, rng) for rng in self._spawn()]
        trials = [f.result() for f in futures]

        best = None
        for vertex, trial, new_conflicts in trials:
            if not self.accept_trial(memory, conflicts, new_conflicts, vertex).accepted:
                continue
            if best is None or new_conflicts < best[2]:
                best = (vertex, trial, new_conflicts)
        return best

    def _select_last_writer(self, current, conflicts, pool, memory) -> Optional[Move]:
        """Whichever accepted trial enters the critical section last wins.

        Trials look at the found flag only before they start, so trials
        already running finish even after another one has been accepted.
        The result depends on thread scheduling.
        """
        found = threading.Event()
        slot: List[Move] = []

        def trial_task(rng):
            if found.is_set():
                return
            vertex, trial, new_conflicts = self._run_trial(current, pool, rng)
            with self._lock:
                if self.accept_trial(memory, conflicts, new_conflicts, vertex).accepted:
                    found.set()
                    slot[:] = [(vertex, trial, new_conflicts)]

        futures = [self._trial_pool.submit(trial_task, rng) for rng in self._spawn()]
        for f in futures:
            f.result()
        return slot[0] if slot else None
