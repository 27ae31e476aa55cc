import os
from dataclasses import dataclass
from typing import Optional

SELECTIONS = ("best", "last_writer")
EXHAUSTED_POLICIES = ("keep", "last_trial")


@dataclass
class TabuConfig:
    """Parameters of one tabu search run.

    ``selection`` picks how the parallel strategy chooses among the trials of
    a batch: ``best`` reduces over all of them after they join, ``last_writer``
    keeps whichever qualifying trial wrote the shared slot last.
    ``on_exhausted`` decides what the sequential strategy commits when no
    trial of an iteration is accepted: ``keep`` leaves the coloring as it is,
    ``last_trial`` commits the last attempted move anyway.
    """

    max_colors: int = 100
    max_iterations: int = 5000
    neighbor_reps: int = 700
    tabu_list_size: int = 4
    seed: Optional[int] = None
    workers: Optional[int] = None
    selection: str = "best"
    on_exhausted: str = "keep"
    verbose: bool = False
    log_every: int = 100

    def __post_init__(self):
        if self.max_colors < 1:
            raise ValueError(f"max_colors must be >= 1, got {self.max_colors}")
        if self.max_iterations < 0:
            raise ValueError(f"max_iterations must be >= 0, got {self.max_iterations}")
        if self.neighbor_reps < 0:
            raise ValueError(f"neighbor_reps must be >= 0, got {self.neighbor_reps}")
        if self.tabu_list_size < 1:
            raise ValueError(f"tabu_list_size must be >= 1, got {self.tabu_list_size}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        if self.selection not in SELECTIONS:
            raise ValueError(f"selection must be one of {SELECTIONS}, got {self.selection!r}")
        if self.on_exhausted not in EXHAUSTED_POLICIES:
            raise ValueError(f"on_exhausted must be one of {EXHAUSTED_POLICIES}, got {self.on_exhausted!r}")
        if self.log_every < 1:
            raise ValueError(f"log_every must be >= 1, got {self.log_every}")

    def resolved_workers(self) -> int:
        if self.workers is not None:
            return self.workers
        return os.cpu_count() if os.cpu_count() else 4
