from collections import deque
from typing import Dict, List

import numpy as np


class TabuMemory:
    """Short-term memory of a tabu search run.

    Holds a bounded FIFO of recently moved vertices and the aspiration
    table mapping a conflict level to the threshold a move from that level
    has to reach to override the tabu restriction.
    """

    def __init__(self, n: int, capacity: int = 4):
        if capacity < 1:
            raise ValueError(f"tabu list capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._queue = deque(maxlen=capacity)
        # a vertex can sit in the queue more than once
        self._occurrences = np.zeros(n, dtype=np.int32)
        self._aspiration: Dict[int, int] = {}

    def is_tabu(self, v: int) -> bool:
        return bool(self._occurrences[v])

    def record_move(self, v: int) -> None:
        if len(self._queue) == self.capacity:
            self._occurrences[self._queue[0]] -= 1
        self._queue.append(v)
        self._occurrences[v] += 1

    def remove_if_present(self, v: int) -> bool:
        if not self._occurrences[v]:
            return False
        kept = [x for x in self._queue if x != v]
        self._queue.clear()
        self._queue.extend(kept)
        self._occurrences[v] = 0
        return True

    def aspiration_threshold(self, level: int) -> int:
        return self._aspiration.setdefault(level, level - 1)

    def tighten_aspiration(self, level: int, threshold: int) -> None:
        self._aspiration[level] = threshold

    def tabu_list(self) -> List[int]:
        return list(self._queue)

    def aspiration_table(self) -> Dict[int, int]:
        return dict(self._aspiration)

    def __len__(self) -> int:
        return len(self._queue)

    def __repr__(self) -> str:
        return f"TabuMemory(tabu={list(self._queue)}, aspiration={self._aspiration})"
