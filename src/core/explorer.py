# src/core/explorer.py
#!/usr/bin/env python3
"""
Exhaustive shortest-trace search — one pop per step() for animation.

Implements the Algorithm API expected by the viewer:
- init(grid) - reset() - step() -> StepResult
plus run() to drain the worklist in one call.

The worklist order comes from the Discipline passed in (stack = depth-first,
queue = breadth-first). Every pushed state is eventually popped, so both
orders end with the same set of best paths; only discovery order differs.

Best-path bookkeeping on each solution:
- shorter than the current best  -> clear, then keep it
- equal                          -> append
- longer                         -> drop
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from src.core.grid import Grid
from src.core.storage import Discipline, Storage, make_storage
from src.core.trace_state import PathState
from src.core.types import Cell, StepResult

log = logging.getLogger(__name__)


@dataclass
class Explorer:
    discipline: Discipline = Discipline.STACK
    name: str = "Circuit Tracer"

    # Internal state
    grid: Optional[Grid] = None
    storage: Optional[Storage] = None
    best: List[PathState] = field(default_factory=list)
    popped_count: int = 0
    pushed_count: int = 0
    done: bool = False

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid) -> None:
        """Initialize on a given grid."""
        self.grid = grid
        self.reset()

    def reset(self) -> None:
        """Clear all state and seed with the open neighbors of the start."""
        if self.grid is None:
            return
        self.storage = make_storage(self.discipline)
        self.best = []
        self.popped_count = 0
        self.pushed_count = 0
        self.done = False

        for r, c in self.grid.neighbors4(self.grid.start):
            self._push(PathState.from_terminal(self.grid, r, c))
        log.info("Seeded %d state(s) from start %s (%s)",
                 self.pushed_count, self.grid.start, self.discipline.value)

    # -------------------- results --------------------

    @property
    def best_paths(self) -> Optional[List[PathState]]:
        """Final best paths, or None while the search has not finished."""
        if not self.done:
            return None
        return list(self.best)

    @property
    def best_length(self) -> Optional[int]:
        return self.best[0].path_length() if self.best else None

    def run(self) -> List[PathState]:
        """Step until the worklist is drained and return the best paths."""
        if self.grid is None:
            raise RuntimeError("Explorer.run() called before init(grid)")
        while not self.done:
            self.step()
        return list(self.best)

    # -------------------- main stepping logic --------------------

    def _push(self, state: PathState) -> None:
        self.storage.store(state)
        self.pushed_count += 1

    def _record_solution(self, state: PathState) -> None:
        best_len = self.best_length
        length = state.path_length()
        if best_len is None or length < best_len:
            log.debug("New best length %d at %s", length, state.frontier)
            self.best.clear()
            self.best.append(state)
        elif length == best_len:
            self.best.append(state)

    def step(self) -> StepResult:
        """
        Run ONE search step:
          - Pop the next state in discipline order.
          - If it touches the end, fold it into the best paths.
          - Else push one child per open neighbor of its frontier.
        """
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done or self.storage.is_empty():
            if not self.done:
                self.done = True
                log.info("Search finished: popped=%d pushed=%d best_len=%s solutions=%d",
                         self.popped_count, self.pushed_count,
                         self.best_length, len(self.best))
            return StepResult(status="done" if self.best else "no_path",
                              metrics=self._metrics())

        state = self.storage.retrieve()
        self.popped_count += 1

        if state.is_solution():
            self._record_solution(state)
            return StepResult(status="running", current=state.frontier,
                              path=list(state.trace), solution=True,
                              metrics=self._metrics())

        pushed_now: List[Cell] = []
        for r, c in state.grid.neighbors4(state.frontier):
            self._push(PathState.from_parent(state, r, c))
            pushed_now.append((r, c))

        return StepResult(status="running", pushed=pushed_now, current=state.frontier,
                          path=list(state.trace), metrics=self._metrics())

    # -------------------- metrics --------------------

    def _metrics(self) -> dict:
        return {
            "algo": self.name,
            "storage": self.discipline.value,
            "popped": self.popped_count,
            "pushed": self.pushed_count,
            "storage_size": len(self.storage) if self.storage is not None else 0,
            "best_len": self.best_length,
            "solutions": len(self.best),
        }
