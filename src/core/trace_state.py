# src/core/trace_state.py
#!/usr/bin/env python3
"""
PathState: one immutable snapshot of a partial trace.

Each state owns the Grid with its trace cells burned in. A child is built
from its parent plus one newly visited open cell, so exploring in any order
never needs to undo anything.
"""

from typing import Tuple

from src.core.grid import Grid
from src.core.types import Cell


class PathState:
    __slots__ = ("_grid", "_trace")

    def __init__(self, grid: Grid, trace: Tuple[Cell, ...]):
        self._grid = grid
        self._trace = trace

    @classmethod
    def from_terminal(cls, grid: Grid, row: int, col: int) -> "PathState":
        """First step out of the start terminal."""
        return cls(grid.place_trace(row, col), ((row, col),))

    @classmethod
    def from_parent(cls, parent: "PathState", row: int, col: int) -> "PathState":
        return cls(parent._grid.place_trace(row, col), parent._trace + ((row, col),))

    # -------------------- queries --------------------

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def trace(self) -> Tuple[Cell, ...]:
        return self._trace

    @property
    def frontier(self) -> Cell:
        return self._trace[-1]

    @property
    def row(self) -> int:
        return self._trace[-1][0]

    @property
    def col(self) -> int:
        return self._trace[-1][1]

    def path_length(self) -> int:
        return len(self._trace)

    def is_open(self, row: int, col: int) -> bool:
        return self._grid.is_open(row, col)

    def is_solution(self) -> bool:
        """True when the frontier touches the end terminal."""
        r, c = self.frontier
        er, ec = self._grid.end
        return abs(r - er) + abs(c - ec) == 1

    def __repr__(self) -> str:
        return f"PathState(length={self.path_length()}, frontier={self.frontier})"
