# src/core/grid.py
#!/usr/bin/env python3
"""
Circuit board grid.

Rows are kept as an immutable tuple of strings, one character per cell.
place_trace() returns a new Grid that shares every untouched row with the
receiver, so snapshots are independent without copying the whole board.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from src.core.types import Cell, CellKind, DIRECTIONS, OccupiedPositionError


@dataclass(frozen=True)
class Grid:
    rows: Tuple[str, ...]          # [row][col]
    start: Cell
    end: Cell

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    @property
    def num_cols(self) -> int:
        return len(self.rows[0])

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.num_rows and 0 <= col < self.num_cols

    def occupancy(self, row: int, col: int) -> Optional[CellKind]:
        """Cell kind at (row, col), or None when out of bounds."""
        if not self.in_bounds(row, col):
            return None
        return CellKind(self.rows[row][col])

    def is_open(self, row: int, col: int) -> bool:
        return self.occupancy(row, col) is CellKind.OPEN

    def place_trace(self, row: int, col: int) -> "Grid":
        if not self.is_open(row, col):
            raise OccupiedPositionError(
                f"row {row}, col {col} contains {self.occupancy(row, col)!r}"
            )
        line = self.rows[row]
        new_line = line[:col] + CellKind.TRACE.value + line[col + 1:]
        rows = self.rows[:row] + (new_line,) + self.rows[row + 1:]
        return Grid(rows, self.start, self.end)

    def neighbors4(self, c: Cell) -> Iterator[Cell]:
        """Open orthogonal neighbors of c in up, down, left, right order."""
        r, col = c
        for dr, dc in DIRECTIONS:
            if self.is_open(r + dr, col + dc):
                yield (r + dr, col + dc)

    def count(self, kind: CellKind) -> int:
        return sum(line.count(kind.value) for line in self.rows)

    def __str__(self) -> str:
        return "".join(" ".join(line) + " \n" for line in self.rows)
