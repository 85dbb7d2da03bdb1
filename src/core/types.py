# src/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Optional, Dict, Any

Cell = Tuple[int, int]  # (row, col)

# up, down, left, right
DIRECTIONS: Tuple[Cell, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class CellKind(str, Enum):
    OPEN = "O"
    BLOCKED = "X"
    START = "1"
    END = "2"
    TRACE = "T"

ALLOWED_CHARS = "".join(k.value for k in CellKind)


class InvalidFileFormatError(ValueError):
    """Board text is malformed or violates the one-start/one-end rule."""


class OccupiedPositionError(RuntimeError):
    """A trace was placed on a cell that is not open."""


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    pushed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    solution: bool = False
    metrics: Dict[str, Any] = field(default_factory=dict)
