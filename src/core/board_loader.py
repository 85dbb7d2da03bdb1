# src/core/board_loader.py
#!/usr/bin/env python3
"""
Board file loader.

    3 3
    O O O
    O 1 X
    O 2 O

First line: ROWS COLS. Then exactly ROWS lines of COLS cell characters
(spaces between characters are ignored). Exactly one '1' and one '2'.
"""

from pathlib import Path
from typing import List, Optional, Union

from src.core.grid import Grid
from src.core.types import ALLOWED_CHARS, Cell, CellKind, InvalidFileFormatError


def _parse_dimensions(line: str):
    dims = line.split()
    if len(dims) != 2:
        raise InvalidFileFormatError("Invalid dimensions format. Expected two integers.")
    try:
        rows, cols = int(dims[0]), int(dims[1])
    except ValueError:
        raise InvalidFileFormatError("Dimensions must be integers.") from None
    if rows <= 0 or cols <= 0:
        raise InvalidFileFormatError(f"Dimensions must be positive, got {rows}x{cols}.")
    return rows, cols


def parse_board(text: str) -> Grid:
    lines = text.splitlines()
    if not lines or not lines[0].strip():
        raise InvalidFileFormatError("File is empty or missing dimensions.")
    n_rows, n_cols = _parse_dimensions(lines[0])

    rows: List[str] = []
    start: Optional[Cell] = None
    end: Optional[Cell] = None
    body = lines[1:]
    for i in range(n_rows):
        if i >= len(body):
            raise InvalidFileFormatError(f"Too few rows. Expected {n_rows}")
        line = "".join(body[i].split())
        if len(line) != n_cols:
            raise InvalidFileFormatError(
                f"Invalid number of columns at row {i}. Expected {n_cols}")
        for j, ch in enumerate(line):
            if ch not in ALLOWED_CHARS:
                raise InvalidFileFormatError(f"Invalid character '{ch}' at ({i}, {j})")
            if ch == CellKind.START.value:
                if start is not None:
                    raise InvalidFileFormatError("Multiple '1' found.")
                start = (i, j)
            elif ch == CellKind.END.value:
                if end is not None:
                    raise InvalidFileFormatError("Multiple '2' found.")
                end = (i, j)
        rows.append(line)

    if any(extra.strip() for extra in body[n_rows:]):
        raise InvalidFileFormatError(f"Too many rows. Expected {n_rows}")
    if start is None:
        raise InvalidFileFormatError("Invalid number of '1's: 0")
    if end is None:
        raise InvalidFileFormatError("Invalid number of '2's: 0")
    return Grid(tuple(rows), start, end)


def load_board(path: Union[str, Path]) -> Grid:
    with open(path, "r") as f:
        return parse_board(f.read())
