# src/app/console.py
#!/usr/bin/env python3
import sys
from typing import Iterable, Optional, TextIO

from src.core.trace_state import PathState


def render_solutions(paths: Iterable[PathState]) -> str:
    """Each solution's board, separated by a blank line."""
    return "\n".join(str(p.grid) for p in paths)


def print_solutions(paths: Iterable[PathState], stream: Optional[TextIO] = None) -> None:
    if stream is None:
        stream = sys.stdout
    text = render_solutions(paths)
    if text:
        stream.write(text)
        stream.flush()
