# src/core/storage.py
#!/usr/bin/env python3
"""
Worklist disciplines for the Explorer.

Both variants expose the same three operations: store(), retrieve(), and
is_empty(). The caller builds one and hands it to the Explorer.
"""

import os
from collections import deque
from enum import Enum
from typing import Deque, Generic, List, Optional, TypeVar, Union

T = TypeVar("T")


class Discipline(str, Enum):
    STACK = "stack"    # LIFO, depth-first
    QUEUE = "queue"    # FIFO, breadth-first


class StackStorage(Generic[T]):
    def __init__(self):
        self._items: List[T] = []

    def store(self, item: T) -> None:
        self._items.append(item)

    def retrieve(self) -> T:
        return self._items.pop()

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)


class QueueStorage(Generic[T]):
    def __init__(self):
        self._items: Deque[T] = deque()

    def store(self, item: T) -> None:
        self._items.append(item)

    def retrieve(self) -> T:
        return self._items.popleft()

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)


Storage = Union[StackStorage, QueueStorage]


def make_storage(discipline: Discipline) -> Storage:
    if discipline is Discipline.STACK:
        return StackStorage()
    if discipline is Discipline.QUEUE:
        return QueueStorage()
    raise ValueError(f"Unknown discipline: {discipline!r}")


def discipline_from_env(default: Discipline = Discipline.STACK) -> Discipline:
    """Discipline named by TRACER_STORAGE (stack|queue), else default."""
    value: Optional[str] = os.getenv("TRACER_STORAGE")
    if not value:
        return default
    value = value.lower()
    if value in ("queue", "q", "bfs"):
        return Discipline.QUEUE
    if value in ("stack", "s", "dfs"):
        return Discipline.STACK
    return default
