"""A stack that logs its operations so it can be rewound to earlier snapshots."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class _Op(enum.Enum):
    PUSH = enum.auto()
    POP = enum.auto()


class Stack(Generic[T]):
    """A stack whose state can be snapshotted and restored."""

    def __init__(self) -> None:
        self._ops: list[tuple[_Op, T]] = []
        self._cache: list[T] = []
        self._snapshots: list[int] = []

    def is_empty(self) -> bool:
        """Whether the stack holds no elements."""
        return not self._cache

    def peek(self) -> T | None:
        """The top element, or ``None`` if the stack is empty."""
        return self._cache[-1] if self._cache else None

    def push(self, elem: T) -> None:
        """Push ``elem`` onto the stack."""
        self._ops.append((_Op.PUSH, elem))
        self._cache.append(elem)

    def pop(self) -> T | None:
        """Remove and return the top element, or ``None`` if the stack is empty."""
        if not self._cache:
            return None
        elem = self._cache.pop()
        self._ops.append((_Op.POP, elem))
        return elem

    def snapshot(self) -> None:
        """Record the current state so that :meth:`restore` can return to it."""
        self._snapshots.append(len(self._ops))

    def clear_snapshot(self) -> None:
        """Drop the most recent snapshot, keeping the current state."""
        if self._snapshots:
            self._snapshots.pop()

    def restore(self) -> None:
        """Rewind to the most recent snapshot, or to the empty stack if there is none."""
        if not self._snapshots:
            self._cache.clear()
            self._ops.clear()
            return
        index = self._snapshots.pop()
        for op, elem in reversed(self._ops[index:]):
            if op is _Op.PUSH:
                self._cache.pop()
            else:
                self._cache.append(elem)
        del self._ops[index:]

    def __len__(self) -> int:
        return len(self._cache)

    def __getitem__(self, index):
        return self._cache[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self._cache)

    def __repr__(self) -> str:
        return f"Stack({self._cache!r})"