"""
Base cursors that pull from user-supplied sources.

These sit at the bottom of every cursor chain: they turn a Python iterator,
a step function or a memoized single-use iterator into the pull protocol.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from typing import TypeVar

from .protocols import EXHAUSTED

T = TypeVar("T")


class IteratorCursor[T]:
    """
    Cursor over a Python iterator.

    The iterator reference is dropped on StopIteration so exhaustion is
    idempotent even for iterators that would resume.
    """

    __slots__ = ("_iterator",)

    def __init__(self, iterator: Iterator[T]):
        self._iterator: Iterator[T] | None = iterator

    def pull(self) -> tuple[bool, T | None]:
        if self._iterator is None:
            return EXHAUSTED
        try:
            value = next(self._iterator)
        except StopIteration:
            self._iterator = None
            return EXHAUSTED
        return True, value


class StepCursor[T]:
    """
    Cursor over ``seed, step(seed), step(step(seed)), ...``.

    The step is applied lazily, when the following element is pulled, so
    pulling ``n`` elements calls ``step`` exactly ``n - 1`` times.
    """

    __slots__ = ("_step", "_current", "_started")

    def __init__(self, step: Callable[[T], T], seed: T):
        """
        Create a step cursor.

        Args:
            step: Function computing the next value from the current one
            seed: First value emitted
        """
        self._step = step
        self._current = seed
        self._started = False

    def pull(self) -> tuple[bool, T]:
        if self._started:
            self._current = self._step(self._current)
        else:
            self._started = True
        return True, self._current


class ReplayBuffer[T]:
    """
    Memo over a single-use iterator.

    Every value pulled from the iterator is kept, so any number of cursors
    can read the same elements in the same order. The buffer only grows;
    memory is proportional to the furthest position any cursor reached.

    The lock is reentrant: an iterator that reads its own buffer while
    producing a value gets the generator's ValueError, not a deadlock.
    """

    def __init__(self, iterator: Iterator[T]):
        self._iterator: Iterator[T] | None = iterator
        self._values: list[T] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        """Return the number of values memoized so far."""
        return len(self._values)

    def get(self, index: int) -> tuple[bool, T | None]:
        """
        Read the value at ``index``, pulling from the iterator if needed.

        Args:
            index: Zero-based position

        Returns:
            ``(True, value)``, or ``(False, None)`` if the iterator ended
            before reaching ``index``
        """
        if index < len(self._values):
            return True, self._values[index]

        with self._lock:
            while index >= len(self._values):
                if self._iterator is None:
                    return EXHAUSTED
                try:
                    value = next(self._iterator)
                except StopIteration:
                    self._iterator = None
                    return EXHAUSTED
                self._values.append(value)
            return True, self._values[index]

    def cursor(self) -> ReplayCursor[T]:
        """Create a cursor reading this buffer from position 0."""
        return ReplayCursor(self)


class ReplayCursor[T]:
    """Cursor reading a ReplayBuffer by position."""

    __slots__ = ("_buffer", "_position")

    def __init__(self, buffer: ReplayBuffer[T]):
        self._buffer: ReplayBuffer[T] | None = buffer
        self._position = 0

    def pull(self) -> tuple[bool, T | None]:
        if self._buffer is None:
            return EXHAUSTED
        has_value, value = self._buffer.get(self._position)
        if not has_value:
            self._buffer = None
            return EXHAUSTED
        self._position += 1
        return True, value
