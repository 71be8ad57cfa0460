"""
Adapters for creating lazy sequences.

This module provides the entry points for building a sequence from a
generator function, a step function and seed, or an ordinary iterable.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Iterable, Iterator
from typing import TypeVar

from .core import LazySequence
from .producers import IteratorCursor, ReplayBuffer, ReplayCursor, StepCursor

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Immutable collections that can be iterated directly without a snapshot
_IMMUTABLE_COLLECTIONS = (range, tuple, str, bytes, frozenset)


class GeneratorSequence(LazySequence[T]):
    """
    Sequence backed by a user-supplied generator factory.

    The factory is called once per cursor. Purity of the sequence depends on
    it returning a fresh, independent and deterministic iterator every time.
    """

    __slots__ = ("factory",)

    def __init__(self, factory: Callable[[], Iterable[T]]):
        """
        Create a generator sequence.

        Args:
            factory: Zero-argument callable returning a new iterator, such as
                a generator function
        """
        self.factory = factory

    def cursor(self) -> IteratorCursor[T]:
        return IteratorCursor(iter(self.factory()))


class StepSequence(LazySequence[T]):
    """Sequence of ``seed, step(seed), step(step(seed)), ...``."""

    __slots__ = ("step", "seed")

    def __init__(self, step: Callable[[T], T], seed: T):
        self.step = step
        self.seed = seed

    def cursor(self) -> StepCursor[T]:
        return StepCursor(self.step, self.seed)


class IterableSequence(LazySequence[T]):
    """
    Sequence over an iterable that can be iterated more than once.

    Immutable collections are used as-is, other sized collections are
    expected to have been snapshotted by ``from_iterable``.
    """

    __slots__ = ("source",)

    def __init__(self, source: Iterable[T]):
        self.source = source

    def cursor(self) -> IteratorCursor[T]:
        return IteratorCursor(iter(self.source))


class ReplaySequence(LazySequence[T]):
    """Sequence over a single-use iterator, memoized so it can be replayed."""

    __slots__ = ("buffer",)

    def __init__(self, iterator: Iterator[T]):
        self.buffer = ReplayBuffer(iterator)

    def cursor(self) -> ReplayCursor[T]:
        return self.buffer.cursor()


def wrap(factory: Callable[[], Iterable[T]]) -> GeneratorSequence[T]:
    """
    Create a sequence from a generator factory.

    Args:
        factory: Zero-argument callable returning a new iterator each call.
            It must not share mutable state between calls.

    Returns:
        A GeneratorSequence

    Example:
        >>> def naturals():
        ...     n = 0
        ...     while True:
        ...         yield n
        ...         n += 1
        >>> wrap(naturals).take(3)
        [0, 1, 2]
    """
    if not callable(factory):
        raise TypeError(
            f"wrap() expects a zero-argument callable, got "
            f"{type(factory).__name__}"
        )
    return GeneratorSequence(factory)


def from_step(step: Callable[[T], T], seed: T) -> StepSequence[T]:
    """
    Create a sequence by repeatedly applying a step function.

    Args:
        step: Function computing the next element from the current one
        seed: The first element

    Returns:
        A StepSequence

    Example:
        >>> from_step(lambda x: x * 2, 1).take(5)
        [1, 2, 4, 8, 16]
    """
    return StepSequence(step, seed)


def from_iterable(source: Iterable[T]) -> LazySequence[T]:
    """
    Create a sequence from an iterable.

    - immutable collections (range, tuple, str, bytes, frozenset) are used
      directly
    - other sized collections are copied into a tuple, so later changes to
      the source do not affect the sequence
    - single-use iterators are memoized, so every realization sees the same
      elements
    - any other iterable is iterated afresh for each realization

    Args:
        source: Any iterable, finite or infinite

    Returns:
        A sequence over the elements of ``source``

    Raises:
        TypeError: If the source is not iterable
    """
    if isinstance(source, _IMMUTABLE_COLLECTIONS):
        return IterableSequence(source)
    elif isinstance(source, Collection):
        logger.debug("Snapshotting %s into a tuple", type(source).__name__)
        return IterableSequence(tuple(source))

    iterator = iter(source)
    if iterator is source:
        logger.debug("Memoizing single-use %s", type(source).__name__)
        return ReplaySequence(iterator)
    return IterableSequence(source)


def from_values(*values: T) -> IterableSequence[T]:
    """Create a finite sequence of the given values."""
    return IterableSequence(values)


def count(start: int = 0, step: int = 1) -> StepSequence[int]:
    """
    Create the infinite arithmetic sequence ``start, start + step, ...``.

    Example:
        >>> count(10, 5).take(3)
        [10, 15, 20]
    """
    return StepSequence(lambda x: x + step, start)


def _same(value):
    return value


def repeat(value: T) -> StepSequence[T]:
    """Create an infinite sequence repeating a single value."""
    return StepSequence(_same, value)
