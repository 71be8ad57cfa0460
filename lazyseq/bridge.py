"""
Bridge functions that connect cursors to ordinary Python code.

Realization operations use these to drain a cursor into a list or to expose
it through the standard iterator protocol.
"""

from collections.abc import Callable, Iterator
from typing import TypeVar

from .protocols import Cursor, ProducerFactory

T = TypeVar("T")


def drain(cursor: Cursor[T], limit: int) -> list[T]:
    """
    Pull up to ``limit`` elements from a cursor.

    Args:
        cursor: The cursor to pull from
        limit: Maximum number of elements to pull

    Returns:
        The pulled elements in order; shorter than ``limit`` if the cursor
        was exhausted first
    """
    values: list[T] = []
    while len(values) < limit:
        has_value, value = cursor.pull()
        if not has_value:
            break
        values.append(value)
    return values


def iterate(cursor: Cursor[T]) -> Iterator[T]:
    """
    Expose a cursor as a Python iterator.

    Args:
        cursor: The cursor to pull from

    Yields:
        Each element until the cursor is exhausted (possibly never)
    """
    while True:
        has_value, value = cursor.pull()
        if not has_value:
            return
        yield value


def generator_factory(factory: ProducerFactory[T]) -> Callable[[], Iterator[T]]:
    """
    Turn a producer factory into a generator factory.

    Each call of the returned function builds a fresh cursor and wraps it in
    a new generator, so generators obtained from it are independent.

    Args:
        factory: The producer factory to wrap

    Returns:
        A zero-argument callable returning a fresh iterator
    """

    def generator() -> Iterator[T]:
        return iterate(factory())

    return generator


def advance(cursor: Cursor[T], count: int) -> int:
    """
    Pull and discard up to ``count`` elements from a cursor.

    Args:
        cursor: The cursor to advance
        count: Number of elements to discard

    Returns:
        The number of elements actually discarded
    """
    skipped = 0
    while skipped < count:
        has_value, _ = cursor.pull()
        if not has_value:
            break
        skipped += 1
    return skipped
