"""
Core lazy sequence implementation.

A LazySequence is an immutable value describing how to build a cursor. It
never keeps a cursor around: every realization builds a fresh one, pulls what
it needs and drops it. Realizing the same sequence twice with the same
arguments therefore gives the same result, provided the user's base producer
is itself deterministic.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any, TypeVar

from .bridge import advance, drain, generator_factory, iterate
from .config import get_max_scan
from .cursors import (
    DropStage,
    FilterDependentStage,
    FilterIndexedStage,
    FilterStage,
    FlatMapCursor,
    IntersperseCursor,
    MapIndexedStage,
    MapStage,
    PipelineCursor,
    TakeWhileStage,
    ZipCursor,
)
from .errors import InvalidArgumentError, OutOfRangeError, check_count
from .protocols import Cursor, Stage

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


class LazySequence[T](ABC):
    """
    Base class for lazy, possibly infinite sequences.

    Transformations return new sequences and leave this one untouched.
    Realization operations (take, nth, iteration) build a fresh cursor each
    time they are called.

    Filtering operations over an infinite sequence pull until the next
    accepted element. If no further element is ever accepted, the pull does
    not return unless a scan limit is configured (see ``set_max_scan``).
    """

    __slots__ = ()

    @abstractmethod
    def cursor(self) -> Cursor[T]:
        """
        Build a new cursor positioned at the start of this sequence.

        This is the sequence's producer factory. Each call returns an
        independent cursor that can be stepped manually with ``pull()``.
        """
        ...

    # Transformations

    def map(self, func: Callable[[T], U]) -> LazySequence[U]:
        """
        Apply a function to each element.

        Args:
            func: Function to apply to each element

        Returns:
            A new sequence of transformed elements
        """
        return MapSequence(self, func)

    def filter(self, predicate: Callable[[T], bool]) -> LazySequence[T]:
        """
        Keep the elements satisfying a predicate, in order.

        Args:
            predicate: Function that returns True for elements to keep

        Returns:
            A new sequence of the accepted elements
        """
        return FilterSequence(self, predicate)

    def map_indexed(self, func: Callable[[T, int], U]) -> LazySequence[U]:
        """
        Apply ``func(value, index)`` to each element.

        Args:
            func: Function receiving the element and its position from 0

        Returns:
            A new sequence of transformed elements
        """
        return MapIndexedSequence(self, func)

    def filter_indexed(
        self, predicate: Callable[[T, int], bool]
    ) -> LazySequence[T]:
        """
        Keep the elements satisfying ``predicate(value, index)``.

        The index is the element's position in this sequence, so it counts
        every element examined, not only those accepted.

        Args:
            predicate: Function receiving the element and its position

        Returns:
            A new sequence of the accepted elements
        """
        return FilterIndexedSequence(self, predicate)

    def filter_dependent(
        self, predicate: Callable[[T, Sequence[T]], bool]
    ) -> LazySequence[T]:
        """
        Keep the elements satisfying ``predicate(value, accepted)``.

        ``accepted`` is a tuple of the elements accepted so far during the
        current realization, in order. It never contains rejected elements.

        Args:
            predicate: Function receiving the element and the accepted ones

        Returns:
            A new sequence of the accepted elements

        Example:
            >>> primes = count(2).filter_dependent(
            ...     lambda x, found: all(x % p for p in found)
            ... )
            >>> primes.take(5)
            [2, 3, 5, 7, 11]
        """
        return FilterDependentSequence(self, predicate)

    def flat_map(self, func: Callable[[T], Iterable[U]]) -> LazySequence[U]:
        """
        Replace each element by the elements of a finite collection.

        Args:
            func: Function returning a finite iterable for each element

        Returns:
            A new sequence concatenating the collections in order
        """
        return FlatMapSequence(self, func)

    def zip(self, other: LazySequence[U]) -> LazySequence[tuple[T, U]]:
        """
        Pair elements of this sequence with those of another.

        The result ends as soon as either sequence ends.

        Args:
            other: The sequence providing the second element of each pair

        Returns:
            A new sequence of ``(a, b)`` pairs
        """
        return ZipSequence(self, other)

    def intersperse(self, other: LazySequence[U]) -> LazySequence[T | U]:
        """
        Alternate elements of this sequence and another, starting here.

        The result ends when the sequence whose turn it is ends.

        Args:
            other: The sequence providing every second element

        Returns:
            A new sequence ``a0, b0, a1, b1, ...``
        """
        return IntersperseSequence(self, other)

    def take_while(self, predicate: Callable[[T], bool]) -> LazySequence[T]:
        """
        Keep elements up to, not including, the first one failing a predicate.

        Args:
            predicate: Function that returns True while the sequence continues

        Returns:
            A new sequence, finite if the predicate ever fails
        """
        return TakeWhileSequence(self, predicate)

    def enumerate(self, start: int = 0) -> LazySequence[tuple[int, T]]:
        """Pair each element with its position, counting from ``start``."""
        return self.map_indexed(lambda value, index: (index + start, value))

    def drop(self, n: int) -> LazySequence[T]:
        """
        Skip the first ``n`` elements.

        Args:
            n: Number of elements to skip

        Returns:
            A new sequence starting at element ``n``

        Raises:
            InvalidArgumentError: If n is not a non-negative integer
        """
        return DropSequence(self, check_count(n))

    # Realization

    def take(self, n: int) -> list[T]:
        """
        Realize the first ``n`` elements.

        If the sequence is finite and ends early, the elements it has are
        returned without error; the result may be shorter than ``n``.

        Args:
            n: Number of elements to realize

        Returns:
            A list of at most ``n`` elements

        Raises:
            InvalidArgumentError: If n is not a non-negative integer
        """
        n = check_count(n)
        if n == 0:
            return []
        values = drain(self.cursor(), n)
        logger.debug("take(%d) produced %d element(s)", n, len(values))
        return values

    def nth(self, n: int) -> T:
        """
        Realize the element at index ``n``.

        Args:
            n: Zero-based index

        Returns:
            The element at that index

        Raises:
            InvalidArgumentError: If n is not a non-negative integer
            OutOfRangeError: If the sequence has fewer than ``n + 1`` elements
        """
        n = check_count(n)
        cursor = self.cursor()
        skipped = advance(cursor, n)
        has_value, value = cursor.pull()
        if not has_value:
            logger.debug("nth(%d) missed: sequence ended after %d", n, skipped)
            raise OutOfRangeError(
                f"index {n} out of range: sequence ended after "
                f"{skipped} element(s)"
            )
        return value

    def first(self) -> T:
        """Realize the first element; raises OutOfRangeError if empty."""
        return self.nth(0)

    def take_continuous(self, n: int) -> tuple[list[T], LazySequence[T]]:
        """
        Realize the first ``n`` elements and return the rest as a sequence.

        The continuation is ``drop(n)``: a sequence in its own right, not a
        reference to a half-consumed cursor. Realizing it derives the skipped
        prefix again from scratch.

        Args:
            n: Number of elements to realize

        Returns:
            A tuple of (values, continuation)

        Raises:
            InvalidArgumentError: If n is not a non-negative integer
        """
        n = check_count(n)
        return self.take(n), self.drop(n)

    def to_generator(self) -> Callable[[], Iterator[T]]:
        """
        Expose this sequence as a generator factory.

        Returns:
            A zero-argument callable; each call returns a new, independent
            iterator over this sequence
        """
        return generator_factory(self.cursor)

    def __iter__(self) -> Iterator[T]:
        return iterate(self.cursor())

    def __getitem__(self, index: int | slice) -> Any:
        """
        Realize an element (``seq[i]``) or a finite slice (``seq[i:j:k]``).

        Slices need an explicit stop; negative bounds are not supported
        because the length of the sequence is unknown.
        """
        if not isinstance(index, slice):
            return self.nth(index)

        if index.stop is None:
            raise InvalidArgumentError(
                "slice stop is required on a lazy sequence"
            )
        start = 0 if index.start is None else check_count(index.start, "start")
        stop = check_count(index.stop, "stop")
        step = 1 if index.step is None else check_count(index.step, "step")
        if step == 0:
            raise InvalidArgumentError("slice step cannot be zero")

        if stop <= start:
            return []
        values = self.drop(start).take(stop - start)
        return values[::step] if step > 1 else values


# Linear transformations share one pipeline cursor


class StageSequence(LazySequence[T]):
    """
    Sequence defined by one linear stage on top of a base sequence.

    Consecutive stage sequences are collected into a single PipelineCursor
    when a cursor is built, so long chains are walked in a loop instead of
    through nested cursors.
    """

    __slots__ = ("base",)

    def __init__(self, base: LazySequence[Any]):
        self.base = base

    @abstractmethod
    def new_stage(self) -> Stage[Any]:
        """Create the per-cursor stage for this transformation."""
        ...

    def cursor(self) -> Cursor[T]:
        stages: list[Stage[Any]] = []
        node: LazySequence[Any] = self
        while isinstance(node, StageSequence):
            stages.append(node.new_stage())
            node = node.base
        stages.reverse()
        return PipelineCursor(node.cursor(), stages, get_max_scan())


class MapSequence[T, U](StageSequence[U]):
    """Sequence that maps a function over elements."""

    __slots__ = ("func",)

    def __init__(self, base: LazySequence[T], func: Callable[[T], U]):
        super().__init__(base)
        self.func = func

    def new_stage(self) -> MapStage[T, U]:
        return MapStage(self.func)


class FilterSequence(StageSequence[T]):
    """Sequence that filters elements by a predicate."""

    __slots__ = ("predicate",)

    def __init__(self, base: LazySequence[T], predicate: Callable[[T], bool]):
        super().__init__(base)
        self.predicate = predicate

    def new_stage(self) -> FilterStage[T]:
        return FilterStage(self.predicate)


class MapIndexedSequence[T, U](StageSequence[U]):
    """Sequence that maps a function over elements and their positions."""

    __slots__ = ("func",)

    def __init__(self, base: LazySequence[T], func: Callable[[T, int], U]):
        super().__init__(base)
        self.func = func

    def new_stage(self) -> MapIndexedStage[T, U]:
        return MapIndexedStage(self.func)


class FilterIndexedSequence(StageSequence[T]):
    """Sequence that filters elements by a predicate on value and position."""

    __slots__ = ("predicate",)

    def __init__(
        self, base: LazySequence[T], predicate: Callable[[T, int], bool]
    ):
        super().__init__(base)
        self.predicate = predicate

    def new_stage(self) -> FilterIndexedStage[T]:
        return FilterIndexedStage(self.predicate)


class FilterDependentSequence(StageSequence[T]):
    """Sequence that filters elements against the ones already accepted."""

    __slots__ = ("predicate",)

    def __init__(
        self,
        base: LazySequence[T],
        predicate: Callable[[T, Sequence[T]], bool],
    ):
        super().__init__(base)
        self.predicate = predicate

    def new_stage(self) -> FilterDependentStage[T]:
        return FilterDependentStage(self.predicate)


class TakeWhileSequence(StageSequence[T]):
    """Sequence that ends at the first element failing a predicate."""

    __slots__ = ("predicate",)

    def __init__(self, base: LazySequence[T], predicate: Callable[[T], bool]):
        super().__init__(base)
        self.predicate = predicate

    def new_stage(self) -> TakeWhileStage[T]:
        return TakeWhileStage(self.predicate)


class DropSequence(StageSequence[T]):
    """Sequence that skips a fixed number of leading elements."""

    __slots__ = ("count",)

    def __init__(self, base: LazySequence[T], count: int):
        super().__init__(base)
        self.count = count

    def new_stage(self) -> DropStage[T]:
        return DropStage(self.count)


# Shape-changing transformations own their inner cursors


class FlatMapSequence[T, U](LazySequence[U]):
    """Sequence that concatenates a finite collection per element."""

    __slots__ = ("base", "func")

    def __init__(
        self, base: LazySequence[T], func: Callable[[T], Iterable[U]]
    ):
        self.base = base
        self.func = func

    def cursor(self) -> FlatMapCursor[T, U]:
        return FlatMapCursor(self.base.cursor(), self.func, get_max_scan())


class ZipSequence[T, U](LazySequence[tuple[T, U]]):
    """Sequence of pairs drawn from two sequences in lockstep."""

    __slots__ = ("left", "right")

    def __init__(self, left: LazySequence[T], right: LazySequence[U]):
        self.left = left
        self.right = right

    def cursor(self) -> ZipCursor[T, U]:
        return ZipCursor(self.left.cursor(), self.right.cursor())


class IntersperseSequence[T, U](LazySequence[T | U]):
    """Sequence alternating the elements of two sequences."""

    __slots__ = ("left", "right")

    def __init__(self, left: LazySequence[T], right: LazySequence[U]):
        self.left = left
        self.right = right

    def cursor(self) -> IntersperseCursor[T, U]:
        return IntersperseCursor(self.left.cursor(), self.right.cursor())
