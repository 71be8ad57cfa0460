"""
Composed cursors for the transformation algebra.

Linear transformations (map, filter and their indexed, history-dependent and
bounded variants, plus drop) do not wrap each other. They are stages run in
order by a single PipelineCursor, so a chain of thousands of maps costs one
loop per pull rather than thousands of nested calls. Transformations that
change the shape of the stream (flat_map, zip, intersperse) get their own
cursors which own their inner cursors.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any, TypeVar

from .errors import NonTerminationError
from .protocols import DISCARD, EMIT, EXHAUSTED, REJECT, STOP, Cursor, Stage

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


def _scan_exceeded(limit: int) -> NonTerminationError:
    logger.warning("Scan limit of %d reached without emitting an element", limit)
    return NonTerminationError(
        f"examined {limit} consecutive elements without emitting one"
    )


# Stages


class MapStage[T, U]:
    """Stage that applies a function to every element."""

    __slots__ = ("func",)

    def __init__(self, func: Callable[[T], U]):
        self.func = func

    def feed(self, value: T) -> tuple[str, U]:
        return EMIT, self.func(value)


class FilterStage[T]:
    """Stage that keeps elements satisfying a predicate."""

    __slots__ = ("predicate",)

    def __init__(self, predicate: Callable[[T], bool]):
        self.predicate = predicate

    def feed(self, value: T) -> tuple[str, T]:
        return (EMIT if self.predicate(value) else REJECT), value


class MapIndexedStage[T, U]:
    """Stage that applies ``func(value, index)``, counting from 0."""

    __slots__ = ("func", "index")

    def __init__(self, func: Callable[[T, int], U]):
        self.func = func
        self.index = 0

    def feed(self, value: T) -> tuple[str, U]:
        result = self.func(value, self.index)
        self.index += 1
        return EMIT, result


class FilterIndexedStage[T]:
    """
    Stage that keeps elements satisfying ``predicate(value, index)``.

    The index counts every element examined by this stage, accepted or not.
    """

    __slots__ = ("predicate", "index")

    def __init__(self, predicate: Callable[[T, int], bool]):
        self.predicate = predicate
        self.index = 0

    def feed(self, value: T) -> tuple[str, T]:
        accepted = self.predicate(value, self.index)
        self.index += 1
        return (EMIT if accepted else REJECT), value


class FilterDependentStage[T]:
    """
    Stage that keeps elements satisfying ``predicate(value, accepted)``.

    ``accepted`` is a tuple of the values this stage has emitted so far, in
    emission order. Rejected values never enter it. The tuple is rebuilt
    only when a value is accepted, so rejections do not copy the history.
    """

    __slots__ = ("predicate", "accepted")

    def __init__(self, predicate: Callable[[T, Sequence[T]], bool]):
        self.predicate = predicate
        self.accepted: tuple[T, ...] = ()

    def feed(self, value: T) -> tuple[str, T]:
        if self.predicate(value, self.accepted):
            self.accepted = (*self.accepted, value)
            return EMIT, value
        return REJECT, value


class TakeWhileStage[T]:
    """Stage that ends the sequence at the first element failing a predicate."""

    __slots__ = ("predicate",)

    def __init__(self, predicate: Callable[[T], bool]):
        self.predicate = predicate

    def feed(self, value: T) -> tuple[str, T]:
        return (EMIT if self.predicate(value) else STOP), value


class DropStage[T]:
    """Stage that discards the first ``count`` elements it sees."""

    __slots__ = ("remaining",)

    def __init__(self, count: int):
        self.remaining = count

    def feed(self, value: T) -> tuple[str, T]:
        if self.remaining:
            self.remaining -= 1
            return DISCARD, value
        return EMIT, value


# Cursors


class PipelineCursor[T]:
    """
    Cursor that runs a source cursor through a list of stages.

    Each pull takes elements from the source until one passes every stage,
    the source is exhausted, or a stage stops the sequence.
    """

    __slots__ = ("_source", "_stages", "_max_scan")

    def __init__(
        self,
        source: Cursor[Any],
        stages: list[Stage[Any]],
        max_scan: int | None = None,
    ):
        """
        Create a pipeline cursor.

        Args:
            source: The cursor elements are pulled from
            stages: Stages applied in order to each pulled element
            max_scan: Raise NonTerminationError after this many consecutive
                rejected elements (None for no limit)
        """
        self._source: Cursor[Any] | None = source
        self._stages = stages
        self._max_scan = max_scan

    def pull(self) -> tuple[bool, T | None]:
        source = self._source
        if source is None:
            return EXHAUSTED

        rejected = 0
        while True:
            has_value, value = source.pull()
            if not has_value:
                self._source = None
                return EXHAUSTED

            verdict = EMIT
            for stage in self._stages:
                verdict, value = stage.feed(value)
                if verdict is not EMIT:
                    break
            if verdict is EMIT:
                return True, value
            if verdict is STOP:
                self._source = None
                return EXHAUSTED
            if verdict is REJECT:
                rejected += 1
                if self._max_scan is not None and rejected >= self._max_scan:
                    raise _scan_exceeded(self._max_scan)
            else:
                # Dropped elements do not count towards the scan limit.
                rejected = 0


class FlatMapCursor[T, U]:
    """
    Cursor that expands each parent element into a finite collection.

    The current collection is drained fully, in order, before the next
    parent element is pulled.
    """

    __slots__ = ("_parent", "_func", "_inner", "_max_scan")

    def __init__(
        self,
        parent: Cursor[T],
        func: Callable[[T], Iterable[U]],
        max_scan: int | None = None,
    ):
        self._parent: Cursor[T] | None = parent
        self._func = func
        self._inner: Iterator[U] | None = None
        self._max_scan = max_scan

    def pull(self) -> tuple[bool, U | None]:
        if self._inner is not None:
            try:
                return True, next(self._inner)
            except StopIteration:
                self._inner = None

        empty = 0
        while self._parent is not None:
            has_value, value = self._parent.pull()
            if not has_value:
                self._parent = None
                break
            inner = iter(self._func(value))
            try:
                first = next(inner)
            except StopIteration:
                empty += 1
                if self._max_scan is not None and empty >= self._max_scan:
                    raise _scan_exceeded(self._max_scan) from None
                continue
            self._inner = inner
            return True, first

        return EXHAUSTED


class ZipCursor[T, U]:
    """
    Cursor that pulls two cursors in lockstep and emits pairs.

    The left cursor is pulled first; when either side is exhausted the zip
    is exhausted and no partial pair is emitted.
    """

    __slots__ = ("_left", "_right")

    def __init__(self, left: Cursor[T], right: Cursor[U]):
        self._left: Cursor[T] | None = left
        self._right: Cursor[U] | None = right

    def pull(self) -> tuple[bool, tuple[T, U] | None]:
        if self._left is None or self._right is None:
            return EXHAUSTED
        has_left, left = self._left.pull()
        if has_left:
            has_right, right = self._right.pull()
            if has_right:
                return True, (left, right)
        self._left = self._right = None
        return EXHAUSTED


class IntersperseCursor[T, U]:
    """
    Cursor that alternates single elements from two cursors, left first.

    Exhausts as soon as the cursor whose turn it is has nothing left.
    """

    __slots__ = ("_cursors", "_turn")

    def __init__(self, left: Cursor[T], right: Cursor[U]):
        self._cursors: tuple[Cursor[Any], Cursor[Any]] | None = (left, right)
        self._turn = 0

    def pull(self) -> tuple[bool, T | U | None]:
        if self._cursors is None:
            return EXHAUSTED
        has_value, value = self._cursors[self._turn].pull()
        if not has_value:
            self._cursors = None
            return EXHAUSTED
        self._turn ^= 1
        return True, value
