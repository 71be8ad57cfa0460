"""
Core protocol definitions for lazy sequences.

A lazy sequence never holds a live cursor. It holds a producer factory: a
zero-argument callable that returns a brand-new cursor starting at position 0
every time it is invoked. Realizing a sequence means invoking the factory,
pulling from the resulting cursor and discarding it.
"""

from abc import abstractmethod
from collections.abc import Callable
from typing import Any, Final, Protocol, TypeVar

T_co = TypeVar("T_co", covariant=True)  # Covariant for Cursor (output only)
T_contra = TypeVar(
    "T_contra", contravariant=True
)  # Contravariant for Stage (input only)

EXHAUSTED: Final[tuple[bool, None]] = (False, None)

# Stage verdicts
EMIT: Final = "emit"
REJECT: Final = "reject"
DISCARD: Final = "discard"
STOP: Final = "stop"


class Cursor(Protocol[T_co]):
    """
    An ephemeral, single-use pull source.

    A cursor is owned by exactly one realization and is never rewound.
    """

    @abstractmethod
    def pull(self) -> tuple[bool, T_co | None]:
        """
        Advance the cursor by one element.

        Returns:
            ``(True, value)`` while elements remain, ``(False, None)`` once
            the cursor is exhausted. Exhaustion is idempotent: every call
            after the first ``(False, None)`` returns ``(False, None)`` again.
        """
        ...


class Stage(Protocol[T_contra]):
    """
    One linear step of a pipeline cursor (map, filter and their variants).

    A stage is created fresh for each cursor, so any state it keeps (a
    running index, the accepted values so far) is private to one
    realization.
    """

    @abstractmethod
    def feed(self, value: T_contra) -> tuple[str, Any]:
        """
        Process a single upstream element.

        Returns:
            A ``(verdict, value)`` pair. ``EMIT`` passes ``value`` to the
            next stage, ``REJECT`` drops the element as a filter would,
            ``DISCARD`` drops it without counting towards the scan limit and
            ``STOP`` ends the sequence.
        """
        ...


type ProducerFactory[T] = Callable[[], Cursor[T]]
