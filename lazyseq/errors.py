"""
Exceptions raised by lazy sequences.

Each error also derives from the builtin exception a caller would expect, so
``except ValueError`` or ``except IndexError`` keep working.
"""

from numbers import Integral


class LazySeqError(Exception):
    """Base class for errors raised by lazyseq."""
    pass


class InvalidArgumentError(LazySeqError, ValueError):
    """Raised when a count or index is not a non-negative integer."""
    pass


class OutOfRangeError(LazySeqError, IndexError):
    """Raised when nth() asks for an element past the end of a finite sequence."""
    pass


class NonTerminationError(LazySeqError, RuntimeError):
    """Raised when a filtering cursor exceeds the configured scan limit."""
    pass


def check_count(value: object, name: str = "n") -> int:
    """
    Validate a count or index argument.

    Args:
        value: The value to validate
        name: Argument name used in the error message

    Returns:
        The value as a plain int

    Raises:
        InvalidArgumentError: If the value is not a non-negative integer
    """
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidArgumentError(
            f"{name} must be a non-negative integer, got {type(value).__name__}"
        )
    if value < 0:
        raise InvalidArgumentError(
            f"{name} must be a non-negative integer, got {value}"
        )
    return int(value)
